# lo_importer/ingestion/extraction/fields.py
"""
Heuristic Field Extractor.

Recovers title, author and abstract from unstructured prose using positional
and pattern rules. Both formats first reduce their tree to a TextOutline, so
the rules live in one place and only the format-specific switches differ.

Title:
    first heading -> first paragraph (if < 200 chars) -> first non-empty line
    of the flattened body (truncated to 200) -> ""

Author (first rule that matches wins):
    1. explicit metadata (dc:creator / meta:initial-creator / <meta name=author>)
    2. "Author: X", "By: X", "Written by: X" in the first 5 non-empty paragraphs
    3. "By Firstname Lastname" in the same window

Abstract (only if enabled):
    skip title line, skip an immediately following author line, skip short
    paragraphs, collect up to abstract_max_paragraphs, strip an
    "Abstract:"/"Summary:"/"Overview:" prefix, join with a blank line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from lo_importer.config.schema import ImportOptions
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import FIELDS

logger = get_logger(__name__)

TITLE_MAX_CHARS = 200
AUTHOR_WINDOW = 5
ABSTRACT_MIN_CHARS = 20

AUTHOR_LABEL_RE = re.compile(r"^(?:Author|By|Written by):\s*(.+)$", re.IGNORECASE)
AUTHOR_LABEL_PREFIX_RE = re.compile(r"^(?:Author|By|Written by):", re.IGNORECASE)
AUTHOR_BYLINE_RE = re.compile(r"^(?i:by)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)$")
ABSTRACT_PREFIX_RE = re.compile(r"^(?:Abstract|Summary|Overview):\s*", re.IGNORECASE)

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class TextOutline:
    """
    Read-only text view of a document tree.

    paragraphs keeps empty entries so positional rules can skip them the
    same way for both formats.
    """

    headings: List[str] = field(default_factory=list)
    paragraphs: List[str] = field(default_factory=list)
    body_text: str = ""
    metadata_author: str = ""

    def non_empty_paragraphs(self) -> List[str]:
        return [p for p in self.paragraphs if p]


@dataclass(frozen=True)
class ExtractedFields:
    title: str
    author: str
    abstract: str


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def is_author_line(text: str) -> bool:
    """True if a paragraph reads like a byline."""
    return bool(AUTHOR_LABEL_PREFIX_RE.match(text) or AUTHOR_BYLINE_RE.match(text))


@dataclass
class FieldExtractor:
    """
    Applies the title/author/abstract heuristics to a TextOutline.

    Example:
        extractor = FieldExtractor(options=ImportOptions())
        fields = extractor.extract(outline)
    """

    options: ImportOptions
    # HTML only treats the first paragraph as the title line when it is short
    short_title_line_only: bool = False

    def extract(self, outline: TextOutline) -> ExtractedFields:
        title = self.extract_title(outline)
        author = self.extract_author(outline)
        abstract = self.extract_abstract(outline, title)
        logger.debug(
            f"{FIELDS} title={title[:40]!r} author={author!r} "
            f"abstract={len(abstract)} chars"
        )
        return ExtractedFields(title=title, author=author, abstract=abstract)

    # -------------------------------------------------------------------------
    # Title
    # -------------------------------------------------------------------------

    def extract_title(self, outline: TextOutline) -> str:
        for heading in outline.headings:
            title = collapse_whitespace(heading)
            if title:
                return title

        paragraphs = outline.non_empty_paragraphs()
        if paragraphs:
            first = collapse_whitespace(paragraphs[0])
            if len(first) < TITLE_MAX_CHARS:
                return first

        for line in outline.body_text.splitlines():
            line = line.strip()
            if line:
                return line[:TITLE_MAX_CHARS].strip()

        return ""

    # -------------------------------------------------------------------------
    # Author
    # -------------------------------------------------------------------------

    def extract_author(self, outline: TextOutline) -> str:
        author = outline.metadata_author.strip()
        if author:
            return author

        if not self.options.auto_extract_author:
            return ""

        lines = [
            line.strip()
            for paragraph in outline.non_empty_paragraphs()[:AUTHOR_WINDOW]
            for line in paragraph.splitlines()
        ]

        for pattern in (AUTHOR_LABEL_RE, AUTHOR_BYLINE_RE):
            found = self._first_capture(pattern, lines)
            if found:
                return found

        return ""

    @staticmethod
    def _first_capture(pattern: re.Pattern, lines: List[str]) -> Optional[str]:
        for line in lines:
            match = pattern.match(line)
            if match:
                captured = match.group(1).strip()
                if captured:
                    return captured
        return None

    # -------------------------------------------------------------------------
    # Abstract
    # -------------------------------------------------------------------------

    def extract_abstract(self, outline: TextOutline, title: str) -> str:
        if not self.options.auto_extract_abstract:
            return ""

        limit = self.options.abstract_max_paragraphs
        parts: List[str] = []
        title_checked = False
        author_checked = False

        for text in outline.paragraphs:
            if not text:
                continue

            if not title_checked:
                title_checked = True
                if not self.short_title_line_only or len(text) < TITLE_MAX_CHARS:
                    continue

            if not author_checked:
                author_checked = True
                if is_author_line(text):
                    continue

            if len(text) < ABSTRACT_MIN_CHARS:
                continue

            if title and collapse_whitespace(text) == title:
                continue

            parts.append(text)
            if len(parts) >= limit:
                break

        if not parts:
            return ""

        parts[0] = ABSTRACT_PREFIX_RE.sub("", parts[0], count=1)
        return "\n\n".join(parts)


__all__ = [
    "TITLE_MAX_CHARS",
    "TextOutline",
    "ExtractedFields",
    "FieldExtractor",
    "collapse_whitespace",
    "is_author_line",
]

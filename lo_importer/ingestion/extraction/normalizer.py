# lo_importer/ingestion/extraction/normalizer.py
"""
Content Normalizer - final deterministic cleanup of assembled markup.
"""

from __future__ import annotations

import re

from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import NORMALIZE

logger = get_logger(__name__)

_BLANK_RUNS_RE = re.compile(r"\n{3,}")
_EMPTY_PARAGRAPH_RE = re.compile(r"<p>\s*</p>")
_STYLE_ATTR_RE = re.compile(r' style="[^"]*"')
_CLASS_ATTR_RE = re.compile(r' class="(?!footnotes")[^"]*"')
_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")


def normalize_content(content: str, strip_attributes: bool = False) -> str:
    """
    Clean up generated markup.

    Steps, in order:
        1. collapse 3+ consecutive newlines to exactly two
        2. remove empty <p> elements
        3. (strip_attributes) drop style="..." and any class="..." other
           than the reserved class="footnotes"
        4. collapse runs of spaces/tabs to one space
        5. trim the whole string

    Args:
        content: Assembled markup.
        strip_attributes: True on the HTML path.
    """
    original_length = len(content)
    content = _BLANK_RUNS_RE.sub("\n\n", content)
    content = _EMPTY_PARAGRAPH_RE.sub("", content)
    if strip_attributes:
        content = _STYLE_ATTR_RE.sub("", content)
        content = _CLASS_ATTR_RE.sub("", content)
    content = _HORIZONTAL_WS_RE.sub(" ", content).strip()

    logger.debug(f"{NORMALIZE} {original_length} -> {len(content)} chars")
    return content


__all__ = ["normalize_content"]

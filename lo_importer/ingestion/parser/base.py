# lo_importer/ingestion/parser/base.py
"""
Parser protocol for document format understanding.

Parsers turn one SourceDocument into one Document. Each parse builds its own
ExtractionState; parsers themselves hold only immutable configuration, so a
parser instance can serve concurrent parses.

Flow: SourceDocument → Parser.parse() → Document
"""

from __future__ import annotations

from typing import Any, Dict, Protocol, Set, runtime_checkable

from lo_importer.config.schema import ImportOptions
from lo_importer.core.document import Document
from lo_importer.core.exceptions import TitleExtractionError
from lo_importer.ingestion.extraction.fields import ExtractedFields
from lo_importer.ingestion.extraction.footnotes import render_footnote_block
from lo_importer.ingestion.extraction.images import strip_image_placeholders
from lo_importer.ingestion.extraction.normalizer import normalize_content
from lo_importer.ingestion.source import SourceDocument
from lo_importer.ingestion.state import ExtractionState


@runtime_checkable
class Parser(Protocol):
    """
    Protocol for document parsers.

    Implementations:
    - OdtParser: zipped OpenDocument Text
    - HtmlParser: pasted rich-text HTML fragments
    """

    plugin_name: str
    supported_extensions: Set[str]  # e.g., {".odt"}

    def parse(self, source: SourceDocument) -> Document:
        """
        Parse a source into a Document.

        Raises:
            ImporterError: If the source cannot be turned into a Document.
        """
        ...

    def can_parse(self, source: SourceDocument) -> bool:
        """Check if this parser can handle the given source."""
        ...


def require_title(fields: ExtractedFields, source: SourceDocument) -> None:
    """Fail the parse when no usable title was found."""
    if not fields.title:
        raise TitleExtractionError("No title found in the document", source=source.uri)


def assemble_document(
    *,
    content: str,
    fields: ExtractedFields,
    state: ExtractionState,
    options: ImportOptions,
    footnotes_are_markup: bool,
    strip_attributes: bool,
    metadata: Dict[str, Any],
) -> Document:
    """
    Finish a walk: reconcile references, append footnotes, normalize.

    Args:
        content: Markup produced by the walker.
        fields: Title/author/abstract from the field extractor.
        state: Accumulators filled during the walk.
        options: Options of this parse.
        footnotes_are_markup: Footnote bodies are rendered markup (HTML)
            rather than plain text (ODT).
        strip_attributes: Apply the HTML-only attribute cleanup.
        metadata: Extra metadata stored on the Document.
    """
    if not options.import_images:
        content = strip_image_placeholders(content)

    content = state.reconcile(content)

    if state.footnotes and options.import_footnotes:
        block = render_footnote_block(state.footnotes, escape=not footnotes_are_markup)
        content = f"{content}\n\n{block}"

    content = normalize_content(content, strip_attributes=strip_attributes)

    return Document(
        title=fields.title,
        author=fields.author,
        abstract=fields.abstract,
        content=content,
        images=state.images,
        footnotes=state.footnotes,
        metadata=metadata,
    )


__all__ = [
    "Parser",
    "require_title",
    "assemble_document",
]

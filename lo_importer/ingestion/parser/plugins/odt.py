# lo_importer/ingestion/parser/plugins/odt.py
"""
ODT parser: walks content.xml of an OpenDocument Text archive.

The walker is a recursive descent over the office:text element tree.
Element tags are mapped to an ElementKind once (ODT_KINDS), and each kind
has exactly one handler; unmapped tags fall through to DESCEND, which keeps
their children.

Block containers (office:text, lists, table rows) ignore stray text nodes;
inline holders (paragraphs, headings, spans, links) keep their text and the
tails of their children.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterator, List, Optional, Set

from lxml import etree

from lo_importer.config.schema import ImportOptions
from lo_importer.core.document import Document, ElementKind
from lo_importer.ingestion.extraction.fields import (
    ExtractedFields,
    FieldExtractor,
    TextOutline,
    collapse_whitespace,
)
from lo_importer.ingestion.extraction.footnotes import footnote_anchor
from lo_importer.ingestion.extraction.formatting import translate
from lo_importer.ingestion.extraction.images import asset_from_archive, image_tag
from lo_importer.ingestion.extraction.markup import (
    escape_attr,
    escape_text,
    escape_url,
    has_content,
)
from lo_importer.ingestion.odf import namespaces as ns
from lo_importer.ingestion.odf.container import OdtContainer
from lo_importer.ingestion.parser.base import assemble_document, require_title
from lo_importer.ingestion.source import SourceDocument
from lo_importer.ingestion.state import ExtractionState
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import FOOTNOTES, IMAGES, WALKER

logger = get_logger(__name__)

ODT_EXTENSIONS: Set[str] = {".odt"}

K = ElementKind

ODT_KINDS: Dict[str, ElementKind] = {
    ns.TEXT_H: K.HEADING,
    ns.TEXT_P: K.PARAGRAPH,
    ns.TEXT_SPAN: K.EMPHASIS,
    ns.TEXT_A: K.LINK,
    ns.TEXT_LIST: K.LIST,
    ns.TEXT_LIST_ITEM: K.LIST_ITEM,
    ns.TEXT_LIST_HEADER: K.LIST_ITEM,
    ns.TABLE_TABLE: K.TABLE,
    ns.TABLE_HEADER_ROWS: K.TABLE,
    ns.TABLE_ROW: K.TABLE,
    ns.TABLE_CELL: K.TABLE,
    ns.TEXT_LINE_BREAK: K.LINE_BREAK,
    ns.TEXT_S: K.SPACE,
    ns.TEXT_TAB: K.TAB,
    ns.TEXT_NOTE: K.NOTE,
    ns.DRAW_FRAME: K.IMAGE,
    # Wrappers whose children are content
    ns.TEXT_SECTION: K.CONTAINER,
    ns.TABLE_ROWS: K.CONTAINER,
    ns.TABLE_ROW_GROUP: K.CONTAINER,
    ns.DRAW_A: K.CONTAINER,
    # Non-content
    ns.TEXT_SEQUENCE_DECLS: K.SKIP,
    ns.TEXT_TRACKED_CHANGES: K.SKIP,
    ns.TEXT_SOFT_PAGE_BREAK: K.SKIP,
    ns.TEXT_BOOKMARK: K.SKIP,
    ns.TEXT_BOOKMARK_START: K.SKIP,
    ns.TEXT_BOOKMARK_END: K.SKIP,
    ns.TEXT_REFERENCE_MARK: K.SKIP,
    ns.TEXT_REFERENCE_MARK_START: K.SKIP,
    ns.TEXT_REFERENCE_MARK_END: K.SKIP,
    ns.TEXT_CHANGE: K.SKIP,
    ns.TEXT_CHANGE_START: K.SKIP,
    ns.TEXT_CHANGE_END: K.SKIP,
    ns.OFFICE_ANNOTATION: K.SKIP,
    ns.OFFICE_ANNOTATION_END: K.SKIP,
    ns.OFFICE_FORMS: K.SKIP,
    ns.TABLE_COLUMN: K.SKIP,
    ns.TABLE_COLUMNS: K.SKIP,
    ns.TABLE_HEADER_COLUMNS: K.SKIP,
    ns.TABLE_COLUMN_GROUP: K.SKIP,
    ns.TABLE_COVERED_CELL: K.SKIP,
}

# Elements whose text never contributes to flattened plain text
_TEXT_EXCLUDED = {ns.TEXT_NOTE, ns.DRAW_FRAME} | {
    tag for tag, kind in ODT_KINDS.items() if kind is K.SKIP
}

_ODF_WS_RE = re.compile(r"[ \t\r\n]+")

TAB_MARKUP = "&nbsp;" * 4


def kind_of(element: etree._Element) -> ElementKind:
    """Kind of an element; comments and processing instructions are SKIP."""
    if not isinstance(element.tag, str):
        return K.SKIP
    return ODT_KINDS.get(element.tag, K.DESCEND)


def heading_level(element: etree._Element) -> int:
    """outline-level clamped to 1..6; missing or invalid means 1."""
    try:
        level = int(element.get(ns.TEXT_OUTLINE_LEVEL, "1"))
    except ValueError:
        return 1
    return min(max(level, 1), 6)


def plain_text(element: etree._Element) -> str:
    """
    Flatten an element to plain text.

    text:s expands to spaces, text:tab to a tab, text:line-break to a newline.
    Footnote bodies, frames and non-content elements are left out.
    """
    parts: List[str] = []

    def _collect(el: etree._Element) -> None:
        if el.text:
            parts.append(el.text)
        for child in el:
            if isinstance(child.tag, str) and child.tag not in _TEXT_EXCLUDED:
                if child.tag == ns.TEXT_S:
                    parts.append(" " * _space_count(child))
                elif child.tag == ns.TEXT_TAB:
                    parts.append("\t")
                elif child.tag == ns.TEXT_LINE_BREAK:
                    parts.append("\n")
                else:
                    _collect(child)
            if child.tail:
                parts.append(child.tail)

    _collect(element)
    return "".join(parts)


def _space_count(element: etree._Element) -> int:
    try:
        count = int(element.get(ns.TEXT_C, "1"))
    except ValueError:
        count = 1
    return count if count > 0 else 1


def iter_text_blocks(element: etree._Element) -> Iterator[etree._Element]:
    """
    Yield text:h and text:p elements in document order.

    Footnote bodies and non-content subtrees are not entered, and a block's
    own descendants are not yielded separately.
    """
    for child in element:
        kind = kind_of(child)
        if kind in (K.HEADING, K.PARAGRAPH):
            yield child
        elif kind in (K.SKIP, K.NOTE, K.IMAGE):
            continue
        else:
            yield from iter_text_blocks(child)


@dataclass(frozen=True)
class _Scope:
    """Position of the walk in the tree."""

    inline: bool = False
    list_style: Optional[str] = None
    list_depth: int = 0
    header_row: bool = False


@dataclass
class OdtWalker:
    """
    Structural Tree Walker for ODT content.

    Holds the open container and the options; all per-parse mutation goes
    into the ExtractionState passed to every call.
    """

    container: OdtContainer
    options: ImportOptions
    _handlers: Dict[ElementKind, Callable[..., str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._handlers = {
            K.HEADING: self._heading,
            K.PARAGRAPH: self._paragraph,
            K.EMPHASIS: self._span,
            K.LINK: self._link,
            K.LIST: self._list,
            K.LIST_ITEM: self._list_item,
            K.TABLE: self._table,
            K.LINE_BREAK: lambda el, state, scope: "<br />",
            K.SPACE: lambda el, state, scope: " " * _space_count(el),
            K.TAB: lambda el, state, scope: TAB_MARKUP,
            K.NOTE: self._note,
            K.IMAGE: self._frame,
            K.CONTAINER: self._children,
            K.SKIP: lambda el, state, scope: "",
            K.DESCEND: self._children,
        }

    def walk(self, body: etree._Element, state: ExtractionState, skip_first: bool = False) -> str:
        """
        Render the office:text body.

        Args:
            body: office:text element.
            state: Accumulators for this parse.
            skip_first: Leave out the first non-empty top-level block (the
                title line, already reported as its own field).
        """
        scope = _Scope()
        parts: List[str] = []
        pending_skip = skip_first

        for child in body:
            if pending_skip and kind_of(child) in (K.HEADING, K.PARAGRAPH):
                if collapse_whitespace(plain_text(child)):
                    pending_skip = False
                    logger.debug(f"{WALKER} Title block left out of content")
                    continue
            parts.append(self.render(child, state, scope))

        return "".join(parts)

    def render(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        return self._handlers[kind_of(element)](element, state, scope)

    # -------------------------------------------------------------------------
    # Generic descent
    # -------------------------------------------------------------------------

    def _children(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        """Render children; text nodes count only in inline scope."""
        parts: List[str] = []
        if scope.inline and element.text:
            parts.append(self._text(element.text))
        for child in element:
            parts.append(self.render(child, state, scope))
            if scope.inline and child.tail:
                parts.append(self._text(child.tail))
        return "".join(parts)

    def _inline(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        return self._children(element, state, replace(scope, inline=True))

    @staticmethod
    def _text(text: str) -> str:
        return escape_text(_ODF_WS_RE.sub(" ", text))

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _heading(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(element, state, scope)
        if not has_content(content):
            return ""
        if scope.inline:
            return content
        level = heading_level(element)
        return f"<h{level}>{content}</h{level}>\n"

    def _paragraph(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(element, state, scope)
        if not has_content(content):
            return ""
        if self.options.preserve_formatting:
            style = self.container.styles.descriptor(element.get(ns.TEXT_STYLE_NAME))
            content = translate(content, style=style)
        if scope.inline:
            return content
        return f"<p>{content}</p>\n"

    def _list(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        style = element.get(ns.TEXT_STYLE_NAME) or scope.list_style
        depth = scope.list_depth + 1
        tag = "ol" if self.container.styles.is_ordered_list(style, depth) else "ul"
        inner = replace(scope, inline=False, list_style=style, list_depth=depth)

        items = "".join(self.render(child, state, inner) for child in element)
        if not items:
            return ""
        return f"<{tag}>\n{items}</{tag}>\n"

    def _list_item(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        pieces: List[str] = []
        for child in element:
            kind = kind_of(child)
            if kind is K.LIST:
                pieces.append(self.render(child, state, scope))
            else:
                rendered = self.render(child, state, replace(scope, inline=True))
                if rendered:
                    if pieces and not pieces[-1].endswith("\n"):
                        pieces.append("<br />")
                    pieces.append(rendered)

        content = "".join(pieces)
        if not has_content(content):
            return ""
        return f"<li>{content}</li>\n"

    def _table(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        tag = element.tag
        block = replace(scope, inline=False)

        if tag == ns.TABLE_TABLE:
            return f"<table>\n{self._children(element, state, replace(block, header_row=False))}</table>\n"

        if tag == ns.TABLE_HEADER_ROWS:
            return f"<thead>\n{self._children(element, state, replace(block, header_row=True))}</thead>\n"

        if tag == ns.TABLE_ROW:
            return f"<tr>\n{self._children(element, state, block)}</tr>\n"

        # table:table-cell
        cell_tag = "th" if scope.header_row else "td"
        pieces = []
        for child in element:
            rendered = self.render(child, state, replace(scope, inline=True))
            if rendered:
                pieces.append(rendered)
        return f"<{cell_tag}>{'<br />'.join(pieces)}</{cell_tag}>\n"

    # -------------------------------------------------------------------------
    # Inline
    # -------------------------------------------------------------------------

    def _span(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(element, state, scope)
        if not self.options.preserve_formatting:
            return content
        style = self.container.styles.descriptor(element.get(ns.TEXT_STYLE_NAME))
        return translate(content, style=style)

    def _link(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(element, state, scope)
        href = escape_url(element.get(ns.XLINK_HREF) or "")
        if not href:
            return content
        return f'<a href="{href}">{content}</a>'

    def _note(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        note_class = element.get(ns.TEXT_NOTE_CLASS, "footnote")
        if note_class != "footnote":
            logger.debug(f"{FOOTNOTES} Ignoring note of class {note_class!r}")
            return ""

        bodies = [
            plain_text(para).strip()
            for note_body in element.iter(ns.TEXT_NOTE_BODY)
            for para in iter_text_blocks(note_body)
        ]
        footnote_id = state.add_footnote(" ".join(b for b in bodies if b))
        return footnote_anchor(footnote_id)

    def _frame(self, element: etree._Element, state: ExtractionState, scope: _Scope) -> str:
        images = [child for child in element if child.tag == ns.DRAW_IMAGE]
        if not images:
            # Text boxes and other frame content
            return self._children(element, state, scope)

        if not self.options.import_images or state.in_footnote:
            return ""

        for image in images:
            href = image.get(ns.XLINK_HREF) or ""
            data = self.container.read_entry(href) if href else None
            if data is None:
                logger.warning(f"{IMAGES} Image {href!r} not found in {self.container.source}")
                continue

            asset = asset_from_archive(href, data, image.get(ns.DRAW_MIME_TYPE) or "")
            image_id = state.add_image(asset)
            alt = self._frame_alt(element) or f"Image {image_id}"
            return image_tag(image_id, escape_attr(alt))

        return ""

    @staticmethod
    def _frame_alt(frame: etree._Element) -> str:
        for tag in (ns.SVG_TITLE, ns.SVG_DESC):
            for node in frame.iter(tag):
                text = collapse_whitespace("".join(node.itertext()))
                if text:
                    return text
        return ""


@dataclass
class OdtParser:
    """
    Parser for zipped OpenDocument Text.

    Example:
        parser = OdtParser(options=ImportOptions())
        doc = parser.parse(SourceDocument.from_path(Path("essay.odt")))
    """

    options: ImportOptions = field(default_factory=ImportOptions)
    plugin_name: str = field(default="odt", repr=False)
    supported_extensions: Set[str] = field(default_factory=lambda: set(ODT_EXTENSIONS))

    def can_parse(self, source: SourceDocument) -> bool:
        return source.extension in self.supported_extensions

    def parse(self, source: SourceDocument) -> Document:
        """
        Parse an ODT archive.

        Raises:
            ContainerError: If the archive or its XML cannot be used.
            TitleExtractionError: If no title can be recovered.
        """
        with OdtContainer(source.as_bytes(), source=source.uri) as container:
            body = container.body
            state = ExtractionState()

            outline = self.outline(container, body)
            fields = FieldExtractor(options=self.options).extract(outline)
            require_title(fields, source)

            content = ""
            if body is not None:
                walker = OdtWalker(container=container, options=self.options)
                content = walker.walk(body, state, skip_first=self._title_leads(body, fields))

            document = assemble_document(
                content=content,
                fields=fields,
                state=state,
                options=self.options,
                footnotes_are_markup=False,
                strip_attributes=False,
                metadata={
                    "parser": self.plugin_name,
                    "source": source.uri,
                    "meta_title": container.metadata_title(),
                },
            )

        logger.info(
            f"{WALKER} Parsed ODT {source.uri}: {len(document.content)} chars, "
            f"{document.image_count} images, {document.footnote_count} footnotes"
        )
        return document

    @staticmethod
    def outline(container: OdtContainer, body: Optional[etree._Element]) -> TextOutline:
        """Text view of the body for the field heuristics."""
        if body is None:
            return TextOutline(metadata_author=container.metadata_author())

        headings: List[str] = []
        paragraphs: List[str] = []
        lines: List[str] = []
        for block in iter_text_blocks(body):
            text = plain_text(block).strip()
            if block.tag == ns.TEXT_H:
                headings.append(text)
            else:
                paragraphs.append(text)
            lines.append(text)

        return TextOutline(
            headings=headings,
            paragraphs=paragraphs,
            body_text="\n".join(lines),
            metadata_author=container.metadata_author(),
        )

    @staticmethod
    def _title_leads(body: etree._Element, fields: ExtractedFields) -> bool:
        """True if the first non-empty top-level block is the title line."""
        for child in body:
            if kind_of(child) not in (K.HEADING, K.PARAGRAPH):
                continue
            text = collapse_whitespace(plain_text(child))
            if text:
                return text == fields.title
        return False


__all__ = ["OdtParser", "OdtWalker", "ODT_EXTENSIONS", "ODT_KINDS", "plain_text"]

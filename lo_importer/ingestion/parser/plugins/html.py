# lo_importer/ingestion/parser/plugins/html.py
"""
HTML parser: walks a pasted rich-text fragment.

Fragments come from word processors and browsers and are often malformed,
so they go through BeautifulSoup's permissive "html.parser" builder, which
never raises on recoverable markup errors (unclosed tags, stray end tags).

Dispatch mirrors the ODT walker: HTML_KINDS maps a tag name to an
ElementKind and each kind has one handler. Unknown tags are DESCEND.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Set

from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

from lo_importer.config.schema import ImportOptions
from lo_importer.core.document import Document, ElementKind
from lo_importer.ingestion.extraction.fields import FieldExtractor, TextOutline
from lo_importer.ingestion.extraction.footnotes import footnote_anchor, looks_like_reference
from lo_importer.ingestion.extraction.formatting import translate
from lo_importer.ingestion.extraction.images import decode_data_uri, image_tag
from lo_importer.ingestion.extraction.markup import (
    escape_attr,
    escape_text,
    escape_url,
    has_content,
    is_absolute_url,
)
from lo_importer.ingestion.parser.base import assemble_document, require_title
from lo_importer.ingestion.source import SourceDocument
from lo_importer.ingestion.state import ExtractionState
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import FOOTNOTES, IMAGES, WALKER

logger = get_logger(__name__)

HTML_EXTENSIONS: Set[str] = {".html", ".htm"}

K = ElementKind

HTML_KINDS: Dict[str, ElementKind] = {
    **{f"h{n}": K.HEADING for n in range(1, 7)},
    "p": K.PARAGRAPH,
    **{tag: K.EMPHASIS for tag in ("strong", "b", "em", "i", "u", "s", "strike", "del", "code")},
    "a": K.LINK,
    "ul": K.LIST,
    "ol": K.LIST,
    "li": K.LIST_ITEM,
    **{tag: K.TABLE for tag in ("table", "thead", "tbody", "tr", "th", "td")},
    "br": K.LINE_BREAK,
    "hr": K.RULE,
    "blockquote": K.BLOCKQUOTE,
    "pre": K.PREFORMATTED,
    "sup": K.SUPERSCRIPT,
    "sub": K.SUBSCRIPT,
    "img": K.IMAGE,
    **{
        tag: K.CONTAINER
        for tag in ("html", "body", "div", "span", "section", "article", "main", "header", "footer", "font")
    },
    **{
        tag: K.SKIP
        for tag in ("head", "title", "script", "style", "meta", "link", "noscript", "template", "iframe", "object")
    },
}

# Tags that start a new line in the flattened text view
BLOCK_TAGS: Set[str] = {
    "p", "div", "section", "article", "main", "header", "footer", "blockquote", "pre",
    "li", "ul", "ol", "table", "tr", "br", "hr",
} | {f"h{n}" for n in range(1, 7)}

# Tags whose children are blocks; whitespace-only text between them is noise
_ROW_CONTAINERS: Set[str] = {"ul", "ol", "table", "thead", "tbody", "tr"}

_NON_CONTENT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction, CData)

_NEWLINES_RE = re.compile(r"\n\s*\n+")


def kind_of(node: Tag) -> ElementKind:
    return HTML_KINDS.get((node.name or "").lower(), K.DESCEND)


def visible_text(node: Tag) -> str:
    """Flatten a subtree to text; block tags become line breaks."""
    parts: List[str] = []

    def _collect(el: Tag) -> None:
        for child in el.children:
            if isinstance(child, NavigableString):
                if not isinstance(child, _NON_CONTENT_STRINGS):
                    parts.append(str(child))
                continue
            if not isinstance(child, Tag) or kind_of(child) is K.SKIP:
                continue
            block = child.name in BLOCK_TAGS
            if block:
                parts.append("\n")
            _collect(child)
            if block:
                parts.append("\n")

    _collect(node)
    return _NEWLINES_RE.sub("\n", "".join(parts))


def _skipped(node: Tag) -> bool:
    """True if node sits inside a non-content element."""
    return any(kind_of(parent) is K.SKIP for parent in node.parents if isinstance(parent, Tag))


@dataclass(frozen=True)
class _Scope:
    root: bool = False
    rows: bool = False  # inside ul/ol/table rows: drop whitespace-only text


@dataclass
class HtmlWalker:
    """Structural Tree Walker for HTML fragments."""

    options: ImportOptions
    _handlers: Dict[ElementKind, Callable[..., str]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._handlers = {
            K.HEADING: self._heading,
            K.PARAGRAPH: lambda el, state, scope: self._block("p", el, state),
            K.EMPHASIS: self._emphasis,
            K.LINK: self._link,
            K.LIST: self._rows,
            K.LIST_ITEM: lambda el, state, scope: self._block("li", el, state),
            K.TABLE: self._table,
            K.LINE_BREAK: lambda el, state, scope: "<br />",
            K.RULE: lambda el, state, scope: "<hr />\n",
            K.BLOCKQUOTE: lambda el, state, scope: self._block("blockquote", el, state),
            K.PREFORMATTED: self._pre,
            K.SUPERSCRIPT: self._superscript,
            K.SUBSCRIPT: lambda el, state, scope: self._wrapped("sub", el, state),
            K.IMAGE: self._image,
            K.CONTAINER: self._children,
            K.SKIP: lambda el, state, scope: "",
            K.DESCEND: self._children,
        }

    def walk(self, root: Tag, state: ExtractionState) -> str:
        """Render the fragment root; bare text directly under it is dropped."""
        return self._children(root, state, _Scope(root=True))

    def render(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        if scope.root:
            scope = replace(scope, root=False)
        return self._handlers[kind_of(node)](node, state, scope)

    def _children(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        parts: List[str] = []
        for child in node.children:
            if isinstance(child, NavigableString):
                parts.append(self._text(child, scope))
            elif isinstance(child, Tag):
                parts.append(self.render(child, state, scope))
        return "".join(parts)

    def _inline(self, node: Tag, state: ExtractionState) -> str:
        return self._children(node, state, _Scope())

    @staticmethod
    def _text(node: NavigableString, scope: _Scope) -> str:
        if isinstance(node, _NON_CONTENT_STRINGS) or scope.root:
            return ""
        text = str(node)
        if scope.rows and not text.strip():
            return ""
        return escape_text(text)

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _heading(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        return self._block(node.name.lower(), node, state)

    def _block(self, tag: str, node: Tag, state: ExtractionState) -> str:
        content = self._inline(node, state)
        if not has_content(content):
            return ""
        return f"<{tag}>{content}</{tag}>\n"

    def _rows(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        tag = node.name.lower()
        inner = self._children(node, state, _Scope(rows=True))
        if not inner.strip():
            return ""
        return f"<{tag}>\n{inner}</{tag}>\n"

    def _table(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        tag = node.name.lower()
        if tag in ("th", "td"):
            return f"<{tag}>{self._inline(node, state)}</{tag}>\n"
        return self._rows(node, state, scope)

    def _pre(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(node, state)
        if not content.strip():
            return ""
        return f"<pre>{content}</pre>\n"

    # -------------------------------------------------------------------------
    # Inline
    # -------------------------------------------------------------------------

    def _wrapped(self, tag: str, node: Tag, state: ExtractionState) -> str:
        content = self._inline(node, state)
        return f"<{tag}>{content}</{tag}>" if content else ""

    def _emphasis(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(node, state)
        if not self.options.preserve_formatting:
            return content
        return translate(content, tag=node.name)

    def _link(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        content = self._inline(node, state)
        href = escape_url(node.get("href") or "")
        if not href:
            return content
        return f'<a href="{href}">{content}</a>'

    def _superscript(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        if state.in_footnote:
            return self._wrapped("sup", node, state)

        hrefs = [a.get("href") or "" for a in node.find_all("a")]
        if not looks_like_reference(node.get_text(), hrefs):
            return self._wrapped("sup", node, state)

        with state.inside_footnote():
            body = self._inline(node, state).strip()
        footnote_id = state.add_footnote(body)
        logger.debug(f"{FOOTNOTES} Superscript {node.get_text().strip()!r} became footnote {footnote_id}")
        return footnote_anchor(footnote_id)

    def _image(self, node: Tag, state: ExtractionState, scope: _Scope) -> str:
        src = (node.get("src") or "").strip()
        alt = node.get("alt") or ""

        if src.lower().startswith("data:"):
            if not self.options.import_images or state.in_footnote:
                return ""
            asset = decode_data_uri(src)
            if asset is None:
                return ""
            image_id = state.add_image(asset)
            return image_tag(image_id, escape_attr(alt or f"Image {image_id}"))

        if is_absolute_url(src):
            url = escape_url(src)
            if url:
                return f'<img src="{url}" alt="{escape_attr(alt)}" />'

        logger.debug(f"{IMAGES} Dropping image with unusable src {src[:60]!r}")
        return ""


@dataclass
class HtmlParser:
    """
    Parser for pasted HTML fragments.

    Example:
        parser = HtmlParser(options=ImportOptions())
        doc = parser.parse(SourceDocument(uri="<paste>", payload=html, extension=".html"))
    """

    options: ImportOptions = field(default_factory=ImportOptions)
    plugin_name: str = field(default="html", repr=False)
    supported_extensions: Set[str] = field(default_factory=lambda: set(HTML_EXTENSIONS))

    def can_parse(self, source: SourceDocument) -> bool:
        return source.extension in self.supported_extensions

    def parse(self, source: SourceDocument) -> Document:
        """
        Parse an HTML fragment.

        Raises:
            TitleExtractionError: If no title can be recovered.
        """
        soup = BeautifulSoup(source.as_text(), "html.parser")
        root = soup.body or soup

        fields = FieldExtractor(options=self.options, short_title_line_only=True).extract(
            self.outline(soup, root)
        )
        require_title(fields, source)

        state = ExtractionState()
        content = HtmlWalker(options=self.options).walk(root, state)

        document = assemble_document(
            content=content,
            fields=fields,
            state=state,
            options=self.options,
            footnotes_are_markup=True,
            strip_attributes=True,
            metadata={"parser": self.plugin_name, "source": source.uri},
        )

        logger.info(
            f"{WALKER} Parsed HTML {source.uri}: {len(document.content)} chars, "
            f"{document.image_count} images, {document.footnote_count} footnotes"
        )
        return document

    @staticmethod
    def outline(soup: BeautifulSoup, root: Tag) -> TextOutline:
        """Text view of the fragment for the field heuristics."""
        headings = [
            visible_text(h).strip()
            for h in root.find_all([f"h{n}" for n in range(1, 7)])
            if not _skipped(h)
        ]
        paragraphs = [visible_text(p).strip() for p in root.find_all("p") if not _skipped(p)]

        author = ""
        meta = soup.find("meta", attrs={"name": re.compile(r"^author$", re.IGNORECASE)})
        if meta is not None:
            author = (meta.get("content") or "").strip()

        return TextOutline(
            headings=headings,
            paragraphs=paragraphs,
            body_text=visible_text(root),
            metadata_author=author,
        )


__all__ = ["HtmlParser", "HtmlWalker", "HTML_EXTENSIONS", "HTML_KINDS", "visible_text"]

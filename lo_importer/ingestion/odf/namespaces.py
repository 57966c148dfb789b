# lo_importer/ingestion/odf/namespaces.py
"""
Fixed OpenDocument namespace table.

Qualified names are resolved once here, in Clark notation ("{uri}local"),
so the walker compares element tags against constants instead of building
namespace lookups on every visit.
"""

from __future__ import annotations

from typing import Dict

NS: Dict[str, str] = {
    "office": "urn:oasis:names:tc:opendocument:xmlns:office:1.0",
    "text": "urn:oasis:names:tc:opendocument:xmlns:text:1.0",
    "style": "urn:oasis:names:tc:opendocument:xmlns:style:1.0",
    "fo": "urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0",
    "draw": "urn:oasis:names:tc:opendocument:xmlns:drawing:1.0",
    "xlink": "http://www.w3.org/1999/xlink",
    "meta": "urn:oasis:names:tc:opendocument:xmlns:meta:1.0",
    "dc": "http://purl.org/dc/elements/1.1/",
    "table": "urn:oasis:names:tc:opendocument:xmlns:table:1.0",
    "svg": "urn:oasis:names:tc:opendocument:xmlns:svg-compatible:1.0",
}


def qn(prefixed: str) -> str:
    """'text:p' -> '{urn:...:text:1.0}p'"""
    prefix, local = prefixed.split(":", 1)
    return f"{{{NS[prefix]}}}{local}"


# office
OFFICE_BODY = qn("office:body")
OFFICE_TEXT = qn("office:text")
OFFICE_ANNOTATION = qn("office:annotation")
OFFICE_ANNOTATION_END = qn("office:annotation-end")
OFFICE_FORMS = qn("office:forms")
OFFICE_AUTOMATIC_STYLES = qn("office:automatic-styles")
OFFICE_STYLES = qn("office:styles")
OFFICE_META = qn("office:meta")

# text
TEXT_H = qn("text:h")
TEXT_P = qn("text:p")
TEXT_SPAN = qn("text:span")
TEXT_A = qn("text:a")
TEXT_LIST = qn("text:list")
TEXT_LIST_ITEM = qn("text:list-item")
TEXT_LIST_HEADER = qn("text:list-header")
TEXT_NOTE = qn("text:note")
TEXT_NOTE_BODY = qn("text:note-body")
TEXT_NOTE_CITATION = qn("text:note-citation")
TEXT_S = qn("text:s")
TEXT_TAB = qn("text:tab")
TEXT_LINE_BREAK = qn("text:line-break")
TEXT_SOFT_PAGE_BREAK = qn("text:soft-page-break")
TEXT_SECTION = qn("text:section")
TEXT_SEQUENCE_DECLS = qn("text:sequence-decls")
TEXT_TRACKED_CHANGES = qn("text:tracked-changes")
TEXT_BOOKMARK = qn("text:bookmark")
TEXT_BOOKMARK_START = qn("text:bookmark-start")
TEXT_BOOKMARK_END = qn("text:bookmark-end")
TEXT_REFERENCE_MARK = qn("text:reference-mark")
TEXT_REFERENCE_MARK_START = qn("text:reference-mark-start")
TEXT_REFERENCE_MARK_END = qn("text:reference-mark-end")
TEXT_CHANGE = qn("text:change")
TEXT_CHANGE_START = qn("text:change-start")
TEXT_CHANGE_END = qn("text:change-end")
TEXT_LIST_STYLE = qn("text:list-style")
TEXT_LIST_LEVEL_STYLE_NUMBER = qn("text:list-level-style-number")
TEXT_LIST_LEVEL_STYLE_BULLET = qn("text:list-level-style-bullet")

# text attributes
TEXT_OUTLINE_LEVEL = qn("text:outline-level")
TEXT_STYLE_NAME = qn("text:style-name")
TEXT_NOTE_CLASS = qn("text:note-class")
TEXT_C = qn("text:c")
TEXT_LEVEL = qn("text:level")

# table
TABLE_TABLE = qn("table:table")
TABLE_HEADER_ROWS = qn("table:table-header-rows")
TABLE_ROWS = qn("table:table-rows")
TABLE_ROW_GROUP = qn("table:table-row-group")
TABLE_ROW = qn("table:table-row")
TABLE_CELL = qn("table:table-cell")
TABLE_COVERED_CELL = qn("table:covered-table-cell")
TABLE_COLUMN = qn("table:table-column")
TABLE_COLUMNS = qn("table:table-columns")
TABLE_HEADER_COLUMNS = qn("table:table-header-columns")
TABLE_COLUMN_GROUP = qn("table:table-column-group")

# draw
DRAW_FRAME = qn("draw:frame")
DRAW_IMAGE = qn("draw:image")
DRAW_A = qn("draw:a")
DRAW_MIME_TYPE = qn("draw:mime-type")
DRAW_NAME = qn("draw:name")

# svg
SVG_TITLE = qn("svg:title")
SVG_DESC = qn("svg:desc")

# xlink
XLINK_HREF = qn("xlink:href")

# style
STYLE_STYLE = qn("style:style")
STYLE_NAME = qn("style:name")
STYLE_PARENT_STYLE_NAME = qn("style:parent-style-name")
STYLE_TEXT_PROPERTIES = qn("style:text-properties")
STYLE_FONT_NAME = qn("style:font-name")
STYLE_TEXT_UNDERLINE_STYLE = qn("style:text-underline-style")
STYLE_TEXT_LINE_THROUGH_STYLE = qn("style:text-line-through-style")
STYLE_TEXT_POSITION = qn("style:text-position")

# fo
FO_FONT_WEIGHT = qn("fo:font-weight")
FO_FONT_STYLE = qn("fo:font-style")
FO_FONT_FAMILY = qn("fo:font-family")

# metadata
DC_CREATOR = qn("dc:creator")
DC_TITLE = qn("dc:title")
META_INITIAL_CREATOR = qn("meta:initial-creator")

# lo_importer/ingestion/odf/styles.py
"""
Resolution of ODT style names into style descriptors.

LibreOffice writes most direct formatting as generated automatic styles
("T1", "P4") whose meaning only lives in their text properties. The catalog
turns every style into a descriptor string - its own name, keywords derived
from its properties, then its parent's descriptor - which the Inline
Formatting Translator substring-matches.

    T1 (fo:font-weight="bold")  ->  "T1 bold"
    P2 (parent Source_20_Code)  ->  "P2 Source_20_Code"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lxml import etree

from lo_importer.ingestion.odf import namespaces as ns

# Parent chains deeper than this are treated as cyclic
_MAX_PARENT_DEPTH = 16

_MONOSPACE_HINTS = ("mono", "courier", "consolas", "menlo", "code")


def _text_keywords(props: etree._Element) -> List[str]:
    """Descriptor keywords implied by a style:text-properties element."""
    keywords: List[str] = []

    weight = (props.get(ns.FO_FONT_WEIGHT) or "").lower()
    if weight == "bold" or (weight.isdigit() and int(weight) >= 600):
        keywords.append("bold")

    if (props.get(ns.FO_FONT_STYLE) or "").lower() in ("italic", "oblique"):
        keywords.append("italic")

    underline = props.get(ns.STYLE_TEXT_UNDERLINE_STYLE)
    if underline and underline != "none":
        keywords.append("underline")

    line_through = props.get(ns.STYLE_TEXT_LINE_THROUGH_STYLE)
    if line_through and line_through != "none":
        keywords.append("strike")

    font = " ".join(
        filter(None, [props.get(ns.STYLE_FONT_NAME), props.get(ns.FO_FONT_FAMILY)])
    ).lower()
    if any(hint in font for hint in _MONOSPACE_HINTS):
        keywords.append("monospace")

    position = (props.get(ns.STYLE_TEXT_POSITION) or "").strip().lower()
    if position:
        first = position.split()[0]
        if first == "super" or (first.endswith("%") and not first.startswith(("-", "0"))):
            keywords.append("superscript")
        elif first == "sub" or first.startswith("-"):
            keywords.append("subscript")

    return keywords


@dataclass(frozen=True)
class StyleCatalog:
    """
    Style lookups resolved once per document.

    descriptors: style name -> descriptor string
    list_levels: list style name -> {level: ordered?}
    """

    descriptors: Dict[str, str] = field(default_factory=dict)
    list_levels: Dict[str, Dict[int, bool]] = field(default_factory=dict)

    @classmethod
    def from_tree(cls, root: Optional[etree._Element]) -> "StyleCatalog":
        if root is None:
            return cls()

        own: Dict[str, List[str]] = {}
        parents: Dict[str, str] = {}
        list_levels: Dict[str, Dict[int, bool]] = {}

        for container_tag in (ns.OFFICE_STYLES, ns.OFFICE_AUTOMATIC_STYLES):
            for container in root.iter(container_tag):
                for style in container.iter(ns.STYLE_STYLE):
                    name = style.get(ns.STYLE_NAME)
                    if not name:
                        continue
                    keywords: List[str] = []
                    for props in style.iter(ns.STYLE_TEXT_PROPERTIES):
                        keywords.extend(_text_keywords(props))
                    own[name] = keywords
                    parent = style.get(ns.STYLE_PARENT_STYLE_NAME)
                    if parent:
                        parents[name] = parent

                for list_style in container.iter(ns.TEXT_LIST_STYLE):
                    name = list_style.get(ns.STYLE_NAME)
                    if not name:
                        continue
                    levels: Dict[int, bool] = {}
                    for level_style in list_style:
                        if level_style.tag not in (
                            ns.TEXT_LIST_LEVEL_STYLE_NUMBER,
                            ns.TEXT_LIST_LEVEL_STYLE_BULLET,
                        ):
                            continue
                        try:
                            level = int(level_style.get(ns.TEXT_LEVEL, "1"))
                        except ValueError:
                            continue
                        levels[level] = level_style.tag == ns.TEXT_LIST_LEVEL_STYLE_NUMBER
                    list_levels[name] = levels

        descriptors = {name: _resolve(name, own, parents) for name in own}
        return cls(descriptors=descriptors, list_levels=list_levels)

    def descriptor(self, name: Optional[str]) -> str:
        """Descriptor for a style name; unknown names describe themselves."""
        if not name:
            return ""
        return self.descriptors.get(name, name)

    def is_ordered_list(self, name: Optional[str], level: int = 1) -> bool:
        if not name:
            return False
        levels = self.list_levels.get(name, {})
        return levels.get(level, levels.get(1, False))


def _resolve(name: str, own: Dict[str, List[str]], parents: Dict[str, str]) -> str:
    parts: List[str] = []
    current: Optional[str] = name
    seen = set()
    while current and current not in seen and len(seen) < _MAX_PARENT_DEPTH:
        seen.add(current)
        parts.append(current)
        parts.extend(own.get(current, []))
        current = parents.get(current)
    return " ".join(parts)


__all__ = ["StyleCatalog"]

# lo_importer/ingestion/extraction/formatting.py
"""
Inline Formatting Translator.

Maps source-specific style markers onto the canonical inline tags:

    ODT  - the run's style descriptor is matched by case-insensitive substring
           ("bold" -> <strong>, "italic" -> <em>, ...)
    HTML - the source tag already names the format (<b> -> <strong>, ...)

The walkers call translate() bottom-up as recursion unwinds, so nested
runs compose (bold inside italic yields <em><strong>..</strong></em>).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from lo_importer.ingestion.extraction.markup import wrap

# Substring rules for ODT style descriptors, outermost wrapper first
STYLE_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("bold", "strong"), "strong"),
    (("italic", "emphasis"), "em"),
    (("underline",), "u"),
    (("strike", "line-through"), "del"),
    (("code", "monospace"), "code"),
    (("superscript",), "sup"),
    (("subscript",), "sub"),
]

# HTML source tag -> canonical tag
HTML_TAGS: Dict[str, str] = {
    "strong": "strong",
    "b": "strong",
    "em": "em",
    "i": "em",
    "u": "u",
    "strike": "del",
    "s": "del",
    "del": "del",
    "code": "code",
}


def tags_for_style(style: str) -> List[str]:
    """
    Canonical tags implied by a style descriptor, outermost first.

    Every matching rule contributes one tag; an unrecognized or empty
    descriptor yields no tags.
    """
    lowered = (style or "").lower().replace("_20_", " ")
    if not lowered:
        return []
    # LibreOffice's "Strong Emphasis" character style is plain bold
    lowered = lowered.replace("strong emphasis", "strong")

    tags: List[str] = []
    for needles, tag in STYLE_RULES:
        if any(needle in lowered for needle in needles):
            tags.append(tag)

    return tags


def translate(content: str, style: Optional[str] = None, tag: Optional[str] = None) -> str:
    """
    Apply inline formatting to already-rendered child markup.

    Args:
        content: Rendered child markup.
        style: ODT style descriptor (substring-matched).
        tag: HTML source tag name (taken at face value).

    Returns:
        content wrapped in the canonical tags, or unchanged if nothing applies.
    """
    if not content:
        return content

    if tag is not None:
        canonical = HTML_TAGS.get(tag.lower())
        return wrap(canonical, content) if canonical else content

    for canonical in reversed(tags_for_style(style or "")):
        content = wrap(canonical, content)
    return content


__all__ = ["STYLE_RULES", "HTML_TAGS", "tags_for_style", "translate"]

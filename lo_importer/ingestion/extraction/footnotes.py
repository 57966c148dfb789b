# lo_importer/ingestion/extraction/footnotes.py
"""
Footnote Collector helpers.

In-text reference:  <sup><a href="#fn-1" id="fnref-1">[1]</a></sup>
Trailing block:     <div class="footnotes"><hr /><ol>
                      <li id="fn-1">body <a href="#fnref-1">↩</a></li>
                    </ol></div>

The reference and the block entry point at each other, forming the
bidirectional pairing.
"""

from __future__ import annotations

import re
from typing import Mapping

from lo_importer.ingestion.extraction.markup import escape_text

FOOTNOTE_ANCHOR_RE = re.compile(r'<sup><a href="#fn-(\d+)" id="fnref-\1">\[\1\]</a></sup>')

# HTML superscripts whose text is a bare (optionally bracketed) number
NUMERIC_REFERENCE_RE = re.compile(r"^\[?\d+\]?$")

FOOTNOTE_HREF_MARKERS = ("#fn", "#footnote")

BACKREF_ARROW = "↩"


def footnote_anchor(footnote_id: int) -> str:
    """Render the in-text reference marker for a footnote id."""
    return (
        f'<sup><a href="#fn-{footnote_id}" id="fnref-{footnote_id}">'
        f"[{footnote_id}]</a></sup>"
    )


def looks_like_reference(text: str, hrefs: list[str]) -> bool:
    """
    Decide whether an HTML superscript is a footnote reference.

    True if its trimmed text is a number like 3 or [3], or if it holds a link
    pointing at a #fn / #footnote target.
    """
    if NUMERIC_REFERENCE_RE.match(text.strip()):
        return True
    return any(marker in href for href in hrefs for marker in FOOTNOTE_HREF_MARKERS)


def render_footnote_block(footnotes: Mapping[int, str], escape: bool = False) -> str:
    """
    Render the ordered footnote block appended after the content.

    Args:
        footnotes: id -> body.
        escape: True when bodies are plain text (ODT), False when they are
                already markup (HTML).
    """
    if not footnotes:
        return ""

    items = []
    for footnote_id, body in footnotes.items():
        rendered = escape_text(body) if escape else body
        items.append(
            f'<li id="fn-{footnote_id}">{rendered} '
            f'<a href="#fnref-{footnote_id}">{BACKREF_ARROW}</a></li>'
        )

    return '<div class="footnotes"><hr /><ol>' + "".join(items) + "</ol></div>"


__all__ = [
    "FOOTNOTE_ANCHOR_RE",
    "footnote_anchor",
    "looks_like_reference",
    "render_footnote_block",
]

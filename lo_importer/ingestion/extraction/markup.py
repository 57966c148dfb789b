# lo_importer/ingestion/extraction/markup.py
"""
Escaping and inspection helpers for the canonical markup subset.
"""

from __future__ import annotations

import html
import re
from urllib.parse import urlsplit

_TAG_RE = re.compile(r"<[^>]*>")

# Schemes that must never reach an href/src attribute
_UNSAFE_SCHEMES = {"javascript", "vbscript", "data"}

# Braces are reserved for {{IMAGE_k}} placeholders the walkers emit
_BRACES = str.maketrans({"{": "&#123;", "}": "&#125;"})


def _escape(value: str) -> str:
    return html.escape(value, quote=True).translate(_BRACES)


def escape_text(text: str) -> str:
    """
    Escape text for embedding between tags.

    Literal braces become character references so source text can never
    forge an image placeholder.
    """
    return _escape(text)


def escape_attr(value: str) -> str:
    """Escape a value for embedding in a double-quoted attribute."""
    return _escape(value)


def escape_url(url: str) -> str:
    """
    Escape a URL for an href/src attribute.

    Returns an empty string for script-capable schemes; callers treat that
    as "no usable URL".
    """
    url = url.strip()
    if not url:
        return ""
    scheme = urlsplit(url).scheme.lower()
    if scheme in _UNSAFE_SCHEMES:
        return ""
    return _escape(url)


def is_absolute_url(url: str) -> bool:
    """True for URLs with both a scheme and a host (http://example.com/a.png)."""
    parts = urlsplit(url.strip())
    return bool(parts.scheme and parts.netloc)


def strip_tags(markup: str) -> str:
    return _TAG_RE.sub("", markup)


def has_content(markup: str) -> bool:
    """
    True if markup renders to something.

    Images count as content even though they carry no text.
    """
    if strip_tags(markup).strip():
        return True
    return "<img " in markup


def wrap(tag: str, content: str) -> str:
    return f"<{tag}>{content}</{tag}>"


__all__ = [
    "escape_text",
    "escape_attr",
    "escape_url",
    "is_absolute_url",
    "strip_tags",
    "has_content",
    "wrap",
]

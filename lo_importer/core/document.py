# lo_importer/core/document.py
"""
Core document types for the import pipeline.

Document is the single normalized record produced from an ODT archive or a
pasted HTML fragment. It carries the heuristically recovered fields (title,
author, abstract), the canonical markup, and the binary/footnote artifacts
referenced from that markup by sequential ids.

Flow: SourceDocument → Parser → Document → PostCreator (external)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping

# Extension → MIME type for assets handed to the downstream collaborator
IMAGE_MIME_TYPES: Dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}


class ElementKind(Enum):
    """
    Closed set of structural element kinds the walkers dispatch on.

    Each format maps its own tags onto these kinds; anything unmapped is
    DESCEND, which visits the children and discards the wrapper.
    """

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    EMPHASIS = "emphasis"  # strong/em/u/del/code (or an ODT styled span)
    LINK = "link"
    LIST = "list"
    LIST_ITEM = "list_item"
    TABLE = "table"  # table/thead/tbody/tr/th/td and ODT equivalents
    LINE_BREAK = "line_break"
    RULE = "rule"
    BLOCKQUOTE = "blockquote"
    PREFORMATTED = "preformatted"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    IMAGE = "image"
    NOTE = "note"
    SPACE = "space"
    TAB = "tab"
    CONTAINER = "container"  # div/span equivalents: children only
    SKIP = "skip"  # non-content: neither element nor children emitted
    DESCEND = "descend"  # unknown element: children still visited


@dataclass(frozen=True)
class ImageAsset:
    """
    Binary image pulled out of the source document.

    The engine never persists it; the downstream collaborator stores the bytes
    and substitutes the matching {{IMAGE_<id>}} placeholder with an address.
    """

    data: bytes
    extension: str  # lowercase, no leading dot
    original_name: str

    @property
    def mime_type(self) -> str:
        """MIME type derived from the extension."""
        return IMAGE_MIME_TYPES.get(self.extension.lower(), "application/octet-stream")

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"ImageAsset({self.original_name!r}, {self.extension}, {self.size} bytes)"


@dataclass(frozen=True)
class Document:
    """
    Normalized result of one parse invocation.

    images and footnotes are read-only mappings keyed by ids 1..N in
    discovery order. Every key appears exactly once as a marker in content.
    """

    title: str
    author: str = ""
    abstract: str = ""
    content: str = ""
    images: Mapping[int, ImageAsset] = field(default_factory=dict)
    footnotes: Mapping[int, str] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the collections so a returned Document cannot be mutated
        object.__setattr__(self, "images", MappingProxyType(dict(self.images)))
        object.__setattr__(self, "footnotes", MappingProxyType(dict(self.footnotes)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def footnote_count(self) -> int:
        return len(self.footnotes)

    def to_dict(self, include_image_data: bool = False) -> Dict[str, Any]:
        """
        Plain-dict view for serialization.

        Image bytes are omitted unless include_image_data is set; the size is
        always reported.
        """
        images: Dict[str, Any] = {}
        for image_id, asset in self.images.items():
            entry: Dict[str, Any] = {
                "extension": asset.extension,
                "original_name": asset.original_name,
                "mime_type": asset.mime_type,
                "size": asset.size,
            }
            if include_image_data:
                entry["data"] = asset.data
            images[str(image_id)] = entry

        return {
            "title": self.title,
            "author": self.author,
            "abstract": self.abstract,
            "content": self.content,
            "images": images,
            "footnotes": {str(k): v for k, v in self.footnotes.items()},
            "metadata": dict(self.metadata),
        }

    def __repr__(self) -> str:
        return (
            f"Document({self.title!r}, {self.image_count} images, "
            f"{self.footnote_count} footnotes)"
        )


__all__ = [
    "IMAGE_MIME_TYPES",
    "ElementKind",
    "ImageAsset",
    "Document",
]

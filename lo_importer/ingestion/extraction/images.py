# lo_importer/ingestion/extraction/images.py
"""
Image Extractor helpers.

Turns embedded image bytes (ODT archive entries) and inline data URIs (HTML)
into ImageAsset values, and renders the placeholder <img> tag that stands in
for an asset until the downstream collaborator has stored it.

No network access happens here: external URLs are never fetched.
"""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import PurePosixPath
from typing import Optional

from lo_importer.core.document import IMAGE_MIME_TYPES, ImageAsset
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import IMAGES

logger = get_logger(__name__)

PLACEHOLDER_TEMPLATE = "{{{{IMAGE_{id}}}}}"

# Placeholder <img> exactly as image_tag() renders it
IMAGE_TAG_RE = re.compile(r'<img src="\{\{IMAGE_(\d+)\}\}" alt="([^"]*)" />')

DATA_URI_RE = re.compile(r"^data:image/([a-z0-9.+-]+);base64,(.*)$", re.IGNORECASE | re.DOTALL)

_EXTENSION_FOR_MIME = {mime: ext for ext, mime in IMAGE_MIME_TYPES.items() if ext != "jpeg"}


def placeholder(image_id: int) -> str:
    """Token the collaborator replaces with the stored asset's address."""
    return PLACEHOLDER_TEMPLATE.format(id=image_id)


def image_tag(image_id: int, alt_attr: str) -> str:
    """Render the placeholder image; alt_attr must already be escaped."""
    return f'<img src="{placeholder(image_id)}" alt="{alt_attr}" />'


def strip_image_placeholders(content: str) -> str:
    """Remove every placeholder image from content."""
    return IMAGE_TAG_RE.sub("", content)


def normalize_extension(raw: str) -> str:
    """
    Lowercase extension without leading dot.

    Handles MIME subtypes as well (svg+xml -> svg, x-ms-bmp -> bmp).
    """
    ext = raw.strip().lower().lstrip(".")
    ext = ext.split("+", 1)[0]
    if ext.startswith("x-ms-"):
        ext = ext[5:]
    elif ext.startswith("x-"):
        ext = ext[2:]
    return ext


def decode_data_uri(src: str) -> Optional[ImageAsset]:
    """
    Decode a data:image/<ext>;base64,<payload> URI.

    Returns None when src is not a base64 image data URI or the payload does
    not decode; the caller then emits nothing for the image.
    """
    match = DATA_URI_RE.match(src.strip())
    if not match:
        return None

    extension = normalize_extension(match.group(1))
    payload = re.sub(r"\s+", "", match.group(2))

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"{IMAGES} Skipping undecodable data URI ({extension}): {e}")
        return None

    if not data:
        logger.warning(f"{IMAGES} Skipping empty data URI ({extension})")
        return None

    return ImageAsset(data=data, extension=extension, original_name=f"image.{extension}")


def asset_from_archive(href: str, data: bytes, mime_type: str = "") -> ImageAsset:
    """
    Build an asset from an archive entry.

    The extension comes from the entry name; the declared MIME type is only
    consulted when the name has none.
    """
    path = PurePosixPath(href)
    extension = normalize_extension(path.suffix)
    if not extension and mime_type:
        extension = _EXTENSION_FOR_MIME.get(mime_type.lower(), "")
    return ImageAsset(data=data, extension=extension, original_name=path.name)


__all__ = [
    "IMAGE_TAG_RE",
    "placeholder",
    "image_tag",
    "strip_image_placeholders",
    "normalize_extension",
    "decode_data_uri",
    "asset_from_archive",
]

# lo_importer/publish/placeholders.py
"""
Placeholder substitution for stored images.

Content carries <img src="{{IMAGE_k}}" alt="..." /> for every extracted
image. Once the collaborator has stored asset k somewhere addressable, the
placeholder is swapped for that address.
"""

from __future__ import annotations

from typing import Mapping

from lo_importer.core.document import IMAGE_MIME_TYPES
from lo_importer.ingestion.extraction.images import IMAGE_TAG_RE, strip_image_placeholders
from lo_importer.ingestion.extraction.markup import escape_url
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import IMAGES

logger = get_logger(__name__)


def resolve_image_placeholders(content: str, urls: Mapping[int, str]) -> str:
    """
    Replace image placeholders with stored addresses.

    Images without a usable address are removed rather than left pointing at
    an unresolved placeholder.
    """

    def _resolve(match) -> str:
        image_id = int(match.group(1))
        url = escape_url(urls.get(image_id, ""))
        if not url:
            logger.warning(f"{IMAGES} No address for image {image_id}; removing it")
            return ""
        return f'<img src="{url}" alt="{match.group(2)}" />'

    return IMAGE_TAG_RE.sub(_resolve, content)


def mime_type_for(extension: str) -> str:
    """MIME type for an image extension, or application/octet-stream."""
    return IMAGE_MIME_TYPES.get(extension.lower().lstrip("."), "application/octet-stream")


__all__ = ["resolve_image_placeholders", "strip_image_placeholders", "mime_type_for"]

# lo_importer/publish/__init__.py
"""
Helpers for the collaborator that publishes a parsed Document.
"""

from lo_importer.publish.base import PostCreator, store_images
from lo_importer.publish.placeholders import (
    mime_type_for,
    resolve_image_placeholders,
    strip_image_placeholders,
)

__all__ = [
    "PostCreator",
    "store_images",
    "resolve_image_placeholders",
    "strip_image_placeholders",
    "mime_type_for",
]

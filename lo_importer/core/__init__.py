# lo_importer/core/__init__.py
"""
Core contracts for the import engine: the Document value and its errors.
"""

from lo_importer.core.document import IMAGE_MIME_TYPES, Document, ElementKind, ImageAsset
from lo_importer.core.exceptions import (
    ConfigError,
    ContainerError,
    ContainerUnreadableError,
    ImporterError,
    MalformedXmlError,
    MissingEntryError,
    TitleExtractionError,
    UnsupportedFormatError,
)

__all__ = [
    "IMAGE_MIME_TYPES",
    "Document",
    "ElementKind",
    "ImageAsset",
    "ImporterError",
    "ContainerError",
    "ContainerUnreadableError",
    "MissingEntryError",
    "MalformedXmlError",
    "TitleExtractionError",
    "UnsupportedFormatError",
    "ConfigError",
]

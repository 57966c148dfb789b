# lo_importer/__init__.py
"""
lo_importer - turn LibreOffice documents and pasted rich text into posts.

Quick Start:
    >>> from lo_importer import parse_html
    >>> doc = parse_html("<h1>My Title</h1><p>Author: Jane Doe</p><p>...</p>")
    >>> doc.title, doc.author
    ('My Title', 'Jane Doe')

Public API:
    Entry points:
        - parse_odt: ODT archive bytes -> Document
        - parse_html: HTML fragment -> Document
        - parse_file: path (.odt / .html) -> Document

    Types:
        - Document, ImageAsset
        - ImportOptions, load_import_options

    Exceptions:
        - ImporterError and its subclasses

Flow:
    bytes / text → SourceDocument → Parser (walker + extractors) → Document

The engine never persists anything. Publishing a Document (storing images,
resolving {{IMAGE_k}} placeholders, matching the author) is the job of a
PostCreator supplied by the caller; see lo_importer.publish.
"""

__version__ = "0.1.0"

# =============================================================================
# CORE TYPES
# =============================================================================

from lo_importer.config import ImportOptions, load_import_options
from lo_importer.core import (
    ConfigError,
    ContainerError,
    ContainerUnreadableError,
    Document,
    ImageAsset,
    ImporterError,
    MalformedXmlError,
    MissingEntryError,
    TitleExtractionError,
    UnsupportedFormatError,
)
from lo_importer.importer import parse_file, parse_html, parse_odt

# =============================================================================
# PUBLIC API
# =============================================================================

__all__ = [
    # Version
    "__version__",
    # Entry points
    "parse_odt",
    "parse_html",
    "parse_file",
    # Types
    "Document",
    "ImageAsset",
    "ImportOptions",
    "load_import_options",
    # Exceptions
    "ImporterError",
    "ContainerError",
    "ContainerUnreadableError",
    "MissingEntryError",
    "MalformedXmlError",
    "TitleExtractionError",
    "UnsupportedFormatError",
    "ConfigError",
]

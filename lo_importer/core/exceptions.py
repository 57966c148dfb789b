# lo_importer/core/exceptions.py
"""
All exceptions raised by the import engine.

Hierarchy:
    ImporterError
    ├── ContainerError - ODT archive could not be used
    │   ├── ContainerUnreadableError - archive cannot be opened at all
    │   ├── MissingEntryError - required entry (content.xml) absent
    │   └── MalformedXmlError - an entry is not well-formed XML
    ├── TitleExtractionError - no usable title could be recovered
    ├── UnsupportedFormatError - no parser for the requested format
    └── ConfigError - import options invalid or unreadable

Every parse-time error is terminal for the call: retrying on the same bytes
reproduces it, and no partial Document is ever returned.
"""

from __future__ import annotations


class ImporterError(Exception):
    """Base class for import failures."""

    def __init__(self, message: str, source: str = "", cause: Exception | None = None):
        super().__init__(message)
        self.source = source
        self.cause = cause


# =============================================================================
# Container Errors (ODT path)
# =============================================================================


class ContainerError(ImporterError):
    """The ODT zip container could not be used."""

    pass


class ContainerUnreadableError(ContainerError):
    """Archive cannot be opened."""

    pass


class MissingEntryError(ContainerError):
    """A required archive entry is missing."""

    def __init__(
        self, message: str, entry: str, source: str = "", cause: Exception | None = None
    ):
        super().__init__(message, source=source, cause=cause)
        self.entry = entry


class MalformedXmlError(ContainerError):
    """A retrieved XML payload is not well-formed."""

    def __init__(
        self, message: str, entry: str, source: str = "", cause: Exception | None = None
    ):
        super().__init__(message, source=source, cause=cause)
        self.entry = entry


# =============================================================================
# Extraction Errors
# =============================================================================


class TitleExtractionError(ImporterError):
    """No usable title was found; the caller must not publish."""

    pass


class UnsupportedFormatError(ImporterError):
    """No parser is registered for the requested format."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(ImporterError):
    """Import options failed validation or could not be read."""

    pass


__all__ = [
    "ImporterError",
    "ContainerError",
    "ContainerUnreadableError",
    "MissingEntryError",
    "MalformedXmlError",
    "TitleExtractionError",
    "UnsupportedFormatError",
    "ConfigError",
]

# lo_importer/ingestion/parser/router.py
"""
ParserRouter - Routes sources to the parser for their format.

Architecture:
    ┌─────────────────────────────────────┐
    │           ParserRouter              │
    │  Routes sources to the right parser │
    └─────────────────────────────────────┘
                    │
            ┌───────┴───────┐
            │               │
            ▼               ▼
       OdtParser        HtmlParser
        (.odt)        (.html, .htm)

Usage:
    router = ParserRouter(options=ImportOptions())
    doc = router.parse(source)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lo_importer.config.schema import ImportOptions
from lo_importer.core.document import Document
from lo_importer.core.exceptions import ImporterError, UnsupportedFormatError
from lo_importer.ingestion.parser.base import Parser
from lo_importer.ingestion.source import SourceDocument
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import WALKER

logger = get_logger(__name__)


def normalize_extension(ext: str) -> str:
    """'ODT' / 'odt' / '.odt' -> '.odt'"""
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


@dataclass
class ParserRouter:
    """
    Routes sources to parsers by extension.

    Unlike a file-ingestion router there is no fallback parser: an extension
    nobody registered is an UnsupportedFormatError.

    Example:
        router = ParserRouter()
        doc = router.parse(SourceDocument.from_path(Path("essay.odt")))
    """

    options: ImportOptions = field(default_factory=ImportOptions)
    _parsers: Dict[str, Parser] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not self._parsers:
            self._initialize_default_parsers()

    def _initialize_default_parsers(self) -> None:
        from lo_importer.ingestion.parser.plugins.html import HtmlParser
        from lo_importer.ingestion.parser.plugins.odt import OdtParser

        self.register_parser(OdtParser(options=self.options))
        self.register_parser(HtmlParser(options=self.options))

    def register_parser(self, parser: Parser, extensions: Optional[List[str]] = None) -> None:
        """
        Register a parser for specific extensions.

        Args:
            parser: Parser instance to register.
            extensions: Extensions to register for. If None, uses
                        parser.supported_extensions.
        """
        exts = extensions or sorted(getattr(parser, "supported_extensions", []))
        for ext in exts:
            normalized = normalize_extension(ext)
            self._parsers[normalized] = parser
            logger.debug(f"{WALKER} Registered parser '{parser.plugin_name}' for {normalized}")

    def get_parser(self, ext: str) -> Parser:
        """
        Parser for an extension or format name ("odt", ".html").

        Raises:
            UnsupportedFormatError: If no parser handles the extension.
        """
        normalized = normalize_extension(ext)
        parser = self._parsers.get(normalized)
        if parser is None:
            raise UnsupportedFormatError(
                f"No parser registered for '{normalized}' "
                f"(supported: {', '.join(self.registered_extensions)})"
            )
        return parser

    def can_parse(self, source: SourceDocument) -> bool:
        parser = self._parsers.get(normalize_extension(source.extension))
        return parser is not None and parser.can_parse(source)

    def parse(self, source: SourceDocument) -> Document:
        """
        Parse a source with the parser registered for its extension.

        Raises:
            ImporterError: Typed errors from the parser are re-raised as is;
                anything else is wrapped.
        """
        parser = self.get_parser(source.extension)
        logger.debug(f"{WALKER} Parsing {source.uri} with {parser.plugin_name} parser")

        try:
            return parser.parse(source)
        except ImporterError:
            raise
        except Exception as e:
            raise ImporterError(
                f"Parser '{parser.plugin_name}' failed: {e}",
                source=source.uri,
                cause=e,
            ) from e

    @property
    def registered_extensions(self) -> List[str]:
        return sorted(self._parsers.keys())

    def __repr__(self) -> str:
        return f"ParserRouter(extensions=[{', '.join(self.registered_extensions)}])"


__all__ = ["ParserRouter", "normalize_extension"]

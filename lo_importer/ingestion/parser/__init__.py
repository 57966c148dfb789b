# lo_importer/ingestion/parser/__init__.py
"""
Parser plugins for document format understanding.

Parsers turn a SourceDocument into the normalized Document; the router
picks one by extension.
"""

from lo_importer.ingestion.parser.base import Parser
from lo_importer.ingestion.parser.plugins.html import HtmlParser
from lo_importer.ingestion.parser.plugins.odt import OdtParser
from lo_importer.ingestion.parser.router import ParserRouter

__all__ = [
    "Parser",
    "ParserRouter",
    "OdtParser",
    "HtmlParser",
]

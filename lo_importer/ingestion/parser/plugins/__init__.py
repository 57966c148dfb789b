# lo_importer/ingestion/parser/plugins/__init__.py
"""
Parser plugins for document format understanding.
"""

from lo_importer.ingestion.parser.plugins.html import HtmlParser
from lo_importer.ingestion.parser.plugins.odt import OdtParser

__all__ = ["HtmlParser", "OdtParser"]

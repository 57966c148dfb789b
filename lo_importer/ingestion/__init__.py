# lo_importer/ingestion/__init__.py
"""
Document ingestion: sources, parsers and the extraction helpers they share.
"""

from lo_importer.ingestion.source import SourceDocument
from lo_importer.ingestion.state import ExtractionState

__all__ = ["SourceDocument", "ExtractionState"]

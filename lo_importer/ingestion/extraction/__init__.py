# lo_importer/ingestion/extraction/__init__.py
"""
Format-independent extraction steps used by both walkers.
"""

from lo_importer.ingestion.extraction.fields import ExtractedFields, FieldExtractor, TextOutline
from lo_importer.ingestion.extraction.formatting import translate
from lo_importer.ingestion.extraction.normalizer import normalize_content

__all__ = [
    "ExtractedFields",
    "FieldExtractor",
    "TextOutline",
    "translate",
    "normalize_content",
]

# lo_importer/ingestion/odf/__init__.py
"""
OpenDocument plumbing: namespaces, the zip container, style resolution.
"""

from lo_importer.ingestion.odf.container import OdtContainer
from lo_importer.ingestion.odf.styles import StyleCatalog

__all__ = ["OdtContainer", "StyleCatalog"]

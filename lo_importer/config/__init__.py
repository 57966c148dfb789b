# lo_importer/config/__init__.py
from lo_importer.config.loader import deep_merge, load_import_options
from lo_importer.config.schema import ImportOptions

__all__ = ["ImportOptions", "deep_merge", "load_import_options"]

# lo_importer/logging/__init__.py
from lo_importer.logging.logger import configure_logging, get_logger, verbosity_level

__all__ = ["configure_logging", "get_logger", "verbosity_level"]

# lo_importer/logging/tags.py
"""
Subsystem tags prefixed to log messages so output stays searchable.
"""

CONTAINER = "[CONTAINER]"
WALKER = "[WALKER]"
FIELDS = "[FIELDS]"
IMAGES = "[IMAGES]"
FOOTNOTES = "[FOOTNOTES]"
NORMALIZE = "[NORMALIZE]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"

# lo_importer/cli/commands/__init__.py
"""
CLI command implementations, imported lazily by lo_importer.cli.cli.
"""

# lo_importer/cli/__init__.py
"""
lo-importer CLI.

Usage:
    lo-importer parse essay.odt          # Summary of the parsed Document
    lo-importer parse paste.html --json  # Full Document as JSON
    lo-importer config                   # Effective import options
"""

from lo_importer.cli.cli import app

__all__ = ["app"]

# lo_importer/importer.py
"""
Top-level entry points.

Each call builds its own SourceDocument and parser, so nothing is shared
between concurrent imports.

Usage:
    from lo_importer import parse_odt, parse_html, parse_file

    doc = parse_odt(Path("essay.odt").read_bytes())
    doc = parse_html("<h1>Title</h1><p>Body</p>")
    doc = parse_file(Path("essay.odt"), options=load_import_options())
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from lo_importer.config.schema import ImportOptions
from lo_importer.core.document import Document
from lo_importer.core.exceptions import ImporterError
from lo_importer.ingestion.parser.plugins.html import HtmlParser
from lo_importer.ingestion.parser.plugins.odt import OdtParser
from lo_importer.ingestion.parser.router import ParserRouter, normalize_extension
from lo_importer.ingestion.source import SourceDocument


def parse_odt(
    data: bytes, options: Optional[ImportOptions] = None, source: str = "<odt>"
) -> Document:
    """
    Parse an ODT archive held in memory.

    Raises:
        ContainerError: If the archive or its XML cannot be used.
        TitleExtractionError: If no title can be recovered.
    """
    parser = OdtParser(options=options or ImportOptions())
    return parser.parse(SourceDocument(uri=source, payload=data, extension=".odt"))


def parse_html(
    fragment: Union[str, bytes], options: Optional[ImportOptions] = None, source: str = "<html>"
) -> Document:
    """
    Parse a pasted HTML fragment.

    Raises:
        TitleExtractionError: If no title can be recovered.
    """
    parser = HtmlParser(options=options or ImportOptions())
    return parser.parse(SourceDocument(uri=source, payload=fragment, extension=".html"))


def parse_file(
    path: Path, options: Optional[ImportOptions] = None, format: Optional[str] = None
) -> Document:
    """
    Parse a file from disk.

    Args:
        path: ODT or HTML file.
        options: Import options; package defaults when omitted.
        format: "odt" or "html" to override the file extension.

    Raises:
        ImporterError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise ImporterError(f"Failed to read {path}: {e}", source=str(path), cause=e) from e

    extension = normalize_extension(format) if format else path.suffix.lower()
    router = ParserRouter(options=options or ImportOptions())
    return router.parse(SourceDocument(uri=str(path), payload=payload, extension=extension))


__all__ = ["parse_odt", "parse_html", "parse_file"]

# lo_importer/cli/commands/parse.py
"""
Parse command.

Usage:
    lo-importer parse essay.odt
    lo-importer parse paste.txt --format html
    lo-importer parse essay.odt --json --config my.yaml
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lo_importer.config.loader import load_import_options
from lo_importer.core.document import Document
from lo_importer.core.exceptions import ImporterError
from lo_importer.importer import parse_file
from lo_importer.logging.logger import configure_logging, get_logger, verbosity_level
from lo_importer.logging.tags import CLI

logger = get_logger(__name__)

console = Console()

_PREVIEW_CHARS = 300


def _error(msg: str) -> None:
    console.print(f"[red]✗[/red] {escape(msg)}", highlight=False)


def _show_summary(doc: Document) -> None:
    console.print(Panel.fit(f"[bold]{escape(doc.title)}[/bold]", border_style="blue"))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Author", escape(doc.author or "-"))
    table.add_row("Abstract", escape(doc.abstract or "-"))
    table.add_row("Images", str(doc.image_count))
    table.add_row("Footnotes", str(doc.footnote_count))
    table.add_row("Content", f"{len(doc.content)} chars")
    console.print(table)

    for image_id, asset in doc.images.items():
        console.print(
            f"  {{{{IMAGE_{image_id}}}}} {asset.original_name} ({asset.mime_type}, {asset.size} bytes)",
            markup=False,
            highlight=False,
        )

    preview = doc.content[:_PREVIEW_CHARS]
    if len(doc.content) > _PREVIEW_CHARS:
        preview += "..."
    console.print(preview, markup=False, highlight=False)


def command(
    path: Path,
    format: Optional[str] = None,
    config: Optional[Path] = None,
    as_json: bool = False,
    verbose: bool = False,
) -> None:
    """Parse one file; exit code 1 on any import failure."""
    configure_logging(verbosity_level(verbose))

    try:
        options = load_import_options(config)
        doc = parse_file(path, options=options, format=format)
    except ImporterError as e:
        logger.debug(f"{CLI} Import of {path} failed: {e!r}")
        _error(str(e))
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(doc.to_dict(), indent=2, ensure_ascii=False))
        return

    _show_summary(doc)

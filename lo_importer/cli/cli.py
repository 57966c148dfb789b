# lo_importer/cli/cli.py
"""
lo-importer CLI - Main application.

Commands:
    lo-importer parse     Parse an ODT or HTML file into a Document
    lo-importer config    Show the effective import options

NOTE: Commands use lazy loading - parser imports only happen when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="lo-importer",
    help="Import LibreOffice documents and pasted rich text. Start with: lo-importer parse essay.odt",
    no_args_is_help=True,
    add_completion=False,
)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("parse")
def parse(
    path: Path = typer.Argument(..., help="ODT or HTML file to parse."),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Force format: odt or html."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to merge over defaults."),
    as_json: bool = typer.Option(False, "--json", help="Output the Document as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Parse a document and report the extracted fields."""
    from lo_importer.cli.commands import parse as mod

    mod.command(path=path, format=format, config=config, as_json=as_json, verbose=verbose)


@app.command("config")
def config(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to merge over defaults."),
) -> None:
    """Show the effective import options as YAML."""
    from lo_importer.cli.commands import config as mod

    mod.command(config=config)


if __name__ == "__main__":
    app()

# lo_importer/cli/commands/config.py
"""
Configuration command.

Usage:
    lo-importer config                 # Effective options (defaults + user file)
    lo-importer config --config my.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml

from lo_importer.config.loader import CONFIG_KEY, load_import_options
from lo_importer.core.exceptions import ConfigError


def command(config: Optional[Path] = None) -> None:
    try:
        options = load_import_options(config)
    except ConfigError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(yaml.safe_dump({CONFIG_KEY: options.model_dump()}, sort_keys=False).rstrip())

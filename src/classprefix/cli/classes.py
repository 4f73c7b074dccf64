"""CLI command: classprefix classes -- list the classes a stylesheet defines."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from classprefix.errors import StylesheetError
from classprefix.stylesheet import load_class_set


@click.command()
@click.argument("stylesheet", type=click.Path(dir_okay=False, path_type=Path))
def classes(stylesheet: Path) -> None:
    """Print every class token found in STYLESHEET, one per line."""
    try:
        class_set = load_class_set(stylesheet)
    except StylesheetError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for name in class_set:
        click.echo(name)

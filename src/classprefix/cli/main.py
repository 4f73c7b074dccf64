"""classprefix CLI entry point: Click group with subcommands."""

import logging

import click

from classprefix import __version__


@click.group()
@click.version_option(version=__version__, prog_name="classprefix")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """classprefix - prefix generated utility classes in JS/TS sources."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


# Import and register subcommands
from classprefix.cli.classes import classes  # noqa: E402
from classprefix.cli.completion import completion  # noqa: E402
from classprefix.cli.prefix import prefix  # noqa: E402

cli.add_command(prefix)
cli.add_command(classes)
cli.add_command(completion)

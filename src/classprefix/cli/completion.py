"""CLI command: classprefix completion -- print a shell completion script."""

from __future__ import annotations

import click
from click.shell_completion import get_completion_class

SHELLS = ("bash", "zsh", "fish")


@click.command()
@click.argument("shell", type=click.Choice(SHELLS))
@click.pass_context
def completion(ctx: click.Context, shell: str) -> None:
    """Print the completion script for SHELL.

    Example: classprefix completion bash >> ~/.bashrc
    """
    root = ctx.find_root()
    prog_name = root.info_name or "classprefix"
    complete_var = f"_{prog_name.replace('-', '_').upper()}_COMPLETE"
    comp_cls = get_completion_class(shell)
    if comp_cls is None:
        raise click.UsageError(f"unsupported shell: {shell}")
    comp = comp_cls(root.command, {}, prog_name, complete_var)
    click.echo(comp.source())

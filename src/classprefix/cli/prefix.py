"""CLI command: classprefix prefix -- rewrite class tokens under a directory."""

from __future__ import annotations

import re
import sys
from pathlib import Path

import click

from classprefix.config import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS, DEFAULT_SCOPES, PrefixConfig
from classprefix.errors import PrefixerError
from classprefix.events.bus import EventBus
from classprefix.events.types import FileProcessed, RunCompleted, RunStarted
from classprefix.model.outcome import FileStatus
from classprefix.runner import Runner

_REMINDER = (
    "[DONE] Remember to run your formatter on the transformed files "
    "to make sure the format is as expected."
)


_DESCRIPTOR_RE = re.compile(r"^(att|prop|fn):")


class _ScopesOption(click.Option):
    """``--scopes`` that also takes the descriptors following it.

    ``--scopes att:className fn:cva ./src`` collects both descriptors and
    leaves ``./src`` for ROOT. Each value is stored as if the option had been
    repeated.
    """

    def add_to_parser(self, parser, ctx):
        result = super().add_to_parser(parser, ctx)
        for name in self.opts:
            option = parser._long_opt.get(name) or parser._short_opt.get(name)
            if option is None:
                continue
            store = option.process

            def process(value, state, store=store):
                store(value, state)
                while state.rargs and _DESCRIPTOR_RE.match(state.rargs[0]):
                    store(state.rargs.pop(0), state)

            option.process = process
            break
        return result


def _attach_reporter(bus: EventBus, dry_run: bool) -> None:
    """Print one line per processed file and a closing summary."""

    def on_start(event: RunStarted) -> None:
        click.echo(
            f"[INFO] {event.known_classes} known classes, "
            f"{event.files} source files under {event.root}",
            err=True,
        )

    def on_file(event: FileProcessed) -> None:
        outcome = event.outcome
        if outcome.status is FileStatus.REWRITTEN:
            verb = "would transform" if dry_run else "transformed"
            click.echo(f"[INFO] {verb} {click.style(str(outcome.path), fg='green')}", err=True)
        elif outcome.status is FileStatus.SKIPPED:
            click.echo(f"{click.style('[WARN]', fg='yellow')} skipped {outcome.error}", err=True)
        elif outcome.status is FileStatus.FAILED:
            click.echo(
                f"{click.style('[ERROR]', fg='red')} failed to process file, "
                f"{outcome.path}: {outcome.error}",
                err=True,
            )

    def on_done(event: RunCompleted) -> None:
        summary = event.summary
        click.echo(
            f"Summary: {summary.count(FileStatus.REWRITTEN)} rewritten, "
            f"{summary.count(FileStatus.UNCHANGED)} unchanged, "
            f"{summary.count(FileStatus.SKIPPED)} skipped, "
            f"{summary.count(FileStatus.FAILED)} failed"
            + (f", {summary.count(FileStatus.CANCELLED)} cancelled" if summary.interrupted else "")
        )
        if summary.rewritten and not summary.dry_run:
            click.echo(click.style(_REMINDER, fg="green"), err=True)

    bus.subscribe(RunStarted, on_start)
    bus.subscribe(FileProcessed, on_file)
    bus.subscribe(RunCompleted, on_done)


@click.command()
@click.argument("root", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "-i",
    "--input",
    "stylesheet",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generated stylesheet, e.g. the output of `npx tailwindcss -i input.css -o output.css`",
)
@click.option("-p", "--prefix", "prefix_", required=True, help="Prefix to add to every known class")
@click.option(
    "-s",
    "--scopes",
    cls=_ScopesOption,
    multiple=True,
    default=DEFAULT_SCOPES,
    show_default=True,
    help="Where to look for classes, e.g. 'att:className,*ClassName prop:classes fn:cva'. Takes several descriptors; repeatable.",
)
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    default=DEFAULT_EXTENSIONS,
    show_default=True,
    help="Source file extension to process. Repeatable.",
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    default=DEFAULT_EXCLUDES,
    show_default=True,
    help="Directory name to skip. Repeatable.",
)
@click.option("-j", "--jobs", type=int, default=None, help="Worker threads (default: automatic)")
@click.option("--dry-run", is_flag=True, help="Report files that would change without writing")
@click.option("--no-ignore", is_flag=True, help="Also process files matched by .gitignore and .ignore files")
def prefix(
    root: Path,
    stylesheet: Path,
    prefix_: str,
    scopes: tuple[str, ...],
    extensions: tuple[str, ...],
    excludes: tuple[str, ...],
    jobs: int | None,
    dry_run: bool,
    no_ignore: bool,
) -> None:
    """Apply a prefix to every known utility class in the project at ROOT."""
    config = PrefixConfig(
        prefix=prefix_,
        stylesheet=stylesheet,
        root=root,
        scopes=tuple(scopes),
        extensions=tuple(extensions),
        excludes=tuple(excludes),
        workers=jobs,
        dry_run=dry_run,
        use_ignore_files=not no_ignore,
    )
    bus = EventBus()
    _attach_reporter(bus, dry_run)

    try:
        summary = Runner(config, event_bus=bus).run()
    except PrefixerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    sys.exit(summary.exit_code)

"""CLI entrypoint for :mod:`duo_cli`.

    duo [options] [entries...]

Installs and builds each entry with the configured engine. Entries given as
arguments are installed concurrently; with no arguments, source piped on stdin
is installed as a single entry.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from duo_cli import __version__
from duo_cli.auth import resolve_token
from duo_cli.logging import create_event_logger
from duo_cli.orchestrator import build_options, orchestrate
from duo_cli.reporting import ExitCoordinator
from duo_cli.settings import Settings


class LogFormat(str, Enum):
    """Supported log output formats."""

    text = "text"
    ndjson = "ndjson"


app = typer.Typer(
    add_completion=False,
    help=(
        "Install and build entries with the configured engine.\n\n"
        "## Examples\n\n"
        "```bash\n"
        "duo index.js index.css\n"
        "cat index.css | duo > build.css\n"
        "duo --use duo-myth --verbose index.css\n"
        "```\n"
    ),
    rich_markup_mode="markdown",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _load_settings() -> Settings:
    try:
        return Settings.load()
    except ValidationError as exc:
        typer.echo(f"❌ Invalid settings: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def install(
    ctx: typer.Context,
    entries: Optional[List[str]] = typer.Argument(
        None,
        help="Entry files to install; omit to read source from stdin.",
        show_default=False,
    ),
    copy: bool = typer.Option(False, "--copy", "-c", help="Copy installed files instead of linking."),
    no_cache: bool = typer.Option(False, "--no-cache", "-C", help="Disable the build cache."),
    development: bool = typer.Option(
        False,
        "--development",
        "-d",
        help="Include development dependencies and inline source maps.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors."),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        file_okay=False,
        dir_okay=True,
        help="Root directory (default: nearest directory with a manifest).",
    ),
    entry_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Force the entry type instead of inferring it.",
    ),
    use: List[str] = typer.Option([], "--use", "-u", help="Apply a plugin (module:attr); repeatable."),
    update: bool = typer.Option(
        False,
        "--update",
        "-U",
        help="Update dependencies instead of using locked versions.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show resolving and installing events."),
    log_format: Optional[LogFormat] = typer.Option(
        None,
        "--log-format",
        case_sensitive=False,
        help="Log output format.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit.",
    ),
) -> None:
    """Install one or more entries."""

    settings = _load_settings()
    event_logger = create_event_logger(
        quiet=quiet,
        log_format=log_format.value if log_format else settings.log_format,
        log_level=settings.log_level,
    )
    coordinator = ExitCoordinator(event_logger, quiet=quiet)

    show_help = False
    try:
        options = build_options(
            copy_files=copy,
            cache_enabled=not no_cache,
            include_dev=development,
            quiet=quiet,
            verbose=verbose,
            root=root,
            entry_type=entry_type,
            plugins=tuple(use),
            update=update,
            credential=resolve_token(settings),
        )
        result = asyncio.run(
            orchestrate(
                entries or [],
                options=options,
                settings=settings,
                event_logger=event_logger,
                coordinator=coordinator,
            )
        )
        show_help = result is None
    except Exception as exc:
        coordinator.report(exc)
    finally:
        # Also reached on KeyboardInterrupt.
        code = coordinator.finalize()

    if show_help:
        typer.echo(ctx.get_help())
    raise typer.Exit(code=code)


def main() -> None:
    """Entrypoint used by console scripts and `python -m duo_cli`."""
    app()


__all__ = ["app", "main"]

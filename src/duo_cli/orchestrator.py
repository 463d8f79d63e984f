"""Entry orchestration: resolve entries, build engines, install, aggregate.

``orchestrate`` is the async core behind the ``duo`` command. It never touches
process state; the exit code is decided by the ``ExitCoordinator`` the caller
passes in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Sequence

from pydantic import ValidationError

from duo_cli.batch import BatchRunner
from duo_cli.engine import EngineFactory
from duo_cli.entries import EntryResolver
from duo_cli.events import EventTranslator
from duo_cli.exceptions import ConfigurationError
from duo_cli.logging import EventLogger
from duo_cli.models import EngineClass, ExecutionResult, Options
from duo_cli.paths import resolve_root
from duo_cli.plugins import load_engine, load_plugins
from duo_cli.reporting import ExitCoordinator
from duo_cli.settings import Settings

logger = logging.getLogger(__name__)


def build_options(**values: Any) -> Options:
    """Validate CLI flags into ``Options``, raising ``ConfigurationError`` on conflicts."""
    try:
        return Options(**values)
    except ValidationError as exc:
        messages = [str(err.get("msg", "")).removeprefix("Value error, ") for err in exc.errors()]
        raise ConfigurationError("; ".join(m for m in messages if m) or str(exc)) from exc


async def orchestrate(
    arguments: Sequence[str],
    *,
    options: Options,
    settings: Settings,
    event_logger: EventLogger,
    coordinator: ExitCoordinator,
    stdin: IO[str] | None = None,
    interactive: bool | None = None,
    engine_cls: EngineClass | None = None,
    cwd: Path | None = None,
) -> ExecutionResult | None:
    """Run one install job per entry.

    Returns ``None`` when there is nothing to do and usage should be shown,
    otherwise the batch result (already absorbed by ``coordinator``).
    Configuration, plugin and entry errors propagate before any engine exists.
    """
    resolution = await EntryResolver(options).resolve(arguments, stdin=stdin, interactive=interactive)
    if resolution.show_help:
        return None

    root = resolve_root(options.root, settings.manifest_name, cwd)
    coordinator.root = root

    engine_cls = engine_cls or load_engine(settings.engine)
    plugins = load_plugins((*settings.plugins, *options.plugins))

    factory = EngineFactory(
        engine_cls=engine_cls,
        root=root,
        options=options,
        plugins=plugins,
        translator=EventTranslator(options, event_logger),
    )
    jobs = factory.create_all(resolution.entries)
    logger.debug("batch.start", extra={"jobs": len(jobs), "root": str(root)})

    result = await BatchRunner().run(jobs)
    coordinator.absorb(result)
    return result


__all__ = ["build_options", "orchestrate"]

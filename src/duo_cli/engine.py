"""Build one configured engine per entry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

from duo_cli.events import EventTranslator
from duo_cli.models import EngineClass, EngineEvent, EngineJob, Entry, Options

logger = logging.getLogger(__name__)


class EngineFactory:
    """Create ``EngineJob`` objects sharing a root, options and plugins.

    The options, plugin tuple and root are shared read-only across jobs; each
    job gets its own engine instance.
    """

    def __init__(
        self,
        *,
        engine_cls: EngineClass,
        root: Path,
        options: Options,
        plugins: Sequence[Any],
        translator: EventTranslator,
    ) -> None:
        self._engine_cls = engine_cls
        self._root = root
        self._options = options
        self._plugins = tuple(plugins)
        self._translator = translator

    @property
    def root(self) -> Path:
        return self._root

    def create(self, entry: Entry) -> EngineJob:
        options = self._options
        engine = self._engine_cls(self._root)
        engine.configure(
            copy=options.copy_files,
            cache=options.cache_enabled,
            update=options.update,
            development=options.include_dev,
            token=options.credential,
        )
        engine.entry(entry.source, entry.type)

        for event in EngineEvent:
            engine.on(event, self._translator.handler_for(event))

        for plugin in self._plugins:
            engine.use(plugin)

        logger.debug("engine.created", extra={"entry": entry.label, "type": entry.type})
        return EngineJob(entry=entry, engine=engine)

    def create_all(self, entries: Sequence[Entry]) -> list[EngineJob]:
        return [self.create(entry) for entry in entries]


__all__ = ["EngineFactory"]

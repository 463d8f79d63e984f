"""Translate engine progress events into typed log lines."""

from __future__ import annotations

from typing import Any, Callable

from duo_cli.logging import EventLogger
from duo_cli.models import EVENT_CATEGORIES, VERBOSE_CATEGORIES, EngineEvent, LogCategory, Options

STDIN_LABEL = "from stdin"


def display_name(payload: Any) -> str:
    """Prefer a package's slug; plain strings pass through."""
    slug = getattr(payload, "slug", None)
    if callable(slug):
        return str(slug())
    if slug is not None:
        return str(slug)
    return str(payload)


class EventTranslator:
    """Forward engine events to an ``EventLogger`` according to the verbosity options.

    Holds no mutable state, so one translator may serve every concurrent job.
    """

    def __init__(self, options: Options, logger: EventLogger) -> None:
        self._quiet = options.quiet
        self._verbose = options.verbose
        # Piped source has no real path; engines name it after the type.
        self._stdin_name = f"source.{options.display_type}"
        self._logger = logger

    def enabled(self, category: LogCategory) -> bool:
        if self._quiet:
            return False
        if category in VERBOSE_CATEGORIES:
            return self._verbose
        return True

    def translate(self, event: EngineEvent, payload: Any) -> None:
        category = EVENT_CATEGORIES[event]
        if not self.enabled(category):
            return

        name = display_name(payload)
        if name == self._stdin_name:
            name = STDIN_LABEL
        self._logger.type(category, name)

    def handler_for(self, event: EngineEvent) -> Callable[[Any], None]:
        def handle(payload: Any) -> None:
            self.translate(event, payload)

        return handle


__all__ = ["STDIN_LABEL", "EventTranslator", "display_name"]

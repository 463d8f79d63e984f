"""Core types shared across the orchestrator.

These types are intentionally small:
- ``Options`` is the resolved, read-only view of CLI flags.
- ``Entry`` is one installable target (a path, or source piped on stdin).
- ``Engine`` is the lifecycle contract the orchestrator drives; the
  implementation itself is loaded from an import spec.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_TYPE = "js"


class EngineEvent(str, Enum):
    """Progress events an engine emits while installing."""

    RESOLVING = "resolving"
    RESOLVE = "resolve"
    INSTALLING = "installing"
    PLUGIN = "plugin"
    INSTALL = "install"
    RUNNING = "running"
    RUN = "run"


class LogCategory(str, Enum):
    """Type tag printed in front of each progress line."""

    RESOLVING = "resolving"
    RESOLVED = "resolved"
    INSTALLING = "installing"
    INSTALLED = "installed"
    USING = "using"
    RUNNING = "running"
    BUILT = "built"


EVENT_CATEGORIES: dict[EngineEvent, LogCategory] = {
    EngineEvent.RESOLVING: LogCategory.RESOLVING,
    EngineEvent.RESOLVE: LogCategory.RESOLVED,
    EngineEvent.INSTALLING: LogCategory.INSTALLING,
    EngineEvent.PLUGIN: LogCategory.USING,
    EngineEvent.INSTALL: LogCategory.INSTALLED,
    EngineEvent.RUNNING: LogCategory.RUNNING,
    EngineEvent.RUN: LogCategory.BUILT,
}

VERBOSE_CATEGORIES = frozenset(
    {LogCategory.RESOLVING, LogCategory.RESOLVED, LogCategory.INSTALLING}
)


class Options(BaseModel):
    """Read-only configuration resolved from CLI flags."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    copy_files: bool = False
    cache_enabled: bool = True
    include_dev: bool = False
    quiet: bool = False
    verbose: bool = False
    root: Path | None = None
    entry_type: str | None = None
    plugins: tuple[str, ...] = ()
    update: bool = False
    credential: str | None = None

    @field_validator("entry_type")
    @classmethod
    def _normalize_type(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().lstrip(".").lower()
        return value or None

    @model_validator(mode="after")
    def _check_verbosity(self) -> "Options":
        if self.quiet and self.verbose:
            raise ValueError("--quiet and --verbose are mutually exclusive")
        return self

    @property
    def display_type(self) -> str:
        """Type used when matching the stdin sentinel identifier."""
        return self.entry_type or DEFAULT_TYPE


@dataclass(frozen=True)
class Entry:
    """A single installable target."""

    source: str
    type: str
    from_stdin: bool = False

    @property
    def label(self) -> str:
        return "stdin" if self.from_stdin else self.source


@runtime_checkable
class Engine(Protocol):
    """Lifecycle contract of the external install engine."""

    def configure(
        self,
        *,
        copy: bool,
        cache: bool,
        update: bool,
        development: bool,
        token: str | None,
    ) -> "Engine": ...

    def entry(self, source: str, type: str) -> "Engine": ...

    def use(self, plugin: Any) -> "Engine": ...

    def on(self, event: EngineEvent, handler: Callable[[Any], None]) -> "Engine": ...

    async def install(self) -> None: ...


EngineClass = Callable[[Path], Engine]


@dataclass
class EngineJob:
    """An entry bound to the engine instance that installs it."""

    entry: Entry
    engine: Engine


@dataclass
class ExecutionResult:
    """Aggregate outcome of a batch of install jobs."""

    first_error: BaseException | None = None
    completed: int = 0
    errors: list[BaseException] = field(default_factory=list)

    @property
    def error_occurred(self) -> bool:
        return bool(self.errors)

    def record(self, error: BaseException | None) -> None:
        self.completed += 1
        if error is None:
            return
        self.errors.append(error)
        if self.first_error is None:
            self.first_error = error


__all__ = [
    "DEFAULT_TYPE",
    "EVENT_CATEGORIES",
    "VERBOSE_CATEGORIES",
    "Engine",
    "EngineClass",
    "EngineEvent",
    "EngineJob",
    "Entry",
    "ExecutionResult",
    "LogCategory",
    "Options",
]

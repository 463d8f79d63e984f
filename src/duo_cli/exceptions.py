"""Orchestrator error hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duo_cli.models import Entry


class DuoError(Exception):
    """Base class for orchestrator-specific exceptions."""


class ConfigurationError(DuoError):
    """Raised when options or settings are invalid before any job starts."""


class PluginError(ConfigurationError):
    """Raised when a plugin (or engine) spec cannot be resolved."""


class EntryError(DuoError):
    """Raised when an entry cannot be turned into an installable job."""


class SniffError(EntryError):
    """Raised when the type of piped source cannot be inferred."""


class JobError(DuoError):
    """Raised for a failed install, wrapping the engine's own error."""

    def __init__(self, entry: "Entry", cause: BaseException) -> None:
        super().__init__(f"{entry.label}: {cause}")
        self.entry = entry
        self.cause = cause


__all__ = [
    "DuoError",
    "ConfigurationError",
    "PluginError",
    "EntryError",
    "SniffError",
    "JobError",
]

"""Decide where entries come from: arguments, piped stdin, or nowhere (help)."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import PurePath
from typing import IO, Sequence

from duo_cli.exceptions import EntryError, SniffError
from duo_cli.models import Entry, Options
from duo_cli.sniff import sniff_type


@dataclass(frozen=True)
class Resolution:
    """Entries to install, or a request to print usage."""

    entries: tuple[Entry, ...] = ()
    show_help: bool = False


def _path_type(path: str) -> str | None:
    suffix = PurePath(path).suffix
    return suffix[1:].lower() if len(suffix) > 1 else None


def _is_interactive(stream: IO[str]) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class EntryResolver:
    def __init__(self, options: Options) -> None:
        self._options = options

    def from_arguments(self, arguments: Sequence[str]) -> tuple[Entry, ...]:
        entries: list[Entry] = []
        for argument in arguments:
            entry_type = self._options.entry_type or _path_type(argument)
            if not entry_type:
                raise EntryError(f"Cannot infer the type of '{argument}'; pass --type")
            entries.append(Entry(source=argument, type=entry_type))
        return tuple(entries)

    def from_source(self, source: str) -> Entry:
        entry_type = self._options.entry_type
        if entry_type is None:
            entry_type = sniff_type(source)
            if entry_type is None:
                raise SniffError("Could not detect the type of stdin; pass --type")
        elif not source.strip():
            raise EntryError("No source received on stdin")
        return Entry(source=source, type=entry_type, from_stdin=True)

    async def resolve(
        self,
        arguments: Sequence[str],
        *,
        stdin: IO[str] | None = None,
        interactive: bool | None = None,
    ) -> Resolution:
        if arguments:
            return Resolution(entries=self.from_arguments(arguments))

        stream = stdin if stdin is not None else sys.stdin
        if interactive is None:
            interactive = _is_interactive(stream)
        if interactive:
            return Resolution(show_help=True)

        source = await asyncio.to_thread(stream.read)
        return Resolution(entries=(self.from_source(source),))


__all__ = ["EntryResolver", "Resolution"]

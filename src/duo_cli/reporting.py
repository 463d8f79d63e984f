"""Error reporting and exit-code finalization."""

from __future__ import annotations

from pathlib import Path

from duo_cli.exceptions import DuoError, JobError
from duo_cli.logging import EventLogger
from duo_cli.models import ExecutionResult
from duo_cli.paths import relativize


class ExitCoordinator:
    """Collect errors for the whole run and decide the process exit code.

    The error flag only ever goes from ``False`` to ``True``; concurrent jobs
    may set it in any order.
    """

    def __init__(self, logger: EventLogger, *, quiet: bool = False, root: Path | None = None) -> None:
        self._logger = logger
        self._quiet = quiet
        self._root = root or Path.cwd()
        self.error_occurred = False

    @property
    def root(self) -> Path:
        return self._root

    @root.setter
    def root(self, value: Path) -> None:
        self._root = value

    def report(self, error: BaseException | str) -> None:
        """Write ``error`` through the ``error`` log type and flag the run as failed."""
        self.error_occurred = True

        if isinstance(error, str):
            error = DuoError(error)

        prefix = ""
        if isinstance(error, JobError):
            prefix = f"{error.entry.label}: "
            error = error.cause

        if isinstance(error, SyntaxError) and error.filename:
            location = relativize(error.filename, self._root)
            if error.lineno:
                location = f"{location}:{error.lineno}"
            self._logger.error("%s%s: %s", prefix, location, error.msg)
        elif isinstance(error, DuoError):
            self._logger.error("%s%s", prefix, error)
        else:
            self._logger.error("%s%s", prefix, str(error) or type(error).__name__, exc=error)

    def absorb(self, result: ExecutionResult) -> None:
        """Report every failed job of a finished batch."""
        for error in result.errors:
            self.report(error)

    def finalize(self) -> int:
        """Flush logging, then return the process exit code."""
        if not self._quiet:
            self._logger.close()
        else:
            self._logger.flush()
        return 1 if self.error_occurred else 0


__all__ = ["ExitCoordinator"]

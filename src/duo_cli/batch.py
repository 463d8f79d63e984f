"""Run install jobs concurrently and aggregate their outcome."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from duo_cli.exceptions import JobError
from duo_cli.models import EngineJob, ExecutionResult

logger = logging.getLogger(__name__)


class BatchRunner:
    """Dispatch every job's install at once and wait for all of them.

    A failing job never cancels its siblings; the first failure (in completion
    order) is reported through ``ExecutionResult.first_error``. There is no
    timeout: a stalled engine stalls the batch.
    """

    async def _install(self, job: EngineJob, result: ExecutionResult) -> None:
        error: BaseException | None = None
        try:
            await job.engine.install()
        except Exception as exc:
            error = JobError(job.entry, exc)
        result.record(error)
        logger.debug(
            "job.completed",
            extra={"entry": job.entry.label, "failed": error is not None},
        )

    async def run(self, jobs: Sequence[EngineJob]) -> ExecutionResult:
        result = ExecutionResult()
        if not jobs:
            return result

        if len(jobs) == 1:
            await self._install(jobs[0], result)
            return result

        await asyncio.gather(*(self._install(job, result) for job in jobs))
        return result


__all__ = ["BatchRunner"]

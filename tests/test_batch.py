from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from duo_cli import batch
from duo_cli.batch import BatchRunner
from duo_cli.exceptions import JobError
from duo_cli.models import EngineJob, Entry

pytestmark = pytest.mark.asyncio


class _ScriptedEngine:
    """Engine whose install waits on a gate, then optionally fails."""

    def __init__(self, name: str, *, gate: asyncio.Event | None = None, error: Exception | None = None) -> None:
        self.name = name
        self.gate = gate
        self.error = error
        self.started = asyncio.Event()
        self.completions = 0

    async def install(self) -> None:
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        self.completions += 1
        if self.error is not None:
            raise self.error


def _job(engine: _ScriptedEngine) -> EngineJob:
    return EngineJob(entry=Entry(source=f"{engine.name}.js", type="js"), engine=engine)  # type: ignore[arg-type]


async def test_all_jobs_are_in_flight_together() -> None:
    gate = asyncio.Event()
    engines = [_ScriptedEngine(name, gate=gate) for name in ("a", "b", "c")]

    task = asyncio.create_task(BatchRunner().run([_job(engine) for engine in engines]))
    await asyncio.wait_for(asyncio.gather(*(engine.started.wait() for engine in engines)), timeout=1)
    assert not task.done()

    gate.set()
    result = await task

    assert result.error_occurred is False
    assert result.first_error is None
    assert result.completed == 3


async def test_failure_does_not_cancel_siblings() -> None:
    slow_gate = asyncio.Event()
    failing = _ScriptedEngine("bad", error=RuntimeError("bad install"))
    slow = _ScriptedEngine("slow", gate=slow_gate)
    fast = _ScriptedEngine("fast")

    task = asyncio.create_task(BatchRunner().run([_job(slow), _job(failing), _job(fast)]))
    await asyncio.sleep(0.01)
    slow_gate.set()
    result = await task

    assert [engine.completions for engine in (slow, failing, fast)] == [1, 1, 1]
    assert result.completed == 3
    assert result.error_occurred is True
    assert isinstance(result.first_error, JobError)
    assert result.first_error.entry.source == "bad.js"
    assert str(result.first_error.cause) == "bad install"


async def test_first_error_follows_completion_order() -> None:
    late_gate = asyncio.Event()
    late = _ScriptedEngine("late", gate=late_gate, error=ValueError("late"))
    early = _ScriptedEngine("early", error=ValueError("early"))

    task = asyncio.create_task(BatchRunner().run([_job(late), _job(early)]))
    await asyncio.sleep(0.01)
    late_gate.set()
    result = await task

    assert str(result.first_error.cause) == "early"
    assert [str(error.cause) for error in result.errors] == ["early", "late"]


async def test_single_job_runs_without_gather(monkeypatch) -> None:
    def _no_gather(*_args, **_kwargs):
        raise AssertionError("gather should not be used for a single job")

    monkeypatch.setattr(batch, "asyncio", SimpleNamespace(gather=_no_gather))
    engine = _ScriptedEngine("only", error=RuntimeError("nope"))

    result = await BatchRunner().run([_job(engine)])

    assert engine.completions == 1
    assert result.completed == 1
    assert result.error_occurred is True


async def test_empty_batch() -> None:
    result = await BatchRunner().run([])

    assert result.completed == 0
    assert result.error_occurred is False

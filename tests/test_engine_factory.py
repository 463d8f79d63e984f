from __future__ import annotations

from pathlib import Path

from duo_cli.engine import EngineFactory
from duo_cli.events import EventTranslator
from duo_cli.models import EngineEvent, Entry, Options

from fake_engine import FakeEngine, minify_plugin, uppercase_plugin


def _factory(make_logger, options: Options, plugins=(), root: Path = Path("/project")) -> EngineFactory:
    return EngineFactory(
        engine_cls=FakeEngine,
        root=root,
        options=options,
        plugins=plugins,
        translator=EventTranslator(options, make_logger()),
    )


def test_engine_is_configured_from_options(make_logger) -> None:
    options = Options(
        copy_files=True,
        cache_enabled=False,
        include_dev=True,
        update=True,
        credential="secret",
    )

    job = _factory(make_logger, options).create(Entry(source="index.js", type="js"))

    engine = job.engine
    assert isinstance(engine, FakeEngine)
    assert engine.root == Path("/project")
    assert engine.settings == {
        "copy": True,
        "cache": False,
        "update": True,
        "development": True,
        "token": "secret",
    }
    assert (engine.source, engine.type) == ("index.js", "js")
    assert job.entry == Entry(source="index.js", type="js")


def test_plugins_are_applied_in_order(make_logger) -> None:
    factory = _factory(make_logger, Options(), plugins=[uppercase_plugin, minify_plugin])

    job = factory.create(Entry(source="index.css", type="css"))

    assert job.engine.plugins == [uppercase_plugin, minify_plugin]


def test_every_event_has_a_listener(make_logger) -> None:
    job = _factory(make_logger, Options()).create(Entry(source="index.js", type="js"))

    assert set(job.engine.handlers) == set(EngineEvent)
    assert all(len(handlers) == 1 for handlers in job.engine.handlers.values())


def test_each_entry_gets_its_own_engine(make_logger) -> None:
    entries = [Entry(source="a.js", type="js"), Entry(source="b.css", type="css")]

    jobs = _factory(make_logger, Options()).create_all(entries)

    assert [job.entry for job in jobs] == entries
    assert jobs[0].engine is not jobs[1].engine
    assert FakeEngine.instances == [jobs[0].engine, jobs[1].engine]

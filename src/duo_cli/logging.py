"""
duo_cli/logging.py

Typed log lines for install progress (stdlib logging).

Line model
----------
Every progress line carries a *type tag* (the log category) and a message:

    resolving : component/emitter@1.1.2
        using : duo-myth
        built : index.css

In ``ndjson`` format the same record becomes one JSON object per line:

    {"timestamp": "<RFC3339 UTC>", "level": "info", "type": "built", "message": "index.css"}

Errors use the ``error`` type and are the only lines that pass in quiet mode.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

from duo_cli.models import LogCategory

ERROR_TYPE = "error"
DEFAULT_TYPE_TAG = "log"
TYPE_WIDTH = 12


def _rfc3339_utc(created: float) -> str:
    return (
        datetime.fromtimestamp(created, tz=timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _type_tag(record: logging.LogRecord) -> str:
    return str(getattr(record, "type_tag", None) or DEFAULT_TYPE_TAG)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        head = f"{_type_tag(record):>{TYPE_WIDTH}} : {record.getMessage()}"
        if record.exc_info:
            head += "\n" + self.formatException(record.exc_info).rstrip("\n")
        return head


class NdjsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        out: dict[str, Any] = {
            "timestamp": _rfc3339_utc(record.created),
            "level": record.levelname.lower(),
            "type": _type_tag(record),
            "message": record.getMessage(),
        }
        if record.exc_info:
            exc_type, exc, _tb = record.exc_info
            out["error"] = {
                "type": getattr(exc_type, "__name__", str(exc_type)),
                "message": "" if exc is None else str(exc),
                "stack_trace": self.formatException(record.exc_info),
            }
        return json.dumps(out, ensure_ascii=False, default=str, separators=(",", ":"))


class EventLogger(logging.LoggerAdapter):
    """
    LoggerAdapter that stamps each record with a type tag.

    - ``type(category, message)`` writes a progress line
    - ``error(message, exc=...)`` writes an error line (visible in quiet mode)
    """

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = dict(self.extra or {})
        caller_extra = kwargs.pop("extra", None)
        if caller_extra:
            extra.update(caller_extra)
        extra.setdefault("type_tag", DEFAULT_TYPE_TAG)
        kwargs["extra"] = extra
        return msg, kwargs

    def type(self, category: LogCategory | str, message: str, *, level: int = logging.INFO) -> None:  # noqa: A003
        tag = category.value if isinstance(category, LogCategory) else str(category)
        self.log(level, "%s", message, extra={"type_tag": tag})

    def error(self, msg: Any, *args: Any, exc: BaseException | None = None, **kwargs: Any) -> None:
        exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
        kwargs.setdefault("extra", {})["type_tag"] = ERROR_TYPE
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def flush(self) -> None:
        for handler in self.logger.handlers:
            handler.flush()

    def close(self) -> None:
        for handler in list(self.logger.handlers):
            handler.flush()
            self.logger.removeHandler(handler)
            handler.close()


def _resolve_format(log_format: str | None) -> str:
    fmt = (log_format or "text").strip().lower()
    if fmt == "json":
        fmt = "ndjson"
    if fmt not in {"text", "ndjson"}:
        raise ValueError("log_format must be 'text' or 'ndjson' (or 'json')")
    return fmt


def create_event_logger(
    *,
    quiet: bool = False,
    log_format: str | None = "text",
    log_level: int = logging.INFO,
    stream: IO[str] | None = None,
    name: str = "duo_cli.events",
) -> EventLogger:
    """Build an ``EventLogger`` writing to ``stream`` (stderr by default).

    In quiet mode the handler only lets ``error`` records through.
    """
    fmt = _resolve_format(log_format)
    level = logging.ERROR if quiet else log_level
    formatter: logging.Formatter = NdjsonFormatter() if fmt == "ndjson" else TextFormatter()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    base_logger = logging.getLogger(name)
    base_logger.setLevel(level)
    for existing in list(base_logger.handlers):
        base_logger.removeHandler(existing)
    base_logger.propagate = False
    base_logger.addHandler(handler)

    return EventLogger(base_logger, {"type_tag": DEFAULT_TYPE_TAG})


__all__ = [
    "ERROR_TYPE",
    "EventLogger",
    "NdjsonFormatter",
    "TextFormatter",
    "create_event_logger",
]

"""Run-scoped logging for conversions.

Each conversion gets its own logger and a single handler writing either
readable text lines or NDJSON, to stderr or a log file. Stdout is left to the
converted JSON. Domain events are plain log records carrying an ``event``
name and an optional ``data`` mapping::

    reporter.event_emitter.emit("table.read", rows=3)
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, IO

LOG_FORMATS = ("text", "ndjson")


def _timestamp(record: logging.LogRecord) -> str:
    moment = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _traceback(record: logging.LogRecord) -> str:
    if not record.exc_info:
        return ""
    return "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")


class RunLogger(logging.LoggerAdapter):
    """Adapter stamping the conversion's ``run_id`` on every record."""

    def __init__(self, logger: logging.Logger, *, run_id: str) -> None:
        super().__init__(logger, {"run_id": run_id})

    def process(self, msg: Any, kwargs: dict[str, Any]):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


class EventEmitter:
    """Emits named domain events through a run logger."""

    def __init__(self, logger: RunLogger) -> None:
        self._logger = logger

    def emit(
        self,
        event: str,
        *,
        message: str | None = None,
        level: int = logging.INFO,
        **data: Any,
    ) -> None:
        """Log ``event`` at ``level``; keyword arguments become its ``data``."""
        extra: dict[str, Any] = {"event": event}
        if data:
            extra["data"] = data
        self._logger.log(level, message or event, extra=extra)


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - matches logging.Formatter API
        payload: dict[str, Any] = {
            "ts": _timestamp(record),
            "level": record.levelname.lower(),
            "event": getattr(record, "event", "log"),
            "message": record.getMessage(),
            "run_id": getattr(record, "run_id", None),
        }
        if getattr(record, "data", None):
            payload["data"] = record.data
        if record.exc_info:
            payload["exc_type"] = record.exc_info[0].__name__
            payload["exc"] = str(record.exc_info[1])
            payload["traceback"] = _traceback(record)
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """``[ts] LEVEL event: message (key=value, ...)`` lines."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - matches logging.Formatter API
        event = getattr(record, "event", None)
        message = record.getMessage()

        line = f"[{_timestamp(record)}] {record.levelname}"
        if event is None:
            line += f" {record.name}: {message}"
        elif message == event:
            line += f" {event}"
        else:
            line += f" {event}: {message}"

        data = getattr(record, "data", None)
        if data:
            line += " (" + ", ".join(f"{key}={data[key]}" for key in sorted(data)) + ")"

        trace = _traceback(record)
        return f"{line}\n{trace}" if trace else line


@dataclass
class Reporter:
    """Logger and event emitter for one conversion; closing detaches the handler."""

    logger: RunLogger
    event_emitter: EventEmitter
    _handler: logging.Handler | None = None
    _handle: IO[str] | None = None

    def close(self) -> None:
        if self._handler is not None:
            self.logger.logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "Reporter":
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:
        self.close()


def build_reporting(
    fmt: str,
    *,
    run_id: str,
    file_path: Path | None = None,
    level: int = logging.WARNING,
    stream: IO[str] | None = None,
) -> Reporter:
    """Configure the ``ctj.run.<run_id>`` logger.

    Records go to ``file_path`` (appended) when given, else to ``stream``,
    else to stderr.
    """
    fmt = (fmt or "text").strip().lower()
    if fmt not in LOG_FORMATS:
        raise ValueError("fmt must be 'text' or 'ndjson'")

    handle: IO[str] | None = None
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handle = file_path.open("a", encoding="utf-8", newline="\n")
        target: IO[str] = handle
    else:
        target = stream if stream is not None else sys.stderr

    handler = logging.StreamHandler(target)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if fmt == "ndjson" else TextFormatter())

    logger = logging.getLogger(f"ctj.run.{run_id}")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False
    logger.addHandler(handler)

    run_logger = RunLogger(logger, run_id=run_id)
    return Reporter(
        logger=run_logger,
        event_emitter=EventEmitter(run_logger),
        _handler=handler,
        _handle=handle,
    )


__all__ = [
    "EventEmitter",
    "JsonFormatter",
    "LOG_FORMATS",
    "Reporter",
    "RunLogger",
    "TextFormatter",
    "build_reporting",
]

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from ctj.reporting import build_reporting


def test_text_reporting_renders_event_and_data() -> None:
    stream = io.StringIO()

    with build_reporting("text", run_id="abc", level=logging.INFO, stream=stream) as reporter:
        reporter.event_emitter.emit("table.read", rows=3)
        reporter.logger.info("plain line")

    first, second = stream.getvalue().splitlines()
    assert "INFO table.read (rows=3)" in first
    assert second.endswith("ctj.run.abc: plain line")


def test_ndjson_reporting_includes_run_id_and_data() -> None:
    stream = io.StringIO()

    with build_reporting("ndjson", run_id="r1", level=logging.INFO, stream=stream) as reporter:
        reporter.event_emitter.emit("output.written", message="done", destination="<stdout>")

    payload = json.loads(stream.getvalue())
    assert payload["event"] == "output.written"
    assert payload["message"] == "done"
    assert payload["run_id"] == "r1"
    assert payload["level"] == "info"
    assert payload["data"] == {"destination": "<stdout>"}


def test_level_filters_records() -> None:
    stream = io.StringIO()

    with build_reporting("text", run_id="quiet", stream=stream) as reporter:
        reporter.event_emitter.emit("convert.started")
        reporter.event_emitter.emit("convert.failed", level=logging.ERROR, code="input_error")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert "ERROR convert.failed" in lines[0]


def test_exceptions_include_traceback() -> None:
    stream = io.StringIO()

    with build_reporting("ndjson", run_id="exc", stream=stream) as reporter:
        try:
            raise ValueError("bad value")
        except ValueError as exc:
            reporter.logger.exception("Conversion failed", exc_info=exc)

    payload = json.loads(stream.getvalue())
    assert payload["exc_type"] == "ValueError"
    assert payload["exc"] == "bad value"
    assert "Traceback" in payload["traceback"]


def test_file_reporting_writes_to_path(tmp_path: Path) -> None:
    log_path = tmp_path / "nested" / "ctj.log"

    with build_reporting("text", run_id="f", level=logging.INFO, file_path=log_path) as reporter:
        reporter.event_emitter.emit("convert.completed", records=0)

    assert "convert.completed" in log_path.read_text(encoding="utf-8")


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_reporting("xml", run_id="x")


def test_text_reporting_lists_every_data_field_in_key_order() -> None:
    stream = io.StringIO()
    data = {f"k{index}": index for index in range(10)}

    with build_reporting("text", run_id="wide", level=logging.INFO, stream=stream) as reporter:
        reporter.event_emitter.emit("settings.effective", message="Effective settings", **data)

    line = stream.getvalue().rstrip("\n")
    expected = ", ".join(f"{key}={data[key]}" for key in sorted(data))
    assert line.endswith(f"INFO settings.effective: Effective settings ({expected})")

"""Orchestration for a single CSV → JSON conversion."""

from __future__ import annotations

import io
import logging
import sys
import uuid
from pathlib import Path
from typing import IO, Any

from ctj.exceptions import ConfigError, CtjError, InputError, OutputError
from ctj.infra.io import dump_records, read_rows, write_output
from ctj.pipeline.assemble import assemble
from ctj.reporting import build_reporting
from ctj.settings import Settings
from ctj.types import (
    ConvertError,
    ConvertErrorCode,
    ConvertRequest,
    ConvertResult,
    ConvertStatus,
    HeaderMode,
)

_ERROR_CODES: dict[type[CtjError], ConvertErrorCode] = {
    ConfigError: ConvertErrorCode.CONFIG_ERROR,
    InputError: ConvertErrorCode.INPUT_ERROR,
    OutputError: ConvertErrorCode.OUTPUT_ERROR,
}


class Converter:
    """Reads one CSV source, infers types, and writes a JSON array."""

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    def _settings_snapshot(self) -> dict[str, Any]:
        return self.settings.model_dump(mode="json", exclude_none=True)

    def run(
        self,
        request: ConvertRequest | None = None,
        *,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
        **kwargs: Any,
    ) -> ConvertResult:
        req = request or ConvertRequest(**kwargs)
        run_id = uuid.uuid4().hex

        pretty = self.settings.pretty if req.pretty is None else req.pretty
        indent = self.settings.indent if req.indent is None else req.indent
        strict_width = self.settings.strict_width if req.strict_width is None else req.strict_width
        encoding = req.encoding or self.settings.encoding
        input_path = Path(req.input_path).expanduser() if req.input_path is not None else None
        output_path = Path(req.output_path).expanduser() if req.output_path is not None else None

        with build_reporting(
            self.settings.log_format,
            run_id=run_id,
            file_path=self.settings.log_file,
            level=self.settings.log_level,
            stream=stderr,
        ) as reporter:
            logger = reporter.logger
            events = reporter.event_emitter

            events.emit(
                "settings.effective",
                message="Effective converter settings",
                level=logging.DEBUG,
                settings=self._settings_snapshot(),
            )
            events.emit(
                "convert.started",
                input=str(input_path) if input_path else "<stdin>",
                output=str(output_path) if output_path else "<stdout>",
                header_mode=HeaderMode(req.header_mode).value,
            )

            record_count = 0
            try:
                if indent < 0:
                    raise ConfigError(f"indent must be >= 0, got {indent}")

                rows = read_rows(
                    input_path,
                    stream=stdin if stdin is not None else sys.stdin,
                    encoding=encoding,
                )
                events.emit("table.read", rows=len(rows))

                records = assemble(rows, req.header_mode, strict_width=strict_width)
                record_count = len(records)
                events.emit(
                    "table.assembled",
                    records=record_count,
                    header_mode=HeaderMode(req.header_mode).value,
                )

                text = dump_records(records, pretty=pretty, indent=indent)
                written = write_output(
                    text,
                    output_path,
                    stream=stdout if stdout is not None else sys.stdout,
                )
                events.emit(
                    "output.written",
                    destination=str(output_path) if output_path else "<stdout>",
                    chars=written,
                )
            except CtjError as exc:
                code = next(
                    (val for exc_type, val in _ERROR_CODES.items() if isinstance(exc, exc_type)),
                    ConvertErrorCode.UNKNOWN_ERROR,
                )
                logger.debug("Conversion failed", exc_info=exc)
                events.emit("convert.failed", message=str(exc), level=logging.ERROR, code=code.value)
                return ConvertResult(
                    status=ConvertStatus.FAILED,
                    error=ConvertError(code=code, message=str(exc)),
                    run_id=run_id,
                )
            except Exception as exc:
                logger.exception("Conversion failed", exc_info=exc)
                events.emit(
                    "convert.failed",
                    message=str(exc),
                    level=logging.ERROR,
                    code=ConvertErrorCode.UNKNOWN_ERROR.value,
                )
                return ConvertResult(
                    status=ConvertStatus.FAILED,
                    error=ConvertError(code=ConvertErrorCode.UNKNOWN_ERROR, message=str(exc)),
                    run_id=run_id,
                )

            events.emit("convert.completed", records=record_count)
            return ConvertResult(
                status=ConvertStatus.SUCCEEDED,
                error=None,
                record_count=record_count,
                output_path=output_path,
                run_id=run_id,
            )


def convert_text(
    text: str,
    *,
    header_mode: HeaderMode = HeaderMode.ENABLED,
    pretty: bool = False,
    indent: int = 2,
    strict_width: bool = False,
) -> str:
    """Convert CSV ``text`` to JSON text in memory.

    Errors propagate as :class:`~ctj.exceptions.CtjError` subclasses.
    """
    rows = read_rows(stream=io.StringIO(text))
    records = assemble(rows, header_mode, strict_width=strict_width)
    return dump_records(records, pretty=pretty, indent=indent)


__all__ = ["Converter", "convert_text"]

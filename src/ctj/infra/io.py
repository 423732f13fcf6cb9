"""CSV ingestion and JSON emission helpers."""

from __future__ import annotations

import csv
import io
import json
import sys
from pathlib import Path
from typing import IO, Iterable, Iterator, Sequence

from ctj.exceptions import InputError, OutputError
from ctj.types import Record, record_to_json

DEFAULT_ENCODING = "utf-8-sig"
_BOM = "\ufeff"

# Lift the 128 KiB default field cap, bounded to a C long.
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


def _without_bom(lines: Iterable[str]) -> Iterator[str]:
    iterator = iter(lines)
    for line in iterator:
        yield line.removeprefix(_BOM)
        break
    yield from iterator


def iter_csv_rows(handle: IO[str]) -> Iterator[tuple[int, list[str]]]:
    """Stream 1-based row index and fields from an open text handle.

    A leading byte order mark is dropped before tokenizing, so a quoted first
    header still unquotes. Blank lines are skipped. Quoting errors (e.g. an
    unterminated quoted field) raise :class:`InputError` with the input line
    they were found on.
    """

    reader = csv.reader(_without_bom(handle), strict=True)
    row_index = 0
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise InputError(
                f"Malformed CSV at line {reader.line_num}: {exc}",
                row=row_index + 1,
            ) from exc
        if not fields:
            continue
        row_index += 1
        yield row_index, fields


def read_rows(
    source: Path | None = None,
    *,
    stream: IO[str] | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> list[list[str]]:
    """Read every row from ``source`` or, when it is ``None``, from ``stream``.

    A stream backed by a byte buffer (``sys.stdin``) is decoded with
    ``encoding`` and ``newline=""``, the same way files are opened. Streams
    without one (``io.StringIO``) are read as they are.
    """

    if source is not None:
        if not source.exists():
            raise InputError(f"Source file not found: {source}")
        if not source.is_file():
            raise InputError(f"Source path is not a file: {source}")
        try:
            with source.open("r", encoding=encoding, newline="") as handle:
                return [fields for _, fields in iter_csv_rows(handle)]
        except UnicodeDecodeError as exc:
            raise InputError(f"Could not decode `{source}` as {encoding}: {exc}") from exc
        except LookupError as exc:
            raise InputError(f"Unknown encoding: {encoding}") from exc
        except OSError as exc:
            raise InputError(f"Could not read `{source}`: {exc}") from exc

    if stream is None:
        raise InputError("No input provided: pass a CSV file or pipe data on stdin")
    if stream.isatty():
        raise InputError("No input provided: pass a CSV file or pipe data on stdin")

    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        try:
            return [fields for _, fields in iter_csv_rows(stream)]
        except UnicodeDecodeError as exc:
            raise InputError(f"Could not decode input stream: {exc}") from exc

    try:
        handle = io.TextIOWrapper(buffer, encoding=encoding, newline="")
    except LookupError as exc:
        raise InputError(f"Unknown encoding: {encoding}") from exc
    try:
        return [fields for _, fields in iter_csv_rows(handle)]
    except UnicodeDecodeError as exc:
        raise InputError(f"Could not decode input stream as {encoding}: {exc}") from exc
    finally:
        # Hand the buffer back so the caller's stream is not closed with ours.
        handle.detach()


def dump_records(records: Sequence[Record], *, pretty: bool = False, indent: int = 2) -> str:
    """Serialize records to a JSON array, keys in insertion order."""

    payload = [record_to_json(record) for record in records]
    if pretty:
        return json.dumps(payload, ensure_ascii=False, indent=indent)
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def write_output(
    text: str,
    destination: Path | None = None,
    *,
    stream: IO[str] | None = None,
) -> int:
    """Write ``text`` to ``destination`` (as-is) or to ``stream`` (plus newline).

    Returns the number of characters written.
    """

    if destination is not None:
        if destination.is_dir():
            raise OutputError(f"Output path is a directory: {destination}")
        if not destination.parent.exists():
            raise OutputError(f"Output directory does not exist: {destination.parent}")
        try:
            destination.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Could not write `{destination}`: {exc}") from exc
        return len(text)

    if stream is None:
        raise OutputError("No output destination provided")
    stream.write(text + "\n")
    stream.flush()
    return len(text) + 1


__all__ = [
    "DEFAULT_ENCODING",
    "dump_records",
    "iter_csv_rows",
    "read_rows",
    "write_output",
]

"""Build ordered records from tokenized rows."""

from __future__ import annotations

from typing import Iterable, Sequence

from ctj.exceptions import InputError
from ctj.pipeline.classify import classify
from ctj.types import HeaderMode, Record, Table

SYNTHETIC_PREFIX = "column_"


def column_key(position: int, header: Sequence[str] | None = None) -> str:
    """Return the key for the cell at 0-based ``position``.

    Header names win where the header has one; otherwise (no header, or a row
    wider than the header) the key is ``column_<position>``.
    """
    if header is not None and position < len(header):
        return header[position]
    return f"{SYNTHETIC_PREFIX}{position}"


def build_record(row: Sequence[str], header: Sequence[str] | None = None) -> Record:
    """Classify one data row into a record, keys in left-to-right order.

    Duplicate keys are not deduplicated: a later cell overwrites an earlier
    one with the same key (the key keeps its first position).
    """
    record: Record = {}
    for position, cell in enumerate(row):
        record[column_key(position, header)] = classify(cell)
    return record


def assemble(
    rows: Iterable[Sequence[str]],
    header_mode: HeaderMode = HeaderMode.ENABLED,
    *,
    strict_width: bool = False,
) -> Table:
    """Turn tokenized rows into a table of records.

    With ``header_mode`` enabled the first row names the columns and is not
    emitted; an input with no rows yields an empty table either way. Rows of
    any width are accepted unless ``strict_width`` is set, in which case a
    data row whose width differs from the header (or, without a header, from
    the first row) raises :class:`~ctj.exceptions.InputError`.
    """
    iterator = iter(rows)
    header: list[str] | None = None
    expected_width: int | None = None
    first_row_number = 1

    if HeaderMode(header_mode) is HeaderMode.ENABLED:
        try:
            header = list(next(iterator))
        except StopIteration:
            return []
        expected_width = len(header)
        first_row_number = 2

    table: Table = []
    for row_number, row in enumerate(iterator, start=first_row_number):
        if strict_width:
            if expected_width is None:
                expected_width = len(row)
            elif len(row) != expected_width:
                raise InputError(
                    f"Row {row_number} has {len(row)} fields, expected {expected_width}",
                    row=row_number,
                )
        table.append(build_record(row, header))

    return table


__all__ = ["SYNTHETIC_PREFIX", "assemble", "build_record", "column_key"]

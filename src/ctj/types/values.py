"""Typed cell values and the record/table shapes built from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class ScalarKind(str, Enum):
    """The four scalar kinds a raw CSV field can be inferred as."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"


class HeaderMode(str, Enum):
    """Whether the first input row names the columns."""

    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass(frozen=True)
class TypedValue:
    """A classified field value.

    ``kind`` is the tag; ``value`` holds the native Python value that maps
    one-to-one onto a JSON literal (``bool``, ``int``, ``float`` or ``str``).
    The tag is kept separately because ``bool`` is a subclass of ``int``.
    """

    kind: ScalarKind
    value: bool | int | float | str

    @classmethod
    def boolean(cls, value: bool) -> "TypedValue":
        return cls(ScalarKind.BOOLEAN, value)

    @classmethod
    def integer(cls, value: int) -> "TypedValue":
        return cls(ScalarKind.INTEGER, value)

    @classmethod
    def float_(cls, value: float) -> "TypedValue":
        return cls(ScalarKind.FLOAT, value)

    @classmethod
    def string(cls, value: str) -> "TypedValue":
        return cls(ScalarKind.STRING, value)


# Insertion-ordered; field order in the output follows key insertion order.
Record: TypeAlias = dict[str, TypedValue]
Table: TypeAlias = list[Record]


def record_to_json(record: Record) -> dict[str, bool | int | float | str]:
    """Return a plain mapping of wire values, preserving key order."""
    return {key: typed.value for key, typed in record.items()}


__all__ = [
    "HeaderMode",
    "Record",
    "ScalarKind",
    "Table",
    "TypedValue",
    "record_to_json",
]

"""Scalar type inference for raw CSV fields.

``classify`` tries each kind in priority order and returns the first match:

1. boolean  - ``true``/``false`` in any letter case
2. integer  - optional sign and ASCII digits, within the signed 64-bit range
3. float    - decimal point and/or exponent, finite double
4. string   - everything else (never fails)

Text is classified exactly as received; surrounding whitespace is not trimmed.
"""

from __future__ import annotations

import math
import re

from ctj.types import TypedValue

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?"
    r"(?:[0-9]+\.[0-9]*(?:[eE][+-]?[0-9]+)?"
    r"|\.[0-9]+(?:[eE][+-]?[0-9]+)?"
    r"|[0-9]+[eE][+-]?[0-9]+)"
)


def parse_boolean(text: str) -> bool | None:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_integer(text: str) -> int | None:
    # int() alone would also accept whitespace, underscores and non-ASCII digits.
    if not _INTEGER_RE.fullmatch(text):
        return None
    value = int(text, 10)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_float(text: str) -> float | None:
    # float() alone would also accept "inf", "nan" and "1_0".
    if not _FLOAT_RE.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


def classify(text: str) -> TypedValue:
    """Return the highest-priority typed reading of ``text``."""

    as_bool = parse_boolean(text)
    if as_bool is not None:
        return TypedValue.boolean(as_bool)

    as_int = parse_integer(text)
    if as_int is not None:
        return TypedValue.integer(as_int)

    as_float = parse_float(text)
    if as_float is not None:
        return TypedValue.float_(as_float)

    return TypedValue.string(text)


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "classify",
    "parse_boolean",
    "parse_float",
    "parse_integer",
]

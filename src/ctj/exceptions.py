"""Converter error hierarchy."""

from __future__ import annotations


class CtjError(Exception):
    """Base class for converter-specific exceptions."""


class ConfigError(CtjError):
    """Raised when settings or option values are invalid."""


class InputError(CtjError):
    """Raised when the CSV source is missing, unreadable or malformed."""

    def __init__(self, message: str, *, row: int | None = None) -> None:
        super().__init__(message)
        self.row = row  # 1-based input row, when known


class OutputError(CtjError):
    """Raised when the JSON destination cannot be written."""


__all__ = [
    "CtjError",
    "ConfigError",
    "InputError",
    "OutputError",
]

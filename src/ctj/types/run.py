"""Request/result types for a single conversion.

- ``ConvertRequest`` is caller-provided input/options (paths may be relative).
- ``ConvertResult`` is what the converter hands back; it never raises for
  input or output problems, it reports them here instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ctj.types.values import HeaderMode


class ConvertStatus(str, Enum):
    """Overall conversion outcome."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ConvertErrorCode(str, Enum):
    """Categorization for failures surfaced to callers."""

    CONFIG_ERROR = "config_error"
    INPUT_ERROR = "input_error"
    OUTPUT_ERROR = "output_error"
    UNKNOWN_ERROR = "unknown_error"


@dataclass
class ConvertRequest:
    """Inputs and options for one conversion."""

    # None means "read the provided text stream" (stdin for the CLI).
    input_path: Path | None = None
    # None means "write to the provided text stream" (stdout for the CLI).
    output_path: Path | None = None
    pretty: bool | None = None
    header_mode: HeaderMode = HeaderMode.ENABLED

    # Unset options fall back to Settings.
    strict_width: bool | None = None
    indent: int | None = None
    encoding: str | None = None


@dataclass(frozen=True)
class ConvertError:
    """Structured error info returned to callers."""

    code: ConvertErrorCode
    message: str


@dataclass(frozen=True)
class ConvertResult:
    """Outcome summary for a conversion."""

    status: ConvertStatus
    error: ConvertError | None
    record_count: int = 0
    output_path: Path | None = None
    run_id: str | None = None


__all__ = [
    "ConvertError",
    "ConvertErrorCode",
    "ConvertRequest",
    "ConvertResult",
    "ConvertStatus",
]

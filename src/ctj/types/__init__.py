"""Value and run-level types exposed by ctj."""

from ctj.types.run import ConvertError, ConvertErrorCode, ConvertRequest, ConvertResult, ConvertStatus
from ctj.types.values import HeaderMode, Record, ScalarKind, Table, TypedValue, record_to_json

__all__ = [
    "ConvertError",
    "ConvertErrorCode",
    "ConvertRequest",
    "ConvertResult",
    "ConvertStatus",
    "HeaderMode",
    "Record",
    "ScalarKind",
    "Table",
    "TypedValue",
    "record_to_json",
]

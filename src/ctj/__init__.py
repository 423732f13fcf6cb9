"""Public API for :mod:`ctj`."""

from importlib import metadata
from pathlib import Path
from typing import TYPE_CHECKING
import tomllib

if TYPE_CHECKING:
    from ctj.engine import Converter, convert_text
    from ctj.pipeline.assemble import assemble
    from ctj.pipeline.classify import classify
    from ctj.settings import Settings
    from ctj.types import ConvertRequest, ConvertResult, ConvertStatus, HeaderMode, ScalarKind, TypedValue


def _pyproject_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        parsed = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        if parsed.get("project", {}).get("name") != "ctj":
            return None
        version = parsed.get("project", {}).get("version")
        if isinstance(version, str) and version:
            return version
    except (FileNotFoundError, OSError, tomllib.TOMLDecodeError):
        return None
    return None


def _resolve_version() -> str:
    # Prefer the local pyproject when running from a source checkout/editable install.
    version = _pyproject_version()
    if version is not None:
        return version

    try:
        return metadata.version("ctj")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "unknown"


__version__ = _resolve_version()

_EXPORTS = {
    "Converter": ("ctj.engine", "Converter"),
    "convert_text": ("ctj.engine", "convert_text"),
    "assemble": ("ctj.pipeline.assemble", "assemble"),
    "classify": ("ctj.pipeline.classify", "classify"),
    "Settings": ("ctj.settings", "Settings"),
    "ConvertRequest": ("ctj.types", "ConvertRequest"),
    "ConvertResult": ("ctj.types", "ConvertResult"),
    "ConvertStatus": ("ctj.types", "ConvertStatus"),
    "HeaderMode": ("ctj.types", "HeaderMode"),
    "ScalarKind": ("ctj.types", "ScalarKind"),
    "TypedValue": ("ctj.types", "TypedValue"),
}


def __getattr__(name: str):
    target = _EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    module = __import__(module_name, fromlist=[attr_name])
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))


__all__ = [
    "Converter",
    "ConvertRequest",
    "ConvertResult",
    "ConvertStatus",
    "HeaderMode",
    "ScalarKind",
    "Settings",
    "TypedValue",
    "assemble",
    "classify",
    "convert_text",
    "__version__",
]

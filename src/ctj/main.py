"""CLI entrypoint for :mod:`ctj`.

    ctj [FILE] [-i FILE] [-o FILE] [--pretty] [--no-header]

Reads a named CSV file, or piped stdin when no file is given, and writes a
JSON array of objects to stdout or to ``--output``.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from typer import BadParameter

from ctj import __version__
from ctj.engine import Converter
from ctj.exceptions import ConfigError
from ctj.settings import Settings
from ctj.types import ConvertRequest, ConvertStatus, HeaderMode

app = typer.Typer(
    help="Convert CSV to JSON from files or piped input.",
    add_completion=False,
)


class LogFormat(str, Enum):
    """Supported log output formats."""

    text = "text"
    ndjson = "ndjson"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_log_level(log_level: Optional[str]) -> Optional[int]:
    """Resolve a string log level to a logging level constant."""
    if not log_level:
        return None

    mapping = logging.getLevelNamesMapping()
    resolved = mapping.get(str(log_level).upper())
    if isinstance(resolved, int):
        return resolved

    raise BadParameter(f"Invalid log level: {log_level}", param_hint="--log-level")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ctj {__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def convert(
    file: Optional[Path] = typer.Argument(
        None,
        metavar="FILE",
        help="Input CSV file (reads from stdin if not provided).",
    ),
    input: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        metavar="FILE",
        help="Input CSV file (reads from stdin if not provided).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        metavar="FILE",
        help="Output JSON file (default: stdout).",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        "-p",
        help="Pretty print JSON output.",
    ),
    no_header: bool = typer.Option(
        False,
        "--no-header",
        "-n",
        help="Treat the first row as data, not headers.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Reject rows whose field count differs from the header (or first row).",
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        min=0,
        help="Indentation width used with --pretty.",
    ),
    encoding: Optional[str] = typer.Option(
        None,
        "--encoding",
        help="Input text encoding (default: utf-8-sig).",
    ),
    log_format: Optional[LogFormat] = typer.Option(
        None,
        "--log-format",
        case_sensitive=False,
        help="Log output format.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Log level (debug, info, warning, error, critical).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Reduce logging to warnings and errors.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Convert CSV to JSON from files or piped input."""

    effective_log_level = resolve_log_level(log_level)
    if debug:
        effective_log_level = logging.DEBUG
    if quiet:
        effective_log_level = logging.WARNING

    try:
        settings = Settings.load(
            log_format=log_format.value if log_format else None,
            log_level=effective_log_level,
            encoding=encoding,
            indent=indent,
        )
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    request = ConvertRequest(
        input_path=input or file,
        output_path=output,
        pretty=True if pretty else None,
        header_mode=HeaderMode.DISABLED if no_header else HeaderMode.ENABLED,
        strict_width=True if strict else None,
    )

    result = Converter(settings=settings).run(request, stdin=sys.stdin, stdout=sys.stdout, stderr=sys.stderr)

    if result.status != ConvertStatus.SUCCEEDED:
        message = result.error.message if result.error else "conversion failed"
        typer.echo(f"Error: {message}", err=True)
        raise typer.Exit(code=1)

    if result.output_path is not None:
        typer.echo(f"JSON output written to: {result.output_path}")


# ---------------------------------------------------------------------------
# Module entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    """Entrypoint used by console scripts and `python -m ctj`."""
    app()


__all__ = ["app", "main"]

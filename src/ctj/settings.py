"""Settings for :mod:`ctj`.

Settings are defined in one place (this file) and loaded using `pydantic-settings`.

Supported sources (lowest → highest precedence):
1) `settings.toml` (current working directory)
2) `.env` (current working directory)
3) environment variables (prefix: `CTJ_`)
4) explicit overrides (`Settings(...)` / CLI)

`settings.toml` is flat: keys map 1:1 to `Settings` fields.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, TomlConfigSettingsSource

from ctj.exceptions import ConfigError

ENV_PREFIX = "CTJ_"


def _coerce_log_level(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("log_level must be an int or a log level name")

    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text:
        return logging.WARNING

    if text.isdigit():
        return int(text)

    mapped = logging.getLevelNamesMapping().get(text.upper())
    if isinstance(mapped, int):
        return mapped

    raise ValueError(f"Invalid log_level: {value!r}")


class Settings(BaseSettings):
    """Runtime settings for the converter."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix=ENV_PREFIX,
        env_file=".env",
    )

    # Logging (stdout carries the JSON, so logs stay quiet by default)
    log_format: Literal["text", "ndjson"] = Field(default="text")
    log_level: int = Field(default=logging.WARNING)
    log_file: Path | None = Field(default=None)

    # Input
    encoding: str = Field(default="utf-8-sig")
    strict_width: bool = Field(default=False)

    # Output
    pretty: bool = Field(default=False)
    indent: int = Field(default=2, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> int:
        return _coerce_log_level(value)

    @field_validator("log_format", mode="before")
    @classmethod
    def _validate_log_format(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value!r}") from exc
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_files = None
        if hasattr(init_settings, "init_kwargs"):
            toml_files = init_settings.init_kwargs.get("_ctj_toml_files")  # type: ignore[attr-defined]

        if toml_files is None:
            toml_files = [Path.cwd() / "settings.toml"]

        toml_settings = TomlConfigSettingsSource(settings_cls, toml_file=toml_files)

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            toml_settings,
            file_secret_settings,
        )

    @classmethod
    def load(cls, *, cwd: Path | None = None, **overrides: Any) -> "Settings":
        """Load settings rooted at ``cwd``, raising :class:`ConfigError` when invalid.

        ``None`` overrides are dropped so unset CLI options fall through to the
        other sources.
        """
        cwd_path = (cwd or Path.cwd()).expanduser().resolve()
        explicit = {key: value for key, value in overrides.items() if value is not None}

        try:
            return cls(
                _ctj_toml_files=[cwd_path / "settings.toml"],
                _env_file=cwd_path / ".env",
                **explicit,
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc


__all__ = ["ENV_PREFIX", "Settings"]

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ctj.exceptions import ConfigError
from ctj.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CTJ_LOG_LEVEL", "CTJ_LOG_FORMAT", "CTJ_LOG_FILE", "CTJ_PRETTY", "CTJ_INDENT", "CTJ_ENCODING", "CTJ_STRICT_WIDTH"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path) -> None:
    settings = Settings.load(cwd=tmp_path)

    assert settings.log_format == "text"
    assert settings.log_level == logging.WARNING
    assert settings.log_file is None
    assert settings.encoding == "utf-8-sig"
    assert settings.indent == 2
    assert settings.pretty is False
    assert settings.strict_width is False


def test_precedence_override_env_dotenv_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "settings.toml").write_text('indent = 3\npretty = true\nlog_format = "ndjson"\nencoding = "latin-1"\n')
    (tmp_path / ".env").write_text("CTJ_INDENT=5\nCTJ_LOG_FORMAT=text\n")
    monkeypatch.setenv("CTJ_INDENT", "6")

    settings = Settings.load(cwd=tmp_path)
    assert settings.indent == 6
    assert settings.log_format == "text"
    assert settings.pretty is True
    assert settings.encoding == "latin-1"

    overridden = Settings.load(cwd=tmp_path, indent=8, pretty=None)
    assert overridden.indent == 8
    assert overridden.pretty is True


@pytest.mark.parametrize(("raw", "expected"), [("debug", logging.DEBUG), ("INFO", logging.INFO), ("40", 40), (10, 10)])
def test_log_level_accepts_names_and_numbers(tmp_path: Path, raw, expected: int) -> None:
    assert Settings.load(cwd=tmp_path, log_level=raw).log_level == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"log_level": "loud"},
        {"log_level": True},
        {"indent": -1},
        {"log_format": "xml"},
        {"encoding": "not-a-codec"},
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, overrides: dict) -> None:
    with pytest.raises(ConfigError):
        Settings.load(cwd=tmp_path, **overrides)


def test_log_format_is_case_insensitive(tmp_path: Path) -> None:
    assert Settings.load(cwd=tmp_path, log_format="NDJSON").log_format == "ndjson"

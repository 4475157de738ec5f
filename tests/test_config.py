"""Unit tests for settings loading."""

from pathlib import Path

import pytest

from quotebook.config import Settings


def test_settings_from_environment(monkeypatch, tmp_path) -> None:
    """Environment variables override the defaults."""
    monkeypatch.setenv("QUOTEBOOK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("QUOTEBOOK_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("QUOTEBOOK_SETTLE_DELAY", "0.25")
    monkeypatch.setenv("QUOTEBOOK_FONT_PATH", "/fonts/DejaVuSans.ttf")
    monkeypatch.setenv("QUOTEBOOK_LOG_LEVEL", "debug")

    settings = Settings.from_env(load_env_file=False)

    assert settings.data_dir == tmp_path / "data"
    assert settings.output_dir == tmp_path / "out"
    assert settings.openai_api_key == "sk-test"
    assert settings.settle_delay == 0.25
    assert settings.font_path == Path("/fonts/DejaVuSans.ttf")
    assert settings.log_level == "DEBUG"


def test_settings_defaults(monkeypatch) -> None:
    """Unset variables fall back to defaults."""
    for name in ("QUOTEBOOK_DATA_DIR", "QUOTEBOOK_OUTPUT_DIR", "OPENAI_API_KEY", "QUOTEBOOK_SETTLE_DELAY",
                 "QUOTEBOOK_FONT_PATH", "QUOTEBOOK_LOG_LEVEL", "QUOTEBOOK_SUGGEST_MODEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env(load_env_file=False)

    assert settings.data_dir.name == "data"
    assert settings.openai_api_key is None
    assert settings.settle_delay == 0.1
    assert settings.suggest_model == "gpt-4.1"
    assert settings.font_path is None


def test_bad_number_is_reported(monkeypatch) -> None:
    """A non-numeric settle delay fails loudly."""
    monkeypatch.setenv("QUOTEBOOK_SETTLE_DELAY", "soon")
    with pytest.raises(RuntimeError):
        Settings.from_env(load_env_file=False)

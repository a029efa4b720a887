"""Tests for environment-driven settings."""

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from stockroom.infrastructure.settings import Settings


class TestSettings:

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = Settings()
        assert settings.data_dir == Path("data")
        assert settings.hold_window == timedelta(minutes=15)
        assert settings.checkout_max_attempts == 3
        assert not settings.log_json

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("STOCKROOM_DATA_DIR", str(tmp_path / "store"))
        monkeypatch.setenv("STOCKROOM_RESERVATION_HOLD_SECONDS", "60")
        monkeypatch.setenv("STOCKROOM_LOG_JSON", "true")

        settings = Settings()
        assert settings.data_dir == tmp_path / "store"
        assert settings.hold_window == timedelta(minutes=1)
        assert settings.log_json

    def test_dotenv_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("STOCKROOM_CHECKOUT_MAX_ATTEMPTS=5\n")
        assert Settings().checkout_max_attempts == 5

    def test_hold_must_be_positive(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("STOCKROOM_RESERVATION_HOLD_SECONDS", "0")
        with pytest.raises(ValidationError):
            Settings()

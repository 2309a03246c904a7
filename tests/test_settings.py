"""Tests for environment-driven configuration."""

import logging

import pytest
from pydantic import ValidationError

from ledgerline.config import AppSettings, get_settings


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self, isolated_environment):
        settings = AppSettings()
        assert settings.data_dir is None
        assert settings.json_indent == 2
        assert settings.log_level == "WARNING"
        assert settings.data_file_path == isolated_environment / ".ledgerline" / "expenses.json"

    def test_data_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LEDGERLINE_DATA_DIR", str(tmp_path / "elsewhere"))
        assert AppSettings().data_file_path == tmp_path / "elsewhere" / "expenses.json"

    def test_log_level_is_normalised(self, monkeypatch):
        monkeypatch.setenv("LEDGERLINE_LOG_LEVEL", "debug")
        settings = AppSettings()
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LEDGERLINE_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_dotenv_file(self, tmp_path):
        """Test settings are read from .env in the working directory."""
        (tmp_path / ".env").write_text("LEDGERLINE_JSON_INDENT=4\n", encoding="utf-8")
        assert AppSettings().json_indent == 4

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

"""Tests for Settings."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from theater_ledger.settings import Settings, settings


class TestSettings:
    def test_default_values(self):
        s = Settings()
        if s.ledger_url or s.ledger_api_key:
            pytest.skip("Settings loaded from .env file or environment")

        assert s.ledger_timeout == 30.0
        assert s.page_size == 5
        assert s.top_themes == 5
        assert s.write_attempts == 1
        assert s.analysis_delay == 0.0

    @patch.dict(
        os.environ,
        {
            "LEDGER_URL": "https://gateway.test",
            "LEDGER_API_KEY": "key-123",
            "PAGE_SIZE": "10",
            "WRITE_ATTEMPTS": "3",
        },
    )
    def test_env_variable_loading(self):
        s = Settings()
        assert s.ledger_url == "https://gateway.test"
        assert s.ledger_api_key == "key-123"
        assert s.page_size == 10
        assert s.write_attempts == 3

    @patch.dict(os.environ, {"UNKNOWN_SETTING": "ignored"})
    def test_extra_env_ignored(self):
        assert not hasattr(Settings(), "unknown_setting")

    def test_frozen(self):
        with pytest.raises(ValidationError):
            settings.page_size = 99  # type: ignore[misc]

    @patch.dict(os.environ, {"PAGE_SIZE": "0"})
    def test_page_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings()

    def test_env_file_loading(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("LEDGER_URL=https://from-file.test\nTOP_THEMES=3\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("LEDGER_URL", raising=False)
        monkeypatch.delenv("TOP_THEMES", raising=False)
        s = Settings()
        assert s.ledger_url == "https://from-file.test"
        assert s.top_themes == 3

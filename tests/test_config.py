"""Tests for application settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings


class TestSettings:
    def test_generator_defaults(self) -> None:
        settings = Settings(GEMINI_API_KEY="k")

        assert settings.GENERATOR_MODEL == "gemini-2.5-pro"
        assert settings.GENERATOR_API_URL.endswith("/v1/chat/completions")
        assert settings.RETRY_MAX_ATTEMPTS == 3
        assert settings.RETRY_DELAY_SECONDS == 1.0
        assert settings.HISTORY_LIMIT == 50
        assert settings.generator_configured is True

    @pytest.mark.parametrize("key", [None, "", "   "])
    def test_generator_not_configured(self, key: str | None) -> None:
        assert Settings(GEMINI_API_KEY=key).generator_configured is False

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
            ('["http://a.test"]', ["http://a.test"]),
            ("", []),
        ],
    )
    def test_cors_origins_parsing(self, raw: str, expected: list[str]) -> None:
        assert Settings(CORS_ORIGINS=raw).CORS_ORIGINS == expected

    def test_wildcard_with_credentials_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(CORS_ORIGINS="*", ALLOW_CREDENTIALS=True)

    def test_retry_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(RETRY_MAX_ATTEMPTS=0)


class TestGetSettings:
    def test_invalid_environment_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        get_settings.cache_clear()
        try:
            with pytest.raises(ValueError):
                get_settings()
        finally:
            monkeypatch.setenv("ENVIRONMENT", "test")
            get_settings.cache_clear()

    def test_production_requires_key(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        get_settings.cache_clear()
        try:
            with pytest.raises(RuntimeError):
                get_settings()
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()

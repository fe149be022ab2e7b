"""Unit tests for environment-driven settings."""

import os

import pytest

from meal_proxy.config import Settings, load_settings
from meal_proxy.services.mealdb import DEFAULT_BASE_URL

ENV_VARS = [
    "MEALDB_BASE_URL",
    "CACHE_TTL_SECONDS",
    "CACHE_MAX_ENTRIES",
    "RESULT_LIMIT",
    "UPSTREAM_TIMEOUT_SECONDS",
    "UPSTREAM_MAX_CONCURRENCY",
    "UPSTREAM_MAX_RETRIES",
    "CORS_ORIGINS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings == Settings()
        assert settings.mealdb_base_url == DEFAULT_BASE_URL
        assert settings.cache_ttl_seconds == 300.0
        assert settings.cache_max_entries == 50
        assert settings.result_limit == 50
        assert settings.upstream_max_retries == 0
        assert settings.cors_origins == ["*"]

    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("CACHE_MAX_ENTRIES", "5")
        monkeypatch.setenv("UPSTREAM_MAX_RETRIES", "2")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = load_settings()
        assert settings.cache_ttl_seconds == 60.0
        assert settings.cache_max_entries == 5
        assert settings.upstream_max_retries == 2
        assert settings.log_level == "DEBUG"

    def test_cors_origins_list(self, monkeypatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173, http://localhost:3000")
        assert load_settings().cors_origins == ["http://localhost:5173", "http://localhost:3000"]

    def test_blank_numeric_uses_default(self, monkeypatch) -> None:
        monkeypatch.setenv("RESULT_LIMIT", "")
        assert load_settings().result_limit == 50

    def test_invalid_integer(self, monkeypatch) -> None:
        monkeypatch.setenv("CACHE_MAX_ENTRIES", "lots")
        with pytest.raises(ValueError, match="CACHE_MAX_ENTRIES"):
            load_settings()

    def test_invalid_number(self, monkeypatch) -> None:
        monkeypatch.setenv("CACHE_TTL_SECONDS", "soon")
        with pytest.raises(ValueError, match="CACHE_TTL_SECONDS"):
            load_settings()

    def test_dotenv_file_is_loaded(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("CACHE_MAX_ENTRIES=7\n")
        assert load_settings().cache_max_entries == 7

    def test_environment_wins_over_dotenv(self, monkeypatch, tmp_path) -> None:
        (tmp_path / ".env").write_text("CACHE_MAX_ENTRIES=7\n")
        monkeypatch.setenv("CACHE_MAX_ENTRIES", "9")
        assert load_settings().cache_max_entries == 9

    @pytest.mark.parametrize(
        "name, value",
        [
            ("UPSTREAM_MAX_CONCURRENCY", "0"),
            ("UPSTREAM_MAX_RETRIES", "-1"),
            ("RESULT_LIMIT", "0"),
            ("RESULT_LIMIT", "-3"),
            ("CACHE_MAX_ENTRIES", "0"),
            ("CACHE_TTL_SECONDS", "0"),
            ("UPSTREAM_TIMEOUT_SECONDS", "-1.5"),
        ],
    )
    def test_out_of_range_values_rejected(self, monkeypatch, name, value) -> None:
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=name):
            load_settings()

    def test_zero_retries_allowed(self, monkeypatch) -> None:
        monkeypatch.setenv("UPSTREAM_MAX_RETRIES", "0")
        assert load_settings().upstream_max_retries == 0

    def test_dotenv_leaves_process_environment_alone(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("CACHE_MAX_ENTRIES=7\n")
        load_settings()
        assert "CACHE_MAX_ENTRIES" not in os.environ

"""Tests for application settings."""

import pytest
from pydantic import ValidationError
from soundseek import CatalogConfig, PipelineConfig
from soundseek_api.settings import Settings, get_settings


class TestLogLevel:
    """Tests for LogLevel type validation."""

    @pytest.mark.parametrize(
        ("input_level", "expected"),
        [
            ("DEBUG", "DEBUG"),
            ("info", "INFO"),
            ("WaRnInG", "WARNING"),
            ("critical", "CRITICAL"),
        ],
    )
    def test_normalizes_to_uppercase(self, input_level: str, expected: str) -> None:
        """Should accept any casing of a valid level."""
        settings = Settings(log_level=input_level)
        assert settings.log_level == expected

    @pytest.mark.parametrize("invalid_level", ["VERBOSE", "WARN", "OFF", ""])
    def test_rejects_invalid_levels(self, invalid_level: str) -> None:
        """Should reject invalid log levels."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level=invalid_level)

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["loc"] == ("log_level",)

    def test_default_log_level(self) -> None:
        assert Settings().log_level == "INFO"


class TestEnvironment:
    """Tests for the deployment environment switch."""

    def test_defaults_to_development(self) -> None:
        settings = Settings()
        assert settings.environment == "development"
        assert settings.is_development is True

    @pytest.mark.parametrize("value", ["production", "PRODUCTION", " Production "])
    def test_normalizes_production(self, value: str) -> None:
        settings = Settings(environment=value)
        assert settings.environment == "production"
        assert settings.is_development is False

    def test_rejects_unknown_environment(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="staging")
        assert exc_info.value.errors()[0]["loc"] == ("environment",)


class TestEnvironmentVariables:
    """Tests for reading SOUNDSEEK_* variables."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOUNDSEEK_PORT", "9000")
        monkeypatch.setenv("SOUNDSEEK_STRATEGY_DELAY", "1.5")
        monkeypatch.setenv("SOUNDSEEK_CATALOG_LOCATION", "GB")

        settings = Settings()

        assert settings.port == 9000
        assert settings.strategy_delay == 1.5
        assert settings.catalog_location == "GB"

    def test_ignores_unprefixed_variables(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PORT", "9000")
        assert Settings().port == 8000

    def test_known_channels_from_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(
            "SOUNDSEEK_KNOWN_CHANNELS", '{"Some Artist": "UCsome", "Other": "UCother"}'
        )
        assert Settings().known_channels == {
            "Some Artist": "UCsome",
            "Other": "UCother",
        }

    def test_reads_env_file(self) -> None:
        # The isolation fixture chdirs into a fresh tmp_path
        with open(".env", "w", encoding="utf-8") as f:
            f.write("SOUNDSEEK_ITEMS_PER_PAGE=25\n")
        assert Settings().items_per_page == 25


class TestBounds:
    """Tests for numeric constraints."""

    @pytest.mark.parametrize("value", [0, -1])
    def test_init_timeout_must_be_positive(self, value: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Settings(init_timeout=value)
        assert exc_info.value.errors()[0]["loc"] == ("init_timeout",)

    def test_strategy_delay_may_be_zero(self) -> None:
        assert Settings(strategy_delay=0).strategy_delay == 0

    def test_rejects_negative_strategy_delay(self) -> None:
        with pytest.raises(ValidationError):
            Settings(strategy_delay=-0.1)

    def test_rejects_empty_pages(self) -> None:
        with pytest.raises(ValidationError):
            Settings(items_per_page=0)


class TestDerivedConfig:
    """Tests for the library configuration built from settings."""

    def test_catalog_config(self) -> None:
        settings = Settings(
            catalog_language="de",
            catalog_location="DE",
            init_timeout=10,
            call_timeout=5,
            cache_size=8,
            cache_ttl=30,
        )

        config = settings.catalog_config

        assert isinstance(config, CatalogConfig)
        assert config.language == "de"
        assert config.location == "DE"
        assert config.init_timeout == 10
        assert config.call_timeout == 5
        assert config.cache_size == 8
        assert config.cache_ttl == 30
        assert config.audio_cache_ttl == CatalogConfig().audio_cache_ttl

    def test_pipeline_config(self) -> None:
        config = Settings(items_per_page=10, strategy_delay=0).pipeline_config

        assert isinstance(config, PipelineConfig)
        assert config.items_per_page == 10
        assert config.strategy_delay == 0
        assert config.early_stop_pages == PipelineConfig().early_stop_pages


class TestGetSettings:
    def test_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        assert get_settings().environment == "development"
        monkeypatch.setenv("SOUNDSEEK_ENVIRONMENT", "production")
        assert get_settings().environment == "development"

        get_settings.cache_clear()

        assert get_settings().environment == "production"

"""Unit tests for startup configuration checks."""

import pytest

from brandkit.core.config import Settings
from brandkit.models.exceptions import ConfigurationError


def _settings(**overrides) -> Settings:
    values = {
        "service_env": "test",
        "openai_api_key": "test-key",
        "database_url": "sqlite://",
        "port": 5000,
        "generation_profile": "studio",
    }
    values.update(overrides)
    return Settings(**values)


class TestSettingsValidate:

    def test_valid_configuration(self):
        _settings().validate()

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            _settings(openai_api_key=None).validate()

        assert exc_info.value.variable == "OPENAI_API_KEY"

    def test_missing_api_key_allowed_with_injected_client(self):
        _settings(openai_api_key=None).validate(require_api_key=False)

    def test_missing_database_url(self):
        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            _settings(database_url="").validate()

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_out_of_range(self, port):
        with pytest.raises(ConfigurationError, match="PORT"):
            _settings(port=port).validate()

    def test_unknown_profile(self):
        with pytest.raises(ConfigurationError, match="GENERATION_PROFILE"):
            _settings(generation_profile="deluxe").validate()

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError, match="COMPLETIONS_TIMEOUT"):
            _settings(completions_timeout=0).validate()


class TestCorsOrigins:

    def test_wildcard_outside_production(self):
        assert _settings(cors_allow_origins=None).cors_origins() == ["*"]

    def test_nothing_in_production_by_default(self):
        assert _settings(service_env="production", cors_allow_origins=None).cors_origins() == []

    def test_explicit_list(self):
        origins = _settings(cors_allow_origins="https://a.example, https://b.example").cors_origins()

        assert origins == ["https://a.example", "https://b.example"]

"""Tests for MagpieConfig and MagpieSettings."""

import pytest

from magpie_sdk import ConfigurationError, MagpieClient, MagpieConfig, MagpieSettings


class TestMagpieConfig:
    """Tests for MagpieConfig defaults and validation."""

    def test_defaults(self):
        config = MagpieConfig()
        assert config.base_url == "https://api.magpie.im"
        assert config.api_version == "v2"
        assert config.timeout == 30.0
        assert config.max_retries == 3
        assert config.retry_delay == 1000
        assert config.max_retry_delay == 30
        assert config.verify_ssl is True
        assert config.debug is False

    def test_user_agent(self):
        assert MagpieConfig().user_agent.startswith("magpie-python/")

    def test_api_url_joins_version(self):
        config = MagpieConfig(base_url="https://api.example.com/", api_version="/v3/")
        assert config.base_url == "https://api.example.com"
        assert config.api_url == "https://api.example.com/v3/"

    def test_from_dict_ignores_unknown_keys(self):
        config = MagpieConfig.from_dict({"timeout": 5, "unknown": True})
        assert config.timeout == 5

    def test_empty_base_url_raises(self):
        with pytest.raises(ConfigurationError, match="base_url is required"):
            MagpieConfig(base_url="/")

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_non_positive_timeout_raises(self, timeout):
        with pytest.raises(ConfigurationError, match="timeout must be greater than 0"):
            MagpieConfig(timeout=timeout)

    def test_negative_max_retries_raises(self):
        with pytest.raises(ConfigurationError, match="max_retries must be non-negative"):
            MagpieConfig(max_retries=-1)

    def test_zero_retries_allowed(self):
        assert MagpieConfig(max_retries=0).max_retries == 0

    def test_configuration_error_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MagpieConfig(retry_delay=-5)
        assert exc_info.value.type == "configuration_error"


class TestMagpieSettings:
    """Tests for environment-driven settings."""

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("MAGPIE_SECRET_KEY", "sk_test_env")
        monkeypatch.setenv("MAGPIE_TIMEOUT", "12.5")
        monkeypatch.setenv("MAGPIE_MAX_RETRIES", "5")
        monkeypatch.setenv("MAGPIE_WEBHOOK_TOLERANCE", "60")

        settings = MagpieSettings(_env_file=None)

        assert settings.secret_key == "sk_test_env"
        assert settings.webhook_config == {"tolerance": 60}
        config = settings.to_config()
        assert config.timeout == 12.5
        assert config.max_retries == 5

    def test_from_settings_without_key_raises(self, monkeypatch):
        monkeypatch.delenv("MAGPIE_SECRET_KEY", raising=False)
        with pytest.raises(ConfigurationError, match="MAGPIE_SECRET_KEY"):
            MagpieClient.from_settings(MagpieSettings(_env_file=None))

    def test_from_settings_builds_client(self):
        settings = MagpieSettings(_env_file=None, secret_key="sk_test_abc", api_version="v3")
        magpie = MagpieClient.from_settings(settings)
        try:
            assert magpie.api_version == "v3"
            assert magpie.get_client().api_key == "sk_test_abc"
        finally:
            magpie.close()

"""Tests for the configuration module."""

import os
from unittest.mock import patch

import pytest

from adminkit.config import ConfigurationError, Environment, Settings


class TestEnvironment:
    """Tests for Environment class."""

    def test_loads_from_environment(self):
        """Environment loads values from environment variables."""
        with patch.dict(os.environ, {
            "SECRET_KEY": "env-secret",
            "FLASK_ENV": "production",
            "DEBUG": "False",
            "SETTINGS_CACHE_BACKEND": "redis",
            "SETTINGS_CACHE_EXPIRES_IN": "600",
            "REDIS_URL": "redis://cache:6379/1",
            "LANGUAGE": "ru",
        }, clear=False):
            env = Environment(_env_file=None)  # type: ignore[call-arg]

            assert env.SECRET_KEY == "env-secret"
            assert env.FLASK_ENV == "production"
            assert env.DEBUG is False
            assert env.SETTINGS_CACHE_BACKEND == "redis"
            assert env.SETTINGS_CACHE_EXPIRES_IN == 600
            assert env.REDIS_URL == "redis://cache:6379/1"
            assert env.LANGUAGE == "ru"

    def test_uses_defaults(self):
        """Environment uses default values when not set."""
        with patch.dict(os.environ, {}, clear=True):
            env = Environment(_env_file=None)  # type: ignore[call-arg]

            assert env.FLASK_ENV == "development"
            assert env.DEBUG is True
            assert env.CORS_ORIGINS == ["http://localhost:3000"]
            assert env.SETTINGS_CACHE_BACKEND == "null"
            assert env.SETTINGS_CACHE_EXPIRES_IN == 86400
            assert env.SETTINGS_DEFAULTS == "{}"
            assert env.REDIS_URL is None


class TestSettingsLoad:
    """Tests for Settings.load() method."""

    def test_load_creates_settings_from_environment(self):
        """Settings.load() creates Settings from Environment."""
        env = Environment(
            _env_file=None,  # type: ignore[call-arg]
            SECRET_KEY="test-secret",
            SETTINGS_CACHE_BACKEND="Memory",
            SETTINGS_DEFAULTS='{"theme": "light", "per_page": 25}',
        )

        settings = Settings.load(env)

        assert settings.secret_key == "test-secret"
        assert settings.settings_cache_backend == "memory"
        assert settings.settings_defaults == {"theme": "light", "per_page": 25}

    def test_invalid_defaults_json(self):
        env = Environment(
            _env_file=None,  # type: ignore[call-arg]
            SETTINGS_DEFAULTS="{not json",
        )

        with pytest.raises(ConfigurationError, match="valid JSON"):
            Settings.load(env)

    def test_defaults_must_be_object(self):
        env = Environment(
            _env_file=None,  # type: ignore[call-arg]
            SETTINGS_DEFAULTS='["theme"]',
        )

        with pytest.raises(ConfigurationError, match="JSON object"):
            Settings.load(env)

    def test_sqlite_has_no_pool_options(self):
        env = Environment(
            _env_file=None,  # type: ignore[call-arg]
            DATABASE_URL="sqlite:///tmp/test.db",
        )

        assert Settings.load(env).sqlalchemy_engine_options == {}

    def test_server_database_has_pool_options(self):
        env = Environment(
            _env_file=None,  # type: ignore[call-arg]
            DATABASE_URL="postgresql+psycopg://user:pass@db/adminkit",
        )

        options = Settings.load(env).sqlalchemy_engine_options

        assert options["pool_pre_ping"] is True
        assert options["pool_size"] == 5


class TestSettingsValidation:
    """Tests for validate_production_config()."""

    def test_development_defaults_are_valid(self):
        Settings().validate_production_config()

    def test_production_requires_secret_key(self):
        settings = Settings(flask_env="production", debug=False)

        with pytest.raises(ConfigurationError, match="SECRET_KEY"):
            settings.validate_production_config()

    def test_production_with_secret_key(self):
        settings = Settings(flask_env="production", debug=False, secret_key="s3cret")

        settings.validate_production_config()

    def test_unknown_cache_backend(self):
        settings = Settings(settings_cache_backend="memcached")

        with pytest.raises(ConfigurationError, match="SETTINGS_CACHE_BACKEND"):
            settings.validate_production_config()

    def test_redis_backend_requires_url(self):
        settings = Settings(settings_cache_backend="redis")

        with pytest.raises(ConfigurationError, match="REDIS_URL"):
            settings.validate_production_config()

    def test_negative_expiry(self):
        settings = Settings(settings_cache_expires_in=-1)

        with pytest.raises(ConfigurationError, match="must not be negative"):
            settings.validate_production_config()

    def test_all_errors_reported(self):
        settings = Settings(
            flask_env="production",
            debug=False,
            settings_cache_backend="redis",
            settings_cache_expires_in=-5,
        )

        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_production_config()

        message = str(exc_info.value)
        assert "SECRET_KEY" in message
        assert "REDIS_URL" in message
        assert "negative" in message


class TestSettingsProperties:
    """Tests for derived Settings properties."""

    def test_is_production_property(self):
        """is_production returns True for production or non-debug mode."""
        assert Settings(flask_env="development", debug=True).is_production is False
        assert Settings(flask_env="production", debug=True).is_production is True
        assert Settings(flask_env="development", debug=False).is_production is True

    def test_is_testing_property(self):
        assert Settings(flask_env="testing").is_testing is True
        assert Settings().is_testing is False

    def test_to_flask_config(self):
        settings = Settings(secret_key="abc", flask_env="testing", database_url="sqlite://")

        flask_config = settings.to_flask_config()

        assert flask_config.SECRET_KEY == "abc"
        assert flask_config.TESTING is True
        assert flask_config.SQLALCHEMY_DATABASE_URI == "sqlite://"
        assert flask_config.SQLALCHEMY_TRACK_MODIFICATIONS is False

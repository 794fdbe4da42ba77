"""Configuration management using Pydantic settings.

Environment variables are read by ``Environment`` (upper-case names, optional
``.env`` file) and converted by ``Settings.load()`` into the lower-case
``Settings`` model used throughout the application.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory (parent of adminkit/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Default secret key that must be changed in production
_DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"

CACHE_BACKENDS = ("null", "memory", "redis")


class ConfigurationError(Exception):
    """Raised when application configuration is invalid."""

    pass


class Environment(BaseSettings):
    """Raw environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Flask settings
    SECRET_KEY: str = Field(default=_DEFAULT_SECRET_KEY)
    FLASK_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Database settings
    DATABASE_URL: str = Field(
        default=f"sqlite:///{_PROJECT_ROOT / 'adminkit.db'}",
        description="SQLAlchemy connection string",
    )

    # CORS settings
    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Settings store
    SETTINGS_CACHE_BACKEND: str = Field(
        default="null",
        description="Cache used by the settings store (null, memory or redis)",
    )
    SETTINGS_CACHE_EXPIRES_IN: int = Field(
        default=86400,
        description="Settings cache expiration in seconds (0 disables expiration)",
    )
    SETTINGS_CACHE_PREFIX: str = Field(
        default="adminkit:settings:",
        description="Key prefix for the redis settings cache",
    )
    SETTINGS_DEFAULTS: str = Field(
        default="{}",
        description="JSON object with default setting values",
    )
    REDIS_URL: str | None = Field(
        default=None,
        description="Redis URL (e.g., redis://localhost:6379/0)",
    )

    # Translations
    LANGUAGE: str = Field(default="en", description="Language for UI labels")


class FlaskConfig:
    """Flask-facing configuration object consumed by ``app.config.from_object``."""

    def __init__(self, settings: "Settings") -> None:
        self.SECRET_KEY = settings.secret_key
        self.DEBUG = settings.debug
        self.TESTING = settings.is_testing
        self.SQLALCHEMY_DATABASE_URI = settings.database_url
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.SQLALCHEMY_ENGINE_OPTIONS = settings.sqlalchemy_engine_options


class Settings(BaseModel):
    """Application settings."""

    model_config = ConfigDict(from_attributes=True)

    # Flask settings
    secret_key: str = _DEFAULT_SECRET_KEY
    flask_env: str = "development"
    debug: bool = True

    # Database settings
    database_url: str = "sqlite://"
    sqlalchemy_engine_options: dict[str, Any] = Field(default_factory=dict)

    # CORS settings
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Settings store
    settings_cache_backend: str = "null"
    settings_cache_expires_in: int = 86400
    settings_cache_prefix: str = "adminkit:settings:"
    settings_defaults: dict[str, Any] = Field(default_factory=dict)
    redis_url: str | None = None

    # Translations
    language: str = "en"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.flask_env == "production" or not self.debug

    @property
    def is_testing(self) -> bool:
        """Check if the application is running in testing mode."""
        return self.flask_env == "testing"

    @classmethod
    def load(cls, env: Environment | None = None) -> "Settings":
        """Load settings from environment variables.

        Raises:
            ConfigurationError: If SETTINGS_DEFAULTS is not a JSON object
        """
        if env is None:
            env = Environment()

        try:
            defaults = json.loads(env.SETTINGS_DEFAULTS)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"SETTINGS_DEFAULTS must be valid JSON: {e}") from e
        if not isinstance(defaults, dict):
            raise ConfigurationError("SETTINGS_DEFAULTS must be a JSON object")

        engine_options: dict[str, Any] = {}
        if not env.DATABASE_URL.startswith("sqlite"):
            engine_options = {
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
                "pool_pre_ping": True,  # Verify connections before use
            }

        return cls(
            secret_key=env.SECRET_KEY,
            flask_env=env.FLASK_ENV,
            debug=env.DEBUG,
            database_url=env.DATABASE_URL,
            sqlalchemy_engine_options=engine_options,
            cors_origins=env.CORS_ORIGINS,
            settings_cache_backend=env.SETTINGS_CACHE_BACKEND.lower(),
            settings_cache_expires_in=env.SETTINGS_CACHE_EXPIRES_IN,
            settings_cache_prefix=env.SETTINGS_CACHE_PREFIX,
            settings_defaults=defaults,
            redis_url=env.REDIS_URL,
            language=env.LANGUAGE,
        )

    def to_flask_config(self) -> FlaskConfig:
        """Build the object passed to Flask's config loader."""
        return FlaskConfig(self)

    def validate_production_config(self) -> None:
        """Validate that required configuration is set.

        Raises:
            ConfigurationError: If required settings are missing or insecure
        """
        errors: list[str] = []

        # SECRET_KEY must be changed from default in production
        if self.is_production and self.secret_key == _DEFAULT_SECRET_KEY:
            errors.append(
                "SECRET_KEY must be set to a secure value in production "
                "(current value is the insecure default)"
            )

        if self.settings_cache_backend not in CACHE_BACKENDS:
            errors.append(
                f"SETTINGS_CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)} "
                f"(got {self.settings_cache_backend!r})"
            )

        if self.settings_cache_backend == "redis" and not self.redis_url:
            errors.append("REDIS_URL must be set when SETTINGS_CACHE_BACKEND is redis")

        if self.settings_cache_expires_in < 0:
            errors.append("SETTINGS_CACHE_EXPIRES_IN must not be negative")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

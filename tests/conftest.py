"""Pytest configuration and fixtures."""

import sqlite3
from collections.abc import Generator
from typing import Any

import pytest
from flask.testing import FlaskClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from adminkit import create_app
from adminkit.app import App
from adminkit.config import Settings
from adminkit.database import init_database
from adminkit.i18n import translations
from adminkit.services.container import ServiceContainer
from adminkit.services.settings_service import SettingsService

TEST_DEFAULTS: dict[str, Any] = {
    "theme": "light",
    "per_page": 25,
    "user_locale": "en",
    "dashboard": {"widgets": ["news"]},
}


def _build_test_settings() -> Settings:
    """Construct base Settings object for tests.

    Settings is a plain Pydantic model, so tests construct it directly
    instead of using Settings.load().
    """
    return Settings(
        # Flask settings
        secret_key="test-secret-key",
        flask_env="testing",
        debug=True,
        # Database settings
        database_url="sqlite://",
        # CORS settings
        cors_origins=["http://localhost:3000"],
        # Settings store
        settings_cache_backend="memory",
        settings_cache_expires_in=3600,
        settings_defaults=TEST_DEFAULTS,
        redis_url=None,
        # Translations
        language="en",
    )


def _override_settings_for_sqlite(settings: Settings, conn: sqlite3.Connection) -> Settings:
    """Create a copy of settings configured for SQLite with static pool."""
    return settings.model_copy(
        update={
            "database_url": "sqlite://",
            "sqlalchemy_engine_options": {
                "poolclass": StaticPool,
                "creator": lambda: conn,
            },
        }
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with in-memory database."""
    return _build_test_settings()


@pytest.fixture
def app(test_settings: Settings) -> Generator[App, None, None]:
    """Create Flask app for testing on a fresh in-memory database."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)

    settings = _override_settings_for_sqlite(test_settings, conn)

    app = create_app(settings)
    with app.app_context():
        init_database()

    try:
        yield app
    finally:
        with app.app_context():
            from adminkit.extensions import db as flask_db

            flask_db.session.remove()

        app.container.db_session.reset()
        translations.set_language("en")
        conn.close()


@pytest.fixture
def client(app: App) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def container(app: App) -> ServiceContainer:
    """Access to the DI container for testing."""
    return app.container


@pytest.fixture
def session(container: ServiceContainer) -> Session:
    """Database session shared with services created in the test."""
    return container.db_session()


@pytest.fixture
def store(container: ServiceContainer) -> SettingsService:
    """Global settings store backed by the test database and memory cache."""
    return container.settings_service()

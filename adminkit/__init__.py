"""Flask application factory for the adminkit engine."""

import logging

from flask import g
from flask_cors import CORS

from adminkit.app import App
from adminkit.config import Settings
from adminkit.extensions import db
from adminkit.i18n import translations
from adminkit.services.container import ServiceContainer


def create_app(settings: Settings | None = None) -> App:
    """Create and configure Flask application."""
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = Settings.load()

    # Validate production configuration
    settings.validate_production_config()

    app.config.from_object(settings.to_flask_config())

    # Configure logging
    debug_mode = settings.flask_env in ("development", "testing")
    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Initialize Flask-SQLAlchemy
    db.init_app(app)

    # Import models to register them with SQLAlchemy
    from adminkit import models  # noqa: F401

    # Initialize SessionLocal for per-request sessions
    # This needs to be done in app context since db.engine requires it
    with app.app_context():
        from sqlalchemy.orm import Session, sessionmaker

        SessionLocal: sessionmaker[Session] = sessionmaker(
            class_=Session,
            bind=db.engine,
            autoflush=True,
            expire_on_commit=False,
        )

    translations.set_language(settings.language)

    # Initialize SpecTree for OpenAPI docs
    from adminkit.utils.spectree_config import configure_spectree

    configure_spectree(app)

    # Initialize service container
    container = ServiceContainer()
    container.config.override(settings)
    container.session_maker.override(SessionLocal)

    # Wire container with API modules
    wire_modules = [
        "adminkit.api.settings",
    ]

    container.wire(modules=wire_modules)

    app.container = container

    # Configure CORS
    CORS(app, origins=settings.cors_origins)

    # Register main API blueprint
    from adminkit.api import api_bp

    app.register_blueprint(api_bp)

    # Register metrics blueprint (at root, not under /api)
    from adminkit.api.metrics import metrics_bp

    app.register_blueprint(metrics_bp)

    # Request teardown handler for database session management
    @app.teardown_request
    def close_session(exc: BaseException | None) -> None:
        """Commit or roll back the request's database session, then close it."""
        try:
            db_session = container.db_session()
            needs_rollback = g.pop("needs_rollback", False)

            if exc or needs_rollback:
                db_session.rollback()
            else:
                db_session.commit()

            db_session.close()

        finally:
            # Ensure the scoped session is removed after each request
            container.db_session.reset()

    return app

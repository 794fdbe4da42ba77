"""Database helpers for schema creation and connectivity checks."""

import logging

from sqlalchemy import inspect, text

from adminkit.extensions import db

logger = logging.getLogger(__name__)


def check_db_connection() -> bool:
    """Check whether the database is reachable. Requires an app context."""
    try:
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database connection check failed: %s", e)
        return False


def init_database(recreate: bool = False) -> list[str]:
    """Create tables for all registered models. Requires an app context.

    Args:
        recreate: Drop all tables first

    Returns:
        Names of the tables that were created
    """
    # Import models to register them with SQLAlchemy
    from adminkit import models  # noqa: F401

    if recreate:
        logger.warning("Dropping all tables")
        db.drop_all()

    existing = set(inspect(db.engine).get_table_names())
    db.create_all()
    created = sorted(set(inspect(db.engine).get_table_names()) - existing)

    for table in created:
        logger.info("Created table %s", table)
    return created

"""API blueprints for the admin engine."""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")


# Import and register all resource blueprints
# Note: Imports are done after api_bp creation to avoid circular imports
from adminkit.api.health import health_bp  # noqa: E402
from adminkit.api.roles import roles_bp  # noqa: E402
from adminkit.api.settings import settings_bp  # noqa: E402

api_bp.register_blueprint(health_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(roles_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(settings_bp)  # type: ignore[attr-defined]

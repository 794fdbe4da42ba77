"""Role type API endpoints."""

from typing import Any

from flask import Blueprint
from spectree import Response as SpectreeResponse

from adminkit.models.role_type import RoleType
from adminkit.schemas.role import RoleTypeListResponseSchema, RoleTypeSchema
from adminkit.utils.error_handling import handle_api_errors
from adminkit.utils.spectree_config import api

roles_bp = Blueprint("roles", __name__, url_prefix="/roles")


@roles_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=RoleTypeListResponseSchema))
@handle_api_errors
def list_roles() -> Any:
    """List role types with their translated titles."""
    roles = [
        RoleTypeSchema(id=role.value, code=role.code, title=role.title)
        for role in RoleType.all()
    ]
    return RoleTypeListResponseSchema(roles=roles, count=len(roles)).model_dump()

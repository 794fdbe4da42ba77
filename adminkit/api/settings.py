"""Settings management API endpoints."""

import time
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from adminkit.schemas.error import ErrorResponseSchema
from adminkit.schemas.setting import (
    SettingResponseSchema,
    SettingsBulkWriteSchema,
    SettingsListQuerySchema,
    SettingsListResponseSchema,
    SettingsScopeQuerySchema,
    SettingWriteSchema,
)
from adminkit.services.container import ServiceContainer
from adminkit.services.settings_service import SettingsService
from adminkit.utils.error_handling import handle_api_errors
from adminkit.utils.settings_metrics import record_operation
from adminkit.utils.spectree_config import api

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


def _scoped_store(
    settings_service: SettingsService, scope: SettingsScopeQuerySchema
) -> SettingsService:
    """Narrow the injected global store to the target named in the query."""
    if scope.target_type is None and scope.target_id is None:
        return settings_service
    return settings_service.for_target(scope.target_type, scope.target_id)


def _list_response(settings: dict[str, Any]) -> dict[str, Any]:
    return SettingsListResponseSchema(settings=settings, count=len(settings)).model_dump()


@settings_bp.route("", methods=["GET"])
@api.validate(
    query=SettingsListQuerySchema,
    resp=SpectreeResponse(
        HTTP_200=SettingsListResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def list_settings(
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
) -> Any:
    """List all settings in scope merged over the defaults."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = SettingsListQuerySchema.model_validate(request.args.to_dict())
        store = _scoped_store(settings_service, query)
        return _list_response(store.all(query.prefix))

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        record_operation("list_settings", status, duration)


@settings_bp.route("", methods=["PUT"])
@api.validate(
    query=SettingsScopeQuerySchema,
    json=SettingsBulkWriteSchema,
    resp=SpectreeResponse(
        HTTP_200=SettingsListResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def update_settings(
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
) -> Any:
    """Write several settings at once and return the resulting settings."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = SettingsScopeQuerySchema.model_validate(request.args.to_dict())
        data = SettingsBulkWriteSchema.model_validate(request.get_json())
        store = _scoped_store(settings_service, query)

        store.update(data.settings)

        return _list_response(store.all())

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        record_operation("update_settings", status, duration)


@settings_bp.route("/<string:name>", methods=["GET"])
@api.validate(
    query=SettingsScopeQuerySchema,
    resp=SpectreeResponse(
        HTTP_200=SettingResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def get_setting(
    name: str,
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
) -> Any:
    """Get a setting value, falling back to its default."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = SettingsScopeQuerySchema.model_validate(request.args.to_dict())
        store = _scoped_store(settings_service, query)

        return SettingResponseSchema(name=name, value=store.get(name)).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        record_operation("get_setting", status, duration)


@settings_bp.route("/<string:name>", methods=["PUT"])
@api.validate(
    query=SettingsScopeQuerySchema,
    json=SettingWriteSchema,
    resp=SpectreeResponse(
        HTTP_200=SettingResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def set_setting(
    name: str,
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
) -> Any:
    """Create or replace a setting value."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = SettingsScopeQuerySchema.model_validate(request.args.to_dict())
        data = SettingWriteSchema.model_validate(request.get_json())
        store = _scoped_store(settings_service, query)

        value = store.set(name, data.value)

        return SettingResponseSchema(name=name, value=value).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        record_operation("set_setting", status, duration)


@settings_bp.route("/<string:name>", methods=["PATCH"])
@api.validate(
    query=SettingsScopeQuerySchema,
    json=SettingWriteSchema,
    resp=SpectreeResponse(
        HTTP_200=SettingResponseSchema,
        HTTP_400=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def merge_setting(
    name: str,
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
) -> Any:
    """Merge a mapping into a mapping-valued setting."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = SettingsScopeQuerySchema.model_validate(request.args.to_dict())
        data = SettingWriteSchema.model_validate(request.get_json())
        store = _scoped_store(settings_service, query)

        merged = store.merge(name, data.value)

        return SettingResponseSchema(name=name, value=merged).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        record_operation("merge_setting", status, duration)


@settings_bp.route("/<string:name>", methods=["DELETE"])
@api.validate(
    query=SettingsScopeQuerySchema,
    resp=SpectreeResponse(
        HTTP_204=None,
        HTTP_404=ErrorResponseSchema,
    ),
)
@handle_api_errors
@inject
def delete_setting(
    name: str,
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
) -> Any:
    """Delete a stored setting so reads fall back to the default."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = SettingsScopeQuerySchema.model_validate(request.args.to_dict())
        store = _scoped_store(settings_service, query)

        store.destroy(name)
        return "", 204

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        record_operation("delete_setting", status, duration)

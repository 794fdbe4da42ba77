"""Centralized error handling utilities."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from flask import g, jsonify
from flask.wrappers import Response
from pydantic import ValidationError

from adminkit.exceptions import (
    BusinessLogicException,
    InvalidOperationException,
    RecordNotFoundException,
    ValidationException,
)
from adminkit.utils import get_current_correlation_id

logger = logging.getLogger(__name__)


def mark_request_failed() -> None:
    """Flag the current request so its database session is rolled back."""
    g.needs_rollback = True


def build_error_response(
    error: str,
    details: dict[str, Any],
    code: str | None = None,
    status_code: int = 400,
) -> tuple[Response, int]:
    """Build error response with correlation ID and optional error code."""
    response_data: dict[str, Any] = {
        "error": error,
        "details": details,
    }

    # Add error code if provided
    if code:
        response_data["code"] = code

    correlation_id = get_current_correlation_id()
    if correlation_id:
        response_data["correlationId"] = correlation_id

    return jsonify(response_data), status_code


def handle_api_errors(
    func: Callable[..., Any],
) -> Callable[..., Response | tuple[Response | str, int]]:
    """Decorator to handle common API errors consistently.

    Handles ValidationError, custom exceptions, and generic exceptions
    with appropriate HTTP status codes and error messages. Any handled
    error marks the request failed so the session is rolled back.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            mark_request_failed()

            # Handle specific exception types
            try:
                raise
            except ValidationError as e:
                logger.warning("Validation failed in %s: %s", func.__name__, str(e))
                # Pydantic validation errors
                error_details = []
                for error in e.errors():
                    field = ".".join(str(x) for x in error["loc"])
                    message = error["msg"]
                    error_details.append({"message": message, "field": field})

                return build_error_response(
                    "Validation failed", {"errors": error_details}, status_code=400
                )

            except RecordNotFoundException as e:
                logger.warning("Not found in %s: %s", func.__name__, e.message)
                return build_error_response(
                    e.message,
                    {"message": "The requested resource could not be found"},
                    code=e.error_code,
                    status_code=404,
                )

            except InvalidOperationException as e:
                logger.warning("Invalid operation in %s: %s", func.__name__, e.message)
                return build_error_response(
                    e.message,
                    {"message": "The requested operation cannot be performed"},
                    code=e.error_code,
                    status_code=400,
                )

            except ValidationException as e:
                logger.warning("Validation failed in %s: %s", func.__name__, e.message)
                return build_error_response(
                    e.message,
                    {"message": "Validation failed"},
                    code=e.error_code,
                    status_code=400,
                )

            except BusinessLogicException as e:
                logger.warning("Business logic error in %s: %s", func.__name__, e.message)
                return build_error_response(
                    e.message,
                    {"message": "A business logic operation failed"},
                    code=e.error_code,
                    status_code=400,
                )

            except Exception as e:
                logger.error("Exception in %s: %s", func.__name__, str(e), exc_info=True)
                return build_error_response(
                    "Internal server error", {"message": str(e)}, status_code=500
                )

    return wrapper

"""Utility modules for the admin engine."""

import uuid

from flask import g, has_request_context, request

CORRELATION_ID_HEADER = "X-Correlation-ID"


def get_current_correlation_id() -> str:
    """Get or generate a correlation ID for the current request.

    Returns:
        The request's X-Correlation-ID header if present, else a new UUID
        that is reused for the rest of the request
    """
    if not has_request_context():
        return str(uuid.uuid4())

    correlation_id = g.get("correlation_id")
    if correlation_id is None:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
        g.correlation_id = correlation_id
    return str(correlation_id)

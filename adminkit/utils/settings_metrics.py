"""Prometheus metrics for the settings store and its API.

Generic API operation metrics used across settings endpoints, plus cache
lookup counters recorded by the settings service.
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

SETTINGS_OPERATIONS_TOTAL = Counter(
    "adminkit_settings_operations_total",
    "Total settings operations",
    ["operation", "status"],
)
SETTINGS_OPERATION_DURATION_SECONDS = Histogram(
    "adminkit_settings_operation_duration_seconds",
    "Duration of settings operations in seconds",
    ["operation"],
)
SETTINGS_CACHE_LOOKUPS_TOTAL = Counter(
    "adminkit_settings_cache_lookups_total",
    "Settings cache lookups by result",
    ["result"],
)


def record_operation(
    operation: str, status: str, duration: float | None = None
) -> None:
    """Record an API operation metric."""
    try:
        SETTINGS_OPERATIONS_TOTAL.labels(
            operation=operation, status=status
        ).inc()
        if duration is not None:
            SETTINGS_OPERATION_DURATION_SECONDS.labels(
                operation=operation
            ).observe(duration)
    except Exception as e:
        logger.error("Error recording operation metric: %s", e)


def record_cache_lookup(hit: bool) -> None:
    """Record a settings cache hit or miss."""
    try:
        SETTINGS_CACHE_LOOKUPS_TOTAL.labels(result="hit" if hit else "miss").inc()
    except Exception as e:
        logger.error("Error recording cache metric: %s", e)

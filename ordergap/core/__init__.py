"""Core domain logic for the ordergap profile sync.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .models import (
    DAYS_PROPERTY_NAME,
    PLACED_ORDER_METRIC_NAME,
    SUBSCRIBED_METRIC_NAME,
    Event,
    FailureKind,
    PipelineFailure,
    PipelineResult,
    PipelineSuccess,
    ProfilePropertyUpdate,
)

__all__ = [
    "DAYS_PROPERTY_NAME",
    "PLACED_ORDER_METRIC_NAME",
    "SUBSCRIBED_METRIC_NAME",
    "Event",
    "FailureKind",
    "PipelineFailure",
    "PipelineResult",
    "PipelineSuccess",
    "ProfilePropertyUpdate",
]

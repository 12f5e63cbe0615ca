"""Error taxonomy for the ordergap profile sync.

Adapters raise these; the pipeline folds them into ``PipelineFailure``
results so that callers never have to catch them.
"""

from .models import FailureKind


class OrderGapError(Exception):
    """Base class for all expected pipeline failures."""

    kind: FailureKind


class ValidationError(OrderGapError):
    """The inbound request did not carry a usable profile ID."""

    kind = FailureKind.VALIDATION


class UpstreamError(OrderGapError):
    """A marketing API call failed, returned non-2xx, or was malformed."""

    kind = FailureKind.UPSTREAM

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class NotFoundError(OrderGapError):
    """A required event is missing from the profile's history."""

    kind = FailureKind.NOT_FOUND


__all__ = ["NotFoundError", "OrderGapError", "UpstreamError", "ValidationError"]

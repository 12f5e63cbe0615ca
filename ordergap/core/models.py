"""Domain models for the ordergap profile sync.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeAlias

SUBSCRIBED_METRIC_NAME = "Subscribed to Email Marketing"
PLACED_ORDER_METRIC_NAME = "Placed Order"
DAYS_PROPERTY_NAME = "time_between_subscribed_and_placed_order"


@dataclass(frozen=True)
class Event:
    """A single profile event fetched from the marketing platform.

    The core's normalized representation of a JSON:API event resource.
    Events are never created by this system, only read.
    """

    id: str
    profile_id: str
    metric_id: str | None  # None when the event carries no metric relationship
    occurred_at: datetime  # attributes.datetime

    def __post_init__(self) -> None:
        """Validate event invariants on creation."""
        if not self.id or not self.id.strip():
            raise ValueError("id must be a non-empty string")
        if self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware")


@dataclass(frozen=True)
class ProfilePropertyUpdate:
    """A partial update of a profile's custom properties."""

    profile_id: str
    properties: dict[str, Any] | MappingProxyType[str, Any]  # converted to proxy in __post_init__

    def __post_init__(self) -> None:
        """Convert properties dict to read-only proxy."""
        if not self.profile_id or not self.profile_id.strip():
            raise ValueError("profile_id must be a non-empty string")
        if isinstance(self.properties, dict):
            object.__setattr__(
                self, "properties", MappingProxyType(self.properties)
            )

    @classmethod
    def days_between(cls, profile_id: str, days: int) -> "ProfilePropertyUpdate":
        """Build the update that records days from subscription to first order."""
        return cls(profile_id=profile_id, properties={DAYS_PROPERTY_NAME: days})


class FailureKind(Enum):
    """Closed set of reasons a pipeline run can fail.

    - VALIDATION: the request did not identify a profile
    - UPSTREAM: the marketing API rejected a call or was unreachable
    - NOT_FOUND: the profile lacks the events needed for the computation
    """

    VALIDATION = "validation"
    UPSTREAM = "upstream"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class PipelineSuccess:
    """A completed run: the profile was updated with ``days_between``."""

    profile_id: str
    subscribed_event_id: str
    placed_order_event_id: str
    days_between: int

    @property
    def message(self) -> str:
        return f"Profile with ID {self.profile_id} processed successfully."


@dataclass(frozen=True)
class PipelineFailure:
    """A run that stopped before (or while) updating the profile."""

    profile_id: str | None
    kind: FailureKind
    message: str


PipelineResult: TypeAlias = PipelineSuccess | PipelineFailure

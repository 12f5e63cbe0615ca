"""Port interfaces for the ordergap profile sync.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - MarketingPort: Read events and metrics, update profiles

2. **Driving Ports** (adapters/external systems call into core)
   - ProfileSyncPort: Entry point for processing a single profile
"""

from abc import ABC, abstractmethod

from .models import Event, PipelineResult, ProfilePropertyUpdate


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class MarketingPort(ABC):
    """Port for the marketing-automation platform holding profiles.

    Adapters implementing this port talk to an external REST API and
    normalize its resources into the core's domain models.

    Implementations must:
    - Preserve the platform's ordering of events
    - Raise UpstreamError for any non-2xx response, transport failure,
      or response that cannot be decoded
    - Not retry
    """

    @abstractmethod
    async def get_events_for_profile(self, profile_id: str) -> list[Event]:
        """Retrieve the event history of a profile.

        Args:
            profile_id: Opaque profile identifier.

        Returns:
            Events in the order the platform returned them.
            Empty list if the profile has no events.

        Raises:
            UpstreamError: If the platform is unreachable or rejects the call.
        """

    @abstractmethod
    async def get_metric_name(self, metric_id: str) -> str:
        """Retrieve the display name of a metric.

        Args:
            metric_id: Metric identifier referenced by an event.

        Returns:
            Human-readable metric name (e.g. "Placed Order").

        Raises:
            UpstreamError: If the platform is unreachable or rejects the call.
        """

    @abstractmethod
    async def update_profile(self, update: ProfilePropertyUpdate) -> None:
        """Apply a partial update to a profile's custom properties.

        Args:
            update: Target profile and the properties to set.

        Raises:
            UpstreamError: If the platform is unreachable or rejects the call.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the adapter."""


# ============================================================================
# DRIVING PORTS (External systems call into core)
# ============================================================================


class ProfileSyncPort(ABC):
    """Port for triggering the subscribed-to-order computation.

    Driving port: the webhook receiver and the CLI invoke this to
    process one profile.
    """

    @abstractmethod
    async def run(self, profile_id: str | None) -> PipelineResult:
        """Compute and store the subscription-to-order delay for a profile.

        Args:
            profile_id: Profile identifier from the inbound request.

        Returns:
            PipelineSuccess, or PipelineFailure describing why the
            profile was not updated. Expected failures are never raised.
        """

"""Subscribed-to-first-order pipeline.

This module coordinates a single profile run: read the profile's
events, name their metrics, pick the subscription and the first later
order, and write the day count back to the profile.
"""

import logging

from .days import days_between
from .errors import NotFoundError, OrderGapError, ValidationError
from .metrics import MetricNameResolver
from .models import (
    PLACED_ORDER_METRIC_NAME,
    SUBSCRIBED_METRIC_NAME,
    Event,
    PipelineFailure,
    PipelineResult,
    PipelineSuccess,
    ProfilePropertyUpdate,
)
from .ports import MarketingPort, ProfileSyncPort

logger = logging.getLogger(__name__)


class ProfileSyncService(ProfileSyncPort):
    """Implements ProfileSyncPort on top of a MarketingPort.

    Every call is strictly sequential: ordering of the outbound calls
    decides both which events match first and how the metric cache
    fills, so nothing here runs concurrently.
    """

    def __init__(self, marketing: MarketingPort):
        self.marketing = marketing

    async def run(self, profile_id: str | None) -> PipelineResult:
        """Process one profile and report the outcome as a result variant.

        Expected failures (validation, upstream, missing events) become
        PipelineFailure. Anything else is logged and re-raised.
        """
        try:
            return await self._process(profile_id)
        except OrderGapError as e:
            logger.error(
                f"Error processing profile ID {profile_id}: {e}",
                extra={"profile_id": profile_id, "failure_kind": e.kind.value},
            )
            return PipelineFailure(profile_id=profile_id, kind=e.kind, message=str(e))
        except Exception as e:
            logger.error(
                f"Unexpected error processing profile ID {profile_id}: {e}",
                exc_info=True,
            )
            raise

    async def _process(self, profile_id: str | None) -> PipelineSuccess:
        """Run the six pipeline steps, raising OrderGapError on failure.

        Steps:
        1. Fetch events for the profile
        2. Resolve every event's metric name (cached per run)
        3. Find the first subscription event
        4. Find the first order strictly after it
        5. Compute the day delta
        6. Update the profile
        """
        if not isinstance(profile_id, str) or not profile_id.strip():
            raise ValidationError("Profile ID is required")

        logger.info(f"Processing profile ID: {profile_id}")

        # 1. Fetch events
        events = await self.marketing.get_events_for_profile(profile_id)
        logger.info(
            f"Fetched {len(events)} events for profile ID {profile_id}",
            extra={"profile_id": profile_id, "event_count": len(events)},
        )
        self._flag_unordered(profile_id, events)

        # 2. Resolve metric names
        resolver = MetricNameResolver(self.marketing)
        await resolver.resolve_events(events)

        # 3. First subscription event, in API order
        subscribed = next(
            (e for e in events if resolver.name_of(e) == SUBSCRIBED_METRIC_NAME),
            None,
        )
        if subscribed is None:
            logger.info(f"Subscribed event not found for profile ID {profile_id}")
            raise NotFoundError("Subscribed event not found")
        logger.info(
            f"Subscribed event found for profile ID {profile_id}: {subscribed.id}",
            extra={"event_id": subscribed.id, "datetime": subscribed.occurred_at.isoformat()},
        )

        # 4. First order strictly after the subscription, in API order
        placed_order = next(
            (
                e
                for e in events
                if resolver.name_of(e) == PLACED_ORDER_METRIC_NAME
                and e.occurred_at > subscribed.occurred_at
            ),
            None,
        )
        if placed_order is None:
            logger.info(
                f"Placed Order event not found after Subscribed event for profile ID {profile_id}"
            )
            raise NotFoundError("Placed Order event not found after Subscribed event")
        logger.info(
            f"Placed Order event found for profile ID {profile_id}: {placed_order.id}",
            extra={"event_id": placed_order.id, "datetime": placed_order.occurred_at.isoformat()},
        )

        # 5. Day delta
        days = days_between(subscribed.occurred_at, placed_order.occurred_at)
        logger.info(f"Calculated days between: {days}")

        # 6. Update profile
        await self.marketing.update_profile(
            ProfilePropertyUpdate.days_between(profile_id, days)
        )
        logger.info(
            f"Profile with ID {profile_id} updated with {days} days between "
            "Subscribed and Placed Order."
        )

        return PipelineSuccess(
            profile_id=profile_id,
            subscribed_event_id=subscribed.id,
            placed_order_event_id=placed_order.id,
            days_between=days,
        )

    @staticmethod
    def _flag_unordered(profile_id: str, events: list[Event]) -> None:
        """Note when the platform's order is not chronological.

        Matching still uses platform order; this only makes the case visible.
        """
        for previous, current in zip(events, events[1:]):
            if current.occurred_at < previous.occurred_at:
                logger.debug(
                    f"Events for profile ID {profile_id} are not in ascending time order; "
                    "first-match uses the order returned by the API",
                    extra={"event_id": current.id, "previous_event_id": previous.id},
                )
                return

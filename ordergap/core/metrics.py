"""Per-run metric name cache."""

import logging

from .models import Event
from .ports import MarketingPort

logger = logging.getLogger(__name__)


class MetricNameResolver:
    """Resolves metric IDs to names, fetching each ID at most once.

    One resolver belongs to one pipeline run; it is never shared
    between runs.
    """

    def __init__(self, marketing: MarketingPort):
        self.marketing = marketing
        self._names: dict[str, str] = {}

    @property
    def names(self) -> dict[str, str]:
        """Copy of the names resolved so far, in resolution order."""
        return dict(self._names)

    async def resolve(self, metric_id: str) -> str:
        """Return the metric's name, calling the platform on a cache miss."""
        if metric_id not in self._names:
            self._names[metric_id] = await self.marketing.get_metric_name(metric_id)
        return self._names[metric_id]

    async def resolve_events(self, events: list[Event]) -> None:
        """Resolve the metric of every event, one call at a time, in order."""
        for event in events:
            if event.metric_id is None:
                logger.debug(f"Event ID: {event.id} has no metric relationship")
                continue
            name = await self.resolve(event.metric_id)
            logger.debug(
                f"Event ID: {event.id}, Metric ID: {event.metric_id}, Metric Name: {name}"
            )

    def name_of(self, event: Event) -> str | None:
        """Return the already-resolved metric name for an event."""
        if event.metric_id is None:
            return None
        return self._names.get(event.metric_id)

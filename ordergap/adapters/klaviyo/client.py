"""Klaviyo marketing adapter.

Implements MarketingPort by calling the Klaviyo REST API for events,
metrics and profiles. Normalizes Klaviyo's JSON:API resources into
core domain models.
"""

import json
import logging
from typing import Any

import httpx

from ordergap.core.days import parse_timestamp
from ordergap.core.errors import UpstreamError
from ordergap.core.models import Event, ProfilePropertyUpdate
from ordergap.core.ports import MarketingPort

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://a.klaviyo.com/api/"
DEFAULT_REVISION = "2024-07-15"


class KlaviyoMarketingAdapter(MarketingPort):
    """Klaviyo-backed marketing adapter via REST API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        revision: str = DEFAULT_REVISION,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Klaviyo adapter.

        Args:
            api_key: Klaviyo private API key.
            api_url: Base URL for the Klaviyo API.
            revision: API revision sent with every request.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        if not api_key or not api_key.strip():
            raise ValueError("api_key must be a non-empty string")
        self.api_url = api_url.rstrip("/") + "/"
        self.api_key = api_key
        self.revision = revision
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers=self._get_headers(),
            timeout=timeout,
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        """Build request headers shared by every call."""
        return {
            "accept": "application/json",
            "revision": self.revision,
            "Authorization": f"Klaviyo-API-Key {self.api_key}",
        }

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources.

        Must be called when done using the adapter if not using it as a context manager.
        """
        await self.client.aclose()

    async def get_events_for_profile(self, profile_id: str) -> list[Event]:
        """Return the profile's events in the order Klaviyo lists them."""
        logger.info(f"Fetching events for profile ID: {profile_id}")
        data = await self._request(
            "GET",
            "events/",
            operation="fetching events",
            params={"filter": f"equals(profile_id,'{profile_id}')"},
        )

        try:
            return [self._parse_event(item, profile_id) for item in data["data"]]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error fetching events: malformed response: {e}")
            raise UpstreamError(f"Malformed events response: {e}") from e

    async def get_metric_name(self, metric_id: str) -> str:
        """Return the display name of a metric."""
        logger.info(f"Fetching metric ID: {metric_id}")
        data = await self._request(
            "GET",
            f"metrics/{metric_id}",
            operation="fetching metric",
        )

        try:
            name = data["data"]["attributes"]["name"]
        except (KeyError, TypeError) as e:
            logger.error(f"Error fetching metric: malformed response: {e}")
            raise UpstreamError(f"Malformed metric response for {metric_id}") from e
        if not isinstance(name, str):
            raise UpstreamError(f"Malformed metric response for {metric_id}")
        return name

    async def update_profile(self, update: ProfilePropertyUpdate) -> None:
        """Patch the profile's custom properties."""
        logger.info(
            f"Updating profile ID: {update.profile_id} with properties: {dict(update.properties)}"
        )
        await self._request(
            "PATCH",
            f"profiles/{update.profile_id}",
            operation="updating profile",
            json={
                "data": {
                    "id": update.profile_id,
                    "type": "profile",
                    "attributes": {"properties": dict(update.properties)},
                }
            },
            headers={"Content-Type": "application/json"},
        )

    async def _request(
        self, method: str, path: str, operation: str, **kwargs: Any
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            UpstreamError: On transport failure, non-2xx status, or a body
                that is not JSON.
        """
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = e.response.text
            logger.error(
                f"Error {operation}: {body or e}",
                extra={"status_code": e.response.status_code, "path": path},
            )
            raise UpstreamError(
                f"Request failed with status code {e.response.status_code}",
                status_code=e.response.status_code,
                response_body=body,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Error {operation}: {e}", extra={"path": path})
            raise UpstreamError(str(e) or type(e).__name__) from e

        if not response.content:
            return None

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            logger.error(f"Error {operation}: response is not JSON: {e}")
            raise UpstreamError(
                f"Invalid JSON in response while {operation}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

        logger.debug(f"{operation.capitalize()} response: {data}")
        return data

    @staticmethod
    def _parse_event(item: dict[str, Any], profile_id: str) -> Event:
        """Parse a Klaviyo event resource into an Event.

        Raises:
            AttributeError, KeyError, TypeError, ValueError: If the resource
                is malformed.
        """
        attributes = item["attributes"]
        relationships = item.get("relationships") or {}

        metric_data = (relationships.get("metric") or {}).get("data") or {}
        metric_id = metric_data.get("id")

        profile_data = (relationships.get("profile") or {}).get("data") or {}

        return Event(
            id=str(item["id"]),
            profile_id=profile_data.get("id", profile_id),
            metric_id=str(metric_id) if metric_id else None,
            occurred_at=parse_timestamp(attributes["datetime"]),
        )

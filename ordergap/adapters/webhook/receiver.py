"""HTTP webhook receiver for profile triggers.

Translates an inbound webhook payload into a ProfileSyncPort call and
the pipeline's result back into an HTTP status and JSON body.
"""

import logging
from typing import Any

from ordergap.core.models import FailureKind, PipelineFailure, PipelineResult
from ordergap.core.ports import ProfileSyncPort

logger = logging.getLogger(__name__)

PROFILE_ID_REQUIRED = "Profile ID is required"

STATUS_BY_FAILURE: dict[FailureKind, int] = {
    FailureKind.VALIDATION: 400,
    FailureKind.UPSTREAM: 500,
    FailureKind.NOT_FOUND: 500,
}


class WebhookReceiver:
    """Handles profile webhooks by forwarding them to ProfileSyncPort."""

    def __init__(self, sync_port: ProfileSyncPort):
        """Initialize the webhook receiver.

        Args:
            sync_port: ProfileSyncPort implementation that processes profiles.
        """
        self.sync_port = sync_port

    async def handle_profile_webhook(
        self, payload: dict[str, Any]
    ) -> tuple[int, dict[str, Any]]:
        """Handle a webhook carrying ``profileId`` (and an unused ``email``).

        Args:
            payload: Decoded JSON body of the request.

        Returns:
            Tuple of HTTP status code and JSON response body.
        """
        profile_id = payload.get("profileId")
        email = payload.get("email")

        # Non-string and whitespace-only IDs are rejected too, not just falsy ones
        if not isinstance(profile_id, str) or not profile_id.strip():
            logger.error(PROFILE_ID_REQUIRED, extra={"email": email})
            return 400, {"status": "error", "message": PROFILE_ID_REQUIRED}

        logger.info(
            "Profile webhook received",
            extra={"profile_id": profile_id, "email": email},
        )
        result = await self.sync_port.run(profile_id)
        return self.to_response(result)

    @staticmethod
    def to_response(result: PipelineResult) -> tuple[int, dict[str, Any]]:
        """Map a pipeline result to an HTTP status and JSON body."""
        if isinstance(result, PipelineFailure):
            return STATUS_BY_FAILURE[result.kind], {
                "status": "error",
                "message": result.message,
            }
        return 200, {"status": "success", "message": result.message}

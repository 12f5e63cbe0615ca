"""CLI command implementations for ordergap.

Provides human-initiated processing of a profile through the
command-line interface, using the same ProfileSyncPort as the webhook.
"""

import logging
from typing import Any

from ordergap.core.models import PipelineFailure
from ordergap.core.ports import ProfileSyncPort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to ProfileSyncPort."""

    def __init__(self, sync_port: ProfileSyncPort):
        """Initialize the CLI command handler.

        Args:
            sync_port: ProfileSyncPort implementation to execute commands.
        """
        self.sync_port = sync_port

    async def process_profile(
        self, profile_id: str | None, verbose: bool = False
    ) -> dict[str, Any]:
        """Process one profile via CLI.

        Args:
            profile_id: Profile to process.
            verbose: If True, include the matched events and day count.

        Returns:
            Dictionary with status and message.
        """
        result = await self.sync_port.run(profile_id)

        if isinstance(result, PipelineFailure):
            logger.error(f"Failed to process profile: {result.message}")
            return {
                "status": "error",
                "operation": "process",
                "profile_id": profile_id,
                "failure": result.kind.value,
                "message": result.message,
            }

        response: dict[str, Any] = {
            "status": "success",
            "operation": "process",
            "profile_id": result.profile_id,
            "message": result.message,
        }
        if verbose:
            response["days_between"] = result.days_between
            response["subscribed_event_id"] = result.subscribed_event_id
            response["placed_order_event_id"] = result.placed_order_event_id
        return response

"""Tests for WebhookReceiver request/response mapping."""

import pytest

from ordergap.adapters.webhook.receiver import WebhookReceiver
from ordergap.core.models import FailureKind, PipelineFailure, PipelineSuccess
from ordergap.tests.fakes import FakeProfileSyncPort


@pytest.fixture
def sync_port() -> FakeProfileSyncPort:
    return FakeProfileSyncPort()


@pytest.fixture
def receiver(sync_port: FakeProfileSyncPort) -> WebhookReceiver:
    return WebhookReceiver(sync_port=sync_port)


class TestWebhookReceiver:
    """Tests for handle_profile_webhook."""

    @pytest.mark.asyncio
    async def test_success_maps_to_200(
        self, receiver: WebhookReceiver, sync_port: FakeProfileSyncPort
    ) -> None:
        status, body = await receiver.handle_profile_webhook(
            {"profileId": "P1", "email": "someone@example.com"}
        )

        assert status == 200
        assert body == {
            "status": "success",
            "message": "Profile with ID P1 processed successfully.",
        }
        assert sync_port.processed == ["P1"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"email": "someone@example.com"},
            {"profileId": ""},
            {"profileId": "   "},
            {"profileId": None},
            {"profileId": 42},
        ],
    )
    async def test_missing_profile_id_is_400(
        self, receiver: WebhookReceiver, sync_port: FakeProfileSyncPort, payload
    ) -> None:
        status, body = await receiver.handle_profile_webhook(payload)

        assert status == 400
        assert body == {"status": "error", "message": "Profile ID is required"}
        assert sync_port.processed == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind,message",
        [
            (FailureKind.NOT_FOUND, "Subscribed event not found"),
            (FailureKind.UPSTREAM, "Request failed with status code 429"),
        ],
    )
    async def test_pipeline_failures_are_500(
        self, receiver: WebhookReceiver, sync_port: FakeProfileSyncPort, kind, message
    ) -> None:
        sync_port.add_result(PipelineFailure(profile_id="P1", kind=kind, message=message))

        status, body = await receiver.handle_profile_webhook({"profileId": "P1"})

        assert status == 500
        assert body == {"status": "error", "message": message}

    def test_validation_failure_maps_to_400(self) -> None:
        status, body = WebhookReceiver.to_response(
            PipelineFailure(profile_id=" ", kind=FailureKind.VALIDATION, message="Profile ID is required")
        )
        assert status == 400
        assert body["status"] == "error"

    def test_success_response_shape(self) -> None:
        status, body = WebhookReceiver.to_response(
            PipelineSuccess(
                profile_id="P9",
                subscribed_event_id="a",
                placed_order_event_id="b",
                days_between=3,
            )
        )
        assert status == 200
        assert body["message"] == "Profile with ID P9 processed successfully."

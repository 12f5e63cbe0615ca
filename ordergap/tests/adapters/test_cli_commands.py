"""Tests for the CLI command handler and interactive loop."""

import json
from unittest.mock import patch

import pytest

from ordergap.adapters.cli.commands import CLICommandHandler
from ordergap.core.models import FailureKind, PipelineFailure
from ordergap.core.pipeline import ProfileSyncService
from ordergap.main import _execute_cli_command, _run_cli_interactive
from ordergap.tests.fakes import FakeMarketingPort, FakeProfileSyncPort


@pytest.fixture
def sync_port() -> FakeProfileSyncPort:
    return FakeProfileSyncPort()


@pytest.fixture
def cli_handler(sync_port: FakeProfileSyncPort) -> CLICommandHandler:
    return CLICommandHandler(sync_port)


class TestCLICommandHandler:
    """Tests for CLICommandHandler.process_profile."""

    @pytest.mark.asyncio
    async def test_process_success(
        self, cli_handler: CLICommandHandler, sync_port: FakeProfileSyncPort
    ) -> None:
        result = await cli_handler.process_profile("P1")

        assert result == {
            "status": "success",
            "operation": "process",
            "profile_id": "P1",
            "message": "Profile with ID P1 processed successfully.",
        }
        assert sync_port.processed == ["P1"]

    @pytest.mark.asyncio
    async def test_process_verbose_includes_details(self, cli_handler: CLICommandHandler) -> None:
        result = await cli_handler.process_profile("P1", verbose=True)

        assert result["days_between"] == 1
        assert result["subscribed_event_id"] == "evt-sub"
        assert result["placed_order_event_id"] == "evt-order"

    @pytest.mark.asyncio
    async def test_process_failure(
        self, cli_handler: CLICommandHandler, sync_port: FakeProfileSyncPort
    ) -> None:
        sync_port.add_result(
            PipelineFailure(
                profile_id="P1",
                kind=FailureKind.NOT_FOUND,
                message="Placed Order event not found after Subscribed event",
            )
        )

        result = await cli_handler.process_profile("P1")

        assert result["status"] == "error"
        assert result["failure"] == "not_found"
        assert result["message"] == "Placed Order event not found after Subscribed event"


class TestExecuteCLICommand:
    """Tests for command dispatch."""

    @pytest.mark.asyncio
    async def test_process_requires_profile_id(self, cli_handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="profile_id"):
            await _execute_cli_command(cli_handler, "process", {})

    @pytest.mark.asyncio
    async def test_unknown_command(self, cli_handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            await _execute_cli_command(cli_handler, "frobnicate", {})

    @pytest.mark.asyncio
    async def test_args_must_be_object(self, cli_handler: CLICommandHandler) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            await _execute_cli_command(cli_handler, "process", ["P1"])  # type: ignore[arg-type]


class TestInteractiveLoop:
    """Tests for the interactive prompt."""

    @pytest.mark.asyncio
    async def test_process_then_exit(
        self, cli_handler: CLICommandHandler, sync_port: FakeProfileSyncPort
    ) -> None:
        commands = ['process {"profile_id": "P7"}', "exit"]
        with patch("builtins.input", side_effect=commands):
            with patch("builtins.print") as mock_print:
                await _run_cli_interactive(cli_handler)

        assert sync_port.processed == ["P7"]
        printed = json.loads(mock_print.call_args_list[0].args[0])
        assert printed["status"] == "success"

    @pytest.mark.asyncio
    async def test_non_string_profile_id_prints_error_and_continues(self) -> None:
        handler = CLICommandHandler(ProfileSyncService(marketing=FakeMarketingPort()))
        commands = ['process {"profile_id": 42}', 'process {"profile_id": 43}', "exit"]
        with patch("builtins.input", side_effect=commands):
            with patch("builtins.print") as mock_print:
                await _run_cli_interactive(handler)

        assert mock_print.call_count == 2
        for call in mock_print.call_args_list:
            printed = json.loads(call.args[0])
            assert printed["status"] == "error"
            assert printed["failure"] == "validation"
            assert printed["message"] == "Profile ID is required"

    @pytest.mark.asyncio
    async def test_unexpected_command_error_is_printed(
        self, cli_handler: CLICommandHandler, sync_port: FakeProfileSyncPort
    ) -> None:
        sync_port.should_fail = True
        commands = ['process {"profile_id": "P1"}', "exit"]
        with patch("builtins.input", side_effect=commands):
            with patch("builtins.print") as mock_print:
                await _run_cli_interactive(cli_handler)

        printed = json.loads(mock_print.call_args_list[0].args[0])
        assert printed == {"status": "error", "message": "Pipeline crashed"}

    @pytest.mark.asyncio
    async def test_eof_exits(self, cli_handler: CLICommandHandler) -> None:
        with patch("builtins.input", side_effect=EOFError):
            await _run_cli_interactive(cli_handler)

    @pytest.mark.asyncio
    async def test_invalid_json_is_skipped(
        self, cli_handler: CLICommandHandler, sync_port: FakeProfileSyncPort
    ) -> None:
        commands = ["process {not json", "", "exit"]
        with patch("builtins.input", side_effect=commands):
            await _run_cli_interactive(cli_handler)

        assert sync_port.processed == []

    @pytest.mark.asyncio
    async def test_errors_are_printed(self, cli_handler: CLICommandHandler) -> None:
        commands = ["process {}", "exit"]
        with patch("builtins.input", side_effect=commands):
            with patch("builtins.print") as mock_print:
                await _run_cli_interactive(cli_handler)

        printed = json.loads(mock_print.call_args_list[0].args[0])
        assert printed == {"status": "error", "message": "Missing required parameter: profile_id"}

"""HTTP server adapter for webhook receiver.

Provides a simple async HTTP server using Python's built-in http.server module
and asyncio for handling webhook requests.

Requests are served one at a time on a worker thread; each request's
coroutine runs on the application's event loop.
"""

import asyncio
import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any

from ordergap.adapters.webhook.receiver import WebhookReceiver

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1024 * 1024


def make_webhook_handler(
    webhook_receiver: WebhookReceiver,
    event_loop: asyncio.AbstractEventLoop,
    webhook_path: str,
    request_timeout: float,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create a WebhookHTTPHandler class with instance-specific state.

    Creates a handler class with closure-captured dependencies instead of
    using class-level mutable state.

    Args:
        webhook_receiver: Receiver for webhook operations
        event_loop: Event loop for async operations
        webhook_path: Path that accepts profile webhooks
        request_timeout: Seconds to wait for a request's pipeline run

    Returns:
        A WebhookHTTPHandler class configured with the provided dependencies
    """
    webhook_paths = {webhook_path, "/"}

    class WebhookHTTPHandler(BaseHTTPRequestHandler):
        """HTTP request handler for webhook endpoints.

        Handles incoming HTTP requests and routes them to the webhook receiver.
        """

        def do_POST(self) -> None:
            """Handle POST requests.

            Routes to appropriate handler based on path.
            """
            path = self.path.split("?", 1)[0]
            if path not in webhook_paths:
                self._send_json(404, {"status": "error", "message": "Not found"})
                return

            try:
                content_length = int(self.headers.get("Content-Length", 0))
            except ValueError:
                self._send_json(400, {"status": "error", "message": "Invalid Content-Length"})
                return

            if content_length > MAX_BODY_SIZE:
                self._send_json(413, {"status": "error", "message": "Request body too large"})
                return

            body = self.rfile.read(content_length) if content_length > 0 else b""

            try:
                data = json.loads(body) if body else {}
            except (json.JSONDecodeError, UnicodeDecodeError):
                self._send_json(400, {"status": "error", "message": "Invalid JSON body"})
                return

            if not isinstance(data, dict):
                self._send_json(400, {"status": "error", "message": "Invalid JSON body"})
                return

            status, response = self._run_async(data)
            self._send_json(status, response)

        def do_GET(self) -> None:
            """Handle GET requests.

            Supports health check via GET.
            """
            if self.path == "/health":
                self._send_json(200, {"status": "healthy"})
            else:
                self._send_json(404, {"status": "error", "message": "Not found"})

        def _run_async(self, data: dict[str, Any]) -> tuple[int, dict[str, Any]]:
            """Run the receiver coroutine on the event loop and wait for it."""
            future = asyncio.run_coroutine_threadsafe(
                webhook_receiver.handle_profile_webhook(data), event_loop
            )
            try:
                return future.result(timeout=request_timeout)
            except Exception as e:
                # Log full exception server-side for debugging
                logger.error(f"Error handling webhook request: {e}", exc_info=True)
                future.cancel()
                return 500, {"status": "error", "message": "Internal server error"}

        def _send_json(self, status: int, data: dict[str, Any]) -> None:
            """Send JSON response."""
            payload = json.dumps(data).encode()
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request."""
            logger.debug(f"HTTP {self.client_address[0]}: {format % args}")

    return WebhookHTTPHandler


class WebhookHTTPServer:
    """Webhook HTTP server adapter.

    Provides the HTTP endpoint that triggers processing of a profile.
    """

    def __init__(
        self,
        webhook_receiver: WebhookReceiver,
        host: str = "0.0.0.0",
        port: int = 8080,
        webhook_path: str = "/webhook",
        request_timeout: float = 60.0,
    ):
        """Initialize the HTTP server.

        Args:
            webhook_receiver: WebhookReceiver instance to handle requests.
            host: Host to listen on (default 0.0.0.0).
            port: Port to listen on (default 8080).
            webhook_path: Path accepting profile webhooks (default /webhook).
            request_timeout: Seconds to wait for one request (default 60).
        """
        if not webhook_path.startswith("/"):
            raise ValueError(f"webhook_path must start with '/', got {webhook_path!r}")
        self.webhook_receiver = webhook_receiver
        self.host = host
        self.port = port
        self.webhook_path = webhook_path
        self.request_timeout = request_timeout
        self.server: HTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the HTTP server."""
        logger.info(
            f"Starting webhook HTTP server on {self.host}:{self.port}{self.webhook_path}"
        )

        handler_class = make_webhook_handler(
            webhook_receiver=self.webhook_receiver,
            event_loop=asyncio.get_running_loop(),
            webhook_path=self.webhook_path,
            request_timeout=self.request_timeout,
        )

        self.server = HTTPServer((self.host, self.port), handler_class)

        self._server_task = asyncio.create_task(self._run_server())
        logger.info("Webhook HTTP server started")

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            # Normal shutdown
            pass
        except Exception as e:
            logger.error(f"Webhook HTTP server error: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
        logger.info("Webhook HTTP server stopped")

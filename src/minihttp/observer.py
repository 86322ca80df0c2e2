"""
=============================================================================
SERVER OBSERVER
=============================================================================

The request-handling code never writes log lines itself. It reports what
happened to an observer, and the observer decides what to do with it.

    ┌──────────────┐   event hooks    ┌──────────────────┐
    │ Router /     │ ───────────────► │ ServerObserver   │  no-op (default)
    │ handlers /   │                  ├──────────────────┤
    │ connections  │                  │ LoggingObserver  │  → logging
    └──────────────┘                  ├──────────────────┤
                                      │ (test recorder)  │  → list of events
                                      └──────────────────┘

This keeps the core testable without capturing process output: tests
pass an observer that records calls, the server passes a LoggingObserver.

=============================================================================
LOG FORMATS
=============================================================================

    TEXT (Apache-style):
        127.0.0.1 - - [15/Oct/2026:10:55:36 +0000] "GET /" 200 24 0.41ms

    JSON (for log aggregators):
        {"method": "GET", "path": "/", "client_ip": "127.0.0.1",
         "status_code": 200, "content_length": 24, "duration_ms": 0.41, ...}

=============================================================================
"""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from .http.request import HTTPRequest
from .http.response import HTTPResponse


logger = logging.getLogger(__name__)

# Namespaced so access logs can be routed separately:
#   logging.getLogger("minihttp.access").addHandler(file_handler)
access_logger = logging.getLogger("minihttp.access")

LOG_FORMATS = ("text", "json")


@dataclass
class RequestLog:
    """
    Structured access log entry for one request.

    Fields:
        method:         Request method as received
        path:           Request path as received
        client_ip:      Peer address ("-" when unknown)
        status_code:    Response status
        content_length: Response body size in bytes
        duration_ms:    Parse + route time
        timestamp:      When the response was produced
    """

    method: str
    path: str
    client_ip: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        entry = asdict(self)
        entry["duration_ms"] = round(self.duration_ms, 2)
        return entry

    def to_text(self) -> str:
        return (
            f'{self.client_ip} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class ServerObserver:
    """
    Receives server events. Every hook is a no-op here; subclass and
    override the ones you care about.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONNECTION EVENTS
    # ─────────────────────────────────────────────────────────────────────

    def server_started(self, host: str, port: int) -> None:
        pass

    def connection_opened(self, address: tuple) -> None:
        pass

    def connection_closed_by_peer(self, address: tuple) -> None:
        pass

    def read_failed(self, address: tuple, error: Exception) -> None:
        pass

    def response_sent(self, address: tuple) -> None:
        pass

    def write_failed(self, address: tuple, error: Exception) -> None:
        pass

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST EVENTS
    # ─────────────────────────────────────────────────────────────────────

    def request_completed(
        self,
        request: HTTPRequest,
        response: HTTPResponse,
        duration_ms: float,
        address: Optional[tuple] = None,
    ) -> None:
        pass

    def submission_received(self, body: str) -> None:
        pass

    def json_received(self, body: str) -> None:
        pass

    def form_received(self, body: str) -> None:
        pass

    def unsupported_content_type(self, content_type: Optional[str]) -> None:
        pass

    def path_traversal_blocked(self, path: str) -> None:
        pass


class LoggingObserver(ServerObserver):
    """
    Forwards server events to the standard logging module.

    Usage:
        observer = LoggingObserver(log_format="json")
        server = HTTPServer(config, observer=observer)
    """

    def __init__(self, log_format: str = "text", log_level: int = logging.INFO):
        """
        Args:
            log_format: "text" (Apache-style) or "json".
            log_level: Level used for access log entries.
        """
        if log_format not in LOG_FORMATS:
            raise ValueError(f"Unknown log format: {log_format!r}")
        self.log_format = log_format
        self.log_level = log_level

    def server_started(self, host, port):
        logger.info(f"Server is running on http://{host}:{port}")

    def connection_opened(self, address):
        logger.info(f"New connection established from: {_format_address(address)}")

    def connection_closed_by_peer(self, address):
        logger.warning(f"Connection closed by client: {_format_address(address)}")

    def read_failed(self, address, error):
        logger.error(f"Failed to read request from {_format_address(address)}: {error}")

    def response_sent(self, address):
        logger.info(f"Response successfully sent to {_format_address(address)}")

    def write_failed(self, address, error):
        logger.error(f"Failed to send response to {_format_address(address)}: {error}")

    def request_completed(self, request, response, duration_ms, address=None):
        entry = RequestLog(
            method=request.method,
            path=request.path,
            client_ip=address[0] if address else "-",
            status_code=response.status_code,
            content_length=response.content_length,
            duration_ms=duration_ms,
            timestamp=datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z"),
        )
        if self.log_format == "json":
            access_logger.log(self.log_level, json.dumps(entry.to_dict()))
        else:
            access_logger.log(self.log_level, entry.to_text())

    def submission_received(self, body):
        logger.info(f"Processing POST request to /submit with body: {body}")

    def json_received(self, body):
        logger.info("Received JSON payload")

    def form_received(self, body):
        logger.info("Received form-encoded payload")

    def unsupported_content_type(self, content_type):
        logger.warning(f"Unsupported Content-Type: {content_type!r}")

    def path_traversal_blocked(self, path):
        logger.warning(f"Path traversal attempt: {path}")


def _format_address(address) -> str:
    if not address:
        return "-"
    return f"{address[0]}:{address[1]}"

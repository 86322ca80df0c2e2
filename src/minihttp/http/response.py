"""
=============================================================================
HTTP RESPONSE
=============================================================================

The response model and its wire serialization.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  STATUS LINE      HTTP/1.1 200 OK\r\n                                │
    │                                                                      │
    │  HEADERS          Content-Type: text/plain\r\n                       │
    │                   Content-Length: 24\r\n     ← always len(body)     │
    │                                                                      │
    │  EMPTY LINE       \r\n                                               │
    │                                                                      │
    │  BODY             Welcome to the homepage!                           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The header set is fixed: exactly Content-Type and Content-Length. No Date,
Server or Connection headers are sent, and the connection is closed after
the response, so Content-Length is what tells the client where the body
ends.

Content-Length is never stored; it is derived from the body bytes at
serialization time, so it cannot drift from the body.

=============================================================================
"""

from dataclasses import dataclass
from typing import Union

from .status_codes import HTTPStatus


HTTP_VERSION = "HTTP/1.1"
TEXT_PLAIN = "text/plain"


@dataclass(frozen=True)
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        Handler returns          to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes

    =========================================================================

    Attributes:
        status:       HTTPStatus member (int-compatible).
        content_type: Value of the Content-Type header.
        body:         Response body bytes.
    """

    status: HTTPStatus = HTTPStatus.OK
    content_type: str = TEXT_PLAIN
    body: bytes = b""

    @property
    def status_code(self) -> int:
        return int(self.status)

    @property
    def status_text(self) -> str:
        return self.status.phrase

    @property
    def content_length(self) -> int:
        """Byte length of the body; the Content-Length header value."""
        return len(self.body)

    @property
    def status_line(self) -> str:
        """
        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 404 Not Found"
        """
        return f"{HTTP_VERSION} {self.status_code} {self.status_text}"

    @property
    def text(self) -> str:
        """The body decoded as UTF-8 (convenient in tests and logs)."""
        return self.body.decode("utf-8", errors="replace")

    def to_bytes(self) -> bytes:
        """
        Serialize the response for socket.sendall().

            HTTP/1.1 200 OK\\r\\n
            Content-Type: text/plain\\r\\n
            Content-Length: 24\\r\\n
            \\r\\n
            Welcome to the homepage!
        """
        head = (
            f"{self.status_line}\r\n"
            f"Content-Type: {self.content_type}\r\n"
            f"Content-Length: {self.content_length}\r\n"
            f"\r\n"
        )
        return head.encode("utf-8") + self.body


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Every canned response the server produces is plain text.
#
#     return text_response(HTTPStatus.OK, "Welcome to the homepage!")
#     return not_found()
#
# =============================================================================

def text_response(
    status: HTTPStatus,
    body: Union[str, bytes],
    content_type: str = TEXT_PLAIN,
) -> HTTPResponse:
    """
    Build a response, encoding a str body as UTF-8.

    Args:
        status: Response status.
        body: Body text or raw bytes.
        content_type: Content-Type header value (default text/plain).
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    return HTTPResponse(status=status, content_type=content_type, body=body)


def ok(body: Union[str, bytes], content_type: str = TEXT_PLAIN) -> HTTPResponse:
    """Create a 200 OK response."""
    return text_response(HTTPStatus.OK, body, content_type)


def not_found(message: str = "404 Not Found") -> HTTPResponse:
    """Create a 404 Not Found response."""
    return text_response(HTTPStatus.NOT_FOUND, message)


def forbidden(message: str = "403 Forbidden") -> HTTPResponse:
    """Create a 403 Forbidden response."""
    return text_response(HTTPStatus.FORBIDDEN, message)


def method_not_allowed(message: str = "405 Method Not Allowed") -> HTTPResponse:
    """Create a 405 Method Not Allowed response."""
    return text_response(HTTPStatus.METHOD_NOT_ALLOWED, message)


def unsupported_media_type(message: str = "Unsupported Content-Type") -> HTTPResponse:
    """Create a 415 Unsupported Media Type response."""
    return text_response(HTTPStatus.UNSUPPORTED_MEDIA_TYPE, message)

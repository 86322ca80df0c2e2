"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the raw bytes of one socket read into a structured HTTPRequest.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  REQUEST LINE     POST /submit HTTP/1.1\r\n                          │
    │                   ──┬─ ───┬─── ───┬────                              │
    │                   Method Path  Version (ignored)                     │
    │                                                                      │
    │  HEADERS          Content-Type: application/json\r\n                 │
    │                   Host: localhost:8080\r\n                           │
    │                              ▲                                       │
    │                              └── separator is exactly ": "          │
    │                                                                      │
    │  EMPTY LINE       \r\n                                               │
    │                                                                      │
    │  BODY             {"a":1}                                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
A LENIENT PARSER
=============================================================================

The parser never rejects input. Whatever arrives produces a request:

    - Missing method or path tokens become empty strings.
    - Header lines without ": " are dropped.
    - If no empty line is ever seen, the body is empty and any trailing
      lines are treated as (unterminated) headers.
    - Invalid UTF-8 is replaced with U+FFFD rather than failing.

Header names are kept exactly as received. Lookups are case-sensitive,
so "content-type" and "Content-Type" are different keys here, unlike
real HTTP. When a header repeats, the last value wins.

The body is whatever follows the empty line in the buffer. Content-Length
is NOT consulted: a body that did not fit in the single read is silently
truncated (see ServerConfig.buffer_size).

=============================================================================
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union


# Lines end at "\n"; a "\r" right before it belongs to the terminator.
_LINE_BREAK = re.compile(r"\r?\n")

HEADER_SEPARATOR = ": "


def _frozen_headers(headers: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed HTTP request.

    =========================================================================
    REQUEST LIFECYCLE
    =========================================================================

        Raw bytes              HTTPRequest               Router
        from socket  ──parse──►  (frozen)    ──route──►  handler
                                    │
                                    └── discarded once the response
                                        has been produced

    Attributes:
        method:  First token of the request line ("" if absent).
        path:    Second token of the request line ("" if absent).
        headers: Read-only mapping, names exactly as received.
        body:    Everything after the first empty line, joined with "\\n".
    """

    method: str = ""
    path: str = ""
    headers: Mapping[str, str] = field(default_factory=_frozen_headers)
    body: str = ""

    def __post_init__(self):
        # Callers may pass a plain dict; store a read-only copy.
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, "headers", _frozen_headers(self.headers))

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a header value by its exact (case-sensitive) name.

        Example:
            request.get_header("Content-Type")   # matches "Content-Type"
            request.get_header("content-type")   # does NOT match it
        """
        return self.headers.get(name, default)

    @property
    def content_type(self) -> Optional[str]:
        """The literal value of the "Content-Type" header, if present."""
        return self.headers.get("Content-Type")


def split_lines(text: str) -> list[str]:
    """
    Split text into lines the way the request reader expects.

    A single trailing terminator does not yield an extra empty line:

        >>> split_lines("GET / HTTP/1.1\\r\\n\\r\\n")
        ['GET / HTTP/1.1', '']
        >>> split_lines("")
        []
    """
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_request(data: Union[bytes, str]) -> HTTPRequest:
    """
    Parse one raw request buffer into an HTTPRequest.

    =====================================================================
    PARSING ALGORITHM
    =====================================================================

    1. Decode bytes as UTF-8, replacing invalid sequences
    2. Split into lines on "\\n" (a preceding "\\r" is dropped)
    3. Request line: method and path are the first two whitespace tokens
    4. Header lines up to the first empty line, split on the first ": "
    5. Everything after the empty line is the body

    =====================================================================

    Args:
        data: Bytes read from the socket, or already-decoded text.

    Returns:
        The parsed request. This function never raises.
    """
    if isinstance(data, bytes):
        text = data.decode("utf-8", errors="replace")
    else:
        text = data

    lines = split_lines(text)
    if not lines:
        return HTTPRequest()

    # -----------------------------------------------------------------
    # Request line: METHOD SP PATH [SP VERSION]
    # -----------------------------------------------------------------
    tokens = lines[0].split()
    method = tokens[0] if len(tokens) > 0 else ""
    path = tokens[1] if len(tokens) > 1 else ""

    # -----------------------------------------------------------------
    # Headers, then body after the first empty line
    # -----------------------------------------------------------------
    headers: dict[str, str] = {}
    body = ""
    for index in range(1, len(lines)):
        line = lines[index]
        if line == "":
            body = "\n".join(lines[index + 1:])
            break

        name, separator, value = line.partition(HEADER_SEPARATOR)
        if separator:
            headers[name] = value

    return HTTPRequest(method=method, path=path, headers=headers, body=body)

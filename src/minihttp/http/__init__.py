"""
=============================================================================
HTTP PROTOCOL MODULE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       HTTP MODULE COMPONENTS                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   request.py       bytes → HTTPRequest (lenient, never raises)      │
    │   response.py      HTTPResponse → bytes                             │
    │   router.py        HTTPRequest → HTTPResponse (import directly)     │
    │   mime_types.py    file extension → Content-Type                    │
    │   status_codes.py  HTTPStatus enum with reason phrases              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .status_codes import HTTPStatus
from .request import HTTPRequest, parse_request
from .response import (
    HTTPResponse,
    text_response,
    ok,
    not_found,
    forbidden,
    method_not_allowed,
    unsupported_media_type,
)
from .mime_types import get_mime_type, MIME_TYPES, DEFAULT_MIME_TYPE


__all__ = [
    "HTTPStatus",
    "HTTPRequest",
    "parse_request",
    "HTTPResponse",
    "text_response",
    "ok",
    "not_found",
    "forbidden",
    "method_not_allowed",
    "unsupported_media_type",
    "get_mime_type",
    "MIME_TYPES",
    "DEFAULT_MIME_TYPE",
]

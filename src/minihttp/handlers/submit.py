"""
=============================================================================
SUBMIT HANDLER
=============================================================================

Handles POST requests. Only /submit exists; the body is echoed back, not
interpreted.

    ┌──────────────────────────────────────┬─────────────────────────────┐
    │  Content-Type header                 │  Response                   │
    ├──────────────────────────────────────┼─────────────────────────────┤
    │  application/json                    │  200 "Received JSON: ..."   │
    │  application/x-www-form-urlencoded   │  200 "Received form data:…" │
    │  anything else, or missing           │  415 Unsupported            │
    └──────────────────────────────────────┴─────────────────────────────┘

The header is looked up by its exact name "Content-Type", and the value
must match exactly: "content-type: application/json" or
"Content-Type: application/json; charset=utf-8" both end up as 415.

=============================================================================
"""

from typing import Mapping, Optional

from ..http.response import HTTPResponse, not_found, ok, unsupported_media_type
from ..observer import ServerObserver


SUBMIT_PATH = "/submit"

JSON_TYPE = "application/json"
FORM_TYPE = "application/x-www-form-urlencoded"


class SubmitHandler:
    """Handler for POST requests."""

    def __init__(self, observer: Optional[ServerObserver] = None):
        self.observer = observer or ServerObserver()

    def handle(self, path: str, headers: Mapping[str, str], body: str) -> HTTPResponse:
        """
        Args:
            path: Request path.
            headers: Request headers (case-sensitive names).
            body: Raw request body.

        Returns:
            404 for any path but /submit, else 200 or 415 by Content-Type.
        """
        if path != SUBMIT_PATH:
            return not_found()

        self.observer.submission_received(body)

        content_type = headers.get("Content-Type")
        if content_type == JSON_TYPE:
            self.observer.json_received(body)
            return ok(f"Received JSON: {body}")
        if content_type == FORM_TYPE:
            self.observer.form_received(body)
            return ok(f"Received form data: {body}")

        self.observer.unsupported_content_type(content_type)
        return unsupported_media_type()

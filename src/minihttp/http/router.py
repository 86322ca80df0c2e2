"""
=============================================================================
REQUEST ROUTER
=============================================================================

Dispatches a parsed request to the code that answers it.

=============================================================================
ROUTING TABLE
=============================================================================

    ┌─────────┬────────────┬─────────────────────────────────────────────┐
    │ Method  │ Path       │ Behavior                                    │
    ├─────────┼────────────┼─────────────────────────────────────────────┤
    │ GET     │ /          │ 200 "Welcome to the homepage!"              │
    │ GET     │ /static/*  │ StaticFileHandler                           │
    │ GET     │ other      │ 404 "404 Not Found"                         │
    │ POST    │ any        │ SubmitHandler (404 unless /submit)          │
    │ other   │ any        │ 405 "405 Method Not Allowed"                │
    └─────────┴────────────┴─────────────────────────────────────────────┘

Matching is exact apart from the /static/ prefix check. Methods are
case-sensitive: "get" is not GET and gets a 405.

=============================================================================
A TOTAL FUNCTION
=============================================================================

Every (method, path, headers, body) produces exactly one response, and
the same input always produces the same response (given the same files
on disk). Error conditions are ordinary responses; route() never raises.

=============================================================================
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from .request import HTTPRequest
from .response import HTTPResponse, method_not_allowed, not_found, ok
from ..handlers.static import STATIC_PREFIX, StaticFileHandler
from ..handlers.submit import SubmitHandler
from ..observer import ServerObserver


WELCOME_MESSAGE = "Welcome to the homepage!"


class Router:
    """
    Routes requests to the homepage, static files, or the submit handler.

    Usage:
        router = Router(static_root="/srv/site")
        response = router.route(parse_request(raw_bytes))
    """

    def __init__(
        self,
        static_root: Union[str, Path] = ".",
        observer: Optional[ServerObserver] = None,
    ):
        """
        Args:
            static_root: Document root for /static/ requests.
            observer: Receives handler events.
        """
        self.observer = observer or ServerObserver()
        self.static = StaticFileHandler(static_root, observer=self.observer)
        self.submit = SubmitHandler(observer=self.observer)

    def route(self, request: HTTPRequest) -> HTTPResponse:
        """Produce the response for a parsed request."""
        return self.handle(request.method, request.path, request.headers, request.body)

    def handle(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: str,
    ) -> HTTPResponse:
        """
        Dispatch on method, then path.

        Args:
            method: Request method, exactly as received.
            path: Request path, exactly as received.
            headers: Request headers.
            body: Request body.
        """
        if method == "GET":
            return self._handle_get(path)
        if method == "POST":
            return self.submit.handle(path, headers, body)
        return method_not_allowed()

    def _handle_get(self, path: str) -> HTTPResponse:
        if path == "/":
            return ok(WELCOME_MESSAGE)
        if path.startswith(STATIC_PREFIX):
            return self.static.handle(path)
        return not_found()

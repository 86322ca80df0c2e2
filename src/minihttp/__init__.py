"""
=============================================================================
MINIHTTP - A Minimal HTTP/1.1 Server on Raw Sockets
=============================================================================

One request per connection, one thread per connection, plain-text
responses.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         ROUTES                                      │
    ├─────────────────────────────────────────────────────────────────────┤
    │   GET  /            200  Welcome to the homepage!                   │
    │   GET  /static/*    file from <root>/static (403 if it escapes)     │
    │   POST /submit      echo JSON / form body, 415 for other types      │
    │   anything else     404 (GET, POST) or 405 (other methods)          │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
QUICK START
=============================================================================

    # From the command line
    python -m minihttp --port 8080 --root ./site

    # From code
    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=8080))
    server.setup_logging()
    server.run()

    # The core without sockets
    from minihttp import Router, parse_request

    response = Router().route(parse_request(b"GET / HTTP/1.1\\r\\n\\r\\n"))
    response.to_bytes()

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .http import (
    HTTPStatus,
    HTTPRequest,
    HTTPResponse,
    parse_request,
    get_mime_type,
)
from .observer import ServerObserver, LoggingObserver, RequestLog
from .handlers import StaticFileHandler, SubmitHandler
from .http.router import Router
from .server import HTTPServer


__all__ = [
    "__version__",
    "ServerConfig",
    "HTTPStatus",
    "HTTPRequest",
    "HTTPResponse",
    "parse_request",
    "get_mime_type",
    "ServerObserver",
    "LoggingObserver",
    "RequestLog",
    "StaticFileHandler",
    "SubmitHandler",
    "Router",
    "HTTPServer",
]

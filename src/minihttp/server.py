"""
=============================================================================
MAIN HTTP SERVER
=============================================================================

Ties the pieces together: accept loop, one thread per connection, parser,
router, observer.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. CLIENT CONNECTS
       └── SocketServer accepts the TCP connection

    2. SPAWN A WORKER
       └── A new daemon thread owns the connection from here on

    3. READ ONCE
       └── Connection.read_request(): a single recv(buffer_size)

    4. PARSE
       └── parse_request(): bytes → HTTPRequest (never fails)

    5. ROUTE
       └── Router.route(): HTTPRequest → HTTPResponse (never fails)

    6. SEND AND CLOSE
       └── Connection.send_response(response.to_bytes()), then close

=============================================================================
ISOLATION
=============================================================================

Each worker thread has its own request, headers, body and response; the
only objects shared between threads are the Router and its handlers,
which hold no mutable state. A read or write failure ends that one
connection and nothing else.

There is no limit on the number of concurrent connections, and without
ServerConfig.timeout a silent client keeps its thread forever.

=============================================================================
"""

import logging
import threading
import time
from typing import Optional

from .config import ServerConfig
from .core import Connection, SocketServer
from .http.request import parse_request
from .http.response import HTTPResponse
from .http.router import Router
from .observer import LoggingObserver, ServerObserver


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class HTTPServer:
    """
    Single-process HTTP/1.1 server, one request per connection.

    =========================================================================
    USAGE
    =========================================================================

        server = HTTPServer(ServerConfig(port=8080, static_root="./site"))
        server.run()   # blocks until Ctrl+C / SIGTERM

    In tests, run it in a thread and stop it with shutdown():

        thread = threading.Thread(target=server.run, daemon=True)
        thread.start()
        server.wait_until_ready(5.0)
        ...
        server.shutdown()

    =========================================================================
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        observer: Optional[ServerObserver] = None,
    ):
        """
        Args:
            config: Server configuration. Defaults if not provided.
            observer: Event sink. Defaults to a LoggingObserver using the
                      configured log format.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail fast on invalid config

        self.observer = observer or LoggingObserver(log_format=self.config.log_format)
        self.router = Router(static_root=self.config.static_root, observer=self.observer)
        self._socket_server = SocketServer(self.config, observer=self.observer)

    @property
    def address(self):
        return self._socket_server.address

    def run(self):
        """
        Start the server (blocking).

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        self._socket_server.start(self._handle_connection)

    def shutdown(self):
        """Stop accepting connections; in-flight workers finish on their own."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def setup_logging(self):
        """Configure the root logger from config.log_level."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        logging.getLogger("minihttp").setLevel(level)

    # =========================================================================
    # PER-CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Called by the accept loop: hand the connection to a new thread
        and return immediately.
        """
        worker = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        worker.start()

    def _process_connection(self, conn: Connection):
        """Read, parse, route, write, close. Runs in the worker thread."""
        with conn:
            self.observer.connection_opened(conn.address)

            try:
                raw = conn.read_request()
            except OSError as e:
                self.observer.read_failed(conn.address, e)
                return

            if raw is None:
                self.observer.connection_closed_by_peer(conn.address)
                return

            try:
                response = self.respond(raw, conn.address)
            except Exception:
                # Routing is total; reaching this is a bug. Drop only
                # this connection, keep the server up.
                logger.exception(f"[{conn.id}] Unhandled error while routing")
                return

            try:
                conn.send_response(response.to_bytes())
            except OSError as e:
                self.observer.write_failed(conn.address, e)
                return

            self.observer.response_sent(conn.address)

    def respond(self, raw: bytes, address: Optional[tuple] = None) -> HTTPResponse:
        """
        Turn one raw request buffer into a response.

        This is the whole core, with no sockets involved: the transport
        supplies the bytes and writes back response.to_bytes().
        """
        start_time = time.perf_counter()
        request = parse_request(raw)
        response = self.router.route(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        self.observer.request_completed(request, response, duration_ms, address)
        return response

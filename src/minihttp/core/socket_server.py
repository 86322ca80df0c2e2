"""
=============================================================================
SOCKET SERVER - The Foundation of the HTTP Server
=============================================================================

Owns the listening TCP socket and runs the accept loop.

=============================================================================
HOW A TCP SERVER WORKS
=============================================================================

    SERVER SIDE                                     CLIENT SIDE
    ═══════════                                     ═══════════

    ┌─────────────┐
    │  socket()   │  Create an endpoint
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │   bind()    │  Claim IP:PORT   ← failure here aborts startup
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │  listen()   │  Start queueing connections
    └──────┬──────┘
           ▼                                        ┌─────────────┐
    ┌─────────────┐    SYN / SYN-ACK / ACK          │  connect()  │
    │  accept()   │ ◄──────────────────────────────►│             │
    └──────┬──────┘                                 └─────────────┘
           │
           └──► Connection(...) handed to the callback, then straight
                back to accept(). The loop itself never reads or writes.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from ..observer import ServerObserver
from .connection import Connection


logger = logging.getLogger(__name__)

# How often accept() wakes up to check for shutdown.
ACCEPT_POLL_INTERVAL = 1.0


class SocketServer:
    """
    Low-level TCP socket server.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      SocketServer Internals                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    start(handler)                                                    │
    │        ├──► bind()            socket, SO_REUSEADDR, bind, listen     │
    │        ├──► _setup_signals()  SIGTERM/SIGINT → shutdown()            │
    │        └──► _accept_loop()    blocks until shutdown()                │
    │                 └──► handler(Connection)                             │
    │                                                                      │
    │    shutdown()                 stop the loop (idempotent)             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Usage:
        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig, observer: Optional[ServerObserver] = None):
        """
        Args:
            config: Server configuration (host, port, backlog, buffer_size).
            observer: Receives the startup event.

        The socket is not created until bind()/start().
        """
        self.config = config
        self.observer = observer or ServerObserver()

        self._socket: Optional[socket.socket] = None
        self._bound_address: Optional[Tuple[str, int]] = None
        self._running = False
        self._ready = threading.Event()
        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (IP, port). Before binding this is the configured
        address; afterwards it is the real one (useful with port 0).
        """
        return self._bound_address or (self.config.host, self.config.port)

    def bind(self) -> None:
        """
        Create the listening socket.

        Raises:
            OSError: If the address cannot be bound (in use, no
                     permission). This is fatal for the server.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # SO_REUSEADDR: restart without "Address already in use" while
        # the previous socket sits in TIME_WAIT.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        try:
            sock.bind((self.config.host, self.config.port))
            sock.listen(self.config.backlog)
        except OSError as e:
            sock.close()
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            raise

        # accept() times out periodically so the loop can see shutdown().
        sock.settimeout(ACCEPT_POLL_INTERVAL)

        self._socket = sock
        self._bound_address = sock.getsockname()[:2]

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, then accept connections until shutdown() is called.

        Args:
            connection_handler: Called with each new Connection. It must
                                return quickly; the HTTP server starts a
                                thread per connection.

        Raises:
            OSError: If binding fails.
        """
        if self._socket is None:
            self.bind()

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self.observer.server_started(host, port)
        self._ready.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue  # Check self._running, then wait again
            except OSError as e:
                # Listening socket closed underneath us, or a real error
                if self._running:
                    logger.error(f"Accept error: {e}")
                break

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
            )
            connection_handler(conn)

    def _setup_signals(self):
        """
        Install SIGTERM/SIGINT handlers for graceful shutdown.

        Python only allows this from the main thread; when the server
        runs in a background thread (tests, embedding) it is skipped.
        """
        if threading.current_thread() is not threading.main_thread():
            return

        def shutdown_handler(signum, frame):
            logger.info(f"Received {signal.Signals(signum).name}, initiating shutdown...")
            self.shutdown()

        for sig in (signal.SIGTERM, signal.SIGINT):
            self._original_handlers[sig] = signal.signal(sig, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def shutdown(self):
        """Stop the accept loop. Safe to call from any thread, repeatedly."""
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. Returns False on timeout."""
        return self._ready.wait(timeout)

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._ready.clear()
        logger.info("Socket server stopped")

"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket: one read, one write, then close.

=============================================================================
ONE READ, ONE RESPONSE
=============================================================================

TCP is a byte stream, so a request may in principle arrive in several
chunks. This server deliberately does NOT loop to collect them: it reads
once, up to buffer_size bytes, and treats what arrived as the request.

    Client sends 6000 bytes, buffer_size = 4096:

        recv(4096) → first 4096 bytes    ← this is "the request"
        (remaining 1904 bytes are never read; the body is truncated)

That keeps the contract with the core simple: the core is handed one
buffer and hands back one complete response to write verbatim.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSED
              │                           │           ▲
              └── peer closed / error ────┴───────────┘

=============================================================================
"""

import socket
import time
import uuid
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and debugging."""

    NEW = "new"                # Just accepted
    READING = "reading"        # Waiting for the request bytes
    PROCESSING = "processing"  # Parsing and routing
    WRITING = "writing"        # Sending the response
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        buffer_size: Maximum bytes taken from the single read.
        timeout: Socket timeout in seconds, None to block indefinitely.
        id: Short identifier for log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
    """

    socket: socket.socket
    address: tuple
    buffer_size: int = 4096
    timeout: Optional[float] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    def __post_init__(self):
        # settimeout(None) puts the socket in plain blocking mode.
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def client_port(self) -> int:
        return self.address[1]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    def read_request(self) -> Optional[bytes]:
        """
        Read the request with a single recv().

        Returns:
            Up to buffer_size bytes, or None if the client closed the
            connection without sending anything.

        Raises:
            OSError: On any socket error, including timeouts.
        """
        self.state = ConnectionState.READING
        data = self.socket.recv(self.buffer_size)
        if not data:
            return None

        self.state = ConnectionState.PROCESSING
        return data

    def send_response(self, data: bytes) -> None:
        """
        Send the complete response.

        sendall() keeps writing until every byte is out; plain send()
        may stop after a partial write.

        Raises:
            OSError: If the client went away or the write timed out.
        """
        self.state = ConnectionState.WRITING
        self.socket.sendall(data)

    def close(self):
        """
        Close the connection.

        1. shutdown(SHUT_WR): send FIN so the client sees end of response
        2. Drain briefly: unread request bytes left in the kernel buffer
           would make close() send RST, which can discard our response
        3. close(): release the file descriptor
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass  # socket.timeout is an OSError too

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

"""
=============================================================================
CORE NETWORKING MODULE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   socket_server.py   listening socket + accept loop                 │
    │   connection.py      one client socket: read once, write, close     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Nothing here knows about HTTP; bytes in, bytes out.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState


__all__ = [
    "SocketServer",
    "Connection",
    "ConnectionState",
]

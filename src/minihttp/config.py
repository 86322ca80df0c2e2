"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the server.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m minihttp --port 3000                            │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── MINIHTTP_PORT=3000 python -m minihttp                     │
    │                                                                      │
    │   3. Default values (in this dataclass)                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .observer import LOG_FORMATS


ENV_PREFIX = "MINIHTTP_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    STATIC FILES
    - static_root

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """The IP address to bind to. Localhost only by default."""

    port: int = 8080
    """The port to listen on. 0 lets the OS pick a free port."""

    backlog: int = 128
    """Maximum number of queued, not yet accepted connections."""

    buffer_size: int = 4096
    """
    Bytes read from each connection, in a single recv().
    A request larger than this is silently truncated, not rejected.
    """

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = wait forever, so a silent client holds its thread
    indefinitely. Set this to bound stalled reads and writes.
    """

    # ─────────────────────────────────────────────────────────────────────
    # STATIC FILES
    # ─────────────────────────────────────────────────────────────────────

    static_root: str = "."
    """
    Document root. GET /static/x is served from <static_root>/static/x.
    Defaults to the working directory.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """Access log format: 'text' (Apache-style) or 'json'."""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        MINIHTTP_HOST         Server host (default: 127.0.0.1)
        MINIHTTP_PORT         Server port (default: 8080)
        MINIHTTP_BUFFER_SIZE  Read buffer in bytes (default: 4096)
        MINIHTTP_TIMEOUT      Socket timeout in seconds (default: none)
        MINIHTTP_STATIC_ROOT  Document root (default: .)
        MINIHTTP_LOG_LEVEL    Logging level (default: INFO)
        MINIHTTP_LOG_FORMAT   text or json (default: text)

        =====================================================================

        Args:
            environ: Mapping to read from instead of os.environ.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name)

        timeout = get("TIMEOUT")
        return cls(
            host=get("HOST") or defaults.host,
            port=int(get("PORT") or defaults.port),
            buffer_size=int(get("BUFFER_SIZE") or defaults.buffer_size),
            timeout=float(timeout) if timeout else defaults.timeout,
            static_root=get("STATIC_ROOT") or defaults.static_root,
            log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
            log_format=(get("LOG_FORMAT") or defaults.log_format).lower(),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at startup so bad values fail immediately, not on the
        first request.

        Raises:
            ValueError: On the first invalid value found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Unknown log format: {self.log_format}")

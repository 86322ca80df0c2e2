"""
pytest configuration and fixtures.
"""

import socket
import threading
import time
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minihttp import HTTPServer, ServerConfig, ServerObserver
from minihttp.http.router import Router


# =============================================================================
# SAMPLE REQUESTS
# =============================================================================

@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /static/style.css HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/css\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with JSON body."""
    body = b'{"name": "John", "email": "john@example.com"}'
    return (
        b"POST /submit HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/json\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
    ) + body


# =============================================================================
# OBSERVER
# =============================================================================

class RecordingObserver(ServerObserver):
    """Observer that remembers every event it receives."""

    HOOKS = (
        "server_started",
        "connection_opened",
        "connection_closed_by_peer",
        "read_failed",
        "response_sent",
        "write_failed",
        "request_completed",
        "submission_received",
        "json_received",
        "form_received",
        "unsupported_content_type",
        "path_traversal_blocked",
    )

    def __init__(self):
        self.events = []
        self._lock = threading.Lock()

    def names(self) -> list:
        with self._lock:
            return [name for name, _ in self.events]

    def wait_for(self, name: str, timeout: float = 5.0) -> bool:
        """Poll until an event shows up (events from worker threads)."""
        deadline = time.time() + timeout
        while time.time() < deadline:
            if name in self.names():
                return True
            time.sleep(0.01)
        return False


def _make_hook(name):
    def hook(self, *args, **kwargs):
        with self._lock:
            self.events.append((name, args))
    hook.__name__ = name
    return hook


for _hook in RecordingObserver.HOOKS:
    setattr(RecordingObserver, _hook, _make_hook(_hook))


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


# =============================================================================
# STATIC FILES
# =============================================================================

@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """
    A document root laid out like:

        <tmp>/secret.txt          outside static/, must never be served
        <tmp>/static/style.css    "body{}"
        <tmp>/static/index.html
        <tmp>/static/data.json
        <tmp>/static/css/app.css
        <tmp>/static/blob.bin     not valid UTF-8
    """
    static = tmp_path / "static"
    (static / "css").mkdir(parents=True)

    (tmp_path / "secret.txt").write_text("top secret")
    (static / "style.css").write_text("body{}")
    (static / "index.html").write_text("<h1>Hi</h1>")
    (static / "data.json").write_text('{"ok": true}')
    (static / "css" / "app.css").write_text("h1{color:red}")
    (static / "blob.bin").write_bytes(b"\xff\xfe\x00\x80")
    return tmp_path


@pytest.fixture
def router(site_root: Path, observer: RecordingObserver) -> Router:
    return Router(static_root=site_root, observer=observer)


# =============================================================================
# LIVE SERVER
# =============================================================================

class TestServer:
    """Runs an HTTPServer in a background thread."""

    __test__ = False  # not a test class

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()
        if not self.server.wait_until_ready(5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, data: bytes, timeout: float = 5.0) -> bytes:
        """Send raw bytes, return everything the server sends back."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=timeout) as sock:
            sock.sendall(data)
            chunks = []
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


@pytest.fixture
def make_server(observer: RecordingObserver) -> Generator:
    """Factory for live servers; every server started is stopped afterwards."""
    started = []

    def factory(**overrides) -> TestServer:
        config = ServerConfig(host="127.0.0.1", port=0, log_level="WARNING", **overrides)
        test_srv = TestServer(HTTPServer(config, observer=observer))
        test_srv.start()
        started.append(test_srv)
        return test_srv

    yield factory

    for test_srv in started:
        test_srv.stop()


@pytest.fixture
def live_server(make_server, site_root: Path) -> TestServer:
    return make_server(static_root=str(site_root))

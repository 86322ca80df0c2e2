"""
Unit tests for server observers and access logging.
"""

import json
import logging

import pytest

from minihttp.http.request import HTTPRequest
from minihttp.http.response import not_found, ok
from minihttp.observer import LoggingObserver, RequestLog, ServerObserver


@pytest.fixture
def entry() -> RequestLog:
    return RequestLog(
        method="GET",
        path="/",
        client_ip="127.0.0.1",
        status_code=200,
        content_length=24,
        duration_ms=0.4567,
        timestamp="15/Oct/2026:10:55:36 +0000",
    )


class TestRequestLog:

    def test_to_text(self, entry):
        assert entry.to_text() == (
            '127.0.0.1 - - [15/Oct/2026:10:55:36 +0000] "GET /" 200 24 0.46ms'
        )

    def test_to_dict(self, entry):
        data = entry.to_dict()

        assert data["method"] == "GET"
        assert data["status_code"] == 200
        assert data["duration_ms"] == 0.46
        json.dumps(data)


class TestServerObserver:

    def test_hooks_are_noops(self):
        observer = ServerObserver()
        request = HTTPRequest(method="GET", path="/")

        observer.server_started("127.0.0.1", 8080)
        observer.connection_opened(("127.0.0.1", 1))
        observer.connection_closed_by_peer(("127.0.0.1", 1))
        observer.read_failed(("127.0.0.1", 1), OSError("boom"))
        observer.write_failed(("127.0.0.1", 1), OSError("boom"))
        observer.response_sent(("127.0.0.1", 1))
        observer.request_completed(request, ok("x"), 1.0)
        observer.submission_received("")
        observer.json_received("")
        observer.form_received("")
        observer.unsupported_content_type(None)
        observer.path_traversal_blocked("/static/../x")


class TestLoggingObserver:

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            LoggingObserver(log_format="xml")

    def test_text_access_log(self, caplog):
        observer = LoggingObserver()
        request = HTTPRequest(method="GET", path="/missing")

        with caplog.at_level(logging.INFO, logger="minihttp.access"):
            observer.request_completed(request, not_found(), 1.5, ("10.0.0.1", 5555))

        record = caplog.records[-1]
        assert record.name == "minihttp.access"
        assert record.getMessage().startswith('10.0.0.1 - - [')
        assert '"GET /missing" 404 13 1.50ms' in record.getMessage()

    def test_json_access_log(self, caplog):
        observer = LoggingObserver(log_format="json")
        request = HTTPRequest(method="POST", path="/submit")

        with caplog.at_level(logging.INFO, logger="minihttp.access"):
            observer.request_completed(request, ok("hello"), 2.0)

        data = json.loads(caplog.records[-1].getMessage())
        assert data["method"] == "POST"
        assert data["path"] == "/submit"
        assert data["client_ip"] == "-"
        assert data["status_code"] == 200
        assert data["content_length"] == 5

    def test_access_log_level(self, caplog):
        observer = LoggingObserver(log_level=logging.DEBUG)
        request = HTTPRequest(method="GET", path="/")

        with caplog.at_level(logging.DEBUG, logger="minihttp.access"):
            observer.request_completed(request, ok("x"), 0.1)

        assert caplog.records[-1].levelno == logging.DEBUG

    @pytest.mark.parametrize("hook, args, level, text", [
        ("server_started", ("127.0.0.1", 8080), logging.INFO,
         "Server is running on http://127.0.0.1:8080"),
        ("connection_opened", (("127.0.0.1", 4242),), logging.INFO,
         "New connection established from: 127.0.0.1:4242"),
        ("connection_closed_by_peer", (("127.0.0.1", 4242),), logging.WARNING,
         "Connection closed by client"),
        ("read_failed", (("127.0.0.1", 4242), OSError("reset")), logging.ERROR,
         "Failed to read request"),
        ("write_failed", (("127.0.0.1", 4242), OSError("pipe")), logging.ERROR,
         "Failed to send response"),
        ("response_sent", (("127.0.0.1", 4242),), logging.INFO,
         "Response successfully sent"),
        ("submission_received", ("a=1",), logging.INFO,
         "Processing POST request to /submit with body: a=1"),
        ("unsupported_content_type", ("text/plain",), logging.WARNING,
         "Unsupported Content-Type"),
        ("path_traversal_blocked", ("/static/../x",), logging.WARNING,
         "Path traversal attempt: /static/../x"),
    ])
    def test_event_messages(self, caplog, hook, args, level, text):
        observer = LoggingObserver()

        with caplog.at_level(logging.DEBUG, logger="minihttp"):
            getattr(observer, hook)(*args)

        record = caplog.records[-1]
        assert record.levelno == level
        assert text in record.getMessage()

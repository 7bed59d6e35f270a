"""Shared fixtures for httpchain tests."""

import gzip
import json
import logging
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional

import pytest
from httpchain.transports.base import parse_status_code

DEFAULT_RAW = "HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n\r\nhello"


class StubTransport:
    """
    Transport that returns a canned raw message and records its lifecycle.

    The canned message includes its status line; the line has no colon so
    the lenient header parser skips it.
    """

    def __init__(
        self,
        raw: Optional[str] = DEFAULT_RAW,
        name: str = "stub",
        available: bool = True,
        schemes: tuple = ("http", "https"),
        error: Optional[Exception] = None,
        status_line: Optional[str] = None,
    ) -> None:
        self.name = name
        self.raw = raw
        self.status_line = status_line
        self.available = available
        self.schemes = schemes
        self.error = error

        self.calls: list[str] = []
        self.in_flight: Optional[str] = None

    def is_available(self) -> bool:
        self.calls.append("is_available")
        return self.available

    def can_handle(self, request) -> bool:
        self.calls.append("can_handle")
        return request.url.scheme in self.schemes

    def prepare_to_handle_new_request(self, request) -> None:
        self.calls.append("prepare")
        self.in_flight = str(request)

    def handle_request(self, request):
        self.calls.append("handle_request")
        if self.error is not None:
            raise self.error
        return self.raw

    def get_response_code(self) -> int:
        self.calls.append("get_response_code")
        return parse_status_code(self.status_line or (self.raw or "").split("\r\n", 1)[0])

    def tear_down(self) -> None:
        self.calls.append("tear_down")
        self.in_flight = None


@pytest.fixture(autouse=True)
def reset_httpchain_logger():
    """Undo setup_logging() so caplog keeps seeing httpchain records."""
    yield
    logger = logging.getLogger("httpchain")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def stub_transport_class():
    """The StubTransport class, for tests that need several instances."""
    return StubTransport


class _RawResponseHandler(BaseHTTPRequestHandler):
    """Serves canned responses, writing bodies exactly as given."""

    def log_message(self, format, *args):  # noqa: A002
        pass

    def _send(self, status: int, headers: dict, body: bytes) -> None:
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(body)

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def do_GET(self):  # noqa: N802
        if self.path == "/plain":
            self._send(200, {"Content-Type": "text/plain"}, b"hello")
        elif self.path == "/chunked":
            self._send(
                200,
                {"Content-Type": "text/plain", "Transfer-Encoding": "chunked"},
                b"5\r\nhello\r\n6\r\n world\r\n0\r\n\r\n",
            )
        elif self.path == "/gzip":
            self._send(
                200,
                {"Content-Type": "text/plain; charset=utf-8", "Content-Encoding": "gzip"},
                gzip.compress(b"hello gzip"),
            )
        elif self.path == "/chunked-gzip":
            payload = gzip.compress(b"hello chunked gzip")
            body = f"{len(payload):x}\r\n".encode() + payload + b"\r\n0\r\n\r\n"
            self._send(
                200,
                {"Content-Type": "text/plain", "Transfer-Encoding": "chunked", "Content-Encoding": "gzip"},
                body,
            )
        elif self.path == "/redirect":
            self._send(302, {"Location": "/plain", "Content-Length": "0"}, b"")
        elif self.path == "/slow":
            time.sleep(1.0)
            self._send(200, {"Content-Type": "text/plain"}, b"too late")
        elif self.path.startswith("/echo"):
            self._echo()
        else:
            self._send(404, {"Content-Type": "text/plain"}, b"not found")

    def do_POST(self):  # noqa: N802
        self._echo()

    def _echo(self) -> None:
        payload = {
            "method": self.command,
            "path": self.path,
            "request_version": self.request_version,
            "headers": dict(self.headers.items()),
            "body": self._read_body().decode("utf-8"),
        }
        self._send(200, {"Content-Type": "application/json"}, json.dumps(payload).encode("utf-8"))


@pytest.fixture
def http_server():
    """Run a local HTTP server and yield its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _RawResponseHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"

    server.shutdown()
    server.server_close()

"""Transport that speaks HTTP/1.0 directly over a socket."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from ..http.parser import HttpMessageParser
from ..models.message import HttpMessage, HttpRequest
from .base import DEFAULT_READ_TIMEOUT, SUPPORTED_SCHEMES, build_default_headers, parse_status_code

try:
    import ssl

    SSL_AVAILABLE = True
except ImportError:
    SSL_AVAILABLE = False

DEFAULT_USER_AGENT = "httpchain (socket)"
READ_CHUNK_SIZE = 8192


class SocketTransport:
    """
    Writes an HTTP/1.0 request to a socket and reads until the server
    closes the connection.

    HTTP/1.0 keeps the exchange simple: one request per connection and no
    persistent connections. The response body is returned exactly as it
    came off the wire, so any transfer or content coding is left for the
    decoder chains.

    This is the last-resort transport and is tried last by default.
    """

    name = "socket"

    def __init__(
        self,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        enabled: bool = True,
        parser: Optional[HttpMessageParser] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._read_timeout = read_timeout
        self._user_agent = user_agent
        self._enabled = enabled
        self._parser = parser or HttpMessageParser()
        self._logger = logger or logging.getLogger(__name__)

        # Per-request state, cleared by tear_down()
        self._request_bytes: Optional[bytes] = None
        self._socket: Optional[socket.socket] = None
        self._status_line: Optional[str] = None

    def is_available(self) -> bool:
        if not self._enabled:
            self._logger.debug("socket transport is disabled")
            return False

        if not hasattr(socket, "create_connection"):
            self._logger.debug("socket.create_connection() is not available")
            return False

        return True

    def can_handle(self, request: HttpRequest) -> bool:
        if request.url.scheme == "https" and not SSL_AVAILABLE:
            return False
        return request.url.scheme in SUPPORTED_SCHEMES

    def prepare_to_handle_new_request(self, request: HttpRequest) -> None:
        self._logger.debug("Building raw HTTP/1.0 request...")

        message = HttpMessage()
        message.set_header("Host", request.url.netloc)
        for name, value in build_default_headers(request, self._user_agent).items():
            message.set_header(name, value)
        message.set_header("Connection", "close")

        head = (
            f"{request.method.value} {request.url.path_and_query} HTTP/1.0\r\n"
            f"{self._parser.get_header_array_as_string(message)}\r\n"
        )
        body = request.entity.content if request.entity is not None else b""
        self._request_bytes = head.encode("iso-8859-1", errors="replace") + body

    def handle_request(self, request: HttpRequest) -> bytes:
        if self._request_bytes is None:
            raise RuntimeError(f"Transport not prepared for {request}")

        url = request.url
        self._logger.debug(f"Opening socket to {url.netloc}...")
        try:
            self._socket = socket.create_connection((url.host, url.effective_port), timeout=self._read_timeout)
            if url.scheme == "https":
                context = ssl.create_default_context()
                self._socket = context.wrap_socket(self._socket, server_hostname=url.host)
        except socket.timeout as e:
            raise RuntimeError(f"Timed out while waiting for {request}") from e
        except OSError as e:
            raise RuntimeError(f"Could not open socket to {request}: {e}") from e

        try:
            self._socket.sendall(self._request_bytes)

            self._logger.debug("Reading socket contents...")
            chunks = []
            while True:
                chunk = self._socket.recv(READ_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
        except socket.timeout as e:
            raise RuntimeError(f"Timed out while waiting for {request}") from e
        except OSError as e:
            raise RuntimeError(f"Socket error while handling {request}: {e}") from e

        raw = b"".join(chunks)
        status_line, found, rest = raw.partition(b"\r\n")
        if not found:
            raise RuntimeError(f"Empty or truncated response from {request}")

        self._status_line = status_line.decode("iso-8859-1")
        return rest

    def get_response_code(self) -> int:
        return parse_status_code(self._status_line)

    def tear_down(self) -> None:
        if self._socket is not None:
            self._socket.close()
        self._socket = None
        self._request_bytes = None
        self._status_line = None

"""Transport backed by the standard library's urllib.request."""

from __future__ import annotations

import logging
import socket
import urllib.error
import urllib.request
from typing import Optional

from ..models.message import HttpMessage, HttpRequest
from .base import DEFAULT_READ_TIMEOUT, SUPPORTED_SCHEMES, build_default_headers, parse_status_code

DEFAULT_USER_AGENT = "httpchain (urllib)"


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Hands 3xx responses back to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):  # type: ignore[no-untyped-def]
        return None


class UrllibTransport:
    """
    Performs requests with urllib.request.

    HTTP error statuses are read as ordinary responses. http.client
    removes chunked transfer coding but leaves content coding alone.
    """

    name = "urllib"

    def __init__(
        self,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        enabled: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._read_timeout = read_timeout
        self._user_agent = user_agent
        self._enabled = enabled
        self._logger = logger or logging.getLogger(__name__)

        # Per-request state, cleared by tear_down()
        self._opener: Optional[urllib.request.OpenerDirector] = None
        self._url_request: Optional[urllib.request.Request] = None
        self._status_line: Optional[str] = None

    def is_available(self) -> bool:
        if not self._enabled:
            self._logger.debug("urllib transport is disabled")
            return False

        if not hasattr(urllib.request, "HTTPHandler"):
            self._logger.debug("urllib.request has no HTTP support")
            return False

        return True

    def can_handle(self, request: HttpRequest) -> bool:
        if request.url.scheme == "https" and not hasattr(urllib.request, "HTTPSHandler"):
            return False
        return request.url.scheme in SUPPORTED_SCHEMES

    def prepare_to_handle_new_request(self, request: HttpRequest) -> None:
        self._logger.debug("Building urllib opener...")

        self._opener = urllib.request.build_opener(_NoRedirectHandler)
        self._url_request = urllib.request.Request(
            str(request.url),
            data=request.entity.content if request.entity is not None else None,
            headers=build_default_headers(request, self._user_agent),
            method=request.method.value,
        )

    def handle_request(self, request: HttpRequest) -> bytes:
        if self._opener is None or self._url_request is None:
            raise RuntimeError(f"Transport not prepared for {request}")

        self._logger.debug("Calling urlopen()...")
        try:
            handle = self._opener.open(self._url_request, timeout=self._read_timeout)
        except urllib.error.HTTPError as e:
            # Error statuses still carry a full response
            handle = e
        except socket.timeout as e:
            raise RuntimeError(f"Timed out while waiting for {request}") from e
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise RuntimeError(f"Timed out while waiting for {request}") from e
            raise RuntimeError(f"Could not open handle for urlopen() to {request}") from e

        self._logger.debug("Reading response contents...")
        try:
            body = handle.read()
        except socket.timeout as e:
            raise RuntimeError(f"Timed out while waiting for {request}") from e
        finally:
            handle.close()

        version = "1.0" if getattr(handle, "version", 11) == 10 else "1.1"
        self._status_line = f"HTTP/{version} {handle.getcode()} {handle.reason or ''}".rstrip()

        header_lines = "".join(
            f"{name}: {value}\r\n"
            for name, value in handle.headers.items()
            if name.lower() != HttpMessage.HTTP_HEADER_TRANSFER_ENCODING.lower()
        )
        return header_lines.encode("iso-8859-1", errors="replace") + b"\r\n" + (body or b"")

    def get_response_code(self) -> int:
        return parse_status_code(self._status_line)

    def tear_down(self) -> None:
        self._opener = None
        self._url_request = None
        self._status_line = None

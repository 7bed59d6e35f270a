"""Transport backed by the requests library."""

from __future__ import annotations

import importlib.util
import logging
from typing import TYPE_CHECKING, Any, Optional

from ..models.message import HttpMessage, HttpRequest
from .base import DEFAULT_READ_TIMEOUT, SUPPORTED_SCHEMES, build_default_headers, parse_status_code

if TYPE_CHECKING:
    import requests

DEFAULT_USER_AGENT = "httpchain (requests)"


class RequestsTransport:
    """
    Performs requests with a short-lived requests.Session.

    The body is read with decode_content=False so that gzip/deflate
    content coding reaches the decoder chain untouched. urllib3 always
    removes chunked transfer coding, so Transfer-Encoding is left out of
    the raw message.

    This is the most capable transport and is tried first by default.
    """

    name = "requests"

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
        self._session: Optional[requests.Session] = None
        self._request_kwargs: Optional[dict[str, Any]] = None
        self._status_line: Optional[str] = None

    def is_available(self) -> bool:
        if not self._enabled:
            self._logger.debug("requests transport is disabled")
            return False

        if importlib.util.find_spec("requests") is None:
            self._logger.debug("requests is not installed")
            return False

        return True

    def can_handle(self, request: HttpRequest) -> bool:
        return request.url.scheme in SUPPORTED_SCHEMES

    def prepare_to_handle_new_request(self, request: HttpRequest) -> None:
        import requests

        self._logger.debug("Creating requests session...")

        self._session = requests.Session()
        self._request_kwargs = {
            "method": request.method.value,
            "url": str(request.url),
            "headers": build_default_headers(request, self._user_agent),
            "data": request.entity.content if request.entity is not None else None,
            "timeout": self._read_timeout,
            "allow_redirects": False,
            "stream": True,
        }

    def handle_request(self, request: HttpRequest) -> bytes:
        import requests
        import urllib3

        if self._session is None or self._request_kwargs is None:
            raise RuntimeError(f"Transport not prepared for {request}")

        self._logger.debug(f"Sending {request} with requests...")
        try:
            response = self._session.request(**self._request_kwargs)
        except requests.Timeout as e:
            raise RuntimeError(f"Timed out while waiting for {request}") from e
        except requests.RequestException as e:
            raise RuntimeError(f"Could not perform {request}: {e}") from e

        self._logger.debug("Reading raw response body...")
        try:
            body = response.raw.read(decode_content=False)
        except urllib3.exceptions.ReadTimeoutError as e:
            raise RuntimeError(f"Timed out while waiting for {request}") from e
        except urllib3.exceptions.HTTPError as e:
            raise RuntimeError(f"Could not read response body for {request}: {e}") from e
        finally:
            response.close()

        version = "1.0" if getattr(response.raw, "version", 11) == 10 else "1.1"
        self._status_line = f"HTTP/{version} {response.status_code} {response.reason or ''}".rstrip()

        header_lines = "".join(
            f"{name}: {value}\r\n"
            for name, value in response.raw.headers.items()
            if name.lower() != HttpMessage.HTTP_HEADER_TRANSFER_ENCODING.lower()
        )
        return header_lines.encode("iso-8859-1", errors="replace") + b"\r\n" + (body or b"")

    def get_response_code(self) -> int:
        return parse_status_code(self._status_line)

    def tear_down(self) -> None:
        if self._session is not None:
            self._session.close()
        self._session = None
        self._request_kwargs = None
        self._status_line = None

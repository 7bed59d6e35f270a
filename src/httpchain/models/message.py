"""HTTP message value objects: requests, responses, entities and URLs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union
from urllib.parse import urlsplit, urlunsplit

from charset_normalizer import from_bytes as detect_encoding
from requests.structures import CaseInsensitiveDict

logger = logging.getLogger(__name__)

HeaderValue = Union[str, list[str]]


class HttpMethod(str, Enum):
    """HTTP request methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"


@dataclass(frozen=True)
class Url:
    """
    Parsed absolute URL.

    Attributes:
        scheme: Lower-cased URL scheme (http, https, ...)
        host: Host name without port
        port: Explicit port, or None to use the scheme default
        path: Path component ("/" when empty)
        query: Query string without the leading "?"
    """

    scheme: str
    host: str
    port: Optional[int] = None
    path: str = "/"
    query: str = ""

    DEFAULT_PORTS = {"http": 80, "https": 443}

    @classmethod
    def parse(cls, url: str) -> Url:
        """Parse a URL string, raising ValueError when it is not absolute."""
        parts = urlsplit(url.strip())
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"Not an absolute URL: {url}")

        return cls(
            scheme=parts.scheme.lower(),
            host=parts.hostname,
            port=parts.port,
            path=parts.path or "/",
            query=parts.query,
        )

    @property
    def effective_port(self) -> Optional[int]:
        return self.port if self.port is not None else self.DEFAULT_PORTS.get(self.scheme)

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}" if self.port is not None else host

    @property
    def path_and_query(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, ""))


def decode_text(content: bytes, content_type: Optional[str]) -> str:
    """
    Decode content with encoding detection.

    Fallback chain:
    1. Content-Type header charset
    2. charset-normalizer detection
    3. UTF-8 with replacement
    """
    encoding = None
    if content_type:
        for part in content_type.split(";"):
            part = part.strip()
            if part.lower().startswith("charset="):
                encoding = part.split("=", 1)[1].strip().strip("\"'")
                break

    if encoding:
        try:
            return content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Failed to decode with declared encoding: {encoding}")

    best_match = detect_encoding(content).best()
    if best_match is not None:
        return str(best_match)

    return content.decode("utf-8", errors="replace")


class HttpEntity:
    """
    Body of an HTTP message.

    The content length is derived from the content, so it always matches
    the byte length of whatever was last assigned.
    """

    def __init__(self, content: Union[bytes, str, None] = None, content_type: Optional[str] = None) -> None:
        self._content = b""
        self.content = content
        self.content_type = content_type

    @property
    def content(self) -> bytes:
        return self._content

    @content.setter
    def content(self, value: Union[bytes, str, None]) -> None:
        if value is None:
            value = b""
        elif isinstance(value, str):
            value = value.encode("utf-8")
        self._content = bytes(value)

    @property
    def content_length(self) -> int:
        return len(self._content)

    @property
    def text(self) -> str:
        """Content decoded to text using the declared or detected charset."""
        return decode_text(self._content, self.content_type)

    def __repr__(self) -> str:
        return f"HttpEntity(content_length={self.content_length}, content_type={self.content_type!r})"


class HttpMessage:
    """Headers and entity shared by requests and responses."""

    HTTP_HEADER_CONTENT_TYPE = "Content-Type"
    HTTP_HEADER_CONTENT_LENGTH = "Content-Length"
    HTTP_HEADER_CONTENT_ENCODING = "Content-Encoding"
    HTTP_HEADER_TRANSFER_ENCODING = "Transfer-Encoding"
    HTTP_HEADER_USER_AGENT = "User-Agent"

    def __init__(self) -> None:
        self._headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.entity: Optional[HttpEntity] = None

    def set_header(self, name: str, value: HeaderValue) -> None:
        """Set a header, replacing any existing header with the same name."""
        if isinstance(value, list):
            value = ", ".join(value)
        self._headers[name] = str(value)

    def get_header_value(self, name: str) -> Optional[str]:
        return self._headers.get(name)

    def has_header(self, name: str) -> bool:
        return name in self._headers

    def remove_header(self, name: str) -> None:
        self._headers.pop(name, None)

    def get_all_headers(self) -> dict[str, str]:
        """Return an ordered copy of all headers with their original names."""
        return dict(self._headers.items())


class HttpRequest(HttpMessage):
    """An HTTP request to be executed by a transport."""

    def __init__(
        self,
        method: Union[HttpMethod, str],
        url: Union[Url, str],
        headers: Optional[dict[str, HeaderValue]] = None,
        entity: Optional[HttpEntity] = None,
    ) -> None:
        super().__init__()
        self.method = HttpMethod(method.upper() if isinstance(method, str) else method)
        self.url = url if isinstance(url, Url) else Url.parse(url)
        for name, value in (headers or {}).items():
            self.set_header(name, value)
        self.entity = entity

    def __str__(self) -> str:
        return f"{self.method.value} to {self.url}"

    def __repr__(self) -> str:
        return f"HttpRequest({self.method.value!r}, {str(self.url)!r})"


class HttpResponse(HttpMessage):
    """An HTTP response assembled from a transport's raw message."""

    def __init__(self, status_code: int = 0) -> None:
        super().__init__()
        self.status_code = status_code

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def __repr__(self) -> str:
        return f"HttpResponse(status_code={self.status_code}, entity={self.entity!r})"

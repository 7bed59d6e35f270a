"""Transport capability protocol and the execution command that drives it."""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol, Union, runtime_checkable

from ..http.parser import HttpMessageParser
from ..models.message import HttpEntity, HttpMessage, HttpRequest, HttpResponse
from ..pipeline.base import ChainStatus, ExecutionContext

logger = logging.getLogger(__name__)

DEFAULT_READ_TIMEOUT = 5.0
SUPPORTED_SCHEMES = frozenset({"http", "https"})

RawMessage = Union[str, bytes]

_LEADING_INT = re.compile(r"[+-]?\d+")


@runtime_checkable
class HttpTransport(Protocol):
    """
    Protocol for HTTP transports.

    A transport only performs raw I/O. It returns the raw message (header
    lines, a blank line, then the body) and remembers the status line so
    that get_response_code() can report it. Assembling the response is
    left to handle_with_transport().

    Lifecycle for one request:
        prepare_to_handle_new_request -> handle_request -> get_response_code -> tear_down

    tear_down() always runs, on success and on failure, so per-request state
    never leaks into the next request on the same instance.
    """

    name: str

    def is_available(self) -> bool:
        """Whether the underlying mechanism is present. Must not do I/O."""
        ...

    def can_handle(self, request: HttpRequest) -> bool:
        """Whether this transport supports the request's URL scheme."""
        ...

    def prepare_to_handle_new_request(self, request: HttpRequest) -> None:
        ...

    def handle_request(self, request: HttpRequest) -> Optional[RawMessage]:
        """
        Perform the request.

        Returns:
            The raw response without its status line. May be empty or None.

        Raises:
            RuntimeError: If the mechanism fails or times out
        """
        ...

    def get_response_code(self) -> int:
        ...

    def tear_down(self) -> None:
        ...


def parse_status_code(status_line: Optional[str]) -> int:
    """
    Extract the status code from an HTTP status line.

    The code token is parsed leniently: leading digits are used and a
    non-numeric token yields 0.

    Raises:
        RuntimeError: If the line has fewer than two tokens
    """
    pieces = (status_line or "").split()
    if len(pieces) < 2:
        raise RuntimeError(f"Invalid status line: {status_line}")

    match = _LEADING_INT.match(pieces[1])
    return int(match.group(0)) if match else 0


def build_default_headers(request: HttpRequest, user_agent: str) -> dict[str, str]:
    """Request headers plus User-Agent, Content-Type and Content-Length when missing."""
    headers = request.get_all_headers()
    lowered = {name.lower() for name in headers}

    if "user-agent" not in lowered:
        headers[HttpMessage.HTTP_HEADER_USER_AGENT] = user_agent

    if request.entity is not None:
        if request.entity.content_type and "content-type" not in lowered:
            headers[HttpMessage.HTTP_HEADER_CONTENT_TYPE] = request.entity.content_type
        if "content-length" not in lowered:
            headers[HttpMessage.HTTP_HEADER_CONTENT_LENGTH] = str(request.entity.content_length)

    return headers


def build_response(
    raw_response: Optional[RawMessage],
    request: HttpRequest,
    status_code: int,
    parser: HttpMessageParser,
    log: logging.Logger,
) -> HttpResponse:
    """
    Assemble a response from a raw message.

    Raises:
        RuntimeError: If no headers could be parsed from the message
    """
    headers_string = parser.get_headers_string_from_raw_http_message(raw_response)
    if not headers_string:
        raise RuntimeError("Could not parse headers from response")

    # may be None
    body = parser.get_body_string_from_raw_http_message(raw_response)
    headers = parser.get_array_of_headers_from_raw_header_string(headers_string)

    if not headers:
        raise RuntimeError(f"No headers in response from {request}")

    response = HttpResponse(status_code=status_code)
    log.debug(f"{request} returned HTTP {status_code}")

    for name, value in headers.items():
        response.set_header(name, value)

    if log.isEnabledFor(logging.DEBUG):
        all_headers = response.get_all_headers()
        log.debug(f"Here are the {len(all_headers)} headers in the response for {request}")
        for name, value in all_headers.items():
            log.debug(f"{name}: {value}")

    response.entity = HttpEntity(
        content=body,
        content_type=response.get_header_value(HttpMessage.HTTP_HEADER_CONTENT_TYPE),
    )
    return response


def handle_with_transport(
    transport: HttpTransport,
    request: HttpRequest,
    parser: HttpMessageParser,
    log: Optional[logging.Logger] = None,
) -> HttpResponse:
    """
    Run one request through a transport's full lifecycle.

    Tear down always runs. Failures are re-raised as RuntimeError after
    the transport has been torn down.

    Raises:
        RuntimeError: If any lifecycle step fails
    """
    log = log or logger

    try:
        log.debug(f"Preparing to handle {request}")
        transport.prepare_to_handle_new_request(request)

        log.debug(f"Now handling {request}")
        raw_response = transport.handle_request(request)

        log.debug(f"Assembling response from {request}")
        response = build_response(raw_response, request, transport.get_response_code(), parser, log)

    except RuntimeError as e:
        log.error(f"Caught exception when handling {request} ({e}). Will re-raise after tear down.")
        raise

    except Exception as e:
        log.error(f"Caught exception when handling {request} ({e}). Will re-raise after tear down.")
        raise RuntimeError(str(e)) from e

    finally:
        log.debug(f"Tearing down after {request}")
        transport.tear_down()

    log.debug(f"Successfully handled {request}")
    return response


class HttpExecutionCommand:
    """
    Adapts a transport to the execution chain.

    Declines requests the transport is unavailable for or cannot handle,
    otherwise runs the transport and publishes the response into the
    execution context.

    Example:
        command = HttpExecutionCommand(SocketTransport(), HttpMessageParser())
        ctx = ExecutionContext(request=HttpRequest("GET", "http://example.com"))

        if command.execute(ctx) is ChainStatus.HANDLED:
            print(ctx.response.status_code)
    """

    def __init__(
        self,
        transport: HttpTransport,
        parser: Optional[HttpMessageParser] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.transport = transport
        self._parser = parser or HttpMessageParser()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return self.transport.name

    def execute(self, ctx: ExecutionContext) -> ChainStatus:
        """
        Try to handle the request in the context.

        Returns:
            HANDLED with ctx.response set, or DECLINED with ctx untouched

        Raises:
            RuntimeError: If the transport accepted the request and failed
        """
        request = ctx.request
        self._logger.debug(f"{self.name}: seeing if able to handle {request}")

        if not self.transport.is_available() or not self.transport.can_handle(request):
            self._logger.debug(f"{self.name}: declined to handle {request}")
            return ChainStatus.DECLINED

        self._logger.debug(f"{self.name}: offered to handle {request}. Now initializing.")

        ctx.response = self.handle(request)
        ctx.transport_name = self.name
        return ChainStatus.HANDLED

    def handle(self, request: HttpRequest) -> HttpResponse:
        """Execute the request with this command's transport."""
        return handle_with_transport(self.transport, request, self._parser, self._logger)

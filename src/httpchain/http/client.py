"""Synchronous HTTP client facade."""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..decoding.content import ContentDecodingChain
from ..decoding.transfer import TransferDecodingChain
from ..models.config import ClientConfig
from ..models.events import EventEmitter, EventType, HttpEvent
from ..models.message import HttpRequest, HttpResponse
from ..pipeline.base import ChainStatus, TransportExecutionChain
from ..transports import build_transport_chain
from .protocols import HttpResponseDecoder, HttpResponseHandler


class HttpClient:
    """
    Executes requests through a transport chain and decodes the responses.

    Pipeline for every request:
    1. The transport execution chain picks the first available transport
       that can handle the request and assembles the response
    2. Each decoder (transfer coding, then content coding) rewrites the
       entity when the response calls for it
    3. The response is returned, or passed to a response handler

    Every failure surfaces as RuntimeError.

    Example:
        client = HttpClient.from_config(ClientConfig())

        response = client.execute(HttpRequest("GET", "https://example.com"))
        print(response.status_code, response.entity.text)

        body = client.execute_and_handle_response(
            HttpRequest("GET", "https://example.com"),
            SuccessfulResponseHandler(),
        )
    """

    def __init__(
        self,
        transport_chain: TransportExecutionChain,
        decoders: Optional[list[HttpResponseDecoder]] = None,
        emit: Optional[EventEmitter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            transport_chain: Chain of transports to execute requests with
            decoders: Decoders applied to every response, in order
            emit: Optional callback receiving HttpEvent notifications
            logger: Logger to use instead of the module logger
        """
        self._transport_chain = transport_chain
        self._decoders = list(decoders or [])
        self._emit = emit
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        emit: Optional[EventEmitter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> HttpClient:
        """Build a client with the configured transports and decoders."""
        decoders: list[HttpResponseDecoder] = []
        if config.decode_transfer_encoding:
            decoders.append(TransferDecodingChain(logger=logger))
        if config.decode_content_encoding:
            decoders.append(ContentDecodingChain(logger=logger))

        return cls(
            build_transport_chain(config, logger=logger),
            decoders=decoders,
            emit=emit,
            logger=logger,
        )

    def _notify(self, event: HttpEvent) -> None:
        if self._emit:
            self._emit(event)

    def execute(self, request: HttpRequest) -> HttpResponse:
        """
        Execute a request and return the decoded response.

        Raises:
            RuntimeError: If no transport could handle the request, the
                transport failed, or decoding failed
        """
        self._notify(HttpEvent(type=EventType.REQUEST_STARTED, request=request))

        try:
            ctx = self._transport_chain.run(request)
            response = ctx.response
            if response is None:
                raise RuntimeError(f"No HTTP transports could handle {request}")

            self._notify(
                HttpEvent(
                    type=EventType.RESPONSE_RECEIVED,
                    request=request,
                    response=response,
                    transport=ctx.transport_name,
                    message=f"HTTP {response.status_code}",
                )
            )

            for decoder in self._decoders:
                if not decoder.needs_to_be_decoded(response):
                    continue

                self._logger.debug(f"Running {decoder.name} decoder over response from {request}")
                if decoder.decode(response) is not ChainStatus.HANDLED:
                    continue

                self._notify(
                    HttpEvent(
                        type=EventType.RESPONSE_DECODED,
                        request=request,
                        response=response,
                        transport=ctx.transport_name,
                        decoder=decoder.name,
                    )
                )

            return response

        except RuntimeError as e:
            self._fail(request, e)
            raise

        except Exception as e:
            self._fail(request, e)
            raise RuntimeError(str(e)) from e

    def execute_and_handle_response(
        self,
        request: HttpRequest,
        handler: HttpResponseHandler,
    ) -> Union[bytes, str, None]:
        """
        Execute a request and pass the decoded response to a handler.

        Returns:
            Whatever the handler extracts, commonly the raw entity content.
            May be empty or None.

        Raises:
            RuntimeError: If execution fails or the handler rejects the response
        """
        response = self.execute(request)

        try:
            return handler.on_response(response)
        except RuntimeError:
            raise
        except Exception as e:
            self._logger.error(f"Response handler failed for {request}: {e}")
            raise RuntimeError(f"Response handler failed for {request}: {e}") from e

    def _fail(self, request: HttpRequest, error: Exception) -> None:
        self._logger.error(f"Failed to execute {request}: {error}")
        self._notify(
            HttpEvent(
                type=EventType.REQUEST_FAILED,
                request=request,
                error=str(error),
                message=f"Request failed: {error}",
            )
        )

"""Protocol definitions for the HTTP client's collaborators."""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

from ..models.message import HttpResponse
from ..pipeline.base import ChainStatus


@runtime_checkable
class HttpResponseHandler(Protocol):
    """
    Protocol for response handlers used by HttpClient.execute_and_handle_response().

    This abstraction allows for:
    - Extracting just the body from a response
    - Failing on unexpected status codes
    - Custom post-processing in calling code
    """

    def on_response(self, response: HttpResponse) -> Union[bytes, str, None]:
        """
        Handle a fully decoded response.

        Args:
            response: The response returned by the transport chain

        Returns:
            The raw entity content. May be empty or None.

        Raises:
            RuntimeError: If the response is not acceptable
        """
        ...


@runtime_checkable
class HttpResponseDecoder(Protocol):
    """
    Protocol for response decoders.

    Decoders rewrite the response entity in place and must leave the
    response untouched when needs_to_be_decoded() is False.
    """

    name: str

    def needs_to_be_decoded(self, response: HttpResponse) -> bool:
        ...

    def decode(self, response: HttpResponse) -> ChainStatus:
        """
        Decode the response entity in place.

        Returns:
            HANDLED if the entity was rewritten

        Raises:
            RuntimeError: If an applicable decoding fails
        """
        ...

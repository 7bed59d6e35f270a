"""Base classes for response decoding chains."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from ..models.message import HttpMessage, HttpResponse
from ..pipeline.base import ChainStatus


@dataclass
class DecodingContext:
    """
    Context passed through the steps of one decoder chain.

    Attributes:
        raw_response: The response whose entity is being decoded
        header_value: Value of the header that triggered decoding
        decoded_content: Set by the step that handled decoding
        consumed_codings: Codings the handling step undid; they are removed
            from the trigger header once the entity is rewritten
    """

    raw_response: HttpResponse
    header_value: str = ""
    decoded_content: Optional[bytes] = None
    consumed_codings: list[str] = field(default_factory=list)

    @property
    def content(self) -> bytes:
        entity = self.raw_response.entity
        return entity.content if entity is not None else b""

    @property
    def codings(self) -> list[str]:
        """Lower-cased codings listed in the trigger header."""
        return [part.strip().lower() for part in self.header_value.split(",") if part.strip()]


@runtime_checkable
class DecodeStep(Protocol):
    """
    Protocol for decoding steps.

    Contract:
    - Return DECLINED when the step does not apply to the listed coding.
    - Return HANDLED after setting ctx.decoded_content and recording the
      codings it undid in ctx.consumed_codings.
    - Return STOP when decoding must not happen at all (for example the
      content is already decoded). The response is left untouched.
    - Raise RuntimeError only when an applicable decoding fails.
    """

    name: str

    def execute(self, ctx: DecodingContext) -> ChainStatus:
        ...


class DecoderChain:
    """
    Decodes a response entity through a chain of steps triggered by one header.

    Steps run in order until one handles or stops decoding. If a step
    handles it, the decoded content replaces the entity content; its
    length follows automatically, its content type is re-copied from the
    response's Content-Type header, and the undone codings are removed
    from the trigger header (the header is dropped once it is empty).

    Example:
        chain = DecoderChain("Content-Encoding", [GzipContentDecoder()], name="content")

        if chain.needs_to_be_decoded(response):
            chain.decode(response)
    """

    def __init__(
        self,
        header_name: str,
        steps: list[DecodeStep],
        name: str = "decoder",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.header_name = header_name
        self.steps = list(steps)
        self.name = name
        self._logger = logger or logging.getLogger(__name__)

    def needs_to_be_decoded(self, response: HttpResponse) -> bool:
        """Whether the response has content and carries this chain's header."""
        entity = response.entity

        if entity is None:
            self._logger.debug("Response contains no entity")
            return False

        if not entity.content:
            self._logger.debug("Response entity contains no content")
            return False

        if response.get_header_value(self.header_name) is None:
            self._logger.debug(f"Response does not contain {self.header_name} header. No need to decode.")
            return False

        self._logger.debug(f"Response contains {self.header_name} header. Will attempt decode.")
        return True

    def decode(self, response: HttpResponse) -> ChainStatus:
        """
        Decode the response entity in place.

        Returns:
            HANDLED if the entity was rewritten, DECLINED or STOP otherwise

        Raises:
            RuntimeError: If an applicable decoding step fails
        """
        entity = response.entity
        if entity is None or not self.needs_to_be_decoded(response):
            return ChainStatus.DECLINED

        ctx = DecodingContext(
            raw_response=response,
            header_value=response.get_header_value(self.header_name) or "",
        )

        status = ChainStatus.DECLINED
        for step in self.steps:
            status = step.execute(ctx)
            if status is not ChainStatus.DECLINED:
                self._logger.debug(f"{self.name}: step {step.name} returned {status.value}")
                break

        if status is not ChainStatus.HANDLED:
            return status

        if ctx.decoded_content is None:
            raise RuntimeError(f"{self.name}: step {step.name} handled decoding without producing content")

        entity.content = ctx.decoded_content
        self._consume_codings(response, ctx)

        content_type = response.get_header_value(HttpMessage.HTTP_HEADER_CONTENT_TYPE)
        if content_type is not None:
            entity.content_type = content_type

        self._logger.debug(f"{self.name}: decoded entity is now {entity.content_length} bytes")
        return ChainStatus.HANDLED

    def _consume_codings(self, response: HttpResponse, ctx: DecodingContext) -> None:
        """Remove the codings the handling step undid from the trigger header."""
        if not ctx.consumed_codings:
            return

        remaining = [coding for coding in ctx.codings if coding not in ctx.consumed_codings]
        if remaining:
            response.set_header(self.header_name, ", ".join(remaining))
        else:
            response.remove_header(self.header_name)

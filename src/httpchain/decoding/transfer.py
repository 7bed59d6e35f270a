"""Transfer-Encoding decoding chain."""

import logging
import re
from typing import Optional

from ..models.message import HttpMessage
from ..pipeline.base import ChainStatus
from .base import DecoderChain, DecodeStep, DecodingContext

logger = logging.getLogger(__name__)

# chunk-size [ chunk-ext ] CRLF
_CHUNK_SIZE_LINE = re.compile(rb"([0-9a-fA-F]+)[ \t]*(?:;[^\r\n]*)?\r?\n")
_LINE_END = re.compile(rb"\r?\n")


def decode_chunked(content: bytes) -> bytes:
    """
    Reassemble a chunked message body. Trailer fields are discarded.

    Raises:
        RuntimeError: If a chunk size line is malformed or a chunk is truncated
    """
    decoded = bytearray()
    position = 0

    while True:
        match = _CHUNK_SIZE_LINE.match(content, position)
        if match is None:
            raise RuntimeError(f"Malformed chunk size line at byte {position} of chunked body")

        size = int(match.group(1), 16)
        position = match.end()
        if size == 0:
            break

        chunk = content[position : position + size]
        if len(chunk) < size:
            raise RuntimeError(f"Truncated chunk in chunked body: expected {size} bytes, got {len(chunk)}")

        decoded += chunk
        position += size

        line_end = _LINE_END.match(content, position)
        if line_end is None:
            raise RuntimeError(f"Missing line break after chunk ending at byte {position} of chunked body")
        position = line_end.end()

    return bytes(decoded)


class ChunkedTransferDecoder:
    """
    Decodes chunked transfer coding.

    Once decoded, "chunked" is removed from Transfer-Encoding, so the
    body is never de-chunked twice. A body that does not start with a
    chunk size line was de-chunked before it got here (most HTTP libraries
    do this themselves), so decoding is stopped rather than attempted.
    """

    name = "chunked"

    def execute(self, ctx: DecodingContext) -> ChainStatus:
        if "chunked" not in ctx.codings:
            return ChainStatus.DECLINED

        if _CHUNK_SIZE_LINE.match(ctx.content) is None:
            logger.debug("Transfer-Encoding is chunked but the body is not. Assuming it is already decoded.")
            return ChainStatus.STOP

        ctx.decoded_content = decode_chunked(ctx.content)
        ctx.consumed_codings.append("chunked")
        return ChainStatus.HANDLED


class TransferDecodingChain(DecoderChain):
    """Decoder chain for the Transfer-Encoding header."""

    def __init__(
        self,
        steps: Optional[list[DecodeStep]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(
            HttpMessage.HTTP_HEADER_TRANSFER_ENCODING,
            steps if steps is not None else [ChunkedTransferDecoder()],
            name="transfer",
            logger=logger,
        )

"""Content-Encoding decoding chain."""

import gzip
import logging
import zlib
from typing import Optional

from ..models.message import HttpMessage
from ..pipeline.base import ChainStatus
from .base import DecoderChain, DecodeStep, DecodingContext

logger = logging.getLogger(__name__)


class IdentityContentDecoder:
    """The identity coding means there is nothing to decode."""

    name = "identity"

    def execute(self, ctx: DecodingContext) -> ChainStatus:
        if ctx.codings == ["identity"]:
            return ChainStatus.STOP
        return ChainStatus.DECLINED


class GzipContentDecoder:
    """Decompresses gzip content coding."""

    name = "gzip"
    CODINGS = frozenset({"gzip", "x-gzip"})

    def execute(self, ctx: DecodingContext) -> ChainStatus:
        if not self.CODINGS.intersection(ctx.codings):
            return ChainStatus.DECLINED

        try:
            ctx.decoded_content = gzip.decompress(ctx.content)
        except (OSError, EOFError, zlib.error) as e:
            raise RuntimeError(f"Could not gzip-decode response entity: {e}") from e

        ctx.consumed_codings.extend(self.CODINGS.intersection(ctx.codings))
        return ChainStatus.HANDLED


class DeflateContentDecoder:
    """
    Decompresses deflate content coding.

    Servers disagree on whether "deflate" means zlib-wrapped or raw
    deflate data, so both are accepted.
    """

    name = "deflate"

    def execute(self, ctx: DecodingContext) -> ChainStatus:
        if "deflate" not in ctx.codings:
            return ChainStatus.DECLINED

        try:
            ctx.decoded_content = zlib.decompress(ctx.content)
        except zlib.error:
            logger.debug("Content is not zlib-wrapped, trying raw deflate")
            try:
                ctx.decoded_content = zlib.decompress(ctx.content, -zlib.MAX_WBITS)
            except zlib.error as e:
                raise RuntimeError(f"Could not deflate-decode response entity: {e}") from e

        ctx.consumed_codings.append("deflate")
        return ChainStatus.HANDLED


class ContentDecodingChain(DecoderChain):
    """Decoder chain for the Content-Encoding header."""

    def __init__(
        self,
        steps: Optional[list[DecodeStep]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if steps is None:
            steps = [IdentityContentDecoder(), GzipContentDecoder(), DeflateContentDecoder()]

        super().__init__(
            HttpMessage.HTTP_HEADER_CONTENT_ENCODING,
            steps,
            name="content",
            logger=logger,
        )

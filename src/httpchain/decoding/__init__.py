"""Decoder chains that post-process response entities."""

from .base import DecoderChain, DecodeStep, DecodingContext
from .content import ContentDecodingChain, DeflateContentDecoder, GzipContentDecoder, IdentityContentDecoder
from .transfer import ChunkedTransferDecoder, TransferDecodingChain, decode_chunked

__all__ = [
    "ChunkedTransferDecoder",
    "ContentDecodingChain",
    "DecodeStep",
    "DecoderChain",
    "DecodingContext",
    "DeflateContentDecoder",
    "GzipContentDecoder",
    "IdentityContentDecoder",
    "TransferDecodingChain",
    "decode_chunked",
]

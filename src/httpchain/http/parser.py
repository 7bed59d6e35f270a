"""Parsing of raw HTTP/1.x messages."""

from __future__ import annotations

import re
from typing import AnyStr, Optional, Union

from ..models.message import HeaderValue, HttpMessage

HEADER_BODY_SEPARATOR = "\r\n\r\n"
HEADER_LINE_ENDING = "\r\n"

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


class HttpMessageParser:
    """
    Splits raw HTTP messages into headers and body, and converts header
    blocks to and from their wire form.

    Parsing is lenient: malformed header lines are dropped instead of
    failing the whole message. Raw messages may be ``str`` or ``bytes``;
    header and body strings are returned in the same type they came in.

    Example:
        parser = HttpMessageParser()
        raw = b"Content-Type: text/plain\\r\\n\\r\\nhello"

        parser.get_headers_string_from_raw_http_message(raw)  # b"Content-Type: text/plain"
        parser.get_body_string_from_raw_http_message(raw)     # b"hello"
    """

    @staticmethod
    def _separator(raw: AnyStr) -> AnyStr:
        return HEADER_BODY_SEPARATOR.encode("ascii") if isinstance(raw, bytes) else HEADER_BODY_SEPARATOR  # type: ignore[return-value]

    def get_headers_string_from_raw_http_message(self, raw: Optional[AnyStr]) -> Optional[AnyStr]:
        """
        Return everything before the first blank line.

        A message without a blank line is treated as all headers.
        """
        if raw is None:
            return None

        headers, found, _ = raw.partition(self._separator(raw))
        return headers if found else raw

    def get_body_string_from_raw_http_message(self, raw: Optional[AnyStr]) -> Optional[AnyStr]:
        """Return everything after the first blank line, or None if there is none."""
        if raw is None:
            return None

        _, found, body = raw.partition(self._separator(raw))
        return body if found else None

    def get_array_of_headers_from_raw_header_string(
        self, raw: Union[str, bytes, None]
    ) -> dict[str, HeaderValue]:
        """
        Parse a raw header block into an ordered mapping.

        Lines without a colon, or with an empty name or value, are skipped.
        A header seen once maps to its value; a repeated header maps to the
        list of its values in the order they appeared.

        Args:
            raw: Header block, one "Name: Value" per line

        Returns:
            Mapping of header name to value(s)
        """
        headers: dict[str, HeaderValue] = {}
        if not raw:
            return headers

        if isinstance(raw, bytes):
            # HTTP/1.x header octets map one-to-one onto ISO-8859-1
            raw = raw.decode("iso-8859-1")

        for line in _LINE_BREAK.split(raw):
            name, found, value = line.partition(":")
            name = name.strip()
            value = value.strip()

            if not found or not name or not value:
                continue

            existing = headers.get(name)
            if existing is None:
                headers[name] = value
            elif isinstance(existing, list):
                existing.append(value)
            else:
                headers[name] = [existing, value]

        return headers

    def get_header_array_as_string(self, message: HttpMessage) -> str:
        """Serialize a message's headers to wire form, one line per header."""
        return "".join(
            f"{name}: {value}{HEADER_LINE_ENDING}" for name, value in message.get_all_headers().items()
        )

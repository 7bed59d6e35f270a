"""Tests for HttpMessageParser."""

import pytest
from httpchain.http.parser import HttpMessageParser
from httpchain.models.message import HttpRequest, HttpResponse


@pytest.fixture
def parser():
    return HttpMessageParser()


class TestHeadersString:
    """Tests for splitting the header block off a raw message."""

    def test_headers_before_separator(self, parser):
        """Test that the header block ends at the first blank line."""
        assert parser.get_headers_string_from_raw_http_message("headers\r\n\r\nHeaders") == "headers"

    def test_message_without_separator_is_all_headers(self, parser):
        """Test that a message without a blank line is returned unchanged."""
        assert parser.get_headers_string_from_raw_http_message("something") == "something"

    def test_none_message(self, parser):
        """Test that None yields None."""
        assert parser.get_headers_string_from_raw_http_message(None) is None

    def test_bytes_message(self, parser):
        """Test that bytes in gives bytes out."""
        raw = b"Content-Type: text/plain\r\n\r\nhello"
        assert parser.get_headers_string_from_raw_http_message(raw) == b"Content-Type: text/plain"

    def test_only_first_separator_splits(self, parser):
        """Test that later blank lines belong to the body."""
        raw = "a: b\r\n\r\nbody\r\n\r\nmore"
        assert parser.get_headers_string_from_raw_http_message(raw) == "a: b"
        assert parser.get_body_string_from_raw_http_message(raw) == "body\r\n\r\nmore"


class TestBodyString:
    """Tests for extracting the body from a raw message."""

    def test_body_after_separator(self, parser):
        """Test that the body starts after the first blank line."""
        assert parser.get_body_string_from_raw_http_message("headers\r\n\r\nbody") == "body"

    def test_message_without_separator_has_no_body(self, parser):
        """Test that a message without a blank line has no body."""
        assert parser.get_body_string_from_raw_http_message("something") is None

    def test_none_message(self, parser):
        """Test that None yields None."""
        assert parser.get_body_string_from_raw_http_message(None) is None

    def test_empty_body(self, parser):
        """Test that a trailing separator gives an empty body, not None."""
        assert parser.get_body_string_from_raw_http_message("a: b\r\n\r\n") == ""

    @pytest.mark.parametrize(
        "headers,body",
        [
            ("Content-Type: text/plain", "hello"),
            ("X-A: 1\r\nX-B: 2", ""),
            ("Server: test", "line one\r\nline two"),
        ],
    )
    def test_split_recovers_both_halves(self, parser, headers, body):
        """Test that headers + separator + body splits back into its parts."""
        raw = headers + "\r\n\r\n" + body
        assert parser.get_headers_string_from_raw_http_message(raw) == headers
        assert parser.get_body_string_from_raw_http_message(raw) == body


class TestHeaderArray:
    """Tests for parsing a header block into a mapping."""

    def test_none_header_string(self, parser):
        """Test that None yields an empty mapping."""
        assert parser.get_array_of_headers_from_raw_header_string(None) == {}

    def test_empty_header_string(self, parser):
        """Test that an empty string yields an empty mapping."""
        assert parser.get_array_of_headers_from_raw_header_string("") == {}

    def test_string_without_headers(self, parser):
        """Test that lines without a colon are ignored."""
        result = parser.get_array_of_headers_from_raw_header_string("this is a string with nothing in it")
        assert result == {}

    def test_bad_lines_are_skipped(self, parser):
        """Test that malformed lines are dropped and good ones kept."""
        raw = "Header: Value\r\ntthis is a string with nothing in it\r\nAnother: \theader\r\nHeader21:\r\n"
        assert parser.get_array_of_headers_from_raw_header_string(raw) == {
            "Header": "Value",
            "Another": "header",
        }

    def test_repeated_headers_accumulate(self, parser):
        """Test that repeated names collect their values in order."""
        raw = "Header: Value\r\nAnother: \theader\r\nHeader: something else\r\n"
        assert parser.get_array_of_headers_from_raw_header_string(raw) == {
            "Header": ["Value", "something else"],
            "Another": "header",
        }

    def test_empty_name_is_skipped(self, parser):
        """Test that a line starting with a colon is dropped."""
        assert parser.get_array_of_headers_from_raw_header_string(": value\r\nA: b") == {"A": "b"}

    def test_value_split_on_first_colon(self, parser):
        """Test that colons inside the value are kept."""
        result = parser.get_array_of_headers_from_raw_header_string("Location: http://example.com:8080/x")
        assert result == {"Location": "http://example.com:8080/x"}

    def test_status_line_is_skipped(self, parser):
        """Test that a leading status line does not become a header."""
        result = parser.get_array_of_headers_from_raw_header_string("HTTP/1.1 200 OK\r\nContent-Type: text/plain")
        assert result == {"Content-Type": "text/plain"}

    def test_bytes_header_string(self, parser):
        """Test that byte header blocks are decoded as ISO-8859-1."""
        result = parser.get_array_of_headers_from_raw_header_string(b"X-Name: caf\xe9\r\n")
        assert result == {"X-Name": "café"}

    def test_insertion_order_preserved(self, parser):
        """Test that headers keep the order they arrived in."""
        result = parser.get_array_of_headers_from_raw_header_string("B: 1\r\nA: 2\r\nC: 3")
        assert list(result) == ["B", "A", "C"]


class TestHeaderArrayAsString:
    """Tests for serializing headers back to wire form."""

    def test_response_headers(self, parser):
        """Test one line per header, in insertion order."""
        message = HttpResponse()
        message.set_header("one", "two")
        message.set_header("three", "four")

        assert parser.get_header_array_as_string(message) == "one: two\r\nthree: four\r\n"

    def test_multi_value_header_is_one_line(self, parser):
        """Test that list values are joined with a comma."""
        message = HttpResponse()
        message.set_header("Accept", ["text/html", "text/plain"])

        assert parser.get_header_array_as_string(message) == "Accept: text/html, text/plain\r\n"

    def test_request_without_headers(self, parser):
        """Test that a message without headers serializes to an empty string."""
        assert parser.get_header_array_as_string(HttpRequest("GET", "http://example.com")) == ""

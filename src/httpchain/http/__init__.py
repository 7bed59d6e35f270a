"""HTTP message parsing, response handlers and the client facade."""

# parser must load before client: transports import it while client is importing
from .parser import HttpMessageParser
from .protocols import HttpResponseDecoder, HttpResponseHandler
from .handlers import EntityContentHandler, SuccessfulResponseHandler
from .client import HttpClient

__all__ = [
    "EntityContentHandler",
    "HttpClient",
    "HttpMessageParser",
    "HttpResponseDecoder",
    "HttpResponseHandler",
    "SuccessfulResponseHandler",
]

"""
httpchain - Execute HTTP requests through a chain of interchangeable transports.

Usage:
    from httpchain import ClientConfig, HttpClient, HttpRequest

    client = HttpClient.from_config(ClientConfig())
    response = client.execute(HttpRequest("GET", "https://example.com"))

    print(response.status_code)
    print(response.get_header_value("Content-Type"))
    print(response.entity.text)
"""

__version__ = "1.0.0"

from .decoding import ContentDecodingChain, DecoderChain, TransferDecodingChain
from .http import (
    EntityContentHandler,
    HttpClient,
    HttpMessageParser,
    HttpResponseDecoder,
    HttpResponseHandler,
    SuccessfulResponseHandler,
)
from .listeners import EventDispatcher, RequestLoggingListener, ResponseLoggingListener
from .logging_config import setup_logging
from .models import (
    ClientConfig,
    EventType,
    HttpEntity,
    HttpEvent,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    TransportName,
    Url,
)
from .pipeline import ChainStatus, TransportExecutionChain
from .transports import (
    HttpExecutionCommand,
    HttpTransport,
    RequestsTransport,
    SocketTransport,
    UrllibTransport,
    build_transport_chain,
)

__all__ = [
    "__version__",
    # Client
    "HttpClient",
    "HttpMessageParser",
    "EntityContentHandler",
    "SuccessfulResponseHandler",
    "HttpResponseHandler",
    "HttpResponseDecoder",
    # Messages
    "HttpEntity",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "Url",
    # Config
    "ClientConfig",
    "TransportName",
    # Transports
    "ChainStatus",
    "HttpExecutionCommand",
    "HttpTransport",
    "RequestsTransport",
    "SocketTransport",
    "TransportExecutionChain",
    "UrllibTransport",
    "build_transport_chain",
    # Decoding
    "ContentDecodingChain",
    "DecoderChain",
    "TransferDecodingChain",
    # Events
    "EventDispatcher",
    "EventType",
    "HttpEvent",
    "RequestLoggingListener",
    "ResponseLoggingListener",
    "setup_logging",
]

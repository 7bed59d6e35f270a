"""httpchain message, configuration and event models."""

from .config import DEFAULT_TRANSPORT_ORDER, ClientConfig, TransportName
from .events import EventEmitter, EventType, HttpEvent
from .message import HttpEntity, HttpMessage, HttpMethod, HttpRequest, HttpResponse, Url

__all__ = [
    # Messages
    "HttpEntity",
    "HttpMessage",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "Url",
    # Config
    "ClientConfig",
    "DEFAULT_TRANSPORT_ORDER",
    "TransportName",
    # Events
    "EventEmitter",
    "EventType",
    "HttpEvent",
]

"""Event types emitted while executing HTTP requests."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from .message import HttpRequest, HttpResponse


class EventType(str, Enum):
    """Types of events emitted by the HTTP client."""

    REQUEST_STARTED = "request_started"
    RESPONSE_RECEIVED = "response_received"
    RESPONSE_DECODED = "response_decoded"
    REQUEST_FAILED = "request_failed"


@dataclass
class HttpEvent:
    """
    Event emitted during request execution.

    Example:
        def on_event(event: HttpEvent) -> None:
            if event.type == EventType.RESPONSE_RECEIVED:
                print(f"{event.request}: HTTP {event.response.status_code} via {event.transport}")
            elif event.type == EventType.REQUEST_FAILED:
                print(f"Error: {event.request} - {event.error}")

        client = HttpClient.from_config(ClientConfig(), emit=on_event)
    """

    type: EventType
    request: HttpRequest

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    response: Optional[HttpResponse] = None
    transport: Optional[str] = None
    decoder: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.type == EventType.REQUEST_FAILED


# Type alias for event emitter function
EventEmitter = Callable[[HttpEvent], None]

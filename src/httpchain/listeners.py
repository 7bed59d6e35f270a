"""Event listeners that log request and response activity."""

import logging
from typing import Optional

from .models.events import EventEmitter, EventType, HttpEvent


class RequestLoggingListener:
    """Logs each request as it starts and when it fails."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def __call__(self, event: HttpEvent) -> None:
        if event.type == EventType.REQUEST_STARTED:
            self._logger.info(f"Executing {event.request}")
        elif event.type == EventType.REQUEST_FAILED:
            self._logger.warning(f"Failed {event.request}: {event.error}")


class ResponseLoggingListener:
    """
    Logs responses as they arrive from a transport.

    Status is logged at INFO; headers and entity details at DEBUG.

    Example:
        client = HttpClient.from_config(config, emit=ResponseLoggingListener())
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def __call__(self, event: HttpEvent) -> None:
        if event.type != EventType.RESPONSE_RECEIVED or event.response is None:
            return

        response = event.response
        self._logger.info(f"{event.request} returned HTTP {response.status_code} via {event.transport}")

        if not self._logger.isEnabledFor(logging.DEBUG):
            return

        for name, value in response.get_all_headers().items():
            self._logger.debug(f"{name}: {value}")

        if response.entity is None:
            self._logger.debug("Response has no entity")
        else:
            self._logger.debug(
                f"Entity is {response.entity.content_length} bytes of {response.entity.content_type or 'unknown type'}"
            )


class EventDispatcher:
    """Fans one event out to several listeners, in registration order."""

    def __init__(self, *listeners: EventEmitter) -> None:
        self.listeners = list(listeners)

    def add_listener(self, listener: EventEmitter) -> "EventDispatcher":
        self.listeners.append(listener)
        return self

    def __call__(self, event: HttpEvent) -> None:
        for listener in self.listeners:
            listener(event)

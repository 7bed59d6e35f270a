"""HTTP transports and the execution chain built from them."""

import logging
from typing import Optional

from ..http.parser import HttpMessageParser
from ..models.config import ClientConfig, TransportName
from ..pipeline.base import TransportExecutionChain
from .base import (
    DEFAULT_READ_TIMEOUT,
    HttpExecutionCommand,
    HttpTransport,
    handle_with_transport,
    parse_status_code,
)
from .requests_transport import RequestsTransport
from .socket_transport import SocketTransport
from .urllib_transport import UrllibTransport

TRANSPORTS: dict[TransportName, type] = {
    TransportName.REQUESTS: RequestsTransport,
    TransportName.URLLIB: UrllibTransport,
    TransportName.SOCKET: SocketTransport,
}


def create_transport(name: TransportName, config: ClientConfig) -> HttpTransport:
    """Instantiate a built-in transport configured from the client config."""
    transport_class = TRANSPORTS[TransportName(name)]
    transport: HttpTransport = transport_class(
        read_timeout=config.read_timeout,
        user_agent=config.user_agent,
    )
    return transport


def build_transport_chain(
    config: ClientConfig,
    parser: Optional[HttpMessageParser] = None,
    logger: Optional[logging.Logger] = None,
) -> TransportExecutionChain:
    """
    Build the execution chain for the transports listed in the config.

    Args:
        config: Client configuration (transport order, timeout, user agent)
        parser: Message parser shared by all commands
        logger: Logger injected into the chain and its commands

    Returns:
        TransportExecutionChain trying transports in configured order
    """
    parser = parser or HttpMessageParser()
    commands = [
        HttpExecutionCommand(create_transport(name, config), parser, logger)
        for name in config.transports
    ]
    return TransportExecutionChain(commands, logger=logger)


__all__ = [
    "DEFAULT_READ_TIMEOUT",
    "HttpExecutionCommand",
    "HttpTransport",
    "RequestsTransport",
    "SocketTransport",
    "TRANSPORTS",
    "UrllibTransport",
    "build_transport_chain",
    "create_transport",
    "handle_with_transport",
    "parse_status_code",
]

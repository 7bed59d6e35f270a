"""Chain-of-responsibility primitives and the transport execution chain."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from ..models.message import HttpRequest, HttpResponse


class ChainStatus(str, Enum):
    """
    Outcome of one command in a chain.

    HANDLED: the command completed the work; the chain stops.
    DECLINED: the command did not participate; the next command runs.
    STOP: the command aborted the chain; no result is produced.
    """

    HANDLED = "handled"
    DECLINED = "declined"
    STOP = "stop"


@dataclass
class ExecutionContext:
    """
    Context passed through the transport execution chain.

    Created fresh for every request and discarded once the chain returns.

    Attributes:
        request: The request being executed
        response: Set by the command that handled the request
        transport_name: Name of the transport that handled the request
    """

    request: HttpRequest
    response: Optional[HttpResponse] = None
    transport_name: Optional[str] = None


@runtime_checkable
class ExecutionCommand(Protocol):
    """
    Protocol for transport execution commands.

    Contract:
    - Return ChainStatus.DECLINED without touching the context when the
      command cannot take the request.
    - Return ChainStatus.HANDLED after publishing ctx.response.
    - Raise RuntimeError when handling was attempted and failed.
    """

    name: str

    def execute(self, ctx: ExecutionContext) -> ChainStatus:
        ...


class TransportExecutionChain:
    """
    Ordered list of execution commands, one per transport.

    Commands are tried in order until one handles the request. A command
    that declines passes the request on; a command that fails raises
    immediately and the remaining commands are never tried.

    Example:
        chain = TransportExecutionChain([
            HttpExecutionCommand(RequestsTransport(), parser),
            HttpExecutionCommand(SocketTransport(), parser),
        ])
        response = chain.execute(HttpRequest("GET", "http://example.com"))
    """

    def __init__(
        self,
        commands: list[ExecutionCommand],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.commands = list(commands)
        self._logger = logger or logging.getLogger(__name__)

    def run(self, request: HttpRequest) -> ExecutionContext:
        """
        Run the request through the chain and return the final context.

        Raises:
            RuntimeError: If no transport handles the request, or the
                transport that took it failed
        """
        ctx = ExecutionContext(request=request)
        status = ChainStatus.DECLINED

        for command in self.commands:
            status = command.execute(ctx)
            if status is ChainStatus.HANDLED:
                break
            if status is ChainStatus.STOP:
                self._logger.debug(f"{command.name} stopped the chain for {request}")
                break

        if status is not ChainStatus.HANDLED or ctx.response is None:
            raise RuntimeError(f"No HTTP transports could handle {request}")

        self._logger.debug(f"{request} handled by {ctx.transport_name}")
        return ctx

    def execute(self, request: HttpRequest) -> HttpResponse:
        """
        Execute a request through the first transport that accepts it.

        Raises:
            RuntimeError: If no transport handles the request, or the
                transport that took it failed
        """
        ctx = self.run(request)
        if ctx.response is None:
            raise RuntimeError(f"No HTTP transports could handle {request}")
        return ctx.response

    def add_command(self, command: ExecutionCommand) -> "TransportExecutionChain":
        """Append a command to the chain (fluent API)."""
        self.commands.append(command)
        return self

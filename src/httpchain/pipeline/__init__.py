"""Chain-of-responsibility pipeline for request execution."""

from .base import ChainStatus, ExecutionCommand, ExecutionContext, TransportExecutionChain

__all__ = ["ChainStatus", "ExecutionCommand", "ExecutionContext", "TransportExecutionChain"]

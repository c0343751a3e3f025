"""Out-of-process transports for the channel messenger."""

from hostbridge.transport.stdio import StdioBridgeServer

__all__ = ["StdioBridgeServer"]

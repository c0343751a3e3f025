"""Method-channel primitives: call/result models, codec, messenger, registrar."""

from hostbridge.channel.protocol import (
    NOT_IMPLEMENTED,
    CallError,
    CallResult,
    MethodCall,
    MethodNotImplemented,
    Success,
)
from hostbridge.channel.messenger import BinaryMessenger
from hostbridge.channel.method_channel import MethodCallHandler, MethodChannel
from hostbridge.channel.registrar import ChannelRegistrar

__all__ = [
    "NOT_IMPLEMENTED",
    "BinaryMessenger",
    "CallError",
    "CallResult",
    "ChannelRegistrar",
    "MethodCall",
    "MethodCallHandler",
    "MethodChannel",
    "MethodNotImplemented",
    "Success",
]

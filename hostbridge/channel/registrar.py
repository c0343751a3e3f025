"""Channel registrar: one handler per channel name on one engine attachment."""

from __future__ import annotations

from loguru import logger

from hostbridge.channel.messenger import BinaryMessenger
from hostbridge.channel.method_channel import MethodCallHandler, MethodChannel
from hostbridge.utils.exceptions import EngineDetachedError


class ChannelRegistrar:
    """Binds channel names to method-call handlers on a single messenger.

    Registering again with the same handler is a no-op; registering a
    different handler replaces the previous one without an explicit unbind.
    """

    def __init__(self, messenger: BinaryMessenger):
        self._messenger = messenger
        self._channels: dict[str, MethodChannel] = {}
        self._handlers: dict[str, MethodCallHandler] = {}

    def register(self, channel_name: str, handler: MethodCallHandler) -> None:
        if self._messenger.closed:
            raise EngineDetachedError(self._messenger.name)
        current = self._handlers.get(channel_name)
        if current is not None and current == handler:
            return
        channel = self._channels.get(channel_name)
        if channel is None:
            channel = MethodChannel(self._messenger, channel_name)
            self._channels[channel_name] = channel
        channel.set_method_call_handler(handler)
        self._handlers[channel_name] = handler
        if current is None:
            logger.debug("Registered handler for channel {} on engine {}", channel_name, self._messenger.name)
        else:
            logger.debug("Replaced handler for channel {} on engine {}", channel_name, self._messenger.name)

    def unregister(self, channel_name: str) -> bool:
        """Remove the binding for ``channel_name``; returns whether one existed."""
        channel = self._channels.pop(channel_name, None)
        self._handlers.pop(channel_name, None)
        if channel is None:
            return False
        if not self._messenger.closed:
            channel.set_method_call_handler(None)
        return True

    def clear(self) -> None:
        for name in list(self._channels):
            self.unregister(name)

    def handler_for(self, channel_name: str) -> MethodCallHandler | None:
        return self._handlers.get(channel_name)

    def channel_names(self) -> list[str]:
        return sorted(self._channels)

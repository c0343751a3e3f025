"""Engine attachments and the host activity that owns them.

A ``HostEngine`` is one attachment of the embedded runtime: it owns a
messenger and the registrar of handlers on it. A ``HostActivity`` owns the
launch context and configures each engine it attaches; recreating the engine
tears the previous attachment down so its handlers never see another call.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping

from loguru import logger

from hostbridge.channel.messenger import BinaryMessenger
from hostbridge.channel.method_channel import MethodChannel
from hostbridge.channel.registrar import ChannelRegistrar
from hostbridge.constants import CHANNEL_NAME
from hostbridge.dispatch.dispatcher import CallDispatcher
from hostbridge.dispatch.methods import HostAccessor
from hostbridge.launch_context import LaunchContext
from hostbridge.utils.exceptions import EngineDetachedError


class HostEngine:
    """One embedded-runtime attachment."""

    def __init__(self, *, engine_id: str | None = None, queue_maxsize: int = 0):
        self.engine_id = engine_id or uuid.uuid4().hex[:8]
        self.messenger = BinaryMessenger(name=self.engine_id, queue_maxsize=queue_maxsize)
        self.registrar = ChannelRegistrar(self.messenger)

    def __repr__(self) -> str:
        return f"HostEngine(engine_id={self.engine_id!r}, attached={self.attached})"

    @property
    def attached(self) -> bool:
        return not self.messenger.closed

    def channel(self, name: str) -> MethodChannel:
        """Embedded-side handle for invoking methods on ``name``."""
        if not self.attached:
            raise EngineDetachedError(self.engine_id)
        return MethodChannel(self.messenger, name)

    async def detach(self) -> None:
        if not self.attached:
            return
        self.registrar.clear()
        await self.messenger.close()
        logger.info("Engine {} detached", self.engine_id)


class HostActivity:
    """Owns the launch context and the current engine attachment."""

    def __init__(
        self,
        launch_context: LaunchContext | None = None,
        *,
        channel_name: str = CHANNEL_NAME,
        methods: Mapping[str, HostAccessor] | None = None,
        queue_maxsize: int = 0,
    ):
        self.launch_context = launch_context if launch_context is not None else LaunchContext()
        self.channel_name = channel_name
        self._methods = dict(methods) if methods is not None else None
        self._queue_maxsize = queue_maxsize
        self._engine: HostEngine | None = None
        self._dispatcher: CallDispatcher | None = None

    @property
    def engine(self) -> HostEngine | None:
        return self._engine

    @property
    def dispatcher(self) -> CallDispatcher | None:
        return self._dispatcher

    def configure_engine(self, engine: HostEngine) -> None:
        """Register the bridge channel on a freshly created engine."""
        dispatcher = CallDispatcher(self.launch_context, methods=self._methods)
        engine.registrar.register(self.channel_name, dispatcher.handle)
        self._dispatcher = dispatcher
        logger.info(
            "Configured engine {} with channel {} ({} methods)",
            engine.engine_id,
            self.channel_name,
            len(dispatcher.methods()),
        )

    async def attach(self) -> HostEngine:
        """Create and configure a new engine, detaching any previous one first."""
        await self.detach()
        engine = HostEngine(queue_maxsize=self._queue_maxsize)
        self.configure_engine(engine)
        self._engine = engine
        return engine

    async def recreate(self) -> HostEngine:
        return await self.attach()

    async def detach(self) -> None:
        engine, self._engine = self._engine, None
        self._dispatcher = None
        if engine is not None:
            await engine.detach()

    async def __aenter__(self) -> HostEngine:
        return await self.attach()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.detach()

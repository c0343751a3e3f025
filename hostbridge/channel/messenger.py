"""Engine-scoped binary messenger with a single ordered dispatch queue."""

from __future__ import annotations

import asyncio
import inspect
from contextlib import suppress
from dataclasses import dataclass
from typing import Awaitable, Callable

from loguru import logger

from hostbridge.utils.exceptions import EngineDetachedError, sanitize_error_message


BinaryReply = bytes | None
BinaryHandler = Callable[[bytes | None], Awaitable[BinaryReply] | BinaryReply]


@dataclass(slots=True)
class _PendingMessage:
    channel: str
    message: bytes | None
    reply: asyncio.Future[BinaryReply]


class BinaryMessenger:
    """Delivers channel messages to handlers one at a time, in send order.

    Every ``send`` resolves with exactly one reply. ``None`` means nobody
    answered: no handler was bound, the handler raised, or the messenger was
    closed while the message was still queued.
    """

    def __init__(self, *, name: str = "engine", queue_maxsize: int = 0):
        self.name = name
        self._handlers: dict[str, BinaryHandler] = {}
        self._queue_maxsize = max(0, int(queue_maxsize))
        self._queue: asyncio.Queue[_PendingMessage] | None = None
        self._worker: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def set_message_handler(self, channel: str, handler: BinaryHandler | None) -> None:
        """Bind ``handler`` to ``channel``; ``None`` unbinds."""
        if self._closed:
            raise EngineDetachedError(self.name)
        if handler is None:
            self._handlers.pop(channel, None)
            return
        self._handlers[channel] = handler

    def has_handler(self, channel: str) -> bool:
        return channel in self._handlers

    async def send(self, channel: str, message: bytes | None) -> BinaryReply:
        """Queue a message for ``channel`` and wait for its reply."""
        if self._closed:
            raise EngineDetachedError(self.name)
        queue = self._ensure_worker()
        reply: asyncio.Future[BinaryReply] = asyncio.get_running_loop().create_future()
        await queue.put(_PendingMessage(channel=channel, message=message, reply=reply))
        if self._closed:
            # Woken by close() freeing a slot in a queue nobody drains any more.
            self._discard(queue)
        return await reply

    def _ensure_worker(self) -> asyncio.Queue[_PendingMessage]:
        if self._queue is None:
            self._queue = asyncio.Queue(maxsize=self._queue_maxsize)
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._drain(self._queue), name=f"hostbridge-dispatch-{self.name}")
        return self._queue

    async def _drain(self, queue: asyncio.Queue[_PendingMessage]) -> None:
        while True:
            pending = await queue.get()
            result: BinaryReply = None
            try:
                result = await self._deliver(pending.channel, pending.message)
            finally:
                if not pending.reply.done():
                    pending.reply.set_result(result)
                queue.task_done()

    async def _deliver(self, channel: str, message: bytes | None) -> BinaryReply:
        handler = self._handlers.get(channel)
        if handler is None:
            logger.debug("No handler bound for channel {} on engine {}", channel, self.name)
            return None
        try:
            outcome = handler(message)
            return await outcome if inspect.isawaitable(outcome) else outcome
        except Exception as exc:
            logger.exception(
                "Handler for channel {} on engine {} raised: {}",
                channel,
                self.name,
                sanitize_error_message(str(exc)),
            )
            return None

    async def close(self) -> None:
        """Stop dispatching; queued messages are answered with an empty reply."""
        if self._closed:
            return
        self._closed = True
        self._handlers.clear()
        worker, self._worker = self._worker, None
        if worker is not None and not worker.done():
            worker.cancel()
            with suppress(asyncio.CancelledError):
                await worker
        queue, self._queue = self._queue, None
        if queue is not None:
            self._discard(queue)
        logger.debug("Messenger for engine {} closed", self.name)

    @staticmethod
    def _discard(queue: asyncio.Queue[_PendingMessage]) -> None:
        # Each get_nowait wakes one sender blocked on a full queue; that sender
        # discards again after its put, so every blocked send gets a reply.
        while not queue.empty():
            pending = queue.get_nowait()
            if not pending.reply.done():
                pending.reply.set_result(None)

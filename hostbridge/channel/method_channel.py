"""Named method channel layered on a binary messenger."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable

from loguru import logger

from hostbridge.channel.codec import (
    decode_envelope,
    decode_method_call,
    encode_error_envelope,
    encode_method_call,
    encode_result,
)
from hostbridge.channel.messenger import BinaryMessenger, BinaryReply
from hostbridge.channel.protocol import CallError, CallResult, MethodCall, Success, is_call_result
from hostbridge.dispatch.error_boundary import invalid_call_result, unhandled_exception_result
from hostbridge.utils.exceptions import CodecError, MethodCallError, MissingMethodError


MethodCallHandler = Callable[[MethodCall], CallResult | Awaitable[CallResult]]


class MethodChannel:
    """A channel name bound to a messenger.

    The host side calls :meth:`set_method_call_handler`; the embedded side
    calls :meth:`invoke` or :meth:`invoke_method`. Both sides must use the
    same name; a mismatch just means no handler answers.
    """

    def __init__(self, messenger: BinaryMessenger, name: str):
        self.messenger = messenger
        self.name = name

    def __repr__(self) -> str:
        return f"MethodChannel(name={self.name!r}, engine={self.messenger.name!r})"

    def set_method_call_handler(self, handler: MethodCallHandler | None) -> None:
        """Bind ``handler`` as the sole responder for this channel (``None`` unbinds)."""
        if handler is None:
            self.messenger.set_message_handler(self.name, None)
            return
        self.messenger.set_message_handler(self.name, self._wrap_handler(handler))

    def _wrap_handler(self, handler: MethodCallHandler) -> Callable[[bytes | None], Awaitable[BinaryReply]]:
        channel_name = self.name

        async def _on_message(message: bytes | None) -> BinaryReply:
            try:
                call = decode_method_call(message)
            except CodecError as exc:
                return encode_result(invalid_call_result(channel=channel_name, exc=exc, log_warning=logger.warning))
            try:
                outcome = handler(call)
                result = await outcome if inspect.isawaitable(outcome) else outcome
            except Exception as exc:
                result = unhandled_exception_result(method=call.method, exc=exc, log_exception=logger.exception)
            if not is_call_result(result):
                logger.warning(
                    "Handler on channel {} returned {} for {}; expected a call result",
                    channel_name,
                    type(result).__name__,
                    call.method,
                )
                result = CallError("BAD_RESULT", f"handler returned {type(result).__name__}", None)
            try:
                return encode_result(result)
            except CodecError as exc:
                logger.warning("Result of {} on channel {} is not encodable: {}", call.method, channel_name, exc.message)
                return encode_error_envelope("BAD_RESULT", exc.message, None)

        return _on_message

    async def invoke(self, method: str, arguments: Any = None) -> CallResult:
        """Send a call and return the decoded result variant."""
        payload = encode_method_call(MethodCall(method=method, arguments=arguments))
        reply = await self.messenger.send(self.name, payload)
        return decode_envelope(reply)

    async def invoke_method(self, method: str, arguments: Any = None) -> Any:
        """Send a call and return its value.

        Raises:
            MissingMethodError: the host did not implement ``method``.
            MethodCallError: the host answered with an error envelope.
        """
        result = await self.invoke(method, arguments)
        if isinstance(result, Success):
            return result.value
        if isinstance(result, CallError):
            raise MethodCallError(result.code, result.message or "", result.details)
        raise MissingMethodError(self.name, method)

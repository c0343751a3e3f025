"""Call dispatcher: resolve a method name and run the matching host accessor."""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

from hostbridge.channel.protocol import CallResult, MethodCall, Success
from hostbridge.dispatch.error_boundary import unhandled_exception_result, unknown_method_result
from hostbridge.dispatch.methods import HostAccessor, default_methods
from hostbridge.launch_context import LaunchContext


class CallDispatcher:
    """Stateless method table over an injected, read-only launch context.

    Matching is exact and case-sensitive. Unknown names yield the
    not-implemented result; accessor faults yield a ``CallError``. ``handle``
    never raises.
    """

    def __init__(
        self,
        launch_context: LaunchContext | None = None,
        methods: Mapping[str, HostAccessor] | None = None,
    ):
        self.launch_context = launch_context if launch_context is not None else LaunchContext()
        self._methods: dict[str, HostAccessor] = dict(default_methods() if methods is None else methods)

    def add_method(self, name: str, accessor: HostAccessor) -> None:
        self._methods[name] = accessor

    def methods(self) -> list[str]:
        return sorted(self._methods)

    def handle(self, call: MethodCall) -> CallResult:
        accessor = self._methods.get(call.method)
        if accessor is None:
            return unknown_method_result(method=call.method, log_debug=logger.debug)
        launch_context = call.launch_context if call.launch_context is not None else self.launch_context
        try:
            value = accessor(call, launch_context)
        except Exception as exc:
            return unhandled_exception_result(method=call.method, exc=exc, log_exception=logger.exception)
        logger.debug("Host method {} served", call.method)
        return Success(value)

"""Method-call and result models shared by both sides of the channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from hostbridge.launch_context import LaunchContext


@dataclass(frozen=True, slots=True)
class MethodCall:
    """A single request crossing the host/embedded boundary."""

    method: str
    arguments: Any = None
    launch_context: LaunchContext | None = None

    def with_launch_context(self, launch_context: LaunchContext) -> "MethodCall":
        return MethodCall(method=self.method, arguments=self.arguments, launch_context=launch_context)


@dataclass(frozen=True, slots=True)
class Success:
    """Call served; ``value`` is the payload handed back to the caller."""

    value: Any = None


@dataclass(frozen=True, slots=True)
class MethodNotImplemented:
    """The handler does not recognize the method name."""


@dataclass(frozen=True, slots=True)
class CallError:
    """The handler recognized the method but serving it failed."""

    code: str
    message: str | None = None
    details: Any = None


CallResult = Union[Success, MethodNotImplemented, CallError]

NOT_IMPLEMENTED = MethodNotImplemented()


def is_call_result(value: Any) -> bool:
    return isinstance(value, (Success, MethodNotImplemented, CallError))

"""Host-side accessors exposed to the embedded runtime."""

from __future__ import annotations

from typing import Any, Callable

from hostbridge.channel.protocol import MethodCall
from hostbridge.constants import DEMO_MODE_DEFAULT, EXTRA_DEMO_MODE, METHOD_GET_DEMO_MODE
from hostbridge.launch_context import LaunchContext


HostAccessor = Callable[[MethodCall, LaunchContext], Any]


def get_demo_mode(call: MethodCall, launch_context: LaunchContext) -> bool:
    """Report whether the app was launched in demo mode; arguments are ignored."""
    return launch_context.get_bool(EXTRA_DEMO_MODE, DEMO_MODE_DEFAULT)


def default_methods() -> dict[str, HostAccessor]:
    return {METHOD_GET_DEMO_MODE: get_demo_mode}

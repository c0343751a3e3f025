"""Host-side call dispatch."""

from hostbridge.dispatch.dispatcher import CallDispatcher
from hostbridge.dispatch.methods import HostAccessor, default_methods, get_demo_mode

__all__ = ["CallDispatcher", "HostAccessor", "default_methods", "get_demo_mode"]

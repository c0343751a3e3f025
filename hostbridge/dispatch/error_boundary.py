"""Map dispatch failures onto call results so nothing escapes across the boundary."""

from __future__ import annotations

from typing import Any, Callable

from hostbridge.channel.protocol import NOT_IMPLEMENTED, CallError, MethodNotImplemented
from hostbridge.utils.exceptions import CodecError, classify_exception, sanitize_error_message


def unknown_method_result(
    *,
    method: str,
    log_debug: Callable[[str, Any], None],
) -> MethodNotImplemented:
    """Build the not-implemented outcome for an unrecognized method name."""
    log_debug("No host method registered for {}", method)
    return NOT_IMPLEMENTED


def unhandled_exception_result(
    *,
    method: str,
    exc: Exception,
    log_exception: Callable[[str, Any, Any, Any], None],
) -> CallError:
    """Map an accessor fault to an INTERNAL_ERROR result."""
    code, category = classify_exception(exc)
    sanitized = sanitize_error_message(str(exc))
    log_exception("Host method {} failed with [{}]: {}", method, code, sanitized)
    return CallError("INTERNAL_ERROR", sanitized, {"error_code": code, "category": category.value})


def invalid_call_result(
    *,
    channel: str,
    exc: CodecError,
    log_warning: Callable[[str, Any, Any], None],
) -> CallError:
    """Map an undecodable call to a BAD_CALL result."""
    log_warning("Rejected malformed call on channel {}: {}", channel, exc.message)
    return CallError(exc.code, exc.message, None)

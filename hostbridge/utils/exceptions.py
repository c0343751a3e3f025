"""
Exception hierarchy and error helpers for hostbridge.

Provides:
- Custom exception classes with error codes
- Error categorization
- Safe error message formatting (no sensitive data leak across the boundary)
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RECOVERABLE = "recoverable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"


class HostBridgeError(Exception):
    """Base exception for all hostbridge errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CodecError(HostBridgeError):
    """Bytes on the channel could not be decoded as a call or envelope."""

    def __init__(self, message: str, payload: Any = None):
        details = {"payload": payload} if payload is not None else {}
        super().__init__(message, code="BAD_CALL", category=ErrorCategory.VALIDATION, details=details)


class EngineDetachedError(HostBridgeError):
    """The engine attachment was torn down; its messenger no longer accepts work."""

    def __init__(self, engine_id: str):
        super().__init__(
            f"Engine '{engine_id}' is detached",
            code="ENGINE_DETACHED",
            category=ErrorCategory.FATAL,
            details={"engine_id": engine_id},
        )


class MissingMethodError(HostBridgeError):
    """The host has no implementation for the invoked method."""

    def __init__(self, channel: str, method: str):
        super().__init__(
            f"No implementation found for method {method} on channel {channel}",
            code="NOT_IMPLEMENTED",
            category=ErrorCategory.NOT_FOUND,
            details={"channel": channel, "method": method},
        )


class MethodCallError(HostBridgeError):
    """The host answered a call with an error envelope."""

    def __init__(self, code: str, message: str, details: Any = None):
        super().__init__(
            message,
            code=code,
            category=ErrorCategory.RECOVERABLE,
            details=details if isinstance(details, dict) else ({"value": details} if details is not None else {}),
        )


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory]:
    """Classify an exception and return (error_code, category)."""
    if isinstance(exc, HostBridgeError):
        return exc.code, exc.category

    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return "TIMEOUT", ErrorCategory.TIMEOUT

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION

    if isinstance(exc, KeyError):
        return "MISSING_KEY", ErrorCategory.VALIDATION

    if isinstance(exc, ValueError):
        return "INVALID_VALUE", ErrorCategory.VALIDATION

    if isinstance(exc, TypeError):
        return "TYPE_ERROR", ErrorCategory.VALIDATION

    if isinstance(exc, LookupError):
        return "NOT_FOUND", ErrorCategory.NOT_FOUND

    return "INTERNAL_ERROR", ErrorCategory.FATAL

"""Utility functions for hostbridge."""

from hostbridge.utils.helpers import ensure_dir, get_data_path, get_logs_path
from hostbridge.utils.exceptions import (
    HostBridgeError,
    CodecError,
    EngineDetachedError,
    MissingMethodError,
    MethodCallError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "ensure_dir",
    "get_data_path",
    "get_logs_path",
    "HostBridgeError",
    "CodecError",
    "EngineDetachedError",
    "MissingMethodError",
    "MethodCallError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
]

"""Read-only launch context (startup extras) supplied by the host container.

The host hands every application instance a small mapping of primitive
extras when it starts it, e.g. ``DEMO_MODE=true`` from a test harness. The
bridge only reads it; typed reads fall back to a caller-supplied default when
the key is absent or holds a value of the wrong type.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from loguru import logger

from hostbridge.utils.exceptions import ErrorCategory, HostBridgeError

ExtraValue = bool | int | str


class LaunchContext(Mapping[str, Any]):
    """Immutable mapping of launch extras."""

    __slots__ = ("_extras",)

    def __init__(self, extras: Mapping[str, Any] | None = None):
        self._extras = MappingProxyType(dict(extras or {}))

    def __getitem__(self, key: str) -> Any:
        return self._extras[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._extras)

    def __len__(self) -> int:
        return len(self._extras)

    def __repr__(self) -> str:
        return f"LaunchContext({dict(self._extras)!r})"

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Read a boolean extra; absent or non-boolean values yield ``default``."""
        if key not in self._extras:
            return default
        value = self._extras[key]
        if isinstance(value, bool):
            return value
        logger.warning(
            "Launch extra {} expected bool but value was {}; returning default {}",
            key,
            type(value).__name__,
            default,
        )
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Read an integer extra; absent or non-integer values yield ``default``."""
        value = self._extras.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if key in self._extras:
            logger.warning("Launch extra {} expected int but value was {}", key, type(value).__name__)
        return default

    def get_str(self, key: str, default: str | None = None) -> str | None:
        """Read a string extra; absent or non-string values yield ``default``."""
        value = self._extras.get(key)
        if isinstance(value, str):
            return value
        if key in self._extras:
            logger.warning("Launch extra {} expected str but value was {}", key, type(value).__name__)
        return default

    def merged(self, overrides: Mapping[str, Any]) -> "LaunchContext":
        """Return a new context with ``overrides`` layered on top."""
        combined = dict(self._extras)
        combined.update(overrides)
        return LaunchContext(combined)

    @classmethod
    def from_pairs(cls, pairs: Iterable[str]) -> "LaunchContext":
        """Build a context from ``KEY=VALUE`` strings (``--extra DEMO_MODE=true``)."""
        extras: dict[str, ExtraValue] = {}
        for raw in pairs:
            key, sep, value = str(raw).partition("=")
            key = key.strip()
            if not sep or not key:
                raise HostBridgeError(
                    f"Invalid launch extra {raw!r}; expected KEY=VALUE",
                    code="INVALID_EXTRA",
                    category=ErrorCategory.VALIDATION,
                    details={"extra": raw},
                )
            extras[key] = parse_extra_value(value)
        return cls(extras)


def parse_extra_value(raw: str) -> ExtraValue:
    """Coerce a textual extra: ``true``/``false`` to bool, integers to int, anything else stays str."""
    text = raw.strip()
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(text)
    except ValueError:
        return text

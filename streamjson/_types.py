"""Dataclass models for stream-json usage records and observer callbacks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

# Accepted spellings per counter, in priority order.
_USAGE_KEYS: dict[str, tuple[str, ...]] = {
    "input": ("input_tokens", "inputTokens"),
    "output": ("output_tokens", "outputTokens"),
    "cache_read": ("cache_read_input_tokens", "cached_input_tokens", "cacheRead"),
    "cache_write": ("cache_write_input_tokens", "cacheWrite"),
    "total": ("total_tokens", "total"),
}

# Field name -> key used by to_dict().
_WIRE_NAMES: dict[str, str] = {
    "input": "input",
    "output": "output",
    "cache_read": "cacheRead",
    "cache_write": "cacheWrite",
    "total": "total",
}


def _positive_number(value: Any) -> int | float | None:
    # bool is an int subclass; true/false are not token counts
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value if value > 0 else None


@dataclass
class CliUsage:
    """Token usage reported by the CLI on a result event."""

    input: int | float | None = None
    output: int | float | None = None
    cache_read: int | float | None = None
    cache_write: int | float | None = None
    total: int | float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CliUsage | None:
        """Convert a raw usage object, or return None when no counter is positive.

        Each counter takes the first of its alternate keys holding a number
        greater than zero. Zero, negative and non-numeric values count as absent.
        """
        counters: dict[str, int | float] = {}
        for field_name, keys in _USAGE_KEYS.items():
            for key in keys:
                value = _positive_number(data.get(key))
                if value is not None:
                    counters[field_name] = value
                    break
        usage = cls(**counters)
        return usage if usage.is_meaningful else None

    @property
    def is_meaningful(self) -> bool:
        return any(_positive_number(getattr(self, name)) is not None for name in _WIRE_NAMES)

    def to_dict(self) -> dict[str, int | float]:
        """Return the set counters keyed by their wire names."""
        return {
            wire: getattr(self, name)
            for name, wire in _WIRE_NAMES.items()
            if getattr(self, name) is not None
        }


@dataclass
class StreamJsonCallbacks:
    """Optional observers invoked synchronously as events are recognized."""

    on_text: Callable[[str], None] | None = None
    on_tool_use: Callable[[str], None] | None = None
    on_session_id: Callable[[str], None] | None = None
    on_usage: Callable[[CliUsage], None] | None = None
    on_error: Callable[[str], None] | None = None

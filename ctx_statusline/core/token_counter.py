"""
Token counting and usage tracking.

Holds the per-response usage snapshot and the cumulative session totals.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping

USAGE_FIELDS = (
    "input_tokens",
    "output_tokens",
    "cache_read_input_tokens",
    "cache_creation_input_tokens",
)


def as_token_count(value: Any) -> int:
    """Coerce a raw transcript value to a non-negative token count.

    Anything that is not a non-negative integral number counts as 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if isinstance(value, float):
        if not math.isfinite(value) or value < 0 or not value.is_integer():
            return 0
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


@dataclass(frozen=True)
class UsageSnapshot:
    """Token usage reported for a single assistant response."""
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_input_tokens: int = 0
    cache_creation_input_tokens: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UsageSnapshot":
        """Build a snapshot from a raw ``usage`` object, defaulting bad fields to 0."""
        return cls(**{name: as_token_count(data.get(name)) for name in USAGE_FIELDS})

    @property
    def context_tokens(self) -> int:
        """Tokens occupying the context window (input + cache read + cache create)."""
        return (
            self.input_tokens
            + self.cache_read_input_tokens
            + self.cache_creation_input_tokens
        )


@dataclass(frozen=True)
class TokenTotals:
    """Cumulative token counts across a whole session."""
    input: int = 0
    output: int = 0
    cache_read: int = 0
    cache_create: int = 0

    @property
    def cache(self) -> int:
        """Cache tokens, read and written."""
        return self.cache_read + self.cache_create

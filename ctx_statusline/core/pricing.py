"""
Pricing calculations and rate management.

Turns cumulative token totals into an estimated session cost.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from .token_counter import TokenTotals

TOKENS_PER_PRICE_UNIT = Decimal("1000000")


@dataclass(frozen=True)
class PriceTable:
    """Per-million-token prices for each token category."""
    input: Decimal = Decimal("15.00")
    output: Decimal = Decimal("75.00")
    cache_read: Decimal = Decimal("1.50")
    cache_write: Decimal = Decimal("18.75")

    def __post_init__(self):
        """Validate prices are non-negative."""
        for name in ("input", "output", "cache_read", "cache_write"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} price cannot be negative")


DEFAULT_PRICES = PriceTable()


def compute_cost(totals: TokenTotals, prices: PriceTable = DEFAULT_PRICES) -> Decimal:
    """Calculate the estimated cost of a session.

    Args:
        totals: Cumulative token counts for the session
        prices: Price per 1M tokens for each category

    Returns:
        Total cost rounded half-up to 2 decimal places
    """
    # Each category: tokens / 1M * price_per_1M
    total_cost = (
        Decimal(totals.input) * prices.input
        + Decimal(totals.output) * prices.output
        + Decimal(totals.cache_read) * prices.cache_read
        + Decimal(totals.cache_create) * prices.cache_write
    ) / TOKENS_PER_PRICE_UNIT

    return total_cost.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

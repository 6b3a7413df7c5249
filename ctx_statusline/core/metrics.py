"""
Session metrics.

Turns parsed transcript data into the values shown on the status line.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from .pricing import compute_cost
from .transcript import TranscriptParser
from ctx_statusline.config.loader import StatuslineConfig

NO_VALUE = "--"
MODEL_LABEL_MAX_CHARS = 12

# Most specific patterns first
MODEL_LABELS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("opus-4-5", "opus-4.5"), "Opus 4.5"),
    (("opus",), "Opus"),
    (("sonnet-4",), "Sonnet 4"),
    (("sonnet",), "Sonnet"),
    (("haiku",), "Haiku"),
)


@dataclass(frozen=True)
class AggregatedMetrics:
    """Everything the renderer needs, computed once per invocation."""
    model: str
    context_tokens: int
    context_pct: int
    total_input: int
    total_output: int
    total_cache: int
    thinking_present: bool
    cost: Decimal
    branch: str


def classify_model(raw: Optional[str]) -> str:
    """Map a raw model identifier to a short display label.

    Unrecognised identifiers are shown verbatim, cut to 12 characters.
    """
    if not raw:
        return NO_VALUE
    lowered = raw.lower()
    for patterns, label in MODEL_LABELS:
        if any(pattern in lowered for pattern in patterns):
            return label
    return raw[:MODEL_LABEL_MAX_CHARS]


def context_pct(context_tokens: int, limit: int) -> int:
    """Context window occupancy as a whole percentage, capped at 100.

    Raises:
        ValueError: If limit is not positive
    """
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if context_tokens <= 0:
        return 0
    return min(100, context_tokens * 100 // limit)


def format_magnitude(n: int) -> str:
    """Format a token count: 999, 12K, 1.5M."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.0f}K"
    return str(n)


def build_metrics(
    parser: TranscriptParser,
    config: StatuslineConfig,
    branch: str,
) -> AggregatedMetrics:
    """Assemble the status line metrics for one transcript.

    Context occupancy comes from the latest usage snapshot only, while
    token totals and cost cover every record in the transcript.

    Args:
        parser: Parsed transcript
        config: StatuslineConfig supplying the context limit and prices
        branch: Current branch name, or the placeholder

    Returns:
        Immutable metrics for rendering
    """
    context_tokens = parser.latest_usage().context_tokens
    totals = parser.totals()

    return AggregatedMetrics(
        model=classify_model(parser.latest_model()),
        context_tokens=context_tokens,
        context_pct=context_pct(context_tokens, config.context_limit),
        total_input=totals.input,
        total_output=totals.output,
        total_cache=totals.cache,
        thinking_present=parser.count_thinking() > 0,
        cost=compute_cost(totals, config.prices),
        branch=branch,
    )

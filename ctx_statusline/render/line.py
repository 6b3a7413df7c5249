"""
Status line layout.

Builds the rich Text shown by the host:

    [Opus 4.5] 🟢 Ctx: 33% | 1K↓ 2K↑ 45K⚡ | 🧠 | $5.57 | main

``Text.plain`` gives the same line without colour.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from rich.text import Text

from ctx_statusline.core.metrics import AggregatedMetrics, format_magnitude

NO_SESSION_LINE = "[--] Ctx: --% | $0.00"

DIM = "dim"
MODEL_STYLE = "bright_cyan"
INPUT_STYLE = "bright_blue"
OUTPUT_STYLE = "bright_magenta"
COST_STYLE = "bright_green"
BRANCH_STYLE = "bright_yellow"
THINKING_ICON = "🧠"


@dataclass(frozen=True)
class TierStyle:
    icon: str
    style: str


class ContextTier(Enum):
    """Context window pressure levels."""
    NORMAL = TierStyle(icon="🟢", style="bright_green")
    WARNING = TierStyle(icon="🟡", style="bright_yellow")
    CRITICAL = TierStyle(icon="🔴", style="bright_red")


# Evaluated high to low; the first threshold the percentage reaches wins
CONTEXT_TIERS: Tuple[Tuple[int, ContextTier], ...] = (
    (90, ContextTier.CRITICAL),
    (70, ContextTier.WARNING),
    (0, ContextTier.NORMAL),
)


def classify_context(pct: int) -> ContextTier:
    for threshold, tier in CONTEXT_TIERS:
        if pct >= threshold:
            return tier
    return ContextTier.NORMAL


def _separator(line: Text) -> None:
    line.append("|", style=DIM)
    line.append(" ")


def render_line(metrics: AggregatedMetrics) -> Text:
    """Render metrics as a colour-annotated status line.

    The thinking segment only appears when the session has thinking records.
    """
    tier = classify_context(metrics.context_pct).value
    line = Text()

    line.append("[", style=DIM)
    line.append(metrics.model, style=MODEL_STYLE)
    line.append("]", style=DIM)
    line.append(" ")

    line.append(f"{tier.icon} Ctx: ")
    line.append(f"{metrics.context_pct}%", style=tier.style)
    line.append(" ")

    _separator(line)
    line.append(format_magnitude(metrics.total_input), style=INPUT_STYLE)
    line.append("↓ ")
    line.append(format_magnitude(metrics.total_output), style=OUTPUT_STYLE)
    line.append("↑ ")
    line.append(f"{format_magnitude(metrics.total_cache)}⚡", style=DIM)
    line.append(" ")

    if metrics.thinking_present:
        _separator(line)
        line.append(f"{THINKING_ICON} ")

    _separator(line)
    line.append(f"${metrics.cost:.2f}", style=COST_STYLE)
    line.append(" ")

    _separator(line)
    line.append(metrics.branch, style=BRANCH_STYLE)

    return line


def render_no_session() -> Text:
    """Degraded line shown when there is no transcript to read."""
    return Text(NO_SESSION_LINE)

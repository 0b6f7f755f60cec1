"""Statistics derived from pity and reroll state.

Progress values use the live pity counter; every rate computed here is taken
over the bounded history window only, so lifetime totals do not skew them.
All functions accept ``None`` and return zeroed defaults.
"""

from dataclasses import dataclass, field
from typing import Optional

from pyrsistent import pmap
from pyrsistent.typing import PMap

from hatchery.config import DEFAULT_CONFIG, EngineConfig
from hatchery.state import PityState, RerollRecord, RerollStats
from hatchery.systems.reroll import get_success_rate
from hatchery.types import Rarity


def _zero_rates() -> PMap[Rarity, float]:
    return pmap({rarity: 0.0 for rarity in Rarity})


@dataclass(frozen=True)
class PityStats:
    """Tier distribution of the recent hatch window.

    Attributes:
        total_hatches: Number of hatches in the window.
        rates: Percentage of the window per tier (one decimal).
        pity_rate: Percentage of the window produced by pity rolls.
    """

    total_hatches: int = 0
    rates: PMap[Rarity, float] = field(default_factory=_zero_rates)
    pity_rate: float = 0.0


@dataclass(frozen=True)
class RerollSummary:
    """Aggregate of the recent reroll window.

    Attributes:
        total_rerolls: Lifetime reroll count.
        success_rate: Lifetime success percentage.
        average_improvement: Mean rank change over the window (two decimals).
        best_reroll: Window entry with the largest improvement (first wins).
    """

    total_rerolls: int = 0
    success_rate: float = 0.0
    average_improvement: float = 0.0
    best_reroll: Optional[RerollRecord] = None


def get_pity_progress(
    state: Optional[PityState], config: EngineConfig = DEFAULT_CONFIG
) -> float:
    """Percentage of the way to the pity threshold, clamped to ``[0, 100]``."""
    if state is None:
        return 0.0
    progress = state.hatches_since_epic / config.pity_threshold * 100.0
    return max(0.0, min(100.0, progress))


def get_pity_progress_text(
    state: Optional[PityState], config: EngineConfig = DEFAULT_CONFIG
) -> str:
    if state is None:
        return "Hatch Progress: Unknown"

    remaining = config.pity_threshold - state.hatches_since_epic
    if state.guaranteed_epic_next or remaining <= 0:
        return "🌟 PITY READY! Next hatch guaranteed Epic+!"
    if remaining <= 3:
        noun = "hatch" if remaining == 1 else "hatches"
        return f"⚡ {remaining} {noun} until guaranteed Epic+!"
    return f"Hatches until pity: {remaining}/{config.pity_threshold}"


def calculate_pity_stats(state: Optional[PityState]) -> PityStats:
    """Per-tier and pity percentages over the recent hatch window."""
    if state is None or len(state.history) == 0:
        return PityStats()

    counts = {rarity: 0 for rarity in Rarity}
    pity_count = 0
    for record in state.history:
        counts[record.rarity] += 1
        if record.was_pity:
            pity_count += 1

    total = len(state.history)
    return PityStats(
        total_hatches=total,
        rates=pmap(
            {rarity: round(count / total * 100.0, 1) for rarity, count in counts.items()}
        ),
        pity_rate=round(pity_count / total * 100.0, 1),
    )


def calculate_reroll_stats(stats: Optional[RerollStats]) -> RerollSummary:
    """Average and best improvement over the recent reroll window."""
    if stats is None or len(stats.reroll_history) == 0:
        return RerollSummary()

    best: Optional[RerollRecord] = None
    total_improvement = 0
    for record in stats.reroll_history:
        total_improvement += record.improvement
        if best is None or record.improvement > best.improvement:
            best = record

    return RerollSummary(
        total_rerolls=stats.total_rerolls,
        success_rate=get_success_rate(stats),
        average_improvement=round(total_improvement / len(stats.reroll_history), 2),
        best_reroll=best,
    )


def _arrow(improvement: int) -> str:
    if improvement > 0:
        return "⬆️"
    if improvement < 0:
        return "⬇️"
    return "➡️"


def format_reroll_history(
    stats: Optional[RerollStats], config: EngineConfig = DEFAULT_CONFIG
) -> str:
    """Render the newest rerolls, newest first, one per line."""
    if stats is None or len(stats.reroll_history) == 0:
        return "No reroll history yet."
    return "\n".join(
        f"{_arrow(record.improvement)} {record.original_rarity} → {record.new_rarity}"
        for record in stats.reroll_history.recent(config.recent_reroll_count)
    )

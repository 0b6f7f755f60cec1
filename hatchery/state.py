"""Immutable per-player roll state.

The engine never stores player data itself: :class:`PityState` and
:class:`RerollStats` are handed in by the caller (who loads them from the game
state store) and every operation returns a *new* instance for the caller to
persist. Histories are :class:`~hatchery.utils.history.BoundedHistory`
instances so the 20-entry cap is enforced by construction.

:class:`RerollSession` is the transient record held by
:class:`hatchery.engine.RerollEngine` for the creature currently on screen.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from hatchery.config import DEFAULT_CONFIG
from hatchery.types import Rarity
from hatchery.utils.history import BoundedHistory


@dataclass(frozen=True)
class HatchRecord:
    """One entry of the pity history.

    Attributes:
        rarity: Rolled tier.
        timestamp: Epoch milliseconds of the roll.
        was_pity: True if the roll was forced by the pity mechanic.
    """

    rarity: Rarity
    timestamp: int
    was_pity: bool = False


@dataclass(frozen=True)
class PityState:
    """Pity counter and hatch history for one player.

    Attributes:
        hatches_since_epic: Consecutive hatches without epic or legendary.
        guaranteed_epic_next: Set when the threshold is reached; consumed by
            the same roll.
        total_hatches: Lifetime hatch count.
        pities_triggered: Lifetime count of forced pity rolls.
        last_hatch_time: Epoch milliseconds of the latest roll, if any.
        history: Latest hatches, oldest first.
    """

    hatches_since_epic: int = 0
    guaranteed_epic_next: bool = False
    total_hatches: int = 0
    pities_triggered: int = 0
    last_hatch_time: Optional[int] = None
    history: BoundedHistory[HatchRecord] = field(
        default_factory=lambda: BoundedHistory(DEFAULT_CONFIG.history_capacity)
    )


@dataclass(frozen=True)
class RerollRecord:
    """One tracked reroll outcome."""

    original_rarity: Rarity
    new_rarity: Rarity
    was_successful: bool
    improvement: int
    timestamp: int


@dataclass(frozen=True)
class RerollStats:
    """Lifetime reroll counters plus the latest reroll outcomes.

    Attributes:
        free_rerolls_available: Rerolls granted per hatch (always one).
        total_rerolls: Lifetime reroll count.
        successful_rerolls: Rerolls that improved the tier.
        reroll_history: Latest rerolls, oldest first.
        last_reroll_time: Epoch milliseconds of the latest reroll, if any.
    """

    free_rerolls_available: int = 1
    total_rerolls: int = 0
    successful_rerolls: int = 0
    reroll_history: BoundedHistory[RerollRecord] = field(
        default_factory=lambda: BoundedHistory(DEFAULT_CONFIG.history_capacity)
    )
    last_reroll_time: Optional[int] = None


@dataclass(frozen=True)
class RerollSession:
    """Transient reroll gate for the creature currently being hatched.

    Creatures are opaque to the engine; only the caller knows their shape.
    """

    original_creature: Any
    reroll_available: bool = True
    has_rerolled: bool = False
    rerolled_creature: Optional[Any] = None


def create_pity_state(capacity: int = DEFAULT_CONFIG.history_capacity) -> PityState:
    """Return a fresh pity state with an empty history."""
    return PityState(history=BoundedHistory(capacity))


def create_reroll_stats(
    capacity: int = DEFAULT_CONFIG.history_capacity,
) -> RerollStats:
    """Return fresh reroll statistics with an empty history."""
    return RerollStats(reroll_history=BoundedHistory(capacity))

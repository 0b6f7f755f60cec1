"""Monte Carlo helpers for balancing the tier table.

These run the real roll functions many times and summarize the outcome with
numpy, e.g. to check that observed frequencies track the declared weights or
that the pity mechanic bounds dry streaks.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
import numpy.typing as npt

from hatchery.config import DEFAULT_CONFIG, EngineConfig
from hatchery.state import PityState
from hatchery.systems.rarity import roll_rarity, roll_standard_rarity
from hatchery.tiers import DEFAULT_TIERS, TierTable
from hatchery.types import HIGH_RARITIES, Rarity, Rng

IntArray = npt.NDArray[np.int64]

_RARITY_ORDER: List[Rarity] = list(Rarity)


def _rarity_indices(rarities: Sequence[Rarity]) -> IntArray:
    return np.fromiter(
        (_RARITY_ORDER.index(r) for r in rarities), dtype=np.int64, count=len(rarities)
    )


def _percentages(rarities: Sequence[Rarity]) -> Dict[Rarity, float]:
    counts: IntArray = np.bincount(_rarity_indices(rarities), minlength=len(_RARITY_ORDER))
    total = max(1, len(rarities))
    return {rarity: float(counts[i]) / total * 100.0 for i, rarity in enumerate(_RARITY_ORDER)}


def expected_rates(
    tiers: TierTable = DEFAULT_TIERS, config: EngineConfig = DEFAULT_CONFIG
) -> Dict[Rarity, float]:
    """Declared percentage per tier for standard rolls."""
    rates = {rarity: 0.0 for rarity in _RARITY_ORDER}
    for tier in tiers:
        rates[tier.rarity] = tier.probability * 100.0 / config.standard_roll_scale
    return rates


def simulate_standard_rolls(
    n: int,
    rng: Rng,
    tiers: TierTable = DEFAULT_TIERS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Dict[Rarity, float]:
    """Observed percentage per tier over ``n`` standard rolls (no pity)."""
    rarities = [roll_standard_rarity(rng, tiers, config) for _ in range(n)]
    return _percentages(rarities)


def simulate_hatches(
    n: int,
    rng: Rng,
    state: Optional[PityState] = None,
    tiers: TierTable = DEFAULT_TIERS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[Rarity]:
    """Roll ``n`` consecutive hatches with pity applied; returns the tiers."""
    rarities: List[Rarity] = []
    for turn in range(n):
        rarity, state = roll_rarity(state, rng, turn, tiers, config)
        rarities.append(rarity)
    return rarities


def longest_dry_streak(rarities: Sequence[Rarity]) -> int:
    """Length of the longest run without an epic or legendary result."""
    if len(rarities) == 0:
        return 0
    high = np.fromiter(
        (r in HIGH_RARITIES for r in rarities), dtype=np.bool_, count=len(rarities)
    )
    # Index of the most recent high roll at or before each position.
    positions = np.arange(len(rarities))
    last_high = np.maximum.accumulate(np.where(high, positions, -1))
    return int(np.max(np.where(high, 0, positions - last_high)))

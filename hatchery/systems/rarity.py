"""Rarity roll system.

Pure functions implementing one hatch roll. :func:`roll_rarity` takes the
previous :class:`~hatchery.state.PityState` and returns the rolled tier with a
*new* state; nothing is mutated in place.

Roll order:

1. Pity check: once ``hatches_since_epic`` reaches the threshold the current
   roll is flagged as guaranteed.
2. Roll: a guaranteed roll picks epic or legendary; otherwise a standard
   weighted roll walks the cumulative tier weights.
3. Bookkeeping: counters, timestamp and bounded history.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

from hatchery.config import DEFAULT_CONFIG, EngineConfig
from hatchery.state import HatchRecord, PityState, create_pity_state
from hatchery.tiers import DEFAULT_TIERS, TierTable
from hatchery.types import HIGH_RARITIES, Rarity, Rng

logger = logging.getLogger(__name__)


def roll_standard_rarity(
    rng: Rng,
    tiers: TierTable = DEFAULT_TIERS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Rarity:
    """Weighted roll over ``tiers`` using a uniform ``[0, scale)`` draw."""
    roll = rng.random() * config.standard_roll_scale
    threshold = 0
    for tier in tiers:
        threshold += tier.probability
        if roll < threshold:
            return tier.rarity
    return tiers[-1].rarity


def roll_pity_rarity(rng: Rng, config: EngineConfig = DEFAULT_CONFIG) -> Rarity:
    """Forced roll: epic with ``pity_epic_chance``, legendary otherwise."""
    return Rarity.EPIC if rng.random() < config.pity_epic_chance else Rarity.LEGENDARY


def pity_check_system(state: PityState, config: EngineConfig = DEFAULT_CONFIG) -> PityState:
    """Flag the roll as guaranteed once the threshold is reached."""
    if state.hatches_since_epic >= config.pity_threshold:
        logger.info(
            "Pity activated after %d hatches, epic or legendary guaranteed",
            state.hatches_since_epic,
        )
        return replace(state, guaranteed_epic_next=True)
    return state


def counter_system(state: PityState, rarity: Rarity) -> PityState:
    """Reset the pity counter on epic/legendary, otherwise bump it by one."""
    if rarity in HIGH_RARITIES:
        return replace(state, hatches_since_epic=0)
    return replace(state, hatches_since_epic=state.hatches_since_epic + 1)


def history_system(
    state: PityState,
    rarity: Rarity,
    was_pity: bool,
    now: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> PityState:
    """Record the roll in lifetime counters and the bounded history.

    The history is resized to ``config.history_capacity`` before appending,
    so loaded states follow the engine's configured cap.
    """
    history = state.history.with_capacity(config.history_capacity)
    return replace(
        state,
        total_hatches=state.total_hatches + 1,
        last_hatch_time=now,
        history=history.append(
            HatchRecord(rarity=rarity, timestamp=now, was_pity=was_pity)
        ),
    )


def roll_rarity(
    state: Optional[PityState],
    rng: Rng,
    now: int,
    tiers: TierTable = DEFAULT_TIERS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[Rarity, PityState]:
    """Roll one hatch and return ``(rarity, next_state)``.

    Args:
        state (PityState | None): Previous pity state. ``None`` is replaced by
            a fresh default state.
        rng (Rng): Random source.
        now (int): Timestamp (epoch milliseconds) recorded for the roll.
        tiers (TierTable): Tier weights used by standard rolls.
        config (EngineConfig): Pity threshold and pity odds.

    Returns:
        Tuple[Rarity, PityState]: Rolled tier and the updated state. The input
            state is never modified.
    """
    if state is None:
        logger.warning("No pity state provided, creating default")
        state = create_pity_state(config.history_capacity)

    state = pity_check_system(state, config)

    was_pity = state.guaranteed_epic_next
    if was_pity:
        rarity = roll_pity_rarity(rng, config)
        state = replace(
            state,
            hatches_since_epic=0,
            guaranteed_epic_next=False,
            pities_triggered=state.pities_triggered + 1,
        )
        logger.info("Pity hatch: %s", rarity)
    else:
        rarity = roll_standard_rarity(rng, tiers, config)

    state = counter_system(state, rarity)
    state = history_system(state, rarity, was_pity, now, config)

    logger.debug(
        "Rolled %s | pity counter %d/%d",
        rarity,
        state.hatches_since_epic,
        config.pity_threshold,
    )
    return rarity, state

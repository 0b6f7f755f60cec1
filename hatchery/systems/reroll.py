"""Reroll tracking system.

Stateless helpers behind :class:`hatchery.engine.RerollEngine`: ranking a
reroll outcome into the persisted :class:`~hatchery.state.RerollStats` and the
advice shown before a player decides to reroll, with odds taken from the
tier table in use.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from pyrsistent import pmap
from pyrsistent.typing import PMap

from hatchery.config import DEFAULT_CONFIG, EngineConfig
from hatchery.state import RerollRecord, RerollStats, create_reroll_stats
from hatchery.tiers import DEFAULT_TIERS, TierTable, parse_rarity, rarity_rank
from hatchery.types import Rarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RerollAdvice:
    """Advisory text for a reroll decision; never enforced."""

    recommend: bool
    message: str
    odds: str


# ``odds`` placeholders: {better}/{worse} are percentages of a standard roll
# landing above/below the tier, {next} is the name of the tier just above.
ADVICE_TEMPLATES: PMap[Rarity, RerollAdvice] = pmap(
    {
        Rarity.COMMON: RerollAdvice(
            recommend=True,
            message="🟢 Low risk! Reroll has good odds of improvement.",
            odds="{better}% chance to get {next} or better!",
        ),
        Rarity.UNCOMMON: RerollAdvice(
            recommend=True,
            message="🟠 Worth trying! Still decent odds.",
            odds="{better}% chance to get {next} or better.",
        ),
        Rarity.RARE: RerollAdvice(
            recommend=False,
            message="🔴 Risky! You might get worse.",
            odds="Only {better}% chance to get {next} or better.",
        ),
        Rarity.EPIC: RerollAdvice(
            recommend=False,
            message="🟣 Very risky! Epic is already great!",
            odds="Only {better}% chance for {next}, {worse}% chance for worse!",
        ),
        Rarity.LEGENDARY: RerollAdvice(
            recommend=False,
            message="🟨 DON'T REROLL! This is the best!",
            odds="You have the top tier - keep it!",
        ),
    }
)


def _percent(weight: int, scale: int) -> str:
    return f"{weight * 100 / scale:g}"


def get_reroll_advice(
    rarity: Union[Rarity, str, None],
    tiers: TierTable = DEFAULT_TIERS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> RerollAdvice:
    """Return advice for ``rarity`` with odds computed from ``tiers``.

    Unknown ids get the common advice.
    """
    current = parse_rarity(rarity)
    rank = rarity_rank(current)
    higher = sorted(
        (tier for tier in tiers if rarity_rank(tier.rarity) > rank),
        key=lambda tier: rarity_rank(tier.rarity),
    )
    better = sum(tier.probability for tier in higher)
    worse = sum(tier.probability for tier in tiers if rarity_rank(tier.rarity) < rank)

    template = ADVICE_TEMPLATES[current]
    return replace(
        template,
        odds=template.odds.format(
            better=_percent(better, config.standard_roll_scale),
            worse=_percent(worse, config.standard_roll_scale),
            next=higher[0].name if higher else "",
        ),
    )


def track_reroll(
    original_rarity: Union[Rarity, str, None],
    new_rarity: Union[Rarity, str, None],
    stats: Optional[RerollStats],
    now: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> RerollStats:
    """Return ``stats`` updated with one reroll outcome.

    ``improvement`` is the difference of ordinal ranks and may be zero or
    negative; a reroll is successful only when the rank strictly increases.
    """
    if stats is None:
        logger.warning("No reroll stats provided, creating default")
        stats = create_reroll_stats(config.history_capacity)

    original = parse_rarity(original_rarity)
    new = parse_rarity(new_rarity)
    improvement = rarity_rank(new) - rarity_rank(original)
    was_successful = improvement > 0

    record = RerollRecord(
        original_rarity=original,
        new_rarity=new,
        was_successful=was_successful,
        improvement=improvement,
        timestamp=now,
    )
    logger.info(
        "Tracked reroll: %s -> %s (%s)",
        original,
        new,
        "success" if was_successful else "worse/same",
    )
    return replace(
        stats,
        total_rerolls=stats.total_rerolls + 1,
        successful_rerolls=stats.successful_rerolls + int(was_successful),
        reroll_history=stats.reroll_history.with_capacity(
            config.history_capacity
        ).append(record),
        last_reroll_time=now,
    )


def get_success_rate(stats: Optional[RerollStats]) -> float:
    """Lifetime percentage of successful rerolls, one decimal place."""
    if stats is None or stats.total_rerolls == 0:
        return 0.0
    return round(stats.successful_rerolls / stats.total_rerolls * 100.0, 1)

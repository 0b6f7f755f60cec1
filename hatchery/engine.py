"""Service objects wiring the roll systems together.

The hatching flow constructs one instance of each service and passes them
around explicitly; there are no module-level singletons, so every test can
build isolated engines with its own RNG and clock.

Usage:

``rng = random.Random(7)``
``rarity_engine = RarityEngine(rng=rng)``
``rarity, pity_state = rarity_engine.roll_rarity(pity_state)``
``color = ColorPaletteGenerator(rng=rng).generate_color_for_rarity(rarity)``

``RerollEngine`` is the only stateful service: it holds a single hatch
session slot. Starting a new session silently replaces the previous one and
no locking is provided; one hatching flow drives it at a time.
"""

import logging
import random
import time
from dataclasses import replace
from typing import Any, List, Optional, Sequence, Tuple, Union

from hatchery.config import DEFAULT_CONFIG, EngineConfig
from hatchery.state import (
    PityState,
    RerollSession,
    RerollStats,
    create_pity_state,
    create_reroll_stats,
)
from hatchery.systems.palette import generate_color_for_rarity, generate_palette
from hatchery.systems.rarity import roll_pity_rarity, roll_rarity, roll_standard_rarity
from hatchery.systems.reroll import (
    RerollAdvice,
    get_reroll_advice,
    get_success_rate,
    track_reroll,
)
from hatchery.systems.statistics import (
    PityStats,
    RerollSummary,
    calculate_pity_stats,
    calculate_reroll_stats,
    format_reroll_history,
    get_pity_progress,
    get_pity_progress_text,
)
from hatchery.tiers import (
    DEFAULT_TIERS,
    RarityTier,
    TierTable,
    get_rarity_info,
    rarity_rank,
    validate_tiers,
)
from hatchery.types import Clock, ColorHex, Rarity, Rng
from hatchery.utils.color import shift_hue

logger = logging.getLogger(__name__)

RarityLike = Union[Rarity, str, None]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class ColorPaletteGenerator:
    """Derives creature colors from tier HSL ranges."""

    def __init__(self, rng: Optional[Rng] = None, tiers: TierTable = DEFAULT_TIERS):
        self.rng: Rng = rng if rng is not None else random.Random()
        self.tiers = tiers

    def generate_color_for_rarity(self, rarity: RarityLike) -> ColorHex:
        return generate_color_for_rarity(rarity, self.rng, self.tiers)

    def shift_hue(self, base_color: ColorHex, shift_degrees: float) -> ColorHex:
        return shift_hue(base_color, shift_degrees)

    def generate_palette(
        self, rarity: RarityLike, accent_shifts: Sequence[float] = (30.0, -30.0)
    ) -> List[ColorHex]:
        return generate_palette(rarity, self.rng, accent_shifts, self.tiers)


class RarityEngine:
    """Rolls hatch rarities against a tier table with a pity counter.

    Args:
        rng (Rng | None): Random source; a fresh ``random.Random`` if omitted.
        clock (Clock): Timestamp source in epoch milliseconds.
        tiers (TierTable): Tier table; validated against the roll scale.
        config (EngineConfig): Pity and history settings; validated.

    Raises:
        ValueError: If the tier table or config is malformed.
    """

    def __init__(
        self,
        rng: Optional[Rng] = None,
        clock: Clock = system_clock,
        tiers: TierTable = DEFAULT_TIERS,
        config: EngineConfig = DEFAULT_CONFIG,
    ):
        self.config = config.validate()
        self.tiers = validate_tiers(tiers, config.standard_roll_scale)
        self.rng: Rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.palette = ColorPaletteGenerator(self.rng, self.tiers)

    @property
    def pity_threshold(self) -> int:
        return self.config.pity_threshold

    def initialize_pity_state(self) -> PityState:
        return create_pity_state(self.config.history_capacity)

    def roll_rarity(self, pity_state: Optional[PityState]) -> Tuple[Rarity, PityState]:
        """Roll one hatch; returns the tier and the state to persist."""
        return roll_rarity(pity_state, self.rng, self.clock(), self.tiers, self.config)

    def roll_standard_rarity(self) -> Rarity:
        return roll_standard_rarity(self.rng, self.tiers, self.config)

    def roll_pity_rarity(self) -> Rarity:
        return roll_pity_rarity(self.rng, self.config)

    def get_rarity_info(self, rarity: RarityLike) -> RarityTier:
        return get_rarity_info(rarity, self.tiers)

    def generate_color_for_rarity(self, rarity: RarityLike) -> ColorHex:
        return self.palette.generate_color_for_rarity(rarity)

    def shift_hue(self, base_color: ColorHex, shift_degrees: float) -> ColorHex:
        return self.palette.shift_hue(base_color, shift_degrees)


class RerollEngine:
    """One-shot reroll gate for the current hatch plus reroll statistics."""

    def __init__(
        self,
        clock: Clock = system_clock,
        tiers: TierTable = DEFAULT_TIERS,
        config: EngineConfig = DEFAULT_CONFIG,
    ):
        self.config = config.validate()
        self.tiers = validate_tiers(tiers, config.standard_roll_scale)
        self.clock = clock
        self._session: Optional[RerollSession] = None

    @property
    def session(self) -> Optional[RerollSession]:
        return self._session

    def initialize_reroll_stats(self) -> RerollStats:
        return create_reroll_stats(self.config.history_capacity)

    def start_hatch_session(self, creature: Any) -> RerollSession:
        """Open a session for ``creature``, replacing any previous one."""
        self._session = RerollSession(original_creature=creature)
        logger.info("New hatch session started, reroll available")
        return self._session

    def can_reroll(self) -> bool:
        if self._session is None:
            logger.warning("No active hatch session")
            return False
        return self._session.reroll_available and not self._session.has_rerolled

    def execute_reroll(self) -> bool:
        """Consume the session's reroll; returns False if none is available."""
        if not self.can_reroll():
            logger.warning("Reroll not available")
            return False
        assert self._session is not None
        self._session = replace(self._session, has_rerolled=True, reroll_available=False)
        logger.info("Reroll executed")
        return True

    def set_rerolled_creature(self, creature: Any) -> None:
        if self._session is None:
            logger.warning("No active hatch session, rerolled creature ignored")
            return
        self._session = replace(self._session, rerolled_creature=creature)
        logger.debug("Rerolled creature set")

    def get_final_creature(self) -> Optional[Any]:
        """Creature the player keeps: the reroll if one was made and set."""
        if self._session is None:
            return None
        if self._session.has_rerolled and self._session.rerolled_creature is not None:
            return self._session.rerolled_creature
        return self._session.original_creature

    def end_hatch_session(self) -> None:
        """Drop the session once the chosen creature has been saved."""
        self._session = None
        logger.info("Hatch session ended")

    def rarity_rank(self, rarity: RarityLike) -> int:
        return rarity_rank(rarity)

    def track_reroll(
        self,
        original_rarity: RarityLike,
        new_rarity: RarityLike,
        reroll_stats: Optional[RerollStats],
    ) -> RerollStats:
        """Record a reroll outcome; independent of the session slot."""
        return track_reroll(
            original_rarity, new_rarity, reroll_stats, self.clock(), self.config
        )

    def get_success_rate(self, reroll_stats: Optional[RerollStats]) -> float:
        return get_success_rate(reroll_stats)

    def get_reroll_advice(self, rarity: RarityLike) -> RerollAdvice:
        return get_reroll_advice(rarity, self.tiers, self.config)


class StatisticsAggregator:
    """Read-only summaries of pity and reroll state for display."""

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config.validate()

    def get_pity_progress_text(self, pity_state: Optional[PityState]) -> str:
        return get_pity_progress_text(pity_state, self.config)

    def get_pity_progress(self, pity_state: Optional[PityState]) -> float:
        return get_pity_progress(pity_state, self.config)

    def calculate_stats(
        self, state: Union[PityState, RerollStats, None]
    ) -> Union[PityStats, RerollSummary]:
        """Dispatch to reroll or pity statistics by state type."""
        if isinstance(state, RerollStats):
            return calculate_reroll_stats(state)
        return calculate_pity_stats(state)

    def calculate_pity_stats(self, pity_state: Optional[PityState]) -> PityStats:
        return calculate_pity_stats(pity_state)

    def calculate_reroll_stats(self, reroll_stats: Optional[RerollStats]) -> RerollSummary:
        return calculate_reroll_stats(reroll_stats)

    def format_reroll_history(self, reroll_stats: Optional[RerollStats]) -> str:
        return format_reroll_history(reroll_stats, self.config)

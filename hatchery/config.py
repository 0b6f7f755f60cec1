"""Engine configuration.

``EngineConfig`` groups the tunable numbers of the roll engine. The tier table
itself lives in :mod:`hatchery.tiers`; this dataclass only carries the pity
and bookkeeping knobs shared by every service.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Tunable constants for rolling and bookkeeping.

    Attributes:
        pity_threshold: Non epic/legendary hatches in a row after which the
            next roll is forced to epic or legendary.
        pity_epic_chance: Probability that a forced pity roll lands on epic
            (legendary otherwise).
        history_capacity: Maximum entries kept in pity and reroll histories.
        recent_reroll_count: Entries shown by the reroll history formatter.
        standard_roll_scale: Upper bound of the uniform draw used by standard
            rolls; tier weights must sum to it.
    """

    pity_threshold: int = 10
    pity_epic_chance: float = 0.7
    history_capacity: int = 20
    recent_reroll_count: int = 5
    standard_roll_scale: int = 100

    def validate(self) -> "EngineConfig":
        """Return ``self`` or raise ``ValueError`` on out-of-range settings."""
        if self.pity_threshold <= 0:
            raise ValueError("pity_threshold must be positive")
        if not 0.0 <= self.pity_epic_chance <= 1.0:
            raise ValueError("pity_epic_chance must be within [0, 1]")
        if self.history_capacity <= 0:
            raise ValueError("history_capacity must be positive")
        if self.recent_reroll_count <= 0:
            raise ValueError("recent_reroll_count must be positive")
        if self.standard_roll_scale <= 0:
            raise ValueError("standard_roll_scale must be positive")
        return self


DEFAULT_CONFIG = EngineConfig()

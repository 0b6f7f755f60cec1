"""hatchery
===========

Rarity, pity and reroll engine for creature hatching.

The symbols re-exported here cover the usual hatching flow so callers can
import from a single place, e.g.::

    from hatchery import RarityEngine, RerollEngine, create_pity_state

State objects are frozen dataclasses; every engine call that changes player
data returns a new object for the caller to persist. See :mod:`hatchery.systems`
modules for the pure functions behind each service.
"""

from .config import DEFAULT_CONFIG, EngineConfig
from .engine import (
    ColorPaletteGenerator,
    RarityEngine,
    RerollEngine,
    StatisticsAggregator,
)
from .state import (
    HatchRecord,
    PityState,
    RerollRecord,
    RerollSession,
    RerollStats,
    create_pity_state,
    create_reroll_stats,
)
from .tiers import DEFAULT_TIERS, RarityTier
from .types import ColorHex, Rarity, Rng
from .utils.history import BoundedHistory

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "EngineConfig",
    # Services
    "ColorPaletteGenerator",
    "RarityEngine",
    "RerollEngine",
    "StatisticsAggregator",
    # State
    "BoundedHistory",
    "HatchRecord",
    "PityState",
    "RerollRecord",
    "RerollSession",
    "RerollStats",
    "create_pity_state",
    "create_reroll_stats",
    # Tiers
    "DEFAULT_TIERS",
    "RarityTier",
    "ColorHex",
    "Rarity",
    "Rng",
]

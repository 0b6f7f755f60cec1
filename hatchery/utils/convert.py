"""Plain-dict conversion for the external game state store.

The save format uses the game's camelCase keys (``hatchesSinceEpic``,
``rerollHistory`` ...). Loading keeps insertion order and re-applies the
history cap, keeping the newest entries. Unknown rarities in saved records
fall back to common; missing or ``None`` payloads yield default state.
Malformed scalars (non-numeric counters, non-boolean flags) are replaced by
their defaults with a logged warning; loading never raises.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from hatchery.config import DEFAULT_CONFIG
from hatchery.state import (
    HatchRecord,
    PityState,
    RerollRecord,
    RerollStats,
    create_pity_state,
    create_reroll_stats,
)
from hatchery.tiers import parse_rarity
from hatchery.utils.history import BoundedHistory

logger = logging.getLogger(__name__)


def _records(data: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = data.get(key) or []
    if not isinstance(value, list):
        logger.warning("Ignoring malformed %s of type %s", key, type(value).__name__)
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def _int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        logger.warning("Ignoring malformed %s=%r, using %d", key, value, default)
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed %s=%r, using %d", key, value, default)
        return default


def _optional_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    value = _int(data, key, -1)
    return value if value >= 0 else None


def _flag(data: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        logger.warning("Ignoring non-boolean %s=%r, using %s", key, value, default)
        return default
    return value


def pity_state_to_dict(state: PityState) -> Dict[str, Any]:
    return {
        "hatchesSinceEpic": state.hatches_since_epic,
        "guaranteedEpicNext": state.guaranteed_epic_next,
        "totalHatches": state.total_hatches,
        "pitiesTriggered": state.pities_triggered,
        "lastHatchTime": state.last_hatch_time,
        "history": [
            {
                "rarity": str(record.rarity),
                "timestamp": record.timestamp,
                "wasPity": record.was_pity,
            }
            for record in state.history
        ],
    }


def pity_state_from_dict(
    data: Optional[Mapping[str, Any]],
    capacity: int = DEFAULT_CONFIG.history_capacity,
) -> PityState:
    if not data:
        return create_pity_state(capacity)
    if not isinstance(data, Mapping):
        logger.warning("Ignoring malformed pity state of type %s", type(data).__name__)
        return create_pity_state(capacity)
    history = BoundedHistory.of(
        (
            HatchRecord(
                rarity=parse_rarity(entry.get("rarity")),
                timestamp=_int(entry, "timestamp"),
                was_pity=_flag(entry, "wasPity"),
            )
            for entry in _records(data, "history")
        ),
        capacity,
    )
    return PityState(
        hatches_since_epic=max(0, _int(data, "hatchesSinceEpic")),
        guaranteed_epic_next=_flag(data, "guaranteedEpicNext"),
        total_hatches=max(0, _int(data, "totalHatches")),
        pities_triggered=max(0, _int(data, "pitiesTriggered")),
        last_hatch_time=_optional_int(data, "lastHatchTime"),
        history=history,
    )


def reroll_stats_to_dict(stats: RerollStats) -> Dict[str, Any]:
    return {
        "freeRerollsAvailable": stats.free_rerolls_available,
        "totalRerolls": stats.total_rerolls,
        "successfulRerolls": stats.successful_rerolls,
        "lastRerollTime": stats.last_reroll_time,
        "rerollHistory": [
            {
                "originalRarity": str(record.original_rarity),
                "newRarity": str(record.new_rarity),
                "wasSuccessful": record.was_successful,
                "improvement": record.improvement,
                "timestamp": record.timestamp,
            }
            for record in stats.reroll_history
        ],
    }


def reroll_stats_from_dict(
    data: Optional[Mapping[str, Any]],
    capacity: int = DEFAULT_CONFIG.history_capacity,
) -> RerollStats:
    if not data:
        return create_reroll_stats(capacity)
    if not isinstance(data, Mapping):
        logger.warning("Ignoring malformed reroll stats of type %s", type(data).__name__)
        return create_reroll_stats(capacity)
    history = BoundedHistory.of(
        (
            RerollRecord(
                original_rarity=parse_rarity(entry.get("originalRarity")),
                new_rarity=parse_rarity(entry.get("newRarity")),
                was_successful=_flag(entry, "wasSuccessful"),
                improvement=_int(entry, "improvement"),
                timestamp=_int(entry, "timestamp"),
            )
            for entry in _records(data, "rerollHistory")
        ),
        capacity,
    )
    return RerollStats(
        free_rerolls_available=max(0, _int(data, "freeRerollsAvailable", 1)),
        total_rerolls=max(0, _int(data, "totalRerolls")),
        successful_rerolls=max(0, _int(data, "successfulRerolls")),
        reroll_history=history,
        last_reroll_time=_optional_int(data, "lastRerollTime"),
    )

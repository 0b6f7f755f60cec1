# tests/systems/test_reroll_system.py

import logging
from dataclasses import replace

import pytest

from hatchery.config import EngineConfig
from hatchery.engine import RerollEngine
from hatchery.state import create_reroll_stats
from hatchery.systems.reroll import (
    ADVICE_TEMPLATES,
    get_reroll_advice,
    get_success_rate,
    track_reroll,
)
from hatchery.tiers import DEFAULT_TIERS, rarity_rank
from hatchery.types import Rarity
from tests.test_utils import make_reroll_stats


@pytest.mark.parametrize(
    "rarity, rank",
    [
        (Rarity.COMMON, 1),
        (Rarity.UNCOMMON, 2),
        (Rarity.RARE, 3),
        (Rarity.EPIC, 4),
        (Rarity.LEGENDARY, 5),
        ("legendary", 5),
        ("unknown", 1),
    ],
)
def test_rarity_rank(rarity: object, rank: int) -> None:
    assert rarity_rank(rarity) == rank  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "original, new, successful, improvement",
    [
        (Rarity.COMMON, Rarity.LEGENDARY, True, 4),
        (Rarity.EPIC, Rarity.COMMON, False, -3),
        (Rarity.RARE, Rarity.RARE, False, 0),
        (Rarity.UNCOMMON, Rarity.RARE, True, 1),
    ],
)
def test_track_reroll_ranking(
    original: Rarity, new: Rarity, successful: bool, improvement: int
) -> None:
    stats = track_reroll(original, new, create_reroll_stats(), now=99)
    record = stats.reroll_history[-1]
    assert record.was_successful is successful
    assert record.improvement == improvement
    assert record.timestamp == 99
    assert stats.total_rerolls == 1
    assert stats.successful_rerolls == int(successful)
    assert stats.last_reroll_time == 99


def test_track_reroll_accumulates() -> None:
    stats = make_reroll_stats(
        [
            (Rarity.COMMON, Rarity.LEGENDARY),
            (Rarity.EPIC, Rarity.COMMON),
            (Rarity.COMMON, Rarity.UNCOMMON),
        ]
    )
    assert stats.total_rerolls == 3
    assert stats.successful_rerolls == 2
    assert [r.improvement for r in stats.reroll_history] == [4, -3, 1]


def test_track_reroll_history_bound() -> None:
    stats = make_reroll_stats([(Rarity.COMMON, Rarity.RARE)] * 23)
    assert len(stats.reroll_history) == 20
    assert stats.reroll_history[0].timestamp == 3
    assert stats.total_rerolls == 23


def test_track_reroll_without_stats(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        stats = track_reroll(Rarity.COMMON, Rarity.EPIC, None, now=1)
    assert stats.total_rerolls == 1
    assert stats.successful_rerolls == 1
    assert "No reroll stats" in caplog.text


def test_track_reroll_unknown_rarity_counts_as_common() -> None:
    stats = track_reroll("shiny", Rarity.UNCOMMON, create_reroll_stats(), now=0)
    record = stats.reroll_history[-1]
    assert record.original_rarity == Rarity.COMMON
    assert record.improvement == 1


def test_success_rate() -> None:
    assert get_success_rate(None) == 0.0
    assert get_success_rate(create_reroll_stats()) == 0.0
    stats = make_reroll_stats(
        [
            (Rarity.COMMON, Rarity.RARE),
            (Rarity.RARE, Rarity.COMMON),
            (Rarity.RARE, Rarity.RARE),
        ]
    )
    assert get_success_rate(stats) == 33.3


def test_advice_covers_every_tier() -> None:
    assert set(ADVICE_TEMPLATES.keys()) == set(Rarity)
    assert get_reroll_advice(Rarity.COMMON).recommend is True
    assert get_reroll_advice(Rarity.UNCOMMON).recommend is True
    assert get_reroll_advice(Rarity.RARE).recommend is False
    assert get_reroll_advice(Rarity.EPIC).recommend is False
    legendary = get_reroll_advice("legendary")
    assert legendary.recommend is False
    assert "DON'T REROLL" in legendary.message


@pytest.mark.parametrize("unknown", [None, "", "mythic"])
def test_advice_for_unknown_rarity_is_common(unknown: object) -> None:
    assert get_reroll_advice(unknown) == get_reroll_advice(Rarity.COMMON)  # type: ignore[arg-type]


def test_configured_capacity_applies_to_loaded_stats() -> None:
    stats = make_reroll_stats([(Rarity.COMMON, Rarity.RARE)] * 8)
    assert len(stats.reroll_history) == 8

    stats = track_reroll(
        Rarity.RARE, Rarity.EPIC, stats, now=8, config=EngineConfig(history_capacity=3)
    )
    assert len(stats.reroll_history) == 3
    assert [record.timestamp for record in stats.reroll_history] == [6, 7, 8]
    assert stats.total_rerolls == 9


@pytest.mark.parametrize(
    "rarity, odds",
    [
        (Rarity.COMMON, "50% chance to get Uncommon or better!"),
        (Rarity.UNCOMMON, "25% chance to get Rare or better."),
        (Rarity.RARE, "Only 10% chance to get Epic or better."),
        (Rarity.EPIC, "Only 2% chance for Legendary, 90% chance for worse!"),
        (Rarity.LEGENDARY, "You have the top tier - keep it!"),
    ],
)
def test_advice_odds_from_default_tiers(rarity: Rarity, odds: str) -> None:
    assert get_reroll_advice(rarity).odds == odds


def test_advice_odds_follow_custom_tiers() -> None:
    tiers = DEFAULT_TIERS.set(0, replace(DEFAULT_TIERS[0], probability=40)).set(
        4, replace(DEFAULT_TIERS[4], probability=12)
    )
    assert get_reroll_advice(Rarity.COMMON, tiers).odds == (
        "60% chance to get Uncommon or better!"
    )
    assert get_reroll_advice(Rarity.EPIC, tiers).odds == (
        "Only 12% chance for Legendary, 80% chance for worse!"
    )
    engine = RerollEngine(tiers=tiers)
    assert engine.get_reroll_advice(Rarity.RARE).odds == (
        "Only 20% chance to get Epic or better."
    )

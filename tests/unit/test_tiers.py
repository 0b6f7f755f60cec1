# tests/unit/test_tiers.py

import logging
from dataclasses import replace

import pytest
from pyrsistent import pvector

from hatchery.config import DEFAULT_CONFIG, EngineConfig
from hatchery.tiers import (
    DEFAULT_TIERS,
    find_tier,
    get_rarity_info,
    parse_rarity,
    validate_tiers,
)
from hatchery.types import Rarity


@pytest.mark.parametrize(
    "value, expected",
    [
        (Rarity.EPIC, Rarity.EPIC),
        ("epic", Rarity.EPIC),
        ("Legendary", Rarity.LEGENDARY),
        ("mythic", Rarity.COMMON),
        ("", Rarity.COMMON),
        (None, Rarity.COMMON),
    ],
)
def test_parse_rarity(value: object, expected: Rarity) -> None:
    assert parse_rarity(value) == expected  # type: ignore[arg-type]


def test_parse_rarity_logs_fallback(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        parse_rarity("mythic")
    assert "Unknown rarity 'mythic'" in caplog.text


def test_get_rarity_info() -> None:
    legendary = get_rarity_info("legendary")
    assert legendary.name == "Legendary"
    assert legendary.metallic is True
    assert legendary.emoji == "🟨"
    assert get_rarity_info("nope") == get_rarity_info(Rarity.COMMON)


def test_get_rarity_info_missing_from_custom_table() -> None:
    table = pvector([t for t in DEFAULT_TIERS if t.rarity != Rarity.RARE])
    assert get_rarity_info(Rarity.RARE, table).rarity == Rarity.COMMON
    assert find_tier(table, Rarity.RARE) is None


def test_validate_default_tiers() -> None:
    assert validate_tiers(DEFAULT_TIERS) is DEFAULT_TIERS


def test_validate_rejects_bad_sum() -> None:
    table = DEFAULT_TIERS.set(0, replace(DEFAULT_TIERS[0], probability=49))
    with pytest.raises(ValueError, match="sum to 99"):
        validate_tiers(table)


def test_validate_rejects_duplicates_and_empty() -> None:
    with pytest.raises(ValueError):
        validate_tiers(pvector())
    with pytest.raises(ValueError):
        validate_tiers(DEFAULT_TIERS.append(DEFAULT_TIERS[0]))


def test_validate_rejects_inverted_saturation() -> None:
    table = DEFAULT_TIERS.set(1, replace(DEFAULT_TIERS[1], saturation_range=(80, 50)))
    with pytest.raises(ValueError, match="saturation"):
        validate_tiers(table)


def test_default_config_is_valid() -> None:
    assert DEFAULT_CONFIG.validate() is DEFAULT_CONFIG
    assert DEFAULT_CONFIG.pity_threshold == 10
    assert DEFAULT_CONFIG.history_capacity == 20


@pytest.mark.parametrize(
    "overrides",
    [
        {"pity_threshold": 0},
        {"pity_epic_chance": 1.5},
        {"pity_epic_chance": -0.1},
        {"history_capacity": 0},
        {"recent_reroll_count": 0},
        {"standard_roll_scale": 0},
    ],
)
def test_invalid_config(overrides: dict[str, float]) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**overrides).validate()  # type: ignore[arg-type]

# tests/integration/test_distribution_integration.py

import random

import pytest

from hatchery.simulate import (
    expected_rates,
    longest_dry_streak,
    simulate_hatches,
    simulate_standard_rolls,
)
from hatchery.types import Rarity


def test_expected_rates() -> None:
    assert expected_rates() == {
        Rarity.COMMON: 50.0,
        Rarity.UNCOMMON: 25.0,
        Rarity.RARE: 15.0,
        Rarity.EPIC: 8.0,
        Rarity.LEGENDARY: 2.0,
    }


@pytest.mark.parametrize("seed", [1, 1234])
def test_standard_roll_distribution(seed: int) -> None:
    observed = simulate_standard_rolls(100_000, random.Random(seed))
    for rarity, expected in expected_rates().items():
        assert observed[rarity] == pytest.approx(expected, abs=0.6)
    assert sum(observed.values()) == pytest.approx(100.0)


@pytest.mark.parametrize("seed", range(3))
def test_pity_bounds_dry_streaks(seed: int) -> None:
    rarities = simulate_hatches(20_000, random.Random(seed))
    assert len(rarities) == 20_000
    assert longest_dry_streak(rarities) <= 10


@pytest.mark.parametrize(
    "rarities, expected",
    [
        ([], 0),
        ([Rarity.EPIC], 0),
        ([Rarity.COMMON], 1),
        ([Rarity.COMMON, Rarity.RARE, Rarity.EPIC, Rarity.COMMON], 2),
        ([Rarity.LEGENDARY, Rarity.COMMON, Rarity.COMMON, Rarity.UNCOMMON], 3),
        ([Rarity.COMMON] * 4 + [Rarity.EPIC] + [Rarity.RARE] * 2, 4),
    ],
)
def test_longest_dry_streak(rarities: list[Rarity], expected: int) -> None:
    assert longest_dry_streak(rarities) == expected

"""Common type aliases, protocols and enumerations.

``Rng`` and ``Clock`` are the two injectable extension points used by the
engines so tests can force specific branches (standard vs. pity roll, a given
hue draw) and pin timestamps.
"""

from enum import StrEnum, auto
from typing import Callable, Protocol, Tuple


ColorHex = int
"""Packed 24-bit RGB color (``0xRRGGBB``)."""

Range = Tuple[float, float]
"""Inclusive ``(min, max)`` pair. Hue ranges may wrap when ``min > max``."""

Clock = Callable[[], int]
"""Zero-arg callable returning the current time in epoch milliseconds."""


class Rng(Protocol):
    """Minimal random source; any :class:`random.Random` satisfies it."""

    def random(self) -> float: ...


class Rarity(StrEnum):
    """Rarity tiers in ascending order of quality."""

    COMMON = auto()
    UNCOMMON = auto()
    RARE = auto()
    EPIC = auto()
    LEGENDARY = auto()


HIGH_RARITIES = frozenset({Rarity.EPIC, Rarity.LEGENDARY})
"""Tiers that reset the pity counter."""

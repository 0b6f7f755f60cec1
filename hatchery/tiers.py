"""Declarative rarity tier table.

Each :class:`RarityTier` bundles the probability weight of a tier with the
HSL ranges used to color creatures of that tier. The default table is a
persistent vector in ascending rank order so rolling and ranking can walk it
as a plain loop:

>>> from hatchery.tiers import DEFAULT_TIERS
>>> [tier.probability for tier in DEFAULT_TIERS]
[50, 25, 15, 8, 2]

Lookups never raise on unknown ids; they fall back to the common tier and log
a warning.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from pyrsistent import pvector
from pyrsistent.typing import PVector

from hatchery.types import ColorHex, Range, Rarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RarityTier:
    """Static descriptor of one rarity tier.

    Attributes:
        rarity: Tier identifier.
        name: Display name.
        probability: Integer weight; weights of a table sum to the roll scale.
        hue_range: Hue interval in degrees. ``min > max`` wraps through 0.
        saturation_range: Saturation interval in percent.
        lightness_range: Lightness interval in percent.
        emoji: Badge shown next to the tier name.
        display_color: CSS color used for tier labels.
        examples: Representative packed colors for the tier.
        metallic: Whether creatures of the tier get a metallic finish.
    """

    rarity: Rarity
    name: str
    probability: int
    hue_range: Range
    saturation_range: Range
    lightness_range: Range
    emoji: str
    display_color: str
    examples: Tuple[ColorHex, ...] = ()
    metallic: bool = False

    @property
    def wraps_hue(self) -> bool:
        """True if the hue interval crosses the 0/360 boundary."""
        return self.hue_range[0] > self.hue_range[1]


TierTable = PVector[RarityTier]


DEFAULT_TIERS: TierTable = pvector(
    [
        RarityTier(
            rarity=Rarity.COMMON,
            name="Common",
            probability=50,
            hue_range=(90, 150),
            saturation_range=(40, 70),
            lightness_range=(45, 65),
            emoji="🟢",
            display_color="#32CD32",
            examples=(0x228B22, 0x32CD32, 0x90EE90, 0x00FA9A),
        ),
        RarityTier(
            rarity=Rarity.UNCOMMON,
            name="Uncommon",
            probability=25,
            hue_range=(15, 45),
            saturation_range=(50, 80),
            lightness_range=(50, 70),
            emoji="🟠",
            display_color="#FF8C00",
            examples=(0xFF8C00, 0xFFA500, 0xFF7F50, 0xFFB347),
        ),
        RarityTier(
            rarity=Rarity.RARE,
            name="Rare",
            probability=15,
            hue_range=(340, 20),
            saturation_range=(60, 85),
            lightness_range=(45, 65),
            emoji="🔴",
            display_color="#DC143C",
            examples=(0xDC143C, 0xFF6B6B, 0xE74C3C, 0xFF1744),
        ),
        RarityTier(
            rarity=Rarity.EPIC,
            name="Epic",
            probability=8,
            hue_range=(260, 290),
            saturation_range=(50, 75),
            lightness_range=(40, 60),
            emoji="🟣",
            display_color="#9370DB",
            examples=(0x9370DB, 0x8A2BE2, 0x6A0DAD, 0x4B0082),
        ),
        RarityTier(
            rarity=Rarity.LEGENDARY,
            name="Legendary",
            probability=2,
            hue_range=(40, 60),
            saturation_range=(70, 100),
            lightness_range=(50, 75),
            emoji="🟨",
            display_color="#FFD700",
            examples=(0xFFD700, 0xFFC700, 0xFFB000, 0xF9A825),
            metallic=True,
        ),
    ]
)


def validate_tiers(tiers: TierTable, scale: int = 100) -> TierTable:
    """Return ``tiers`` unchanged or raise ``ValueError`` if malformed.

    A table must be non-empty, have no duplicate tiers, use non-negative
    weights summing to ``scale`` and keep saturation/lightness ranges ordered.
    """
    if len(tiers) == 0:
        raise ValueError("Tier table is empty")
    seen = set()
    for tier in tiers:
        if tier.rarity in seen:
            raise ValueError(f"Duplicate tier {tier.rarity}")
        seen.add(tier.rarity)
        if tier.probability < 0:
            raise ValueError(f"Negative weight for tier {tier.rarity}")
        for name, (low, high) in (
            ("saturation", tier.saturation_range),
            ("lightness", tier.lightness_range),
        ):
            if low > high:
                raise ValueError(f"Inverted {name} range for tier {tier.rarity}")
    total = sum(tier.probability for tier in tiers)
    if total != scale:
        raise ValueError(f"Tier weights sum to {total}, expected {scale}")
    return tiers


def parse_rarity(value: Union[Rarity, str, None]) -> Rarity:
    """Coerce ``value`` to a :class:`Rarity`, falling back to common."""
    if isinstance(value, Rarity):
        return value
    try:
        return Rarity(str(value).lower())
    except ValueError:
        logger.warning("Unknown rarity %r, falling back to common", value)
        return Rarity.COMMON


def find_tier(tiers: TierTable, rarity: Rarity) -> Optional[RarityTier]:
    """Return the tier descriptor for ``rarity`` or None if absent."""
    for tier in tiers:
        if tier.rarity == rarity:
            return tier
    return None


def get_rarity_info(
    rarity: Union[Rarity, str, None], tiers: TierTable = DEFAULT_TIERS
) -> RarityTier:
    """Return the tier for ``rarity``; unknown ids resolve to the common tier."""
    tier = find_tier(tiers, parse_rarity(rarity))
    if tier is None:
        logger.warning("Tier %r missing from table, using first tier", rarity)
        fallback = find_tier(tiers, Rarity.COMMON)
        return fallback if fallback is not None else tiers[0]
    return tier


def rarity_rank(rarity: Union[Rarity, str, None]) -> int:
    """Ordinal rank of a tier, ``common=1`` through ``legendary=5``."""
    return list(Rarity).index(parse_rarity(rarity)) + 1

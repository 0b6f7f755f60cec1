"""Rarity color palette system.

Turns a tier's HSL ranges into concrete packed RGB colors. Hue ranges whose
minimum exceeds their maximum wrap through 0 degrees, e.g. ``(340, 20)``
covers ``[340, 360) U [0, 20]``.
"""

from typing import List, Sequence, Union

from hatchery.tiers import DEFAULT_TIERS, TierTable, get_rarity_info
from hatchery.types import ColorHex, Range, Rarity, Rng
from hatchery.utils.color import hsl_to_hex, shift_hue


def random_in_range(rng: Rng, low: float, high: float) -> float:
    return low + rng.random() * (high - low)


def random_hue(rng: Rng, hue_range: Range) -> float:
    """Draw a hue uniformly from ``hue_range`` (wrap-aware)."""
    low, high = hue_range
    if low <= high:
        return random_in_range(rng, low, high)

    upper_span = 360.0 - low
    draw = rng.random() * (upper_span + high)
    if draw < upper_span:
        return low + draw
    return draw - upper_span


def generate_color_for_rarity(
    rarity: Union[Rarity, str, None],
    rng: Rng,
    tiers: TierTable = DEFAULT_TIERS,
) -> ColorHex:
    """Pick a random color within the HSL ranges of ``rarity``'s tier.

    Unknown ids use the common tier. Hue, saturation and lightness are drawn
    independently, in that order.
    """
    tier = get_rarity_info(rarity, tiers)
    hue = random_hue(rng, tier.hue_range)
    saturation = random_in_range(rng, *tier.saturation_range)
    lightness = random_in_range(rng, *tier.lightness_range)
    return hsl_to_hex(hue, saturation, lightness)


def generate_palette(
    rarity: Union[Rarity, str, None],
    rng: Rng,
    accent_shifts: Sequence[float] = (30.0, -30.0),
    tiers: TierTable = DEFAULT_TIERS,
) -> List[ColorHex]:
    """Return a base color for ``rarity`` followed by hue-shifted accents."""
    base = generate_color_for_rarity(rarity, rng, tiers)
    return [base] + [shift_hue(base, shift) for shift in accent_shifts]

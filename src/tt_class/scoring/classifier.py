"""Promotion of a base class up the class ladder based on total points."""

import logging
from collections.abc import Sequence

from tt_class.exceptions import UnknownBaseClass
from tt_class.scoring.scorer import clean_base_class

logger = logging.getLogger(__name__)

# Promotion bands: [14, 28) -> 1, [28, 42) -> 2, ... [84, inf) -> 6
PROMOTION_BAND_START = 14
PROMOTION_BAND_WIDTH = 14
MAX_PROMOTION_TIER = 6


def promotion_tier(total_points: int) -> int:
    """Return how many ladder steps a total score promotes a vehicle.

    Examples:
        >>> promotion_tier(13)
        0
        >>> promotion_tier(14)
        1
        >>> promotion_tier(27)
        1
        >>> promotion_tier(84)
        6
        >>> promotion_tier(500)
        6
    """
    if total_points < PROMOTION_BAND_START:
        return 0
    tier = (total_points - PROMOTION_BAND_START) // PROMOTION_BAND_WIDTH + 1
    return min(tier, MAX_PROMOTION_TIER)


def classify(raw_base_class: str, total_points: int, ladder: Sequence[str]) -> str:
    """Return the final class for a base class and a total score.

    The base class is cleaned of its markers, located on the ladder and
    moved up by the promotion tier. Promotion stops at the top of the ladder.

    Args:
        raw_base_class: Base class, possibly carrying * and $ markers.
        total_points: Combined bonus and modification points.
        ladder: Class codes ordered slowest first.

    Returns:
        Final class code.

    Raises:
        UnknownBaseClass: If the cleaned base class is not on the ladder.
    """
    clean = clean_base_class(raw_base_class)
    try:
        base_index = list(ladder).index(clean)
    except ValueError:
        logger.error(
            "Base class %r (raw %r) is missing from class ladder %s",
            clean,
            raw_base_class,
            list(ladder),
        )
        raise UnknownBaseClass(clean) from None

    final_index = min(base_index + promotion_tier(total_points), len(ladder) - 1)
    return ladder[final_index]

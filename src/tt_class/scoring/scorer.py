"""Point calculation for base classes and selected modifications."""

import logging
from collections.abc import Iterable, Mapping

from tt_class.exceptions import MissingRequiredCategory
from tt_class.models.pydantic_models import TIRES_CATEGORY, ScoreBreakdown, Selection

logger = logging.getLogger(__name__)

# Special indicator markers and the points each one adds (presence only, no stacking)
ASTERISK_MARKER = "*"
DOLLAR_MARKER = "$"
ASTERISK_BONUS = 7
DOLLAR_BONUS = 5

_MARKER_TABLE = str.maketrans("", "", ASTERISK_MARKER + DOLLAR_MARKER)


def special_indicator_bonus(raw_base_class: str) -> int:
    """Return bonus points for the special markers in a raw base class.

    Examples:
        >>> special_indicator_bonus("TTC*")
        7
        >>> special_indicator_bonus("TTD$*")
        12
        >>> special_indicator_bonus("TTB")
        0
    """
    points = 0
    if ASTERISK_MARKER in raw_base_class:
        points += ASTERISK_BONUS
    if DOLLAR_MARKER in raw_base_class:
        points += DOLLAR_BONUS
    return points


def special_indicator_explanation(raw_base_class: str) -> str | None:
    """Describe the special markers on a base class, or None if there are none."""
    has_asterisk = ASTERISK_MARKER in raw_base_class
    has_dollar = DOLLAR_MARKER in raw_base_class

    if has_asterisk and has_dollar:
        return (
            f"* adds +{ASTERISK_BONUS} points, $ adds +{DOLLAR_BONUS} points "
            f"(total +{ASTERISK_BONUS + DOLLAR_BONUS} points)"
        )
    if has_asterisk:
        return f"* adds +{ASTERISK_BONUS} points"
    if has_dollar:
        return f"$ adds +{DOLLAR_BONUS} points"
    return None


def clean_base_class(raw_base_class: str) -> str:
    """Remove every special marker, leaving the class ladder key."""
    return raw_base_class.translate(_MARKER_TABLE)


def _as_items(items: str | Iterable[str]) -> Iterable[str]:
    # A bare label is one item, not a sequence of characters
    if isinstance(items, str):
        return (items,) if items else ()
    return items


def modification_points(
    selection: Mapping[str, Iterable[str]],
    score_table: Mapping[str, Mapping[str, int]],
) -> int:
    """Sum the points of every selected item.

    Items (or whole categories) missing from the score table count as zero.
    A bare string counts as a single item.
    An item listed twice under the same category counts once.

    Args:
        selection: Category name -> selected item labels.
        score_table: Category name -> item label -> points.

    Returns:
        Total modification points (may be negative).
    """
    points = 0
    for category, items in selection.items():
        table = score_table.get(category, {})
        for item in set(_as_items(items)):
            value = table.get(item)
            if value is None:
                logger.debug("Unscored item %r in category %r counts as 0", item, category)
                continue
            points += value
    return points


def total_score(
    raw_base_class: str,
    selection: Mapping[str, Iterable[str]],
    score_table: Mapping[str, Mapping[str, int]],
) -> int:
    """Return special indicator bonus plus modification points."""
    return special_indicator_bonus(raw_base_class) + modification_points(selection, score_table)


def compute_score(
    raw_base_class: str,
    selection: Selection | Mapping[str, Iterable[str]],
    score_table: Mapping[str, Mapping[str, int]],
) -> ScoreBreakdown:
    """Score a selection after checking that exactly one tire is chosen.

    Args:
        raw_base_class: Base class, possibly carrying * and $ markers.
        selection: A Selection or a plain category -> items mapping.
        score_table: Category name -> item label -> points.

    Returns:
        ScoreBreakdown with bonus, modification points and total.

    Raises:
        MissingRequiredCategory: If the tires category does not hold exactly one item.
    """
    mapping = selection.as_mapping() if isinstance(selection, Selection) else selection

    tires = set(_as_items(mapping.get(TIRES_CATEGORY, ())))
    if not tires:
        raise MissingRequiredCategory(
            TIRES_CATEGORY, "You must select a tire type to calculate your class"
        )
    if len(tires) > 1:
        raise MissingRequiredCategory(
            TIRES_CATEGORY, f"Only one tire type may be selected, got {len(tires)}"
        )

    base_bonus = special_indicator_bonus(raw_base_class)
    mod_points = modification_points(mapping, score_table)

    return ScoreBreakdown(
        base_bonus=base_bonus,
        modification_points=mod_points,
        total=base_bonus + mod_points,
    )

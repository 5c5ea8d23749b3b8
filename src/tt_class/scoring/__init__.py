"""Scoring and classification modules."""

from tt_class.scoring.classifier import classify, promotion_tier
from tt_class.scoring.scorer import (
    clean_base_class,
    compute_score,
    modification_points,
    special_indicator_bonus,
    special_indicator_explanation,
    total_score,
)

__all__ = [
    "classify",
    "clean_base_class",
    "compute_score",
    "modification_points",
    "promotion_tier",
    "special_indicator_bonus",
    "special_indicator_explanation",
    "total_score",
]

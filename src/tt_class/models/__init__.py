"""Data models for the classification calculator."""

from tt_class.models.pydantic_models import (
    CATEGORIES,
    TIRES_CATEGORY,
    ClassificationResult,
    ModelEntry,
    SavedConfigurationRead,
    ScoreBreakdown,
    Selection,
    SubmissionPayload,
    SubmissionRequest,
)

__all__ = [
    "CATEGORIES",
    "TIRES_CATEGORY",
    "ClassificationResult",
    "ModelEntry",
    "SavedConfigurationRead",
    "ScoreBreakdown",
    "Selection",
    "SubmissionPayload",
    "SubmissionRequest",
]

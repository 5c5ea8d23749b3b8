"""Service layer."""

from tt_class.services.classification_service import ClassificationService
from tt_class.services.configuration_service import (
    ConfigurationNotFoundError,
    ConfigurationService,
)
from tt_class.services.submission_service import SubmissionService

__all__ = [
    "ClassificationService",
    "ConfigurationNotFoundError",
    "ConfigurationService",
    "SubmissionService",
]

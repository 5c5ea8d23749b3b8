"""Build submission payloads from saved configurations."""

from collections.abc import Iterable, Mapping

from sqlalchemy.orm import Session

from tt_class.models.pydantic_models import (
    CATEGORIES,
    SavedConfigurationRead,
    SubmissionPayload,
    SubmissionRequest,
)
from tt_class.services.configuration_service import ConfigurationService


def format_modifications(mods: Mapping[str, Iterable[str]]) -> str:
    """Render selected modifications as a plain-text block.

    Known categories come first in display order, then any others as given.
    Empty categories are skipped.

    Examples:
        >>> format_modifications({"tires": ["OEM (0 points)"], "aero": []})
        '\\nTIRES:\\n- OEM (0 points)\\n'
    """
    ordered = [c for c in CATEGORIES if c in mods] + [c for c in mods if c not in CATEGORIES]

    result = ""
    for category in ordered:
        items = list(mods[category])
        if not items:
            continue
        result += f"\n{category.upper()}:\n"
        for item in items:
            result += f"- {item}\n"
    return result


def build_submission(
    config: SavedConfigurationRead, request: SubmissionRequest
) -> SubmissionPayload:
    """Combine a saved configuration with driver details."""
    return SubmissionPayload(
        driver_name=request.driver_name,
        driver_email=request.driver_email,
        car_number=request.car_number,
        effective_date=request.effective_date,
        vehicle=f"{config.make} {config.model}",
        base_class=config.base_class,
        final_class=config.final_class,
        total_points=config.total_points,
        modifications=format_modifications(config.mods),
        comments=request.comments,
        team=request.team or None,
    )


class SubmissionService:
    """Prepare submissions for saved configurations.

    Sending the payload to the series organisers is left to the caller.
    """

    def __init__(self, session: Session) -> None:
        self._configurations = ConfigurationService(session)

    def prepare(self, request: SubmissionRequest) -> SubmissionPayload:
        """Build the payload for the configuration named in the request.

        Raises:
            ConfigurationNotFoundError: If the configuration doesn't exist.
        """
        config = self._configurations.get(request.configuration_id)
        return build_submission(config, request)

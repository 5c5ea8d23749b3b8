"""Saved configuration API endpoints."""

from fastapi import APIRouter, HTTPException, Query

from tt_class.api.dependencies import ConfigurationServiceDep, SubmissionServiceDep
from tt_class.api.schemas import ConfigurationListResponse
from tt_class.models.pydantic_models import (
    SavedConfigurationRead,
    SubmissionPayload,
    SubmissionRequest,
)
from tt_class.services.configuration_service import ConfigurationNotFoundError

router = APIRouter()


@router.get("", response_model=ConfigurationListResponse)
async def list_configurations(
    service: ConfigurationServiceDep,
    final_class: str | None = Query(None, description="Filter by final class"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> ConfigurationListResponse:
    """Get saved configurations, newest first."""
    configs, total = service.list_saved(final_class=final_class, limit=limit, offset=offset)
    return ConfigurationListResponse(configurations=configs, count=len(configs), total=total)


@router.get("/{config_id}", response_model=SavedConfigurationRead)
async def get_configuration(
    config_id: int,
    service: ConfigurationServiceDep,
) -> SavedConfigurationRead:
    """Get a saved configuration.

    Raises:
        HTTPException: 404 if not found.
    """
    try:
        return service.get(config_id)
    except ConfigurationNotFoundError:
        raise HTTPException(status_code=404, detail=f"Configuration {config_id} not found") from None


@router.delete("/{config_id}", status_code=204)
async def delete_configuration(
    config_id: int,
    service: ConfigurationServiceDep,
) -> None:
    """Delete a saved configuration.

    Raises:
        HTTPException: 404 if not found.
    """
    try:
        service.delete(config_id)
    except ConfigurationNotFoundError:
        raise HTTPException(status_code=404, detail=f"Configuration {config_id} not found") from None


@router.post("/{config_id}/submission", response_model=SubmissionPayload)
async def prepare_submission(
    config_id: int,
    request: SubmissionRequest,
    service: SubmissionServiceDep,
) -> SubmissionPayload:
    """Build the submission payload for a saved configuration.

    Raises:
        HTTPException: 400 if the body names another configuration, 404 if not found.
    """
    if request.configuration_id != config_id:
        raise HTTPException(status_code=400, detail="configuration_id does not match URL")

    try:
        return service.prepare(request)
    except ConfigurationNotFoundError:
        raise HTTPException(status_code=404, detail=f"Configuration {config_id} not found") from None

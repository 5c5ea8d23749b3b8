"""Classification API endpoint."""

import logging

from fastapi import APIRouter, HTTPException

from tt_class.api.dependencies import ClassificationServiceDep, ConfigurationServiceDep
from tt_class.api.schemas import ClassifyRequest, ClassifyResponse
from tt_class.exceptions import IntegrityError, UnknownMakeModel, ValidationError
from tt_class.scoring.scorer import special_indicator_explanation

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ClassifyResponse)
async def classify_vehicle(
    request: ClassifyRequest,
    service: ClassificationServiceDep,
    configurations: ConfigurationServiceDep,
) -> ClassifyResponse:
    """Calculate the final class of a vehicle.

    Raises:
        HTTPException: 404 for a vehicle not in the catalog, 422 for a
            missing vehicle or tire selection, 500 for inconsistent catalog data.
    """
    try:
        result = service.evaluate(request.make, request.model, request.selection)
    except UnknownMakeModel as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except ValidationError as e:
        raise HTTPException(
            status_code=422, detail={"error_type": type(e).__name__, "message": str(e)}
        ) from None
    except IntegrityError as e:
        logger.error("Catalog integrity failure classifying %s %s: %s", request.make, request.model, e)
        raise HTTPException(status_code=500, detail="Catalog data is inconsistent") from None

    saved_id = None
    if request.save:
        saved_id = configurations.save(result, request.selection).id

    return ClassifyResponse(
        result=result,
        special_indicators=special_indicator_explanation(result.base_class_raw),
        saved_id=saved_id,
    )

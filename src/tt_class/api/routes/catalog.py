"""Catalog API endpoints for populating selection forms."""

from fastapi import APIRouter, HTTPException

from tt_class.api.dependencies import CatalogDep
from tt_class.api.schemas import (
    CategoriesResponse,
    CategoryItemsResponse,
    ItemInfo,
    MakesResponse,
    ModelInfo,
    ModelsResponse,
)
from tt_class.catalog import NOT_FOUND, display_label
from tt_class.models.pydantic_models import TIRES_CATEGORY
from tt_class.scoring.scorer import special_indicator_explanation

router = APIRouter()


@router.get("/makes", response_model=MakesResponse)
async def list_makes(catalog: CatalogDep) -> MakesResponse:
    """Get all vehicle makes."""
    return MakesResponse(makes=catalog.list_makes())


@router.get("/makes/{make}/models", response_model=ModelsResponse)
async def list_models(make: str, catalog: CatalogDep) -> ModelsResponse:
    """Get the models of a make with their base classes.

    An unknown make returns an empty model list.
    """
    models = []
    for name in catalog.list_models(make):
        raw = catalog.models[make][name]
        models.append(
            ModelInfo(model=name, base_class=raw, special_indicators=special_indicator_explanation(raw))
        )
    return ModelsResponse(make=make, models=models)


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(catalog: CatalogDep) -> CategoriesResponse:
    """Get modification categories."""
    return CategoriesResponse(categories=catalog.list_categories(), required=[TIRES_CATEGORY])


@router.get("/categories/{category}", response_model=CategoryItemsResponse)
async def list_category_items(category: str, catalog: CatalogDep) -> CategoryItemsResponse:
    """Get the items and points of a category.

    Raises:
        HTTPException: 404 if the category is unknown.
    """
    items = catalog.score_table_for(category)
    if items is NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"Category '{category}' not found")

    return CategoryItemsResponse(
        category=category,
        items=[
            ItemInfo(item=item, label=display_label(item), points=points)
            for item, points in items.items()
        ],
    )

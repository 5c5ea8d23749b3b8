"""API request and response schemas."""

from pydantic import BaseModel, Field

from tt_class.models.pydantic_models import (
    ClassificationResult,
    SavedConfigurationRead,
    Selection,
)


class MakesResponse(BaseModel):
    """Vehicle makes in catalog order."""

    makes: list[str]


class ModelInfo(BaseModel):
    """A model and its raw base class."""

    model: str
    base_class: str
    special_indicators: str | None = Field(None, description="Explanation of * and $ markers")


class ModelsResponse(BaseModel):
    """Models for one make."""

    make: str
    models: list[ModelInfo]


class CategoriesResponse(BaseModel):
    """Modification categories in display order."""

    categories: list[str]
    required: list[str] = Field(description="Categories that need exactly one selection")


class ItemInfo(BaseModel):
    """A modification item with its points."""

    item: str = Field(description="Full item label, used in selections")
    label: str = Field(description="Label without the points suffix")
    points: int


class CategoryItemsResponse(BaseModel):
    """Items available in one category."""

    category: str
    items: list[ItemInfo]


class ClassifyRequest(BaseModel):
    """Vehicle and modifications to classify."""

    make: str
    model: str
    selection: Selection = Field(default_factory=Selection)
    save: bool = Field(False, description="Persist the result as a saved configuration")


class ClassifyResponse(BaseModel):
    """Classification outcome."""

    result: ClassificationResult
    special_indicators: str | None = None
    saved_id: int | None = None


class ConfigurationListResponse(BaseModel):
    """Paginated saved configurations."""

    configurations: list[SavedConfigurationRead]
    count: int = Field(description="Number of configurations in this response")
    total: int = Field(description="Total number of saved configurations")

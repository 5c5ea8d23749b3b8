"""Static reference data: class ladder, vehicle base classes and score table."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tt_class.exceptions import CatalogIntegrityError
from tt_class.models.pydantic_models import CATEGORIES, TIRES_CATEGORY, ModelEntry
from tt_class.scoring.scorer import clean_base_class


class NotFoundType(Enum):
    """Sentinel type for catalog lookups that miss."""

    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND: Literal[NotFoundType.NOT_FOUND] = NotFoundType.NOT_FOUND


def display_label(item: str) -> str:
    """Strip the trailing points annotation from an item label.

    Examples:
        >>> display_label("Turbo upgrade (+20 points)")
        'Turbo upgrade'
        >>> display_label("Seam welding")
        'Seam welding'
    """
    head, sep, _ = item.rpartition("(")
    if not sep:
        return item.strip()
    return head.strip()


class Catalog(BaseModel):
    """Read-only catalog of classes, vehicles and modification points.

    Makes, models, categories and items keep the order they were declared in.
    """

    classes: list[str] = Field(..., min_length=1, description="Class ladder, slowest first")
    models: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="make -> model -> raw base class"
    )
    score_table: dict[str, dict[str, int]] = Field(
        default_factory=dict, description="category -> item label -> points"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_integrity(self) -> "Catalog":
        if len(set(self.classes)) != len(self.classes):
            raise CatalogIntegrityError(f"Duplicate entries in class ladder: {self.classes}")

        unknown = [c for c in self.score_table if c not in CATEGORIES]
        if unknown:
            raise CatalogIntegrityError(f"Unknown modification categories: {unknown}")
        if TIRES_CATEGORY not in self.score_table or not self.score_table[TIRES_CATEGORY]:
            raise CatalogIntegrityError("Score table must define at least one tire item")

        ladder = set(self.classes)
        for make, models in self.models.items():
            for model, raw in models.items():
                if clean_base_class(raw) not in ladder:
                    raise CatalogIntegrityError(
                        f"{make} {model}: base class '{raw}' is not on the class ladder"
                    )
        return self

    # ========== VEHICLES ==========

    def list_makes(self) -> list[str]:
        """Return all makes in catalog order."""
        return list(self.models)

    def list_models(self, make: str) -> list[str]:
        """Return models for a make, or an empty list for an unknown make."""
        return list(self.models.get(make, {}))

    def lookup_base_class(self, make: str, model: str) -> str | NotFoundType:
        """Return the raw base class for a make/model, or NOT_FOUND."""
        raw = self.models.get(make, {}).get(model)
        if raw is None:
            return NOT_FOUND
        return raw

    def entries(self) -> list[ModelEntry]:
        """Return every vehicle as a ModelEntry."""
        return [
            ModelEntry(make=make, model=model, base_class=raw)
            for make, models in self.models.items()
            for model, raw in models.items()
        ]

    # ========== MODIFICATIONS ==========

    def list_categories(self) -> list[str]:
        """Return categories present in the score table, in display order."""
        return [c for c in CATEGORIES if c in self.score_table]

    def score_table_for(self, category: str) -> dict[str, int] | NotFoundType:
        """Return a copy of the item -> points mapping for a category, or NOT_FOUND."""
        items = self.score_table.get(category)
        if items is None:
            return NOT_FOUND
        return dict(items)

    def find_item(self, category: str, text: str) -> str | NotFoundType:
        """Resolve user input to an item label in a category.

        Tries an exact label match first, then a case-insensitive match on
        the display label (label without its points suffix).
        """
        items = self.score_table.get(category, {})
        if text in items:
            return text

        wanted = text.strip().casefold()
        for item in items:
            if display_label(item).casefold() == wanted:
                return item
        return NOT_FOUND

    # ========== CLASSES ==========

    def class_index(self, class_code: str) -> int | NotFoundType:
        """Return the ladder position of a (clean) class code, or NOT_FOUND."""
        try:
            return self.classes.index(class_code)
        except ValueError:
            return NOT_FOUND

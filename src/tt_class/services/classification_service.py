"""Service layer tying the catalog, scorer and classifier together."""

import logging
from collections.abc import Iterable, Mapping

from tt_class.catalog import NOT_FOUND, Catalog, NotFoundType
from tt_class.config import get_catalog
from tt_class.exceptions import NoVehicleSelected, UnknownMakeModel
from tt_class.models.pydantic_models import ClassificationResult, ScoreBreakdown, Selection
from tt_class.scoring.classifier import classify, promotion_tier
from tt_class.scoring.scorer import clean_base_class, compute_score

logger = logging.getLogger(__name__)


class ClassificationService:
    """Caller-facing entry points for vehicle classification.

    Holds only the read-only catalog; every call is independent.
    """

    def __init__(self, catalog: Catalog | None = None) -> None:
        """Initialize with a catalog.

        Args:
            catalog: Catalog to use. If None, the default catalog is loaded.
        """
        self._catalog = catalog if catalog is not None else get_catalog()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    # ========== CATALOG ACCESSORS ==========

    def list_makes(self) -> list[str]:
        return self._catalog.list_makes()

    def list_models(self, make: str) -> list[str]:
        return self._catalog.list_models(make)

    def list_categories(self) -> list[str]:
        return self._catalog.list_categories()

    def items_for(self, category: str) -> dict[str, int] | NotFoundType:
        return self._catalog.score_table_for(category)

    def lookup_base_class(self, make: str, model: str) -> str | NotFoundType:
        return self._catalog.lookup_base_class(make, model)

    def resolve_base_class(self, make: str, model: str) -> str:
        """Return the raw base class for a vehicle, raising if it cannot be resolved.

        Raises:
            NoVehicleSelected: If make or model is empty.
            UnknownMakeModel: If the pair is not in the catalog.
        """
        if not make or not model:
            raise NoVehicleSelected("Select a make and model first")

        raw = self._catalog.lookup_base_class(make, model)
        if raw is NOT_FOUND:
            raise UnknownMakeModel(make, model)
        return raw

    # ========== SCORING ==========

    def compute_score(
        self,
        raw_base_class: str,
        selection: Selection | Mapping[str, Iterable[str]],
    ) -> ScoreBreakdown:
        """Score a selection against the catalog's score table.

        Raises:
            MissingRequiredCategory: If no single tire is selected.
        """
        return compute_score(raw_base_class, selection, self._catalog.score_table)

    def classify(self, raw_base_class: str, total_points: int) -> str:
        """Return the final class for a base class and total points.

        Raises:
            UnknownBaseClass: If the base class is not on the catalog's ladder.
        """
        return classify(raw_base_class, total_points, self._catalog.classes)

    def evaluate(self, make: str, model: str, selection: Selection) -> ClassificationResult:
        """Run the full lookup, scoring and classification for a vehicle.

        Args:
            make: Vehicle make.
            model: Vehicle model.
            selection: Chosen modifications.

        Returns:
            A new ClassificationResult.

        Raises:
            NoVehicleSelected: If make or model is empty.
            UnknownMakeModel: If the vehicle is not in the catalog.
            MissingRequiredCategory: If no single tire is selected.
            UnknownBaseClass: If catalog and ladder disagree.
        """
        raw = self.resolve_base_class(make, model)
        score = self.compute_score(raw, selection)
        final_class = self.classify(raw, score.total)

        logger.debug(
            "Classified %s %s: %s + %d points -> %s", make, model, raw, score.total, final_class
        )

        return ClassificationResult(
            make=make,
            model=model,
            base_class_raw=raw,
            base_class_clean=clean_base_class(raw),
            base_bonus_points=score.base_bonus,
            modification_points=score.modification_points,
            total_points=score.total,
            tier=promotion_tier(score.total),
            final_class=final_class,
        )

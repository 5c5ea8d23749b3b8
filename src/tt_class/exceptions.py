"""Exception hierarchy for classification failures.

Two families exist:

- ValidationError: the caller supplied something a user can correct
  (no vehicle chosen, vehicle not in the catalog, no tire selected).
- IntegrityError: the reference data is inconsistent with itself
  (a base class that is not on the class ladder).
"""


class ClassificationError(Exception):
    """Base class for all classification errors."""

    pass


class ValidationError(ClassificationError):
    """User-correctable input problem."""

    pass


class NoVehicleSelected(ValidationError):
    """Raised when make or model is missing."""

    pass


class UnknownMakeModel(ValidationError):
    """Raised when a make/model pair is not in the catalog."""

    def __init__(self, make: str, model: str) -> None:
        self.make = make
        self.model = model
        super().__init__(f"Unknown vehicle: {make} {model}")


class MissingRequiredCategory(ValidationError):
    """Raised when a mandatory category has no single selected item."""

    def __init__(self, category: str, message: str | None = None) -> None:
        self.category = category
        super().__init__(message or f"Exactly one '{category}' selection is required")


class IntegrityError(ClassificationError):
    """Reference data is inconsistent."""

    pass


class UnknownBaseClass(IntegrityError):
    """Raised when a cleaned base class is not on the class ladder."""

    def __init__(self, base_class: str) -> None:
        self.base_class = base_class
        super().__init__(f"Base class '{base_class}' is not on the class ladder")


class CatalogIntegrityError(IntegrityError):
    """Raised when catalog data fails its load-time checks."""

    pass

"""Pydantic models for data validation."""

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Modification categories in display order
CATEGORIES: tuple[str, ...] = (
    "engine",
    "drivetrain",
    "suspension",
    "chassis",
    "aero",
    "tires",
    "weight",
)

# The single category that requires exactly one selection
TIRES_CATEGORY = "tires"


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


class ModelEntry(BaseModel):
    """A make/model pair and its raw base class (may carry * and $ markers)."""

    make: str
    model: str
    base_class: str = Field(..., description="Raw base class, e.g. 'TTC*'")

    model_config = ConfigDict(frozen=True)


class Selection(BaseModel):
    """Modifications chosen for a vehicle.

    Tires are a single optional value; every other category is a list of
    item labels keyed by category name.
    """

    tires: str | None = Field(None, description="Selected tire item label")
    mods: dict[str, list[str]] = Field(
        default_factory=dict, description="Selected item labels per non-tire category"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("mods")
    @classmethod
    def _tires_not_in_mods(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        if TIRES_CATEGORY in value:
            raise ValueError("tires must be given through the 'tires' field")
        return value

    def as_mapping(self) -> dict[str, list[str]]:
        """Return the selection as category -> unique item labels."""
        mapping = {
            category: list(dict.fromkeys(items))
            for category, items in self.mods.items()
            if items
        }
        mapping[TIRES_CATEGORY] = [self.tires] if self.tires else []
        return mapping


class ScoreBreakdown(BaseModel):
    """Points computed from a base class and a selection."""

    base_bonus: int = Field(..., description="Points from special indicators")
    modification_points: int = Field(..., description="Points from selected modifications")
    total: int

    model_config = ConfigDict(frozen=True)


class ClassificationResult(BaseModel):
    """Outcome of a single classification request."""

    make: str | None = None
    model: str | None = None
    base_class_raw: str
    base_class_clean: str
    base_bonus_points: int
    modification_points: int
    total_points: int
    tier: int = Field(..., ge=0)
    final_class: str

    model_config = ConfigDict(frozen=True)


class SavedConfigurationRead(BaseModel):
    """Saved configuration as read from the database."""

    id: int
    make: str
    model: str
    base_class: str
    mods: dict[str, list[str]] = Field(default_factory=dict)
    base_class_points: int = 0
    modification_points: int = 0
    total_points: int
    final_class: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    def to_selection(self) -> Selection:
        """Rebuild the Selection that produced this configuration."""
        tires = self.mods.get(TIRES_CATEGORY) or []
        return Selection(
            tires=tires[0] if tires else None,
            mods={k: v for k, v in self.mods.items() if k != TIRES_CATEGORY},
        )


class SubmissionRequest(BaseModel):
    """Driver details submitted together with a saved configuration."""

    configuration_id: int
    driver_name: str = Field(..., min_length=1)
    driver_email: str = Field(..., min_length=1)
    car_number: str = Field(..., min_length=1)
    effective_date: date
    team: str | None = None
    comments: str = ""

    @field_validator("driver_name", "driver_email", "car_number")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class SubmissionPayload(BaseModel):
    """Flattened submission ready to hand to an external form."""

    driver_name: str
    driver_email: str
    car_number: str
    effective_date: date
    vehicle: str = Field(..., description="'<make> <model>'")
    base_class: str
    final_class: str
    total_points: int
    modifications: str = Field(..., description="Formatted modification list")
    comments: str = ""
    team: str | None = None

    def as_form_data(self) -> dict[str, str]:
        """Return string-valued form fields, omitting an empty team."""
        data = {
            "driver_name": self.driver_name,
            "driver_email": self.driver_email,
            "car_number": self.car_number,
            "effective_date": self.effective_date.isoformat(),
            "vehicle": self.vehicle,
            "base_class": self.base_class,
            "final_class": self.final_class,
            "total_points": str(self.total_points),
            "modifications": self.modifications,
            "comments": self.comments,
        }
        if self.team:
            data["team"] = self.team
        return data

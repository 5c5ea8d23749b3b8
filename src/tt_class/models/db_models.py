"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from tt_class.models.pydantic_models import utc_now


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SavedConfiguration(Base):
    """A calculated vehicle configuration kept for later review or submission."""

    __tablename__ = "saved_configurations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    make: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(200), nullable=False)
    base_class: Mapped[str] = mapped_column(String(20), nullable=False)  # raw, with markers

    # Category -> list of item labels
    mods: Mapped[dict[str, list[str]]] = mapped_column(JSON, default=dict)

    # Points
    base_class_points: Mapped[int] = mapped_column(Integer, default=0)
    modification_points: Mapped[int] = mapped_column(Integer, default=0)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False)
    final_class: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<SavedConfiguration(id={self.id}, vehicle='{self.make} {self.model}', "
            f"final_class='{self.final_class}')>"
        )

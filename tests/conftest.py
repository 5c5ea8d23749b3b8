"""Shared fixtures."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from tt_class.catalog import Catalog
from tt_class.models.db_models import Base

LADDER = ["TTS", "TTE", "TTD", "TTC", "TTB", "TTA", "TTX"]

OEM_TIRES = "OEM (0 points)"
R_COMPOUND = "R-compound DOT (+10 points)"
TURBO = "Turbo upgrade (+20 points)"
ECU_TUNE = "ECU tune (+5 points)"
RESTRICTOR = "Intake restrictor (-4 points)"
COILOVERS = "Adjustable coilovers (+5 points)"
INTERIOR = "Interior removal (+2 points)"


@pytest.fixture
def catalog_dict() -> dict[str, Any]:
    """Return a small catalog as it would appear in YAML."""
    return {
        "classes": list(LADDER),
        "models": {
            "Honda": {"Civic Type R": "TTC*", "Fit": "TTS"},
            "Mazda": {"Miata NA": "TTS", "RX-7": "TTC$", "Miata ND": "TTE*$"},
        },
        "score_table": {
            "engine": {TURBO: 20, ECU_TUNE: 5, RESTRICTOR: -4},
            "suspension": {COILOVERS: 5},
            "tires": {OEM_TIRES: 0, R_COMPOUND: 10},
            "weight": {INTERIOR: 2},
        },
    }


@pytest.fixture
def catalog(catalog_dict: dict[str, Any]) -> Catalog:
    """Return the small catalog as a Catalog."""
    return Catalog(**catalog_dict)


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_dict: dict[str, Any]) -> Path:
    """Write the small catalog to a temporary YAML file."""
    path = tmp_path / "catalog.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(catalog_dict, f, sort_keys=False)
    return path


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create an in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()

"""Fixtures for API integration tests."""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tt_class.api.dependencies import get_catalog_dep, get_db
from tt_class.api.main import create_app
from tt_class.catalog import Catalog
from tt_class.models.db_models import Base


@pytest.fixture
def test_engine(tmp_path: Path) -> Engine:
    """Create a test database engine."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session_factory(test_engine: Engine) -> sessionmaker[Session]:
    """Create a session factory for the test database."""
    return sessionmaker(bind=test_engine)


@pytest.fixture
def client(session_factory: sessionmaker[Session], catalog: Catalog) -> TestClient:
    """Create test client backed by the test catalog and database."""
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_dep] = lambda: catalog

    return TestClient(app)

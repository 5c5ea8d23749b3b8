"""FastAPI dependency injection for database sessions and services."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from tt_class.catalog import Catalog
from tt_class.config import get_catalog
from tt_class.database.engine import get_session_factory
from tt_class.services.classification_service import ClassificationService
from tt_class.services.configuration_service import ConfigurationService
from tt_class.services.submission_service import SubmissionService


def get_db() -> Generator[Session, None, None]:
    """Provide a database session that is closed after the request."""
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


def get_catalog_dep() -> Catalog:
    """Provide the loaded catalog."""
    return get_catalog()


def get_classification_service(
    catalog: Annotated[Catalog, Depends(get_catalog_dep)],
) -> ClassificationService:
    return ClassificationService(catalog)


def get_configuration_service(
    session: Annotated[Session, Depends(get_db)],
) -> ConfigurationService:
    return ConfigurationService(session)


def get_submission_service(
    session: Annotated[Session, Depends(get_db)],
) -> SubmissionService:
    return SubmissionService(session)


# Type aliases for cleaner dependency injection
CatalogDep = Annotated[Catalog, Depends(get_catalog_dep)]
ClassificationServiceDep = Annotated[ClassificationService, Depends(get_classification_service)]
ConfigurationServiceDep = Annotated[ConfigurationService, Depends(get_configuration_service)]
SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]

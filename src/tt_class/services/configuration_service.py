"""Service layer for saved configuration operations."""

from sqlalchemy.orm import Session

from tt_class.database.repository import ConfigurationRepository
from tt_class.models.db_models import SavedConfiguration
from tt_class.models.pydantic_models import (
    ClassificationResult,
    SavedConfigurationRead,
    Selection,
)


class ConfigurationNotFoundError(Exception):
    """Raised when a saved configuration is not found."""

    pass


class ConfigurationService:
    """Save, list and reload calculated configurations.

    Returns Pydantic models instead of ORM objects.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._repo = ConfigurationRepository(session)

    def save(self, result: ClassificationResult, selection: Selection) -> SavedConfigurationRead:
        """Persist a classification result."""
        return self._to_read(self._repo.create(result, selection))

    def get(self, config_id: int) -> SavedConfigurationRead:
        """Get a saved configuration.

        Raises:
            ConfigurationNotFoundError: If it doesn't exist.
        """
        config = self._repo.get(config_id)
        if config is None:
            raise ConfigurationNotFoundError(f"Configuration {config_id} not found")
        return self._to_read(config)

    def list_saved(
        self,
        final_class: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[SavedConfigurationRead], int]:
        """List saved configurations newest first, with the total count."""
        configs = self._repo.list_all(final_class=final_class, limit=limit, offset=offset)
        total = self._repo.count(final_class=final_class)
        return [self._to_read(c) for c in configs], total

    def delete(self, config_id: int) -> None:
        """Delete a saved configuration.

        Raises:
            ConfigurationNotFoundError: If it doesn't exist.
        """
        if not self._repo.delete(config_id):
            raise ConfigurationNotFoundError(f"Configuration {config_id} not found")

    def _to_read(self, config: SavedConfiguration) -> SavedConfigurationRead:
        return SavedConfigurationRead.model_validate(config)

"""Repository layer for saved configurations."""

import functools
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from typing_extensions import Concatenate, ParamSpec

from tt_class.models.db_models import SavedConfiguration
from tt_class.models.pydantic_models import ClassificationResult, Selection

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# SQLite "database is locked" handling for writes
DB_RETRY_MAX_ATTEMPTS = 5
DB_RETRY_WAIT_MIN = 1  # seconds
DB_RETRY_WAIT_MAX = 8  # seconds
DB_RETRY_WAIT_MULTIPLIER = 2


def retry_locked_write(
    method: Callable[Concatenate["ConfigurationRepository", P], R],
) -> Callable[Concatenate["ConfigurationRepository", P], R]:
    """Run a repository write again when SQLite reports a lock.

    A failed flush leaves the session unusable, so it is rolled back before
    each new attempt and before the last error propagates.
    """

    @functools.wraps(method)
    def wrapper(repo: "ConfigurationRepository", *args: P.args, **kwargs: P.kwargs) -> R:
        retrying = Retrying(
            retry=retry_if_exception_type(OperationalError),
            stop=stop_after_attempt(DB_RETRY_MAX_ATTEMPTS),
            wait=wait_exponential(
                multiplier=DB_RETRY_WAIT_MULTIPLIER,
                min=DB_RETRY_WAIT_MIN,
                max=DB_RETRY_WAIT_MAX,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                try:
                    return method(repo, *args, **kwargs)
                except OperationalError:
                    repo._session.rollback()
                    raise
        raise RuntimeError("unreachable: tenacity reraises the last error")

    return wrapper


class ConfigurationRepository:
    """Repository for SavedConfiguration CRUD operations."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @retry_locked_write
    def create(self, result: ClassificationResult, selection: Selection) -> SavedConfiguration:
        """Persist a classification result together with the selection behind it.

        Args:
            result: Result to save. Must carry make and model.
            selection: Selection that produced the result.

        Returns:
            Created SavedConfiguration ORM object.
        """
        if not result.make or not result.model:
            raise ValueError("Only results for a catalog vehicle can be saved")

        config = SavedConfiguration(
            make=result.make,
            model=result.model,
            base_class=result.base_class_raw,
            mods=selection.as_mapping(),
            base_class_points=result.base_bonus_points,
            modification_points=result.modification_points,
            total_points=result.total_points,
            final_class=result.final_class,
        )

        self._session.add(config)
        self._session.commit()
        self._session.refresh(config)
        return config

    def get(self, config_id: int) -> SavedConfiguration | None:
        """Get a saved configuration by ID."""
        return self._session.get(SavedConfiguration, config_id)

    def list_all(
        self,
        final_class: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[SavedConfiguration]:
        """List saved configurations, newest first.

        Args:
            final_class: Only return configurations in this final class.
            limit: Maximum number of results.
            offset: Number of results to skip.
        """
        stmt = select(SavedConfiguration)
        if final_class:
            stmt = stmt.where(SavedConfiguration.final_class == final_class)
        stmt = stmt.order_by(
            SavedConfiguration.created_at.desc(), SavedConfiguration.id.desc()
        ).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._session.scalars(stmt))

    def count(self, final_class: str | None = None) -> int:
        """Count saved configurations."""
        stmt = select(func.count()).select_from(SavedConfiguration)
        if final_class:
            stmt = stmt.where(SavedConfiguration.final_class == final_class)
        return self._session.scalar(stmt) or 0

    @retry_locked_write
    def delete(self, config_id: int) -> bool:
        """Delete a saved configuration.

        Returns:
            True if deleted, False if not found.
        """
        config = self.get(config_id)
        if config is None:
            return False

        self._session.delete(config)
        self._session.commit()
        return True

"""Database module."""

from tt_class.database.engine import get_engine, get_session, reset_engine
from tt_class.database.repository import ConfigurationRepository

__all__ = ["get_engine", "get_session", "reset_engine", "ConfigurationRepository"]

"""Database engine and session management for saved configurations."""

import os
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tt_class.models.db_models import Base

DB_PATH_ENV = "TT_CLASS_DB_PATH"

# Default database path (project root / data)
DEFAULT_DB_PATH = Path(__file__).parent.parent.parent.parent / "data" / "tt_class.db"


def get_database_url(db_path: Path | None = None) -> str:
    """Resolve the database URL.

    Priority:
        1. DATABASE_URL environment variable
        2. Explicit db_path argument
        3. TT_CLASS_DB_PATH environment variable
        4. Default path (data/tt_class.db)
    """
    if url := os.environ.get("DATABASE_URL"):
        return url
    return f"sqlite:///{db_path or _get_db_path()}"


def _get_db_path() -> Path:
    env_path = os.environ.get(DB_PATH_ENV)
    return Path(env_path) if env_path else DEFAULT_DB_PATH


_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def get_engine(db_path: Path | str | None = None, echo: bool = False) -> Engine:
    """Get or create the process-wide SQLAlchemy engine.

    SQLite databases get their parent directory created, WAL journaling and
    a busy timeout. Tables are created on first use.

    Args:
        db_path: Path to SQLite database file. Defaults to data/tt_class.db.
        echo: Whether to echo SQL statements.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine

    if _engine is not None:
        return _engine

    path_obj = Path(db_path) if db_path else None
    database_url = get_database_url(path_obj)
    is_sqlite = database_url.startswith("sqlite")

    engine_kwargs: dict[str, object] = {"echo": echo}
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
        if not os.environ.get("DATABASE_URL"):
            (path_obj or _get_db_path()).parent.mkdir(parents=True, exist_ok=True)
    else:
        engine_kwargs["pool_size"] = 5
        engine_kwargs["pool_recycle"] = 3600

    _engine = create_engine(database_url, **engine_kwargs)

    if is_sqlite:
        with _engine.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.commit()

    Base.metadata.create_all(_engine)
    return _engine


def get_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """Get or create the session factory bound to the default engine."""
    global _SessionLocal

    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=engine or get_engine()
        )
    return _SessionLocal


@contextmanager
def get_session(engine: Engine | None = None) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""
    session = get_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose the global engine and session factory. Used by tests."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None

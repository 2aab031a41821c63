"""
Database Connection Management.

This module handles the SQL connection used by the persistent session
memory backend. It provides:
- Connection pooling
- Session management
- Table creation
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from devstudio.core.logging_config import get_logger
from devstudio.database.models import Base

logger = get_logger(__name__)


class DatabaseConnection:
    """
    Manages database connections and session lifecycle.

    Example:
        >>> db = DatabaseConnection("sqlite:///data/memory.db")
        >>> with db.get_session() as session:
        ...     session.query(MemorySession).count()
    """

    def __init__(self, connection_url: str):
        """
        Initialize database engine with connection pooling.

        Args:
            connection_url: SQLAlchemy database URL
        """
        url = make_url(connection_url)

        if url.get_backend_name() == "sqlite":
            # Worker threads share the engine; sqlite needs this to allow it
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        else:
            # pool_pre_ping: Test connections before using (handles stale connections)
            engine_kwargs = {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}

        self.engine = create_engine(url, echo=False, **engine_kwargs)

        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
        )

        logger.info(f"Database connection initialized: {url.render_as_string(hide_password=True)}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic cleanup.

        Transactions are rolled back on error, committed on success.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error, rolling back: {e}")
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create memory tables if they don't exist."""
        Base.metadata.create_all(self.engine)
        logger.info("Memory tables initialized")

    def close(self) -> None:
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Database connections closed")

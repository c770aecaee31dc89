"""Database connection pool management with SQLAlchemy 2.0.

A DatabaseConnection wraps one engine and its session factory. It is
built once at process start and handed explicitly to whatever needs
database access.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from greenlight.database.models import Base
from greenlight.settings import DatabaseSettings


class DatabaseConnection:
    """Owns the connection pool and hands out transactional sessions.

    Attributes:
        _engine: SQLAlchemy engine.
        _session_factory: Session factory bound to the engine.

    Example:
        ```python
        db = DatabaseConnection.from_settings(settings.database)
        with db.session() as session:
            session.execute(text("SELECT 1"))
        ```
    """

    def __init__(self, engine: Engine) -> None:
        """Wrap an existing engine.

        Args:
            engine: Configured SQLAlchemy engine.
        """
        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, db: DatabaseSettings, echo: bool = False) -> "DatabaseConnection":
        """Create a pooled PostgreSQL connection from settings.

        Args:
            db: Database settings section.
            echo: Log emitted SQL.

        Returns:
            New DatabaseConnection.
        """
        engine = create_engine(db.sync_url, echo=echo, **db.engine_options())
        return cls(engine)

    @classmethod
    def in_memory(cls) -> "DatabaseConnection":
        """Create a single-connection in-memory SQLite database.

        The schema is created immediately. Intended for tests and
        local experiments.

        Returns:
            New DatabaseConnection.
        """
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        connection = cls(engine)
        connection.create_schema()
        return connection

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional session scope.

        Automatically commits on success, rolls back on exception,
        and closes the session when done.

        Yields:
            SQLAlchemy Session instance.

        Raises:
            Exception: Re-raises any exception after rollback.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """Test database connectivity with a simple query.

        Returns:
            True if connection successful, False otherwise.
        """
        try:
            with self.session() as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def create_schema(self, drop: bool = False) -> None:
        """Create all tables, optionally dropping them first.

        Args:
            drop: Drop existing tables before creating.
        """
        if drop:
            Base.metadata.drop_all(self._engine)
        Base.metadata.create_all(self._engine)

    def dispose(self) -> None:
        """Dispose the connection pool and release resources.

        Should be called during application shutdown.
        """
        self._engine.dispose()

    @property
    def engine(self) -> Engine:
        """Get the underlying engine."""
        return self._engine

    @property
    def dialect_name(self) -> str:
        """Name of the SQL dialect in use (e.g. 'postgresql')."""
        return self._engine.dialect.name

"""Movie store with optimistic concurrency control.

Every operation runs in its own short transaction bounded by a
statement timeout. Updates and deletes never lock rows between the
caller's read and write: an update only applies when the version the
caller read is still current.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from greenlight.core.movie import Movie, MovieInput
from greenlight.database.connection import DatabaseConnection
from greenlight.database.errors import (
    EditConflictError,
    RecordNotFoundError,
    StoreError,
    StoreTimeoutError,
)
from greenlight.database.models import MovieRecord

# SQLSTATE raised by PostgreSQL when statement_timeout fires
_QUERY_CANCELED = "57014"

_SYNC_NONE = {"synchronize_session": False}


class MovieStore:
    """Persistence operations for movies.

    Attributes:
        database: Injected connection pool.
        timeout: Seconds a single call may spend in the database.
    """

    def __init__(self, database: DatabaseConnection, timeout: float = 3.0) -> None:
        """Initialize the store.

        Args:
            database: Connection pool shared by the process.
            timeout: Per-call statement timeout in seconds.
        """
        self._database = database
        self._timeout = timeout

    @property
    def database(self) -> DatabaseConnection:
        """Get the injected database connection."""
        return self._database

    @property
    def timeout(self) -> float:
        """Per-call timeout in seconds."""
        return self._timeout

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def insert(self, movie: MovieInput) -> Movie:
        """Insert a new movie.

        Args:
            movie: Validated create payload.

        Returns:
            Stored movie with id, created_at and version assigned.

        Raises:
            StoreTimeoutError: If the call exceeded its timeout.
            StoreError: On any other database failure.
        """
        stmt = (
            insert(MovieRecord)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=list(movie.genres or []),
            )
            .returning(MovieRecord.id, MovieRecord.created_at, MovieRecord.version)
        )
        with self._transaction() as session:
            row = session.execute(stmt).one()

        return Movie(
            id=row.id,
            created_at=row.created_at,
            title=movie.title,
            year=movie.year,
            runtime=movie.runtime,
            genres=list(movie.genres or []),
            version=row.version,
        )

    def get(self, movie_id: int) -> Movie:
        """Fetch a movie by id.

        Args:
            movie_id: Primary key.

        Returns:
            Stored movie.

        Raises:
            RecordNotFoundError: If ``movie_id`` < 1 or no row matches.
            StoreTimeoutError: If the call exceeded its timeout.
            StoreError: On any other database failure.
        """
        if movie_id < 1:
            raise RecordNotFoundError()

        with self._transaction() as session:
            record = session.get(MovieRecord, movie_id)
            if record is None:
                raise RecordNotFoundError()
            return _to_movie(record)

    def update(self, movie: Movie) -> Movie:
        """Write a movie back if nobody changed it since it was read.

        The row is only updated when both ``id`` and ``version`` still
        match; the version is incremented in the same statement.

        Args:
            movie: Candidate record carrying the version read earlier.

        Returns:
            The movie with its new version.

        Raises:
            EditConflictError: If the row was updated or deleted meanwhile.
            StoreTimeoutError: If the call exceeded its timeout.
            StoreError: On any other database failure.
        """
        stmt = (
            update(MovieRecord)
            .where(MovieRecord.id == movie.id, MovieRecord.version == movie.version)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=list(movie.genres),
                version=MovieRecord.version + 1,
            )
            .returning(MovieRecord.version)
        )
        with self._transaction() as session:
            new_version = session.execute(stmt, execution_options=_SYNC_NONE).scalar_one_or_none()
            if new_version is None:
                raise EditConflictError()

        movie.version = new_version
        return movie

    def delete(self, movie_id: int) -> None:
        """Hard-delete a movie.

        Args:
            movie_id: Primary key.

        Raises:
            RecordNotFoundError: If ``movie_id`` < 1 or no row was deleted.
            StoreTimeoutError: If the call exceeded its timeout.
            StoreError: On any other database failure.
        """
        if movie_id < 1:
            raise RecordNotFoundError()

        stmt = delete(MovieRecord).where(MovieRecord.id == movie_id)
        with self._transaction() as session:
            result = session.execute(stmt, execution_options=_SYNC_NONE)
            if result.rowcount == 0:
                raise RecordNotFoundError()

    def get_all(self) -> list[Movie]:
        """List every movie ordered by id.

        Returns:
            All stored movies; empty list when there are none.

        Raises:
            StoreTimeoutError: If the call exceeded its timeout.
            StoreError: On any other database failure.
        """
        stmt = select(MovieRecord).order_by(MovieRecord.id)
        with self._transaction() as session:
            return [_to_movie(record) for record in session.scalars(stmt)]

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    @contextmanager
    def _transaction(self) -> Generator[Session, None, None]:
        """Open a timeout-bounded transaction and translate driver errors.

        Yields:
            Session inside a transaction committed on exit.

        Raises:
            StoreTimeoutError: On statement or pool checkout timeout.
            StoreError: On any other SQLAlchemy error.
        """
        try:
            with self._database.session() as session:
                self._apply_timeout(session)
                yield session
        except PoolTimeoutError as exc:
            raise StoreTimeoutError("timed out waiting for a database connection") from exc
        except OperationalError as exc:
            if _is_query_canceled(exc):
                raise StoreTimeoutError(
                    f"database call exceeded {self._timeout:g}s timeout"
                ) from exc
            raise StoreError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def _apply_timeout(self, session: Session) -> None:
        """Bound every statement of the current transaction."""
        if self._database.dialect_name != "postgresql":
            return
        milliseconds = max(1, int(self._timeout * 1000))
        session.execute(text(f"SET LOCAL statement_timeout = {milliseconds}"))


def _to_movie(record: MovieRecord) -> Movie:
    """Convert an ORM row into a detached Movie."""
    return Movie(
        id=record.id,
        created_at=record.created_at,
        title=record.title,
        year=record.year,
        runtime=record.runtime,
        genres=list(record.genres),
        version=record.version,
    )


def _is_query_canceled(exc: OperationalError) -> bool:
    """Tell whether the driver reported a statement timeout."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code == _QUERY_CANCELED

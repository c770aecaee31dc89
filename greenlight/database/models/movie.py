"""Movie model - the single catalogue table."""

from sqlalchemy import JSON, BigInteger, CheckConstraint, Integer, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from greenlight.core.movie import MIN_YEAR
from greenlight.database.models.base import Base, CreatedAtMixin

# text[] on PostgreSQL, JSON array elsewhere (SQLite in tests)
GenreList = ARRAY(Text).with_variant(JSON(), "sqlite")


class MovieRecord(Base, CreatedAtMixin):
    """Row of the ``movies`` table.

    Attributes:
        id: Primary key.
        title: Movie title.
        year: Release year.
        runtime: Runtime in minutes.
        genres: Ordered genre names.
        version: Optimistic concurrency token.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    runtime: Mapped[int] = mapped_column(Integer, nullable=False)
    genres: Mapped[list[str]] = mapped_column(GenreList, nullable=False)
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
    )

    __table_args__ = (
        CheckConstraint("runtime > 0", name="runtime"),
        CheckConstraint(f"year >= {MIN_YEAR}", name="year"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<MovieRecord(id={self.id}, title='{self.title}', version={self.version})>"

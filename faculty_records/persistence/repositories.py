"""Data access layer for the academic-year snapshot cache.

SnapshotRepository stores and reads back assembled per-year tables so a
rerun can skip the directory lookups for years already processed. It
returns domain models rather than ORM models.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from faculty_records.domain.models import FacultyTableRow, YearSnapshot

from .exceptions import DataIntegrityError, PersistenceError
from .schema import FacultyRowModel, YearSnapshotModel

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """Repository for cached academic-year tables."""

    def __init__(self, session: Session):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_snapshot(self, academic_year: str) -> Optional[YearSnapshot]:
        """Snapshot metadata for academic_year, or None when not cached.

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            model = self.session.get(YearSnapshotModel, academic_year)
            return model.to_domain() if model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving snapshot for {academic_year}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve snapshot: {e}") from e

    def get_rows(self, academic_year: str) -> List[FacultyTableRow]:
        """Cached rows for academic_year in their original order.

        Returns:
            List of rows (empty list if the year is not cached)

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            stmt = (
                select(FacultyRowModel)
                .where(FacultyRowModel.academic_year == academic_year)
                .order_by(FacultyRowModel.position.asc())
            )
            models = self.session.execute(stmt).scalars().all()
            return [model.to_domain() for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving rows for {academic_year}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve rows: {e}") from e

    def save_rows(
        self,
        academic_year: str,
        rows: Sequence[FacultyTableRow],
        diagnostic_count: int = 0,
        created_at: Optional[datetime] = None,
    ) -> YearSnapshot:
        """Replace the cached table for academic_year.

        Args:
            academic_year: Year label; every row must carry the same label
            rows: Rows in output order
            diagnostic_count: Number of diagnostics produced for the year
            created_at: Snapshot time (defaults to now, UTC)

        Returns:
            Persisted snapshot metadata

        Raises:
            DataIntegrityError: If a row belongs to another academic year
            PersistenceError: If database error occurs
        """
        mismatched = [row.academic_year for row in rows if row.academic_year != academic_year]
        if mismatched:
            raise DataIntegrityError(
                f"Rows for {mismatched[0]} cannot be saved under {academic_year}"
            )

        snapshot = YearSnapshot(
            academic_year=academic_year,
            created_at=created_at or datetime.now(timezone.utc),
            row_count=len(rows),
            diagnostic_count=diagnostic_count,
        )

        try:
            self._delete_year(academic_year)
            self.session.add(YearSnapshotModel.from_domain(snapshot))
            self.session.flush()
            self.session.add_all(
                [FacultyRowModel.from_domain(row, position) for position, row in enumerate(rows)]
            )
            self.session.flush()
        except IntegrityError as e:
            logger.error(f"Integrity error saving rows for {academic_year}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to save rows due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error saving rows for {academic_year}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save rows: {e}") from e

        logger.debug(
            f"Cached {len(rows)} rows for {academic_year}",
            extra={"event": "persistence.snapshot.saved", "academic_year": academic_year},
        )
        return snapshot

    def delete(self, academic_year: str) -> bool:
        """Remove a cached year.

        Returns:
            True if a snapshot existed

        Raises:
            PersistenceError: If database error occurs
        """
        try:
            existed = self.session.get(YearSnapshotModel, academic_year) is not None
            self._delete_year(academic_year)
            self.session.flush()
            return existed
        except SQLAlchemyError as e:
            logger.error(f"Error deleting snapshot for {academic_year}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete snapshot: {e}") from e

    def list_years(self) -> List[str]:
        """Labels of all cached academic years, sorted."""
        try:
            stmt = select(YearSnapshotModel.academic_year).order_by(YearSnapshotModel.academic_year.asc())
            return list(self.session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing cached years: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list cached years: {e}") from e

    def _delete_year(self, academic_year: str) -> None:
        self.session.execute(delete(FacultyRowModel).where(FacultyRowModel.academic_year == academic_year))
        self.session.execute(delete(YearSnapshotModel).where(YearSnapshotModel.academic_year == academic_year))

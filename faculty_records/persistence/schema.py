"""Database schema definition and ORM models.

This module defines the snapshot cache tables and conversions between ORM
rows and domain models:
- faculty_rows: one row per faculty member per cached academic year
- year_snapshots: when each academic year was cached and what it held
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from faculty_records.domain.models import FacultyTableRow, YearSnapshot

logger = logging.getLogger(__name__)

Base = declarative_base()


class YearSnapshotModel(Base):
    """ORM model for year_snapshots table."""

    __tablename__ = "year_snapshots"

    academic_year = Column(String(20), primary_key=True, nullable=False)

    # Stored as ISO 8601 strings
    created_at = Column(String(50), nullable=False)

    row_count = Column(Integer, nullable=False, default=0)
    diagnostic_count = Column(Integer, nullable=False, default=0)

    def to_domain(self) -> YearSnapshot:
        return YearSnapshot(
            academic_year=self.academic_year,
            created_at=_parse_datetime(self.created_at),
            row_count=self.row_count,
            diagnostic_count=self.diagnostic_count,
        )

    @classmethod
    def from_domain(cls, snapshot: YearSnapshot) -> "YearSnapshotModel":
        return cls(
            academic_year=snapshot.academic_year,
            created_at=_format_datetime(snapshot.created_at),
            row_count=snapshot.row_count,
            diagnostic_count=snapshot.diagnostic_count,
        )


class FacultyRowModel(Base):
    """ORM model for faculty_rows table.

    Keyed by (academic_year, position) since names are not unique within a
    year. Rows of a year are always replaced together.
    """

    __tablename__ = "faculty_rows"

    academic_year = Column(
        String(20),
        ForeignKey("year_snapshots.academic_year", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
    )
    position = Column(Integer, primary_key=True, nullable=False)

    name = Column(Text, nullable=True)
    graduation_year = Column(Integer, nullable=True)
    degree = Column(String(50), nullable=True)
    age = Column(Integer, nullable=True)
    department = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_faculty_rows_name", "name"),
    )

    def to_domain(self) -> FacultyTableRow:
        return FacultyTableRow(
            name=self.name,
            graduation_year=self.graduation_year,
            degree=self.degree,
            age=self.age,
            academic_year=self.academic_year,
            department=self.department,
        )

    @classmethod
    def from_domain(cls, row: FacultyTableRow, position: int) -> "FacultyRowModel":
        """Create ORM model from a table row.

        Args:
            row: Domain row
            position: Index of the row within its academic year
        """
        return cls(
            academic_year=row.academic_year,
            position=position,
            name=row.name,
            graduation_year=row.graduation_year,
            degree=row.degree,
            age=row.age,
            department=row.department,
        )


def _format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime as ISO 8601 string in UTC with a Z suffix."""
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string written by _format_datetime."""
    if not dt_str:
        return None

    dt_str = dt_str.rstrip("Z")
    try:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S.%f")
    except ValueError:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S")

    return dt.replace(tzinfo=timezone.utc)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        logger.info(f"Database schema ready. Tables: {', '.join(sorted(Base.metadata.tables))}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise

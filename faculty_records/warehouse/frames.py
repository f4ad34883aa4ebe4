"""Tabular assembly of faculty rows with pandas.

Per-year tables are DataFrames with a fixed column set. The warehouse is
their concatenation: rows for the same person in different years stay
separate, nothing is deduplicated or merged.
"""

from typing import Dict, Iterable, List, Sequence

import pandas as pd

from faculty_records.domain.models import FacultyTableRow
from faculty_records.logging import get_logger

logger = get_logger(__name__, component="warehouse")

COLUMNS: Dict[str, str] = {
    "Name": "object",
    "GraduationYear": "Int64",
    "Degree": "category",
    "Age": "Int64",
    "AcademicYear": "object",
    "Department": "category",
}

# FacultyTableRow field for each column
FIELD_NAMES: Dict[str, str] = {
    "Name": "name",
    "GraduationYear": "graduation_year",
    "Degree": "degree",
    "Age": "age",
    "AcademicYear": "academic_year",
    "Department": "department",
}


def _apply_dtypes(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.astype(COLUMNS)


def empty_frame() -> pd.DataFrame:
    """A table with the warehouse columns and no rows."""
    return _apply_dtypes(pd.DataFrame({column: [] for column in COLUMNS}))


def rows_to_frame(rows: Sequence[FacultyTableRow]) -> pd.DataFrame:
    """One academic year's rows as a typed DataFrame.

    Missing graduation years and ages are <NA> in nullable integer columns,
    never zero.
    """
    if not rows:
        return empty_frame()

    data = {
        column: [getattr(row, field) for row in rows]
        for column, field in FIELD_NAMES.items()
    }
    return _apply_dtypes(pd.DataFrame(data))


def frame_to_rows(frame: pd.DataFrame) -> List[FacultyTableRow]:
    """Inverse of rows_to_frame, for reading back a saved table."""
    rows: List[FacultyTableRow] = []
    for record in frame.to_dict(orient="records"):
        values = {
            field: (None if pd.isna(record[column]) else record[column])
            for column, field in FIELD_NAMES.items()
        }
        for field in ("graduation_year", "age"):
            if values[field] is not None:
                values[field] = int(values[field])
        rows.append(FacultyTableRow(**values))
    return rows


def build_warehouse(tables: Iterable[pd.DataFrame]) -> pd.DataFrame:
    """Concatenate per-year tables in the order given.

    Rows are never deduplicated by Name; the same person in two academic
    years yields two rows.
    """
    frames = [table for table in tables if table is not None]
    if not frames:
        return empty_frame()

    # Category columns with different categories per year concatenate as
    # object, so dtypes are re-applied to the combined frame.
    warehouse = _apply_dtypes(pd.concat(frames, ignore_index=True))

    logger.info(
        f"Warehouse built from {len(frames)} table(s) with {len(warehouse)} rows",
        extra={
            "event": "warehouse.built",
            "table_count": len(frames),
            "row_count": len(warehouse),
        },
    )
    return warehouse

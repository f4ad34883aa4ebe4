"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from faculty_records.domain.models import Diagnostic


@dataclass
class YearRunStats:
    """
    Statistics for one academic year within a pipeline run.

    Attributes:
        academic_year: Year label
        name_count: Flat-file lines (one per faculty member)
        linked_count: Records found in the secondary document
        looked_up_count: Records found through the directory
        missing_count: Rows left without an academic record
        ambiguous_count: Directory searches that returned several identifiers
        failed_count: Directory lookups lost to transport errors
        row_count: Rows in the year's table
        diagnostic_count: Diagnostics produced for the year
        from_cache: Whether rows were read from the snapshot cache
        duration_seconds: Time spent on this year
        had_errors: Whether the year failed as a whole
        error_message: Optional error message if the year failed
    """

    academic_year: str
    name_count: int = 0
    linked_count: int = 0
    looked_up_count: int = 0
    missing_count: int = 0
    ambiguous_count: int = 0
    failed_count: int = 0
    row_count: int = 0
    diagnostic_count: int = 0
    from_cache: bool = False
    duration_seconds: float = 0.0
    had_errors: bool = False
    error_message: Optional[str] = None


@dataclass
class PipelineRunResult:
    """
    Results from a complete pipeline execution.

    Attributes:
        run_id: Identifier attached to every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Total time for the entire run
        year_stats: Per-year statistics in processing order
        diagnostics: Every diagnostic produced, in order
        tables: Per-year DataFrames keyed by academic year
        warehouse: Concatenation of the per-year tables
        total_rows: Rows across all years
        total_missing: Rows without an academic record across all years
        had_errors: Whether any year failed
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    total_duration_seconds: float = 0.0
    year_stats: List[YearRunStats] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    tables: Dict[str, pd.DataFrame] = field(default_factory=dict)
    warehouse: Optional[pd.DataFrame] = None
    total_rows: int = 0
    total_missing: int = 0
    had_errors: bool = False

    def __post_init__(self):
        """Compute aggregate statistics from year stats."""
        if self.year_stats:
            self.total_rows = sum(s.row_count for s in self.year_stats)
            self.total_missing = sum(s.missing_count for s in self.year_stats)
            self.had_errors = any(s.had_errors for s in self.year_stats)

        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def failed_years(self) -> List[str]:
        return [s.academic_year for s in self.year_stats if s.had_errors]

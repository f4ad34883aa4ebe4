"""Pipeline orchestration: catalogs in, multi-year faculty table out."""

import threading
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple
from uuid import uuid4

from faculty_records.config.models import AppConfig, YearConfig
from faculty_records.directory.base import BaseDirectory
from faculty_records.directory.factory import get_directory
from faculty_records.domain.models import Diagnostic, DiagnosticKind, FacultyTableRow, RecordSource
from faculty_records.extraction.names import collect_departments, collect_faculty_names
from faculty_records.linking.linker import link_records
from faculty_records.logging import get_logger
from faculty_records.logging.context import log_context
from faculty_records.normalization.service import DocumentNormalizer
from faculty_records.persistence.database import get_session
from faculty_records.persistence.repositories import SnapshotRepository
from faculty_records.transform.service import transform
from faculty_records.warehouse.frames import build_warehouse, rows_to_frame

from .models import PipelineRunResult, YearRunStats

logger = get_logger(__name__, component="pipeline")

# A year with any of these is rebuilt on the next run instead of being cached
UNCACHEABLE_KINDS = frozenset({DiagnosticKind.CONFIGURATION_MISMATCH, DiagnosticKind.LOOKUP_FAILURE})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CatalogPipeline:
    """
    Runs the extraction pipeline for every configured academic year.

    Each year goes normalize -> collect names -> link against the secondary
    document -> directory fallback -> transform, and the per-year tables are
    concatenated into the warehouse. A year that fails is recorded in its
    stats and the remaining years still run.
    """

    def __init__(
        self,
        app_config: AppConfig,
        directory: Optional[BaseDirectory] = None,
        use_cache: bool = True,
    ):
        """
        Initialize the pipeline.

        Args:
            app_config: Application configuration
            directory: Directory client; built from configuration when omitted
                and the directory is enabled
            use_cache: Read and write the snapshot cache (requires init_database)
        """
        self.app_config = app_config
        self.use_cache = use_cache

        if directory is None and app_config.directory.enabled:
            directory = get_directory(app_config.directory, app_config.extraction)
        self.directory = directory

        self._lock = threading.Lock()

    def select_years(self, labels: Optional[Sequence[str]] = None) -> List[YearConfig]:
        """Years to process, in configuration order.

        Raises:
            ValueError: If a requested label is not configured
        """
        if not labels:
            return self.app_config.get_enabled_years()

        unknown = [label for label in labels if self.app_config.get_year(label) is None]
        if unknown:
            configured = ", ".join(year.label for year in self.app_config.years)
            raise ValueError(f"Unknown academic year(s): {', '.join(unknown)}. Configured: {configured}")

        return [year for year in self.app_config.years if year.label in labels]

    def run(self, years: Optional[Sequence[str]] = None, refresh: bool = False) -> PipelineRunResult:
        """
        Process the selected years and build the warehouse.

        Args:
            years: Labels to process (default: every enabled year)
            refresh: Ignore cached snapshots and rebuild from the documents

        Returns:
            PipelineRunResult with per-year stats, diagnostics and tables

        Raises:
            ValueError: If a requested label is not configured
            RuntimeError: If another run is in progress on this pipeline
        """
        selected = self.select_years(years)
        run_id = uuid4().hex
        run_started_at = _utc_now()

        if not self._lock.acquire(blocking=False):
            raise RuntimeError("A pipeline run is already in progress")

        try:
            with log_context(run_id=run_id):
                logger.info(
                    f"Pipeline run started for {len(selected)} year(s)",
                    extra={
                        "event": "pipeline.run.started",
                        "years": [year.label for year in selected],
                        "refresh": refresh,
                        "directory_enabled": self.directory is not None,
                    },
                )

                year_stats: List[YearRunStats] = []
                diagnostics: List[Diagnostic] = []
                tables = {}

                for year_config in selected:
                    stats, rows, year_diagnostics = self._process_year(year_config, refresh, run_id)
                    year_stats.append(stats)
                    diagnostics.extend(year_diagnostics)
                    if not stats.had_errors:
                        tables[year_config.label] = rows_to_frame(rows)

                result = PipelineRunResult(
                    run_id=run_id,
                    run_started_at=run_started_at,
                    run_finished_at=_utc_now(),
                    year_stats=year_stats,
                    diagnostics=diagnostics,
                    tables=tables,
                    warehouse=build_warehouse(tables.values()),
                )

                logger.info(
                    "Pipeline run completed",
                    extra={
                        "event": "pipeline.run.completed",
                        "duration_ms": int(result.total_duration_seconds * 1000),
                        "total_rows": result.total_rows,
                        "total_missing": result.total_missing,
                        "diagnostic_count": len(result.diagnostics),
                        "failed_years": result.failed_years,
                    },
                )

                return result
        finally:
            self._lock.release()

    def build_year(self, year_config: YearConfig) -> Tuple[List[FacultyTableRow], List[Diagnostic], YearRunStats]:
        """
        Build one year's rows from its documents (no cache involved).

        Raises:
            OSError: If a document cannot be read
        """
        label = year_config.label
        stats = YearRunStats(academic_year=label)
        diagnostics: List[Diagnostic] = []

        primary = DocumentNormalizer(
            anchor_keyword=year_config.anchor_keyword,
            short_line_threshold=year_config.short_line_threshold,
            rejoin_count=year_config.rejoin_count,
            academic_year=label,
        ).normalize_file(year_config.document)
        if primary.diagnostic is not None:
            diagnostics.append(primary.diagnostic)

        flat_file = primary.flat_file
        faculty_names = collect_faculty_names(flat_file)
        display_names = [
            name.display(year_config.reorder_names) if name is not None else None
            for name in faculty_names
        ]
        departments = collect_departments(flat_file)
        stats.name_count = len(flat_file)

        secondary_flat_file = None
        if year_config.secondary_document is not None:
            secondary = DocumentNormalizer(
                anchor_keyword=year_config.secondary_anchor_keyword,
                short_line_threshold=year_config.secondary_short_line_threshold,
                academic_year=label,
            ).normalize_file(year_config.secondary_document)
            if secondary.diagnostic is not None:
                diagnostics.append(secondary.diagnostic)
            secondary_flat_file = secondary.flat_file

        pattern = self.app_config.extraction.record_pattern
        linked = link_records(display_names, secondary_flat_file, pattern, departments)
        stats.linked_count = sum(1 for item in linked if item.source == RecordSource.SECONDARY)

        if self.directory is not None:
            linked, lookup_diagnostics = self.directory.lookup_missing(linked, faculty_names, label)
            diagnostics.extend(lookup_diagnostics)
            stats.looked_up_count = sum(1 for item in linked if item.source == RecordSource.DIRECTORY)
            stats.ambiguous_count = sum(1 for d in lookup_diagnostics if d.kind == DiagnosticKind.AMBIGUOUS)
            stats.failed_count = sum(1 for d in lookup_diagnostics if d.kind == DiagnosticKind.LOOKUP_FAILURE)

        for item in linked:
            if item.is_missing and item.name is not None and self.directory is None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.NO_MATCH,
                        name=item.name,
                        academic_year=label,
                        message="no record in the secondary document and directory lookup is disabled",
                    )
                )

        rows = transform(
            linked,
            academic_year=label,
            reference_year=year_config.reference_year,
            assumed_graduation_age=self.app_config.extraction.assumed_graduation_age,
        )
        stats.missing_count = sum(1 for item in linked if item.is_missing)
        stats.row_count = len(rows)
        stats.diagnostic_count = len(diagnostics)

        return rows, diagnostics, stats

    def _process_year(
        self, year_config: YearConfig, refresh: bool, run_id: str
    ) -> Tuple[YearRunStats, List[FacultyTableRow], List[Diagnostic]]:
        """
        Process one year, from the cache when possible.

        Never raises: a failure is recorded on the returned stats.
        """
        year_start = time.time()
        label = year_config.label
        stats = YearRunStats(academic_year=label)
        rows: List[FacultyTableRow] = []
        diagnostics: List[Diagnostic] = []

        with log_context(run_id=run_id, academic_year=label):
            logger.info(
                f"Processing academic year {label}",
                extra={"event": "year.run.started"},
            )

            try:
                cached = None if refresh else self._load_cached(label)

                if cached is not None:
                    rows = cached
                    stats.from_cache = True
                    stats.row_count = len(rows)
                    stats.name_count = len(rows)
                    stats.missing_count = sum(1 for row in rows if row.graduation_year is None)
                    logger.info(
                        f"Loaded {len(rows)} cached rows for {label}",
                        extra={"event": "year.cache.hit", "row_count": len(rows)},
                    )
                else:
                    rows, diagnostics, stats = self.build_year(year_config)
                    unsettled = [d.kind.value for d in diagnostics if d.kind in UNCACHEABLE_KINDS]
                    if unsettled:
                        logger.warning(
                            f"Not caching {label}: {len(unsettled)} unresolved diagnostic(s)",
                            extra={"event": "year.cache.skipped", "kinds": sorted(set(unsettled))},
                        )
                    else:
                        self._save_cached(label, rows, len(diagnostics))

            except Exception as e:
                stats.had_errors = True
                stats.error_message = str(e)
                rows, diagnostics = [], []
                logger.error(
                    f"Failed to process academic year {label}: {e}",
                    extra={
                        "event": "year.run.failed",
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )

            finally:
                stats.duration_seconds = time.time() - year_start
                logger.info(
                    f"Academic year {label} completed",
                    extra={
                        "event": "year.run.completed",
                        "row_count": stats.row_count,
                        "linked_count": stats.linked_count,
                        "looked_up_count": stats.looked_up_count,
                        "missing_count": stats.missing_count,
                        "from_cache": stats.from_cache,
                        "had_errors": stats.had_errors,
                    },
                )

        return stats, rows, diagnostics

    def _load_cached(self, label: str) -> Optional[List[FacultyTableRow]]:
        if not self.use_cache:
            return None
        with get_session() as session:
            repo = SnapshotRepository(session)
            if repo.get_snapshot(label) is None:
                return None
            return repo.get_rows(label)

    def _save_cached(self, label: str, rows: List[FacultyTableRow], diagnostic_count: int) -> None:
        if not self.use_cache:
            return
        with get_session() as session:
            SnapshotRepository(session).save_rows(label, rows, diagnostic_count=diagnostic_count)

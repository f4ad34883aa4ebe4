"""Command-line entry point for the faculty records pipeline."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from faculty_records.config.environment import EnvironmentConfig
from faculty_records.config.exceptions import ConfigurationError
from faculty_records.config.loader import load_config
from faculty_records.config.models import AppConfig
from faculty_records.logging import get_logger
from faculty_records.logging.config import configure_logging
from faculty_records.persistence.database import close_database, init_database
from faculty_records.pipeline import CatalogPipeline, PipelineRunResult

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Path, log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = str(getattr(app_config.logging.level, "value", app_config.logging.level))

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Faculty Records - build a multi-year table of faculty degrees from catalog text"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument(
        "--year",
        dest="years",
        action="append",
        default=None,
        help="Academic year label to process; repeat for several (default: all enabled years)",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore cached snapshots and rebuild from the documents",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the warehouse as CSV to this path (default: stdout)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def write_output(result: PipelineRunResult, output: Optional[Path]) -> None:
    """Write the warehouse as CSV to output, or to stdout when output is None."""
    if output is None:
        result.warehouse.to_csv(sys.stdout, index=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    result.warehouse.to_csv(output, index=False, encoding="utf-8")
    logger.info(
        f"Wrote {len(result.warehouse)} rows to {output}",
        extra={"event": "output.written", "path": str(output), "row_count": len(result.warehouse)},
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the pipeline once and write the warehouse.

    Returns:
        Exit code: 0 on success, 1 on a configuration error, an unknown
        year, or when any academic year failed.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Faculty Records starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config),
                "log_level": env_config.log_level,
                "years": args.years,
                "refresh": args.refresh,
            },
        )

        init_database(env_config.database_url)

        try:
            pipeline = CatalogPipeline(app_config)
            result = pipeline.run(years=args.years, refresh=args.refresh)
            write_output(result, args.output)
        finally:
            close_database()

        for diagnostic in result.diagnostics:
            logger.info(
                str(diagnostic),
                extra={"event": "diagnostic.reported", "kind": diagnostic.kind.value},
            )

        logger.info(
            f"Run completed: {result.total_rows} rows, {result.total_missing} without a record, "
            f"{len(result.diagnostics)} diagnostics",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
                "had_errors": result.had_errors,
                "failed_years": result.failed_years,
            },
        )

        return 1 if result.had_errors else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())

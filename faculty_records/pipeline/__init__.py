"""Pipeline orchestration across academic years."""

from .models import PipelineRunResult, YearRunStats
from .runner import CatalogPipeline

__all__ = [
    "CatalogPipeline",
    "PipelineRunResult",
    "YearRunStats",
]

"""Document normalization: raw catalog text to flat files.

This module provides:
- The named cleaning rules (trim_to_anchor, trim_to_separator,
  drop_short_lines, rejoin_split_lines) and their composition, normalize()
- DocumentNormalizer: per-layout service that reports configuration mismatches
- NormalizationResult: flat file plus optional diagnostic
"""

from .models import NormalizationResult
from .service import (
    DocumentNormalizer,
    drop_short_lines,
    normalize,
    read_document,
    rejoin_split_lines,
    trim_to_anchor,
    trim_to_separator,
)

__all__ = [
    "DocumentNormalizer",
    "NormalizationResult",
    "normalize",
    "read_document",
    "trim_to_anchor",
    "trim_to_separator",
    "drop_short_lines",
    "rejoin_split_lines",
]

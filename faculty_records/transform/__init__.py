"""Record transformation: academic record text to typed table rows."""

from .service import (
    ASSUMED_GRADUATION_AGE,
    estimate_age,
    extract_degree,
    extract_graduation_year,
    transform,
    undergraduate_fragment,
)

__all__ = [
    "ASSUMED_GRADUATION_AGE",
    "transform",
    "extract_graduation_year",
    "extract_degree",
    "estimate_age",
    "undergraduate_fragment",
]

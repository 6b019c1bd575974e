"""String measures -- a memoized registry over third-party algorithms."""

from record_linkage.measures.catalog import (
    DISTANCE_MEASURES,
    KNOWN_MEASURES,
    SIMILARITY_MEASURES,
    Orientation,
)
from record_linkage.measures.lcs import NormalizedLcs
from record_linkage.measures.registry import Measure, MeasureRegistry, normalize_operand

__all__ = [
    "DISTANCE_MEASURES",
    "KNOWN_MEASURES",
    "SIMILARITY_MEASURES",
    "Measure",
    "MeasureRegistry",
    "NormalizedLcs",
    "Orientation",
    "normalize_operand",
]

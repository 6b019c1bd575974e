"""Probabilistic record-linkage match scoring."""

from record_linkage.errors import (
    InvalidMatchers,
    InvalidScoreMode,
    MissingFieldProperty,
    MissingProperty,
    MissingSessionProperty,
    ScoringConfigError,
    UnknownMeasure,
)
from record_linkage.matching import ScoringSession

__all__ = [
    "InvalidMatchers",
    "InvalidScoreMode",
    "MissingFieldProperty",
    "MissingProperty",
    "MissingSessionProperty",
    "ScoringConfigError",
    "ScoringSession",
    "UnknownMeasure",
]

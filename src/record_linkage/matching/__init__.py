"""Per-field comparison specs and the score aggregation engine."""

from record_linkage.matching.aggregators import (
    NOT_SCORED,
    Aggregator,
    BayesAggregator,
    FellegiSunterAggregator,
    FieldOutcome,
    MultiplyAggregator,
    ScoreBreakdown,
    SumAggregator,
    build_aggregator,
)
from record_linkage.matching.config import (
    FieldMatchSpec,
    NullHandling,
    ScoreMode,
    ScoringConfig,
    load_scoring_config,
    parse_field_specs,
    parse_session,
)
from record_linkage.matching.session import ScoringSession

__all__ = [
    "NOT_SCORED",
    "Aggregator",
    "BayesAggregator",
    "FellegiSunterAggregator",
    "FieldMatchSpec",
    "FieldOutcome",
    "MultiplyAggregator",
    "NullHandling",
    "ScoreBreakdown",
    "ScoreMode",
    "ScoringConfig",
    "ScoringSession",
    "SumAggregator",
    "build_aggregator",
    "load_scoring_config",
    "parse_field_specs",
    "parse_session",
]

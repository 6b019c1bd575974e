"""Score aggregators.

Each aggregator folds the per-field comparison outcomes of one document
into a single score.  The aggregation mode is chosen once per session
(see :func:`build_aggregator`); the null-handling policy names are
shared across modes but their numeric effect is defined per mode.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from record_linkage.matching.config import FieldMatchSpec, NullHandling, ScoreMode, ScoringConfig
from record_linkage.measures import Measure, MeasureRegistry

# Outside [0, 1]: marks a Bayes total to which no field has contributed.
NOT_SCORED = 2.0

DocumentAccessor = Mapping[str, Any] | Callable[[str], Any]


@dataclass(frozen=True)
class FieldOutcome:
    """How one field contributed to a document's score.

    ``policy`` is ``None`` when neither value was empty, ``raw_score`` is
    ``None`` when a null policy replaced the measure, and
    ``contribution`` is ``None`` when the field was skipped.
    """

    field: str
    policy: NullHandling | None
    raw_score: float | None
    contribution: float | None


@dataclass(frozen=True)
class ScoreBreakdown:
    score: float
    fields: tuple[FieldOutcome, ...]


def read_value(document: DocumentAccessor, field: str) -> str:
    """Fetch a field from the document; absent values read as ``""``."""
    if callable(document):
        value = document(field)
    else:
        value = document.get(field)
    return "" if value is None else str(value)


def resolve_null_policy(document_value: str, spec: FieldMatchSpec) -> NullHandling | None:
    """Pick the null-handling policy that applies to this comparison.

    Returns ``None`` when neither value is empty.
    """
    if not document_value and not spec.value:
        return spec.null_handling_both or spec.null_handling
    if not document_value or not spec.value:
        return spec.null_handling
    return None


def combine_probabilities(a: float, b: float) -> float:
    """Naive Bayes combination of two independent probability estimates.

    Fully contradictory certainties (1 and 0) carry no usable evidence
    and combine to 0.5.
    """
    agree = a * b
    denominator = agree + (1.0 - a) * (1.0 - b)
    if denominator == 0.0:
        return 0.5
    return agree / denominator


class Aggregator(ABC):
    """Folds a document's field outcomes into one score."""

    initial: float = 0.0

    def __init__(self, specs: Sequence[FieldMatchSpec], registry: MeasureRegistry) -> None:
        self.specs = tuple(specs)
        self.registry = registry

    def score(self, document: DocumentAccessor) -> float:
        return self.explain(document).score

    def explain(self, document: DocumentAccessor) -> ScoreBreakdown:
        total = self.initial
        outcomes = []
        for spec in self.specs:
            outcome = self.evaluate(spec, read_value(document, spec.field))
            if outcome.contribution is not None:
                total = self.fold(total, outcome.contribution)
            outcomes.append(outcome)
        return ScoreBreakdown(score=total, fields=tuple(outcomes))

    def evaluate(self, spec: FieldMatchSpec, document_value: str) -> FieldOutcome:
        policy = resolve_null_policy(document_value, spec)
        if policy is None or policy is NullHandling.OFF:
            measure = self.registry.resolve(spec.matcher)
            raw = measure.score(spec.value, document_value)
            contribution = self.measured(spec, measure, raw)
        else:
            raw = None
            contribution = self.substituted(spec, policy)
        return FieldOutcome(
            field=spec.field,
            policy=policy,
            raw_score=raw,
            contribution=contribution,
        )

    @abstractmethod
    def measured(self, spec: FieldMatchSpec, measure: Measure, raw: float) -> float | None:
        """Contribution of a field whose measure was computed."""

    @abstractmethod
    def substituted(self, spec: FieldMatchSpec, policy: NullHandling) -> float | None:
        """Contribution of a field resolved by a null-handling policy."""

    @abstractmethod
    def fold(self, total: float, contribution: float) -> float:
        """Fold one contribution into the running total."""


class FellegiSunterAggregator(Aggregator):
    """Sums log10 likelihood-ratio weights on top of a base score."""

    def __init__(
        self,
        specs: Sequence[FieldMatchSpec],
        registry: MeasureRegistry,
        base_score: float = 0.0,
    ) -> None:
        super().__init__(specs, registry)
        self.initial = base_score

    def measured(self, spec: FieldMatchSpec, measure: Measure, raw: float) -> float:
        if measure.matches(raw, spec.threshold):
            return spec.match_weight
        return spec.unmatch_weight

    def substituted(self, spec: FieldMatchSpec, policy: NullHandling) -> float | None:
        if policy is NullHandling.CONSERVATIVE:
            return spec.unmatch_weight
        if policy is NullHandling.GREEDY:
            return spec.match_weight
        return None

    def fold(self, total: float, contribution: float) -> float:
        return total + contribution


class BayesAggregator(Aggregator):
    """Combines clamped per-field probabilities with naive Bayes.

    If every field is skipped the result stays at :data:`NOT_SCORED`.
    """

    initial = NOT_SCORED

    def measured(self, spec: FieldMatchSpec, measure: Measure, raw: float) -> float:
        # high is applied first, so low wins if the bounds are inverted
        return max(min(raw, spec.high), spec.low)

    def substituted(self, spec: FieldMatchSpec, policy: NullHandling) -> float | None:
        if policy is NullHandling.CONSERVATIVE:
            return spec.low
        if policy is NullHandling.GREEDY:
            return spec.high
        return None

    def fold(self, total: float, contribution: float) -> float:
        if total == NOT_SCORED:
            return contribution
        return combine_probabilities(total, contribution)


def _binarize(spec: FieldMatchSpec, measure: Measure, raw: float) -> float:
    # a zero threshold means "use the raw score"
    if spec.threshold == 0.0:
        return raw
    return 1.0 if measure.matches(raw, spec.threshold) else 0.0


class MultiplyAggregator(Aggregator):
    """Product of weighted field scores; moderate fields are left out."""

    initial = 1.0

    def measured(self, spec: FieldMatchSpec, measure: Measure, raw: float) -> float:
        return _binarize(spec, measure, raw) * spec.weight

    def substituted(self, spec: FieldMatchSpec, policy: NullHandling) -> float | None:
        if policy is NullHandling.CONSERVATIVE:
            return 0.0
        if policy is NullHandling.GREEDY:
            return spec.weight
        return None

    def fold(self, total: float, contribution: float) -> float:
        return total * contribution


class SumAggregator(Aggregator):
    """Sum of weighted field scores; moderate fields count as zero."""

    initial = 0.0

    def measured(self, spec: FieldMatchSpec, measure: Measure, raw: float) -> float:
        return _binarize(spec, measure, raw) * spec.weight

    def substituted(self, spec: FieldMatchSpec, policy: NullHandling) -> float:
        if policy is NullHandling.GREEDY:
            return spec.weight
        return 0.0

    def fold(self, total: float, contribution: float) -> float:
        return total + contribution


def build_aggregator(config: ScoringConfig, registry: MeasureRegistry) -> Aggregator:
    """Select the aggregator for the session's score mode."""
    if config.score_mode is ScoreMode.FELLEGI_SUNTER:
        return FellegiSunterAggregator(config.matchers, registry, base_score=config.base_score)
    if config.score_mode is ScoreMode.BAYES:
        return BayesAggregator(config.matchers, registry)
    if config.score_mode is ScoreMode.MULTIPLY:
        return MultiplyAggregator(config.matchers, registry)
    return SumAggregator(config.matchers, registry)

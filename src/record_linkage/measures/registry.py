"""Memoizing registry of named string measures.

A registry is owned by one scoring session.  Measures are constructed
lazily on first use and cached for the registry's lifetime; concurrent
first use from several worker threads yields exactly one instance per
name.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from record_linkage.measures.catalog import (
    Comparator,
    Orientation,
    build_comparator,
    orientation_of,
)

logger = structlog.get_logger()


def normalize_operand(text: str) -> str:
    """Trim surrounding whitespace and lower-case (locale independent)."""
    return text.strip().lower()


@dataclass(frozen=True)
class Measure:
    """A named comparison capability tagged with its orientation."""

    name: str
    orientation: Orientation
    comparator: Comparator

    @property
    def is_distance(self) -> bool:
        return self.orientation is Orientation.DISTANCE

    def score(self, left: str, right: str) -> float:
        """Compare two strings after mandatory normalization."""
        return float(self.comparator(normalize_operand(left), normalize_operand(right)))

    def matches(self, score: float, threshold: float) -> bool:
        """Return ``True`` if ``score`` is on the matching side of ``threshold``.

        Distances match at or below the threshold, similarities at or
        above it.
        """
        if self.orientation is Orientation.DISTANCE:
            return score <= threshold
        return score >= threshold


class MeasureRegistry:
    """Session-scoped, thread-safe cache of :class:`Measure` instances."""

    def __init__(self) -> None:
        self._measures: dict[str, Measure] = {}
        self._lock = threading.Lock()

    def resolve(self, name: str) -> Measure:
        """Return the cached measure for ``name``, constructing it once.

        Raises:
            UnknownMeasure: if ``name`` is not a supported measure.
        """
        measure = self._measures.get(name)
        if measure is not None:
            return measure

        with self._lock:
            measure = self._measures.get(name)
            if measure is None:
                measure = Measure(
                    name=name,
                    orientation=orientation_of(name),
                    comparator=build_comparator(name),
                )
                self._measures[name] = measure
                logger.debug(
                    "measure_constructed",
                    measure=name,
                    orientation=measure.orientation.value,
                )
        return measure

    def compare(self, name: str, left: str, right: str) -> float:
        """Resolve ``name`` and score ``left`` against ``right``."""
        return self.resolve(name).score(left, right)

    @staticmethod
    def is_distance(name: str) -> bool:
        """Classify ``name`` without constructing the measure."""
        return orientation_of(name) is Orientation.DISTANCE

    def cached_names(self) -> frozenset[str]:
        """Names of the measures constructed so far."""
        return frozenset(self._measures)

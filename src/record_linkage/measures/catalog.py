"""The closed set of supported string measures.

Each entry maps a measure name to its orientation and to a builder that
constructs the comparison callable.  Builders are only invoked by
:class:`~record_linkage.measures.registry.MeasureRegistry`, which
memoizes the result; the shingle-based measures keep n-gram profile
state on the constructed object.
"""

from __future__ import annotations

from difflib import SequenceMatcher
from enum import Enum
from typing import Callable

from rapidfuzz.distance import OSA, DamerauLevenshtein, Indel, JaroWinkler, LCSseq, Levenshtein
from strsimpy.cosine import Cosine
from strsimpy.jaccard import Jaccard
from strsimpy.ngram import NGram
from strsimpy.qgram import QGram
from strsimpy.sorensen_dice import SorensenDice

from record_linkage.errors import UnknownMeasure
from record_linkage.measures.lcs import NormalizedLcs

Comparator = Callable[[str, str], float]

# Shingle size shared by the profile-based measures.
SHINGLE_K = 3


class Orientation(str, Enum):
    """How a measure's scalar output is to be read."""

    SIMILARITY = "similarity"
    DISTANCE = "distance"


class _SorensenDice(SorensenDice):
    """Sorensen-Dice that scores two different shingle-less strings as disjoint."""

    def __init__(self, k: int) -> None:
        super().__init__(k)
        self._k = k

    def similarity(self, s0: str, s1: str) -> float:
        # neither operand yields a k-shingle: the profile sizes sum to zero
        if s0 != s1 and len(s0) < self._k and len(s1) < self._k:
            return 0.0
        return super().similarity(s0, s1)

    def distance(self, s0: str, s1: str) -> float:
        return 1.0 - self.similarity(s0, s1)


def _ratcliff_obershelp(s1: str, s2: str) -> float:
    return SequenceMatcher(None, s1, s2, autojunk=False).ratio()


_SIMILARITY_BUILDERS: dict[str, Callable[[], Comparator]] = {
    "cosine-similarity": lambda: Cosine(SHINGLE_K).similarity,
    "dice-similarity": lambda: _SorensenDice(SHINGLE_K).similarity,
    "jaccard-similarity": lambda: Jaccard(SHINGLE_K).similarity,
    "jaro-winkler-similarity": lambda: JaroWinkler.similarity,
    "normalized-levenshtein-similarity": lambda: Levenshtein.normalized_similarity,
    "normalized-lcs-similarity": lambda: NormalizedLcs().similarity,
    "ratcliff-obershelp": lambda: _ratcliff_obershelp,
}

_DISTANCE_BUILDERS: dict[str, Callable[[], Comparator]] = {
    "levenshtein": lambda: Levenshtein.distance,
    "normalized-levenshtein-distance": lambda: Levenshtein.normalized_distance,
    "damerau-levenshtein": lambda: DamerauLevenshtein.distance,
    "optimal-string-alignment": lambda: OSA.distance,
    "jaro-winkler-distance": lambda: JaroWinkler.distance,
    "longest-common-subsequence": lambda: Indel.distance,
    "normalized-lcs-distance": lambda: NormalizedLcs().distance,
    "metric-lcs": lambda: LCSseq.normalized_distance,
    "ngram": lambda: NGram(2).distance,
    "qgram": lambda: QGram(SHINGLE_K).distance,
    "cosine-distance": lambda: Cosine(SHINGLE_K).distance,
    "dice-distance": lambda: _SorensenDice(SHINGLE_K).distance,
    "jaccard-distance": lambda: Jaccard(SHINGLE_K).distance,
}

SIMILARITY_MEASURES = frozenset(_SIMILARITY_BUILDERS)
DISTANCE_MEASURES = frozenset(_DISTANCE_BUILDERS)
KNOWN_MEASURES = SIMILARITY_MEASURES | DISTANCE_MEASURES


def orientation_of(name: str) -> Orientation:
    """Classify a measure name.

    Unlike a plain "not a similarity" check, unrecognised names are
    rejected rather than silently treated as distances.
    """
    if name in SIMILARITY_MEASURES:
        return Orientation.SIMILARITY
    if name in DISTANCE_MEASURES:
        return Orientation.DISTANCE
    raise UnknownMeasure(name)


def build_comparator(name: str) -> Comparator:
    """Construct a fresh comparison callable for ``name``."""
    builder = _SIMILARITY_BUILDERS.get(name) or _DISTANCE_BUILDERS.get(name)
    if builder is None:
        raise UnknownMeasure(name)
    return builder()

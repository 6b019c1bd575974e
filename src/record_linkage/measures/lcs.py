"""Normalized longest-common-subsequence measure.

Wraps the raw LCS edit distance (``len(a) + len(b) - 2 * |LCS|``) and
divides it by the longer operand.  Similarity is derived from the same
computation so that ``similarity + distance == 1`` holds exactly.
"""

from __future__ import annotations

from rapidfuzz.distance import Indel


class NormalizedLcs:
    """LCS distance normalized by ``max(len(s1), len(s2))``."""

    def distance(self, s1: str, s2: str) -> float:
        longest = max(len(s1), len(s2))
        if longest == 0:
            return 0.0
        return Indel.distance(s1, s2) / longest

    def similarity(self, s1: str, s2: str) -> float:
        return 1.0 - self.distance(s1, s2)

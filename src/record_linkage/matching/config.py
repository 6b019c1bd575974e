"""Scoring session configuration.

The host hands over a generic payload (``score_mode``, ``matchers`` and,
for Fellegi-Sunter, ``base_score``).  :func:`parse_session` validates it
and returns an immutable :class:`ScoringConfig`; the same payload can be
kept in a YAML file and read with :func:`load_scoring_config`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from record_linkage.errors import (
    InvalidMatchers,
    InvalidScoreMode,
    MissingFieldProperty,
    MissingSessionProperty,
    UnknownMeasure,
)
from record_linkage.measures import KNOWN_MEASURES

# Configuration keys
FIELD = "field"
VALUE = "value"
MATCHER = "matcher"
HIGH = "high"
LOW = "low"
M_VALUE = "m_value"
U_VALUE = "u_value"
THRESHOLD = "threshold"
WEIGHT = "weight"
NULL_HANDLING = "null_handling"
NULL_HANDLING_BOTH = "null_handling_both"
SCORE_MODE = "score_mode"
BASE_SCORE = "base_score"
MATCHERS = "matchers"


class ScoreMode(str, Enum):
    """How per-field outcomes are folded into one score."""

    FELLEGI_SUNTER = "fellegi-sunter"
    BAYES = "bayes"
    MULTIPLY = "multiply"
    SUM = "sum"

    @classmethod
    def parse(cls, raw: Any) -> ScoreMode:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw))
        except ValueError:
            raise InvalidScoreMode(str(raw), tuple(m.value for m in cls)) from None


class NullHandling(str, Enum):
    """Policy applied when the document value, reference value or both are empty."""

    OFF = "off"
    CONSERVATIVE = "conservative"
    GREEDY = "greedy"
    MODERATE = "moderate"


# Keys every entry needs, then the extra keys per mode (checked in order).
_UNIVERSAL_KEYS = (FIELD, VALUE, MATCHER)
_MODE_REQUIRED_KEYS: dict[ScoreMode, tuple[str, ...]] = {
    ScoreMode.FELLEGI_SUNTER: (THRESHOLD, M_VALUE, U_VALUE),
    ScoreMode.BAYES: (HIGH, LOW),
    ScoreMode.MULTIPLY: (),
    ScoreMode.SUM: (),
}
# Keys each mode reads; anything else in an entry is ignored for that mode.
_MODE_KEYS: dict[ScoreMode, tuple[str, ...]] = {
    ScoreMode.FELLEGI_SUNTER: (THRESHOLD, M_VALUE, U_VALUE),
    ScoreMode.BAYES: (HIGH, LOW),
    ScoreMode.MULTIPLY: (THRESHOLD, WEIGHT),
    ScoreMode.SUM: (THRESHOLD, WEIGHT),
}


class FieldMatchSpec(BaseModel):
    """One configured field comparison.

    ``match_weight`` and ``unmatch_weight`` are derived from ``m_value``
    and ``u_value`` when both are given and are never recomputed.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    field: str
    value: str = ""
    matcher: str

    # bayes
    high: float = 0.0
    low: float = 0.0

    # fellegi-sunter
    m_value: float | None = None
    u_value: float | None = None
    match_weight: float = 0.0
    unmatch_weight: float = 0.0

    # fellegi-sunter threshold; optional binarization for multiply/sum
    threshold: float = 0.0
    weight: float = 1.0

    null_handling: NullHandling = NullHandling.OFF
    null_handling_both: NullHandling | None = None

    @field_validator("value", mode="before")
    @classmethod
    def absent_value_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="before")
    @classmethod
    def derive_linkage_weights(cls, data: Any) -> Any:
        """Compute log10 match/unmatch weights from the m and u probabilities."""
        if not isinstance(data, Mapping):
            return data
        m_raw, u_raw = data.get(M_VALUE), data.get(U_VALUE)
        if m_raw is None or u_raw is None:
            return data
        m, u = float(m_raw), float(u_raw)
        for key, probability in ((M_VALUE, m), (U_VALUE, u)):
            if not 0.0 < probability < 1.0:
                raise ValueError(f"{key} must be strictly between 0 and 1, got {probability}")
        return {
            **data,
            "match_weight": math.log10(m / u),
            "unmatch_weight": math.log10((1 - m) / (1 - u)),
        }

    @model_validator(mode="after")
    def warn_if_bounds_inverted(self) -> FieldMatchSpec:
        """Log a warning if the bayes clamp bounds are inverted."""
        if self.low > self.high:
            structlog.get_logger().warning(
                "bayes_bounds_inverted",
                field=self.field,
                high=self.high,
                low=self.low,
            )
        return self


class ScoringConfig(BaseModel):
    """A validated scoring session: one mode and its field specs."""

    model_config = ConfigDict(frozen=True)

    score_mode: ScoreMode
    base_score: float = 0.0
    matchers: tuple[FieldMatchSpec, ...] = ()


def check_field_entry(mode: ScoreMode, entry: Mapping[str, Any]) -> None:
    """Raise :class:`MissingFieldProperty` for the first absent required key."""
    for key in _UNIVERSAL_KEYS:
        if key not in entry:
            raise MissingFieldProperty(key)
    for key in _MODE_REQUIRED_KEYS[mode]:
        if key not in entry:
            raise MissingFieldProperty(key, mode.value)


def parse_field_spec(mode: ScoreMode, entry: Mapping[str, Any]) -> FieldMatchSpec:
    """Validate and parse one raw matcher entry for ``mode``."""
    check_field_entry(mode, entry)

    matcher = str(entry[MATCHER])
    if matcher not in KNOWN_MEASURES:
        raise UnknownMeasure(matcher)

    data: dict[str, Any] = {
        FIELD: str(entry[FIELD]),
        VALUE: entry[VALUE],
        MATCHER: matcher,
    }
    for key in _MODE_KEYS[mode]:
        if key in entry:
            data[key] = entry[key]

    # null_handling_both is only honoured alongside null_handling
    if NULL_HANDLING in entry:
        data[NULL_HANDLING] = entry[NULL_HANDLING]
        if NULL_HANDLING_BOTH in entry:
            data[NULL_HANDLING_BOTH] = entry[NULL_HANDLING_BOTH]

    return FieldMatchSpec(**data)


def parse_field_specs(
    mode: ScoreMode | str, entries: Sequence[Mapping[str, Any]]
) -> list[FieldMatchSpec]:
    """Turn raw matcher entries into field specs for ``mode``.

    Raises:
        InvalidMatchers: ``entries`` is not a list, or an entry is not a mapping.
    """
    mode = ScoreMode.parse(mode)
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise InvalidMatchers(f"expected a list of matcher entries, got {type(entries).__name__}")
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise InvalidMatchers(f"entry {index} is a {type(entry).__name__}, not a mapping")
    return [parse_field_spec(mode, entry) for entry in entries]


def parse_session(params: Mapping[str, Any]) -> ScoringConfig:
    """Validate a session payload and parse its matcher entries.

    Raises:
        MissingSessionProperty: ``matchers``, ``score_mode`` or (for
            Fellegi-Sunter) ``base_score`` is absent.
        InvalidScoreMode: ``score_mode`` is not a supported mode.
        InvalidMatchers: ``matchers`` is not a list of mappings.
        MissingFieldProperty: an entry lacks a key its mode requires.
        UnknownMeasure: an entry names an unsupported matcher.
    """
    if MATCHERS not in params:
        raise MissingSessionProperty(MATCHERS)
    if SCORE_MODE not in params:
        raise MissingSessionProperty(SCORE_MODE)

    mode = ScoreMode.parse(params[SCORE_MODE])
    if mode is ScoreMode.FELLEGI_SUNTER and BASE_SCORE not in params:
        raise MissingSessionProperty(
            BASE_SCORE,
            f"Missing parameter [{BASE_SCORE}] for {mode.value}",
        )

    return ScoringConfig(
        score_mode=mode,
        base_score=params.get(BASE_SCORE, 0.0),
        matchers=tuple(parse_field_specs(mode, params[MATCHERS] or [])),
    )


def load_scoring_config(path: Path) -> ScoringConfig:
    """Load a scoring session payload from a YAML file.

    An empty file is treated as an empty payload and fails validation
    on the first missing session property.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return parse_session(data)

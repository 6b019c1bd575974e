"""Compiled scoring session.

A session is built once from a configuration payload and then scores
any number of documents, possibly from several threads at once.  It
owns its measure registry, so independent sessions never share state.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from record_linkage.matching.aggregators import (
    Aggregator,
    DocumentAccessor,
    ScoreBreakdown,
    build_aggregator,
)
from record_linkage.matching.config import ScoringConfig, load_scoring_config, parse_session
from record_linkage.measures import MeasureRegistry

logger = structlog.get_logger()


class ScoringSession:
    """Scores documents against one validated :class:`ScoringConfig`."""

    def __init__(self, config: ScoringConfig, registry: MeasureRegistry | None = None) -> None:
        self.config = config
        self.registry = registry if registry is not None else MeasureRegistry()
        self._aggregator: Aggregator = build_aggregator(config, self.registry)
        logger.info(
            "scoring_session_compiled",
            score_mode=config.score_mode.value,
            fields=len(config.matchers),
        )

    @classmethod
    def compile(cls, params: Mapping[str, Any]) -> ScoringSession:
        """Validate a raw payload and build a session from it."""
        return cls(parse_session(params))

    @classmethod
    def from_yaml(cls, path: Path) -> ScoringSession:
        return cls(load_scoring_config(path))

    def score(self, document: DocumentAccessor) -> float:
        """Score one document.

        ``document`` is either a mapping of field names to values or a
        callable returning the value for a field name.
        """
        return self._aggregator.score(document)

    def explain(self, document: DocumentAccessor) -> ScoreBreakdown:
        """Score one document and report each field's contribution."""
        return self._aggregator.explain(document)

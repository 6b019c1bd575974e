"""Shared test fixtures."""

from pathlib import Path

import pytest

from record_linkage.measures import MeasureRegistry

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"
EXAMPLE_CONFIG = CONFIG_DIR / "scoring.yaml"


@pytest.fixture
def registry() -> MeasureRegistry:
    """Return a fresh, empty measure registry."""
    return MeasureRegistry()


@pytest.fixture
def example_config_path() -> Path:
    """Return path to the shipped example scoring config."""
    return EXAMPLE_CONFIG


@pytest.fixture
def fellegi_sunter_params() -> dict:
    """Return a minimal valid Fellegi-Sunter session payload."""
    return {
        "score_mode": "fellegi-sunter",
        "base_score": 0,
        "matchers": [
            {
                "field": "name",
                "value": "John Smith",
                "matcher": "normalized-levenshtein-similarity",
                "threshold": 0.5,
                "m_value": 0.9,
                "u_value": 0.1,
            }
        ],
    }

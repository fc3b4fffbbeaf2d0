"""
Pytest configuration and shared fixtures for Kitchen Chemical Matcher tests.

Provides:
- Sample chemical catalog
- Generated schedule plan
- Tokenizer and matcher instances
- Chemical factory for one-off catalog entries
"""

import copy

import pytest

from src.catalog.models import Chemical
from src.matching.chemical_matcher import ChemicalMatcher
from src.matching.types import MatcherConfig
from src.normalization.tokenizer import TaskTokenizer
from src.schedule.models import parse_generated_schedule
from tests.fixtures.test_data import SAMPLE_CHEMICALS, GENERATED_SCHEDULE


# ============================================================================
# NORMALIZATION FIXTURES
# ============================================================================

@pytest.fixture
def tokenizer() -> TaskTokenizer:
    """Provide a TaskTokenizer instance."""
    return TaskTokenizer()


# ============================================================================
# MATCHING FIXTURES
# ============================================================================

@pytest.fixture
def matcher() -> ChemicalMatcher:
    """Provide a ChemicalMatcher with default weights."""
    return ChemicalMatcher(config=MatcherConfig())


@pytest.fixture
def make_chemical():
    """
    Factory for catalog entries with no hazard text by default.

    Usage:
        make_chemical("A", "oven, grill", toxicological_info="Irritant")
    """
    def _make(chemical_id: str, used_for: str = "", **kwargs) -> Chemical:
        kwargs.setdefault('name', f"Chemical {chemical_id}")
        return Chemical(id=chemical_id, used_for=used_for, **kwargs)
    return _make


# ============================================================================
# CATALOG / SCHEDULE FIXTURES
# ============================================================================

@pytest.fixture
def sample_catalog():
    """Sample kitchen chemical catalog as Chemical records."""
    return [Chemical.from_dict(record) for record in SAMPLE_CHEMICALS]


@pytest.fixture
def catalog_records():
    """Sample catalog as raw camelCase dictionaries (deep copy)."""
    return copy.deepcopy(SAMPLE_CHEMICALS)


@pytest.fixture
def generated_plan():
    """Generated schedule converted to a plan with empty chemical slots."""
    return parse_generated_schedule(copy.deepcopy(GENERATED_SCHEDULE))

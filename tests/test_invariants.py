"""
Invariant Test Suite: Stability Gates for the Kitchen Chemical Matcher

These tests encode the system's architectural invariants as executable assertions.
They are NOT unit tests for individual functions; they are control-surface
consistency checks that prevent silent ranking drift.

Invariant categories:
  1. Weight ordering (exact > partial, item name > task description)
  2. Config centralization (YAML, defaults and MatcherConfig agree)
  3. Lookup table hygiene (stop words, severity tables)
  4. Tokenization version consistency
  5. Matcher purity (no input mutation, no failures on odd input)

Run:  pytest tests/test_invariants.py -v
"""

import copy
import re
from pathlib import Path

import pytest
import yaml

from src.catalog.models import Chemical
from src.matching import ChemicalMatcher, MatcherConfig
from src.matching.safety_penalty import PROTECTION_PENALTIES, TOXICOLOGY_PENALTIES
from src.normalization.tokenizer import TaskTokenizer, TOKENIZATION_VERSION
from src.utils.config_manager import ConfigManager, DEFAULT_CONFIG_PATH


# ============================================================================
# FIXTURES
# ============================================================================

CONFIG_PATH = Path(__file__).parent.parent / "config" / "matcher_config.yaml"


@pytest.fixture
def config():
    """Load the canonical YAML config."""
    with open(CONFIG_PATH, "r") as f:
        return yaml.safe_load(f)


# ============================================================================
# 1. WEIGHT ORDERING
# ============================================================================

class TestWeightOrdering:
    """
    Ranking semantics depend on the relative order of weights, not their
    absolute values. These orderings must never invert.
    """

    def test_exact_greater_than_partial(self, config):
        scoring = config["scoring"]
        assert scoring["exact_match_score"] > scoring["partial_match_score"]

    def test_item_weight_greater_than_task_weight(self, config):
        scoring = config["scoring"]
        assert scoring["item_name_weight"] > scoring["task_description_weight"]

    def test_all_weights_positive(self, config):
        for name, value in config["scoring"].items():
            assert isinstance(value, int) and value > 0, f"{name} must be a positive integer"


# ============================================================================
# 2. CONFIG CENTRALIZATION
# ============================================================================

class TestConfigCentralization:
    """The YAML file, DEFAULT_CONFIG and MatcherConfig defaults must agree."""

    def test_config_file_exists(self):
        assert CONFIG_PATH.exists(), f"Missing {CONFIG_PATH}"
        assert DEFAULT_CONFIG_PATH.resolve() == CONFIG_PATH.resolve()

    def test_yaml_matches_defaults(self, config):
        assert config["scoring"] == ConfigManager.DEFAULT_CONFIG["scoring"]
        assert config["association"] == ConfigManager.DEFAULT_CONFIG["association"]

    def test_dataclass_defaults_match_config(self):
        assert MatcherConfig.from_config_manager(ConfigManager()) == MatcherConfig()

    def test_yaml_config_is_valid(self):
        assert ConfigManager(CONFIG_PATH).validate_config() == []


# ============================================================================
# 3. LOOKUP TABLE HYGIENE
# ============================================================================

class TestLookupTables:
    """Stop words and severity tables are matched against lowercased text."""

    def test_stop_words_lowercase_alphanumeric(self):
        for word in TaskTokenizer.STOP_WORDS:
            assert re.fullmatch(r"[a-z0-9]+", word), f"Stop word '{word}' can never match a token"

    def test_severity_keywords_lowercase(self):
        for keyword in list(TOXICOLOGY_PENALTIES) + list(PROTECTION_PENALTIES):
            assert keyword == keyword.lower()

    def test_severity_weights_positive(self):
        for table in (TOXICOLOGY_PENALTIES, PROTECTION_PENALTIES):
            for keyword, weight in table.items():
                assert isinstance(weight, int) and weight > 0, keyword

    def test_fatal_is_most_severe(self):
        assert TOXICOLOGY_PENALTIES["fatal"] == max(TOXICOLOGY_PENALTIES.values())


# ============================================================================
# 4. TOKENIZATION VERSION CONSISTENCY
# ============================================================================

class TestTokenizationVersion:

    def test_tokenization_version_is_integer(self):
        assert isinstance(TOKENIZATION_VERSION, int)
        assert TOKENIZATION_VERSION >= 1


# ============================================================================
# 5. MATCHER PURITY
# ============================================================================

ODD_INPUTS = [
    ("", ""),
    (None, None),
    ("Oven", "   "),
    ("!!!", "???"),
    ("Oven" * 200, "oven " * 500),
    ("Ünïcödé", "ßpëcïal chars"),
]


class TestMatcherPurity:
    """The matcher never raises and never mutates its inputs."""

    @pytest.mark.parametrize("item,task", ODD_INPUTS)
    def test_never_raises(self, item, task, sample_catalog):
        result = ChemicalMatcher().match(item, task, sample_catalog)
        assert result is None or result in {c.id for c in sample_catalog}

    def test_malformed_catalog_entries(self):
        catalog = [
            Chemical(id="a", name="A", used_for=""),
            Chemical(id="b", name="B", used_for=",,,"),
            Chemical(id="c", name="C", used_for="   "),
        ]
        assert ChemicalMatcher().match("Oven", "Degrease oven", catalog) is None

    def test_catalog_snapshot_unchanged(self, sample_catalog):
        before = copy.deepcopy(sample_catalog)
        ChemicalMatcher().explain("Oven", "Degrease oven", sample_catalog)
        assert sample_catalog == before

    def test_matcher_holds_no_catalog_reference(self, sample_catalog):
        matcher = ChemicalMatcher()
        matcher.match("Oven", "Degrease oven", sample_catalog)
        assert set(vars(matcher)) == {"config", "tokenizer"}

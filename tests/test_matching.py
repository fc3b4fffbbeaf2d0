"""
Test suite for the chemical-to-task matching engine.

Tests short-circuits, keyword match quality, field weighting,
safety penalties, tie-breaking, and the diagnostic outcome.
"""

import pytest

from src.catalog.models import Chemical
from src.matching import (
    ChemicalMatcher,
    MatchQuality,
    MatcherConfig,
    build_matcher,
    find_best_chemical_for_task,
    keyword_match_quality,
)


# ============================================================================
# KEYWORD MATCH QUALITY TESTS
# ============================================================================

class TestKeywordMatchQuality:
    """Tests for keyword_match_quality."""

    def test_exact(self):
        assert keyword_match_quality("oven", {"oven", "grill"}) == (MatchQuality.EXACT, "oven")

    def test_token_inside_keyword(self):
        quality, keyword = keyword_match_quality("steel", {"stainless steel"})
        assert quality is MatchQuality.PARTIAL
        assert keyword == "stainless steel"

    def test_keyword_inside_token(self):
        quality, _ = keyword_match_quality("ovens", {"oven"})
        assert quality is MatchQuality.PARTIAL

    def test_exact_preferred_over_partial(self):
        """An exact keyword wins even when a partial one is also present."""
        quality, keyword = keyword_match_quality("grill", ["grills", "grill"])
        assert quality is MatchQuality.EXACT
        assert keyword == "grill"

    def test_no_match(self):
        assert keyword_match_quality("floor", {"oven"}) == (MatchQuality.NONE, None)

    @pytest.mark.parametrize("keywords", [
        ["steel wool", "brushed steel", "stainless steel"],
        ["stainless steel", "steel wool", "brushed steel"],
        frozenset({"brushed steel", "stainless steel", "steel wool"}),
    ])
    def test_partial_keyword_independent_of_order(self, keywords):
        assert keyword_match_quality("steel", keywords) == (MatchQuality.PARTIAL, "brushed steel")


# ============================================================================
# SHORT-CIRCUIT TESTS
# ============================================================================

class TestNoMatchInputs:
    """Inputs that can never produce a match."""

    @pytest.mark.parametrize("task", ["", "   ", "N/A", "n/a", "  N/a  ", None])
    def test_not_applicable_task(self, matcher, sample_catalog, task):
        """Empty, whitespace and N/A tasks never match, whatever the catalog."""
        assert matcher.match("Oven", task, sample_catalog) is None

    def test_empty_catalog(self, matcher):
        assert matcher.match("Oven", "Degrease oven", []) is None

    def test_no_tokens(self, matcher, sample_catalog):
        """Item and task made only of stop words and short words."""
        assert matcher.match("", "Clean daily as needed", sample_catalog) is None

    def test_item_tokens_alone_are_enough(self, matcher, make_chemical):
        """A task of stop words still matches on the item name."""
        catalog = [make_chemical("A", "oven")]
        assert matcher.match("Oven", "Clean daily", catalog) == "A"

    def test_chemical_without_keywords_never_selected(self, matcher, make_chemical):
        """Empty or blank usedFor skips the chemical even if its name fits."""
        catalog = [
            make_chemical("A", "", name="Oven Cleaner"),
            make_chemical("B", " , ,, "),
        ]
        assert matcher.match("Oven", "Oven cleaner degrease oven", catalog) is None

    def test_no_positive_score(self, matcher, make_chemical):
        catalog = [make_chemical("A", "floor")]
        assert matcher.match("Oven", "Degrease racks", catalog) is None


# ============================================================================
# SCORING TESTS
# ============================================================================

class TestScoring:
    """Tests for weighted scoring."""

    def test_spec_example_oven(self, matcher, make_chemical):
        """'Oven' exact-matches the first chemical; the floor cleaner scores 0."""
        catalog = [make_chemical("A", "oven,grill"), make_chemical("B", "floor")]
        assert matcher.match("Oven", "Deep clean interior with degreaser", catalog) == "A"

    def test_exact_beats_partial(self, matcher, make_chemical):
        """Exact keyword equality outranks a substring overlap."""
        catalog = [make_chemical("partial", "grills"), make_chemical("exact", "grill")]
        assert matcher.match("Grill", "Scrub", catalog) == "exact"

    def test_item_name_beats_task_description(self, matcher, make_chemical):
        """An item-name hit (x5) outranks an equal task hit (x2)."""
        catalog = [make_chemical("task-hit", "basket"), make_chemical("item-hit", "fryer")]
        assert matcher.match("Fryer", "Degrease basket", catalog) == "item-hit"

    def test_safety_penalty_breaks_equal_match(self, matcher, make_chemical):
        """Among equal textual matches the less hazardous chemical wins."""
        catalog = [
            make_chemical("harsh", "oven", toxicological_info="Severe burns. Corrosive."),
            make_chemical("mild", "oven", toxicological_info="Irritant"),
        ]
        assert matcher.match("Oven", "Degrease", catalog) == "mild"

    def test_fatal_penalized_more_than_irritant(self, matcher, make_chemical):
        fatal = make_chemical("fatal", "oven, grill", toxicological_info="Fatal if inhaled")
        irritant = make_chemical("irritant", "oven, grill", toxicological_info="Irritant")
        tokens = {"oven"}
        fatal_score = matcher.score_chemical(fatal, tokens, set())
        irritant_score = matcher.score_chemical(irritant, tokens, set())
        assert fatal_score.safety_penalty > irritant_score.safety_penalty
        assert fatal_score.final_score <= irritant_score.final_score

    def test_score_clamped_at_zero(self, matcher, make_chemical):
        chemical = make_chemical("A", "oven", toxicological_info="Fatal", personal_protection="SCBA")
        candidate = matcher.score_chemical(chemical, {"oven"}, set())
        assert candidate.raw_score == 50
        assert candidate.safety_penalty == 190
        assert candidate.final_score == 0

    def test_penalty_can_remove_only_match(self, matcher, make_chemical):
        """A heavily penalized sole candidate gives no match at all."""
        catalog = [make_chemical("A", "oven", toxicological_info="Fatal")]
        assert matcher.match("Oven", "Degrease", catalog) is None

    def test_best_keyword_per_token_only(self, matcher, make_chemical):
        """Many overlapping synonyms do not inflate a token's score."""
        synonyms = make_chemical("syn", "oven, oven door, oven rack, ovenware")
        single = make_chemical("one", "oven")
        tokens = {"oven"}
        assert matcher.score_chemical(synonyms, tokens, set()).item_score == \
            matcher.score_chemical(single, tokens, set()).item_score == 50

    def test_score_breakdown(self, matcher, make_chemical):
        """Item and task scores are summed per token and weighted per field."""
        chemical = make_chemical("A", "glass, door, mirror")
        # item: glass 10 + glas 1 + door 10 = 21 -> x5
        # task: glass 10 + glas 1 + panels 0 + panel 0 = 11 -> x2
        outcome = matcher.explain("Glass Door", "Wipe glass panels", [chemical])
        candidate = outcome.best_candidate
        assert candidate.item_score == 105
        assert candidate.task_score == 22
        assert candidate.safety_penalty == 0
        assert outcome.score == 127

    def test_keywords_case_insensitive_and_trimmed(self, matcher, make_chemical):
        catalog = [make_chemical("A", "  OVEN ,Grill  ")]
        assert matcher.match("oven", "Degrease grill", catalog) == "A"

    def test_plural_item_matches_singular_keyword(self, matcher, make_chemical):
        catalog = [make_chemical("partial", "basket rack"), make_chemical("exact", "basket")]
        assert matcher.match("Fryer Baskets", "Soak", catalog) == "exact"

    def test_custom_weights(self, make_chemical):
        """Field weights come from the config."""
        config = MatcherConfig(item_name_weight=1, task_description_weight=10)
        matcher = ChemicalMatcher(config=config)
        catalog = [make_chemical("item-hit", "fryer"), make_chemical("task-hit", "basket")]
        assert matcher.match("Fryer", "Degrease basket", catalog) == "task-hit"


# ============================================================================
# SELECTION TESTS
# ============================================================================

class TestSelection:
    """Tests for tie-breaking and determinism."""

    def test_first_of_equal_scores_wins(self, matcher, make_chemical):
        catalog = [make_chemical("first", "oven"), make_chemical("second", "oven")]
        assert matcher.match("Oven", "Degrease", catalog) == "first"

    def test_tie_depends_on_catalog_order(self, matcher, make_chemical):
        catalog = [make_chemical("second", "oven"), make_chemical("first", "oven")]
        assert matcher.match("Oven", "Degrease", catalog) == "second"

    def test_later_higher_score_replaces(self, matcher, make_chemical):
        catalog = [make_chemical("low", "ovens"), make_chemical("high", "oven")]
        assert matcher.match("Oven", "Degrease", catalog) == "high"

    def test_idempotent(self, matcher, sample_catalog):
        first = matcher.match("Convection Oven", "Degrease oven cavity", sample_catalog)
        second = matcher.match("Convection Oven", "Degrease oven cavity", sample_catalog)
        assert first == second == "chem-degreaser"

    def test_catalog_not_mutated(self, matcher, sample_catalog):
        snapshot = list(sample_catalog)
        matcher.match("Oven", "Degrease oven", sample_catalog)
        assert sample_catalog == snapshot

    def test_accepts_tuple_catalog(self, matcher, sample_catalog):
        assert matcher.match("Dishwasher", "Descale dishwasher", tuple(sample_catalog)) == "chem-descaler"


# ============================================================================
# SAMPLE CATALOG TESTS
# ============================================================================

class TestSampleCatalog:
    """Realistic tasks against the sample catalog."""

    @pytest.mark.parametrize("item,task,expected", [
        ("Oven", "Deep clean interior with degreaser", "chem-degreaser"),
        ("Convection Oven", "Wipe down door gasket", "chem-glass"),
        ("Coffee Machine", "Descale with kettle descaler", "chem-descaler"),
        ("Kitchen Floor", "Mop floors", "chem-floor"),
        ("Meat Slicer", "Sanitize blade", "chem-sanitizer"),
        ("Walk-in Cooler", "Organize shelves", None),
    ])
    def test_sample_tasks(self, matcher, sample_catalog, item, task, expected):
        assert matcher.match(item, task, sample_catalog) == expected


# ============================================================================
# EXPLAIN / CONVENIENCE TESTS
# ============================================================================

class TestExplain:
    """Tests for the diagnostic MatchOutcome."""

    def test_candidates_in_catalog_order(self, matcher, sample_catalog):
        outcome = matcher.explain("Oven", "Degrease oven", sample_catalog)
        assert [c.chemical_id for c in outcome.candidates] == [c.id for c in sample_catalog]
        assert outcome.matched
        assert outcome.chemical_id == matcher.match("Oven", "Degrease oven", sample_catalog)

    def test_skipped_candidate_flagged(self, matcher, sample_catalog):
        outcome = matcher.explain("Oven", "Degrease oven", sample_catalog)
        skipped = [c.chemical_id for c in outcome.candidates if c.skipped]
        assert skipped == ["chem-unlabelled"]

    @pytest.mark.parametrize("item,task,catalog,reason", [
        ("Oven", "N/A", [Chemical(id="A", name="A", used_for="oven")], "no_task"),
        ("Oven", "Degrease", [], "empty_catalog"),
        ("", "Clean daily", [Chemical(id="A", name="A", used_for="oven")], "no_tokens"),
        ("Oven", "Degrease", [Chemical(id="A", name="A", used_for="floor")], "no_positive_score"),
    ])
    def test_no_match_reasons(self, matcher, item, task, catalog, reason):
        outcome = matcher.explain(item, task, catalog)
        assert not outcome.matched
        assert outcome.reason == reason
        assert outcome.best_candidate is None

    def test_matched_keywords_recorded(self, matcher, make_chemical):
        outcome = matcher.explain("Oven", "Degrease racks", [make_chemical("A", "oven, rack")])
        assert outcome.best_candidate.matched_keywords == {"oven": "oven", "racks": "rack", "rack": "rack"}

    def test_to_dict(self, matcher, make_chemical):
        outcome = matcher.explain("Oven", "Degrease", [make_chemical("A", "oven")])
        data = outcome.to_dict()
        assert data["matched"] is True
        assert data["chemical_id"] == "A"
        assert data["candidates"][0]["final_score"] == 50


class TestFindBestChemicalForTask:
    """Tests for the module-level convenience function and builder."""

    def test_convenience_function(self, make_chemical):
        catalog = [make_chemical("A", "oven,grill"), make_chemical("B", "floor")]
        assert find_best_chemical_for_task("Oven", "Deep clean interior with degreaser", catalog) == "A"

    def test_convenience_na(self, sample_catalog):
        assert find_best_chemical_for_task("Oven", "N/A", sample_catalog) is None

    def test_build_matcher_uses_defaults(self, tmp_path):
        matcher = build_matcher(tmp_path / "missing.yaml")
        assert matcher.config == MatcherConfig()

    def test_build_matcher_reads_config(self, tmp_path):
        config_path = tmp_path / "matcher.yaml"
        config_path.write_text("scoring:\n  item_name_weight: 7\n", encoding="utf-8")
        matcher = build_matcher(config_path)
        assert matcher.config.item_name_weight == 7
        assert matcher.config.task_description_weight == 2

    def test_build_matcher_rejects_invalid_config(self, tmp_path):
        config_path = tmp_path / "matcher.yaml"
        config_path.write_text("scoring:\n  exact_match_score: 1\n", encoding="utf-8")
        with pytest.raises(ValueError, match="exact_match_score"):
            build_matcher(config_path)

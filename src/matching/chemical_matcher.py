"""
Chemical-to-task matching engine.

Selects the catalog chemical that best fits a cleaning task using a
weighted keyword model:

  1. Tokenize the item name and the task description
  2. For each token, grade its best match against the chemical's
     ``usedFor`` keywords (exact > partial > none)
  3. Weight item-name hits above task-description hits
  4. Subtract the safety penalty, clamping at zero
  5. Keep the first chemical with the strictly highest positive score

The matcher is a pure function of its inputs. Any input, however
malformed, yields either a chemical id or None.
"""

import logging
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Set, Tuple

from src.catalog.models import Chemical
from src.normalization.tokenizer import TaskTokenizer
from src.matching.match_result import CandidateScore, MatchOutcome
from src.matching.safety_penalty import calculate_safety_penalty
from src.matching.types import MatchQuality, MatcherConfig

logger = logging.getLogger(__name__)

NOT_APPLICABLE = 'n/a'


def keyword_match_quality(token: str, keywords: Iterable[str]) -> Tuple[MatchQuality, Optional[str]]:
    """
    Find the best match quality of a token against a keyword set.

    Args:
        token: Normalized task token
        keywords: Chemical keywords (trimmed, lowercase)

    Returns:
        Tuple of (quality, keyword that produced it or None). Among several
        partial matches the alphabetically first keyword is reported.
    """
    best = MatchQuality.NONE
    best_keyword = None
    for keyword in sorted(keywords):
        if keyword == token:
            return MatchQuality.EXACT, keyword
        if best is MatchQuality.NONE and (token in keyword or keyword in token):
            best = MatchQuality.PARTIAL
            best_keyword = keyword
    return best, best_keyword


class ChemicalMatcher:
    """
    Weighted keyword matcher for cleaning chemicals.

    Holds only an immutable MatcherConfig and a tokenizer, so one
    instance can be shared across threads.
    """

    def __init__(self, config: Optional[MatcherConfig] = None,
                 tokenizer: Optional[TaskTokenizer] = None):
        """
        Initialize the matcher.

        Args:
            config: Scoring weights (defaults if None)
            tokenizer: TaskTokenizer instance (creates new if None)
        """
        self.config = config or MatcherConfig()
        self.tokenizer = tokenizer or TaskTokenizer()

    def match(self, item_name: str, task_description: str,
              chemicals: Sequence[Chemical]) -> Optional[str]:
        """
        Find the best chemical for a cleaning task.

        Args:
            item_name: Item being cleaned (e.g. "Oven")
            task_description: Task text (e.g. "Deep clean interior")
            chemicals: Catalog snapshot; order decides ties

        Returns:
            Id of the best matching chemical, or None
        """
        return self.explain(item_name, task_description, chemicals).chemical_id

    def explain(self, item_name: str, task_description: str,
                chemicals: Sequence[Chemical]) -> MatchOutcome:
        """
        Score every chemical and report the decision.

        Same selection rule as ``match``; the outcome also carries a
        CandidateScore per chemical in catalog order.
        """
        outcome = MatchOutcome(item_name=item_name, task_description=task_description)

        if self._is_not_applicable(task_description):
            outcome.reason = 'no_task'
            return outcome
        if not chemicals:
            outcome.reason = 'empty_catalog'
            return outcome

        item_tokens = self.tokenizer.tokenize(item_name)
        task_tokens = self.tokenizer.tokenize(task_description)
        if not item_tokens and not task_tokens:
            outcome.reason = 'no_tokens'
            return outcome

        best: Optional[CandidateScore] = None
        for chemical in chemicals:
            candidate = self.score_chemical(chemical, item_tokens, task_tokens)
            outcome.candidates.append(candidate)
            if candidate.skipped:
                logger.debug(f"Skipping chemical '{chemical.name}': no usable keywords")
                continue
            if candidate.final_score > 0 and (best is None or candidate.final_score > best.final_score):
                best = candidate

        if best is None:
            outcome.reason = 'no_positive_score'
            logger.debug(f"No chemical matched '{item_name}' / '{task_description}'")
            return outcome

        outcome.chemical_id = best.chemical_id
        outcome.score = best.final_score
        logger.debug(
            f"Matched '{item_name}' / '{task_description}' -> "
            f"{best.chemical_name} (score={best.final_score})"
        )
        return outcome

    def score_chemical(self, chemical: Chemical, item_tokens: Set[str],
                       task_tokens: Set[str]) -> CandidateScore:
        """
        Score one chemical against pre-tokenized task text.

        Args:
            chemical: Catalog chemical
            item_tokens: Tokens from the item name
            task_tokens: Tokens from the task description

        Returns:
            CandidateScore (skipped=True if the chemical has no keywords)
        """
        candidate = CandidateScore(chemical_id=chemical.id, chemical_name=chemical.name)

        keywords = chemical.keywords
        if not keywords:
            candidate.skipped = True
            return candidate

        candidate.item_score = self._content_score(
            item_tokens, keywords, self.config.item_name_weight, candidate.matched_keywords
        )
        candidate.task_score = self._content_score(
            task_tokens, keywords, self.config.task_description_weight, candidate.matched_keywords
        )
        candidate.safety_penalty = calculate_safety_penalty(
            chemical, base_penalty=self.config.base_safety_penalty
        )
        candidate.final_score = max(0, candidate.raw_score - candidate.safety_penalty)
        return candidate

    def _content_score(self, tokens: Set[str], keywords: FrozenSet[str], weight: int,
                       hits: Dict[str, str]) -> int:
        """
        Sum each token's single best keyword score, times the field weight.
        """
        score = 0
        for token in tokens:
            quality, keyword = keyword_match_quality(token, keywords)
            token_score = self.config.quality_score(quality)
            if token_score:
                hits.setdefault(token, keyword)
            score += token_score
        return score * weight

    @staticmethod
    def _is_not_applicable(task_description: Optional[str]) -> bool:
        """Empty, whitespace-only and 'N/A' tasks never get a chemical."""
        if not task_description or not isinstance(task_description, str):
            return True
        stripped = task_description.strip().lower()
        return not stripped or stripped == NOT_APPLICABLE


# Module-level singleton for convenience function
_matcher_instance = None


def _get_matcher() -> ChemicalMatcher:
    """Get or create the module-level ChemicalMatcher singleton."""
    global _matcher_instance
    if _matcher_instance is None:
        _matcher_instance = ChemicalMatcher()
    return _matcher_instance


def find_best_chemical_for_task(item_name: str, task_description: str,
                                chemicals: Sequence[Chemical]) -> Optional[str]:
    """
    Find the best matching chemical for a cleaning task with default weights.

    Args:
        item_name: Item being cleaned (e.g. "Oven")
        task_description: Task text (e.g. "Deep clean interior with degreaser")
        chemicals: Catalog snapshot

    Returns:
        Id of the best matching chemical, or None if nothing fits

    Examples:
        >>> catalog = [Chemical(id="A", name="Oven Cleaner", used_for="oven,grill"),
        ...            Chemical(id="B", name="Floor Cleaner", used_for="floor")]
        >>> find_best_chemical_for_task("Oven", "Deep clean interior with degreaser", catalog)
        'A'
    """
    return _get_matcher().match(item_name, task_description, chemicals)

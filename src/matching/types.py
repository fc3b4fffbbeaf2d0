"""
Type definitions for the chemical matching engine.

Defines the match-quality grades and the scoring configuration shared by
the matcher and the schedule association layer.
"""

from dataclasses import dataclass
from enum import Enum


class MatchQuality(Enum):
    """How well a task token matches a chemical keyword."""
    EXACT = "exact"      # token == keyword
    PARTIAL = "partial"  # one is a substring of the other
    NONE = "none"


@dataclass(frozen=True)
class MatcherConfig:
    """
    Scoring weights for the matcher.

    Item-name tokens outweigh task-description tokens, and exact keyword
    matches outweigh partial ones.
    """
    # Field weights
    item_name_weight: int = 5
    task_description_weight: int = 2

    # Per-token match quality scores
    exact_match_score: int = 10
    partial_match_score: int = 1

    # Flat penalty for each hazard field carrying real information
    base_safety_penalty: int = 5

    def quality_score(self, quality: MatchQuality) -> int:
        """Score awarded for a token's best keyword match."""
        if quality is MatchQuality.EXACT:
            return self.exact_match_score
        if quality is MatchQuality.PARTIAL:
            return self.partial_match_score
        return 0

    @classmethod
    def from_config_manager(cls, manager) -> "MatcherConfig":
        """
        Build from the 'scoring' section of a ConfigManager.

        Args:
            manager: src.utils.config_manager.ConfigManager instance

        Returns:
            MatcherConfig with values from configuration
        """
        return cls(
            item_name_weight=int(manager.get_scoring_param('item_name_weight')),
            task_description_weight=int(manager.get_scoring_param('task_description_weight')),
            exact_match_score=int(manager.get_scoring_param('exact_match_score')),
            partial_match_score=int(manager.get_scoring_param('partial_match_score')),
            base_safety_penalty=int(manager.get_scoring_param('base_safety_penalty')),
        )

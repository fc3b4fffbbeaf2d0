"""
Chemical-to-task matching engine package.

Selects the best cleaning chemical for a task using:
- Tokenization of item name and task description
- Exact / partial grading against each chemical's usedFor keywords
- Field weighting (item name over task description)
- A safety penalty from toxicological and PPE text

Scoring weights come from config/matcher_config.yaml with defaults.
"""

import logging
from pathlib import Path
from typing import Optional

from src.matching.match_result import CandidateScore, MatchOutcome
from src.matching.types import MatchQuality, MatcherConfig
from src.matching.safety_penalty import calculate_safety_penalty
from src.matching.chemical_matcher import (
    ChemicalMatcher,
    find_best_chemical_for_task,
    keyword_match_quality,
)
from src.utils.config_manager import ConfigManager, DEFAULT_CONFIG_PATH

_logger = logging.getLogger(__name__)


def build_matcher(config_path: Optional[Path] = None) -> ChemicalMatcher:
    """
    Build a ChemicalMatcher from the YAML configuration.

    Falls back to default weights if the config file is missing.

    Args:
        config_path: Config file (defaults to config/matcher_config.yaml)

    Returns:
        ChemicalMatcher with configured weights

    Raises:
        ValueError: If the configuration fails validation
    """
    manager = ConfigManager(config_path or DEFAULT_CONFIG_PATH)
    errors = manager.validate_config()
    if errors:
        raise ValueError(f"Invalid matcher configuration: {'; '.join(errors)}")

    config = MatcherConfig.from_config_manager(manager)
    _logger.info(
        "Matcher weights: item=%d task=%d exact=%d partial=%d base_penalty=%d",
        config.item_name_weight,
        config.task_description_weight,
        config.exact_match_score,
        config.partial_match_score,
        config.base_safety_penalty,
    )
    return ChemicalMatcher(config=config)


__all__ = [
    "CandidateScore",
    "MatchOutcome",
    "MatchQuality",
    "MatcherConfig",
    "ChemicalMatcher",
    "calculate_safety_penalty",
    "find_best_chemical_for_task",
    "keyword_match_quality",
    "build_matcher",
]

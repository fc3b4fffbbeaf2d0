"""
Safety penalty model.

Scores the hazard described by a chemical's toxicological and personal
protection text. The penalty is subtracted from the match score so that,
among chemicals that fit a task equally well, the less hazardous one wins.
"""

from typing import Dict, Optional

from src.catalog.models import Chemical

# Severity keywords searched as substrings of the toxicological text.
# Weights are additive across every keyword present.
TOXICOLOGY_PENALTIES: Dict[str, int] = {
    'fatal': 100,
    'toxic': 80,
    'poison': 80,
    'corrosive': 70,
    'carcinogen': 90,
    'mutagen': 90,
    'reproductive toxin': 90,
    'aspiration hazard': 60,
    'severe': 50,
    'harmful': 30,
    'irritant': 20,
    'sensitizer': 20,
    'danger': 40,
}

# PPE keywords searched as substrings of the personal protection text.
PROTECTION_PENALTIES: Dict[str, int] = {
    'respirator': 70,
    'scba': 80,
    'ventilated hood': 60,
    'full-face shield': 50,
    'chemical-resistant suit': 70,
    'goggles': 20,
    'safety glasses': 10,
    'gloves': 10,
    'apron': 10,
    'mask': 10,
}

NOT_SPECIFIED_MARKER = 'not specified'
DEFAULT_BASE_PENALTY = 5


def keyword_penalty(text: Optional[str], table: Dict[str, int]) -> int:
    """
    Sum the weights of every table keyword found in text.

    Args:
        text: Free text (None and non-string values treated as empty)
        table: keyword -> weight

    Returns:
        Additive penalty (0 if nothing matches)
    """
    if not isinstance(text, str):
        return 0
    lowered = text.lower()
    if not lowered:
        return 0
    return sum(weight for keyword, weight in table.items() if keyword in lowered)


def has_safety_info(text: Optional[str]) -> bool:
    """True when a hazard field is filled with something other than 'Not specified'."""
    if not isinstance(text, str) or not text.strip():
        return False
    return text.lower() != NOT_SPECIFIED_MARKER


def calculate_safety_penalty(chemical: Chemical, base_penalty: int = DEFAULT_BASE_PENALTY) -> int:
    """
    Calculate the safety penalty for a chemical.

    Toxicology and PPE texts are scored independently against their
    severity tables. Each field that carries real information also adds
    ``base_penalty``, so a chemical with no hazard notes ranks ahead of
    one with mild notes.

    Args:
        chemical: Catalog chemical
        base_penalty: Flat penalty per informative hazard field

    Returns:
        Non-negative, unclamped penalty

    Examples:
        >>> calculate_safety_penalty(Chemical(id="x", name="Mild", toxicological_info="Irritant"))
        25
    """
    penalty = keyword_penalty(chemical.toxicological_info, TOXICOLOGY_PENALTIES)
    penalty += keyword_penalty(chemical.personal_protection, PROTECTION_PENALTIES)

    if has_safety_info(chemical.toxicological_info):
        penalty += base_penalty
    if has_safety_info(chemical.personal_protection):
        penalty += base_penalty

    return penalty

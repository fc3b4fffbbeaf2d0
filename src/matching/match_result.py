"""
Data structures for matching results.

The matcher's contract is a bare chemical id (or None). These structures
carry the per-candidate score breakdown behind that decision for
diagnostics and reports.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class CandidateScore:
    """
    Score breakdown for one catalog chemical.

    Attributes:
        chemical_id: Identifier of the scored chemical
        chemical_name: Display name of the chemical
        item_score: Weighted item-name content score
        task_score: Weighted task-description content score
        safety_penalty: Penalty from hazard/PPE text
        final_score: max(0, item_score + task_score - safety_penalty)
        skipped: True if the chemical has no usable keywords
        matched_keywords: token -> best keyword hit, for explanation
    """
    chemical_id: str
    chemical_name: str
    item_score: int = 0
    task_score: int = 0
    safety_penalty: int = 0
    final_score: int = 0
    skipped: bool = False
    matched_keywords: Dict[str, str] = field(default_factory=dict)

    @property
    def raw_score(self) -> int:
        """Content score before the penalty and clamping."""
        return self.item_score + self.task_score

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "chemical_id": self.chemical_id,
            "chemical_name": self.chemical_name,
            "item_score": self.item_score,
            "task_score": self.task_score,
            "safety_penalty": self.safety_penalty,
            "final_score": self.final_score,
            "skipped": self.skipped,
            "matched_keywords": dict(self.matched_keywords),
        }


@dataclass
class MatchOutcome:
    """
    Complete result of matching one task against a catalog.

    Attributes:
        item_name: Item name as supplied
        task_description: Task description as supplied
        chemical_id: Winning chemical id, or None for no match
        score: Winning final score (0 when unmatched)
        candidates: One CandidateScore per catalog chemical, in catalog order
        reason: Why matching stopped early, if it did
    """
    item_name: str
    task_description: str
    chemical_id: Optional[str] = None
    score: int = 0
    candidates: List[CandidateScore] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        """Check if a chemical was selected."""
        return self.chemical_id is not None

    @property
    def best_candidate(self) -> Optional[CandidateScore]:
        """Score breakdown of the winning chemical."""
        for candidate in self.candidates:
            if (candidate.chemical_id == self.chemical_id and not candidate.skipped
                    and candidate.final_score == self.score):
                return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "item_name": self.item_name,
            "task_description": self.task_description,
            "matched": self.matched,
            "chemical_id": self.chemical_id,
            "score": self.score,
            "reason": self.reason,
            "candidates": [c.to_dict() for c in self.candidates],
        }

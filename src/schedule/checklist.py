"""
Completion checklist for a cleaning schedule.

Tracks, per schedule item, whether its daily, weekly and monthly tasks
have been done. Items are addressed by (category_index, item_index), the
same coordinates used by CleaningSchedulePlan.iter_slots.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from src.schedule.models import FREQUENCIES, CleaningSchedulePlan


def _check_frequency(frequency: str) -> None:
    if frequency not in FREQUENCIES:
        raise ValueError(f"Invalid frequency '{frequency}', must be one of {FREQUENCIES}")


@dataclass
class ChecklistStatus:
    """Done flags for one schedule item."""
    daily: bool = False
    weekly: bool = False
    monthly: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {"daily": self.daily, "weekly": self.weekly, "monthly": self.monthly}


@dataclass
class ChecklistState:
    """
    Done flags for every item of a plan.

    Attributes:
        statuses: (category_index, item_index) -> ChecklistStatus
    """
    statuses: Dict[Tuple[int, int], ChecklistStatus] = field(default_factory=dict)

    @classmethod
    def for_plan(cls, plan: CleaningSchedulePlan) -> "ChecklistState":
        """Fresh checklist with every task of the plan unchecked."""
        return cls(statuses={
            (cat_index, item_index): ChecklistStatus()
            for cat_index, category in enumerate(plan.schedule)
            for item_index in range(len(category.items))
        })

    def is_checked(self, category_index: int, item_index: int, frequency: str) -> bool:
        """
        Raises:
            KeyError: If the item is not in the checklist
            ValueError: If frequency is invalid
        """
        _check_frequency(frequency)
        return getattr(self.statuses[(category_index, item_index)], frequency)

    def toggle(self, category_index: int, item_index: int, frequency: str) -> bool:
        """
        Flip one task's done flag in place.

        Args:
            category_index: Index into plan.schedule
            item_index: Index into the category's items
            frequency: 'daily', 'weekly' or 'monthly'

        Returns:
            The new flag value

        Raises:
            KeyError: If the item is not in the checklist
            ValueError: If frequency is invalid
        """
        _check_frequency(frequency)
        status = self.statuses[(category_index, item_index)]
        value = not getattr(status, frequency)
        setattr(status, frequency, value)
        return value

    def reset(self, frequency: str) -> None:
        """Uncheck one frequency across every item (e.g. at the start of a new week)."""
        _check_frequency(frequency)
        for status in self.statuses.values():
            setattr(status, frequency, False)

    def completed(self, frequency: str) -> Tuple[int, int]:
        """Return (checked, total) for one frequency."""
        _check_frequency(frequency)
        done = sum(1 for status in self.statuses.values() if getattr(status, frequency))
        return done, len(self.statuses)

    def to_dict(self) -> Dict[int, Dict[int, Dict[str, bool]]]:
        """Nested {category_index: {item_index: flags}} form."""
        result: Dict[int, Dict[int, Dict[str, bool]]] = {}
        for (cat_index, item_index), status in sorted(self.statuses.items()):
            result.setdefault(cat_index, {})[item_index] = status.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[Any, Dict[Any, Dict[str, bool]]]) -> "ChecklistState":
        """Inverse of to_dict; also accepts the string keys JSON produces."""
        statuses = {}
        for cat_index, items in data.items():
            for item_index, flags in items.items():
                statuses[(int(cat_index), int(item_index))] = ChecklistStatus(
                    **{frequency: bool(flags.get(frequency, False)) for frequency in FREQUENCIES}
                )
        return cls(statuses=statuses)

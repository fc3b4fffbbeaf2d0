"""
Cleaning schedule data model.

A plan is a list of equipment categories; each item in a category carries
one task per frequency (daily, weekly, monthly), and each task may reference
a catalog chemical. JSON uses camelCase keys (itemName, chemicalId).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

FREQUENCIES = ('daily', 'weekly', 'monthly')


class ScheduleFormatError(ValueError):
    """Raised when a schedule payload does not have the expected structure."""


@dataclass
class TaskDetail:
    """
    One cleaning task slot.

    Attributes:
        task: Task description ("N/A" when the frequency does not apply)
        notes: Safety warnings or special instructions
        chemical_id: Referenced catalog chemical, or None
    """
    task: str
    notes: str = ""
    chemical_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], keep_chemical: bool = True) -> "TaskDetail":
        if not isinstance(data, dict) or 'task' not in data:
            raise ScheduleFormatError(f"Task entry must be an object with a 'task' field: {data!r}")
        return cls(
            task=data['task'] or "",
            notes=data.get('notes') or "",
            chemical_id=(data.get('chemicalId') or None) if keep_chemical else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"task": self.task, "notes": self.notes, "chemicalId": self.chemical_id}


@dataclass
class ScheduleItem:
    """A piece of equipment and its daily/weekly/monthly tasks."""
    item_name: str
    daily: TaskDetail
    weekly: TaskDetail
    monthly: TaskDetail

    def task_for(self, frequency: str) -> TaskDetail:
        """
        Get the task slot for a frequency.

        Raises:
            ValueError: If frequency is not daily, weekly or monthly
        """
        if frequency not in FREQUENCIES:
            raise ValueError(f"Invalid frequency '{frequency}', must be one of {FREQUENCIES}")
        return getattr(self, frequency)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], keep_chemical: bool = True) -> "ScheduleItem":
        if not isinstance(data, dict) or 'itemName' not in data:
            raise ScheduleFormatError(f"Schedule item must have an 'itemName': {data!r}")
        slots = {}
        for frequency in FREQUENCIES:
            if frequency not in data:
                raise ScheduleFormatError(
                    f"Schedule item '{data['itemName']}' is missing its {frequency} task"
                )
            slots[frequency] = TaskDetail.from_dict(data[frequency], keep_chemical=keep_chemical)
        return cls(item_name=data['itemName'], **slots)

    def to_dict(self) -> Dict[str, Any]:
        result = {"itemName": self.item_name}
        for frequency in FREQUENCIES:
            result[frequency] = getattr(self, frequency).to_dict()
        return result


@dataclass
class ScheduleCategory:
    """A named group of schedule items (e.g. 'Cooking Equipment')."""
    category: str
    items: List[ScheduleItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], keep_chemical: bool = True) -> "ScheduleCategory":
        if not isinstance(data, dict) or 'category' not in data:
            raise ScheduleFormatError(f"Schedule category must have a 'category' name: {data!r}")
        items = data.get('items')
        if not isinstance(items, list):
            raise ScheduleFormatError(f"Category '{data['category']}' must have an 'items' list")
        return cls(
            category=data['category'],
            items=[ScheduleItem.from_dict(item, keep_chemical=keep_chemical) for item in items],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "items": [item.to_dict() for item in self.items]}


@dataclass
class CleaningSchedulePlan:
    """Complete cleaning schedule."""
    schedule: List[ScheduleCategory] = field(default_factory=list)

    def iter_slots(self) -> Iterator[Tuple[int, int, str, ScheduleItem, TaskDetail]]:
        """
        Iterate over every task slot.

        Yields:
            (category_index, item_index, frequency, item, task_detail)
        """
        for cat_index, category in enumerate(self.schedule):
            for item_index, item in enumerate(category.items):
                for frequency in FREQUENCIES:
                    yield cat_index, item_index, frequency, item, getattr(item, frequency)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], keep_chemical: bool = True) -> "CleaningSchedulePlan":
        """
        Build a plan from its JSON dictionary.

        Args:
            data: {'schedule': [...]} dictionary
            keep_chemical: If False, every chemicalId is reset to None

        Raises:
            ScheduleFormatError: If the structure is invalid
        """
        if not isinstance(data, dict) or not isinstance(data.get('schedule'), list):
            raise ScheduleFormatError("Invalid data structure: expected an object with a 'schedule' list")
        return cls(schedule=[
            ScheduleCategory.from_dict(category, keep_chemical=keep_chemical)
            for category in data['schedule']
        ])

    def to_dict(self) -> Dict[str, Any]:
        return {"schedule": [category.to_dict() for category in self.schedule]}


def parse_generated_schedule(payload: Union[str, Dict[str, Any]]) -> CleaningSchedulePlan:
    """
    Convert a schedule generator response into a plan.

    Generated schedules never carry chemical references; every slot starts
    with chemical_id None and missing notes become "".

    Args:
        payload: JSON text or already-decoded dictionary

    Returns:
        CleaningSchedulePlan ready for auto-association

    Raises:
        ScheduleFormatError: If the payload is not valid JSON or has the wrong shape
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload.strip())
        except json.JSONDecodeError as e:
            raise ScheduleFormatError(f"Schedule payload is not valid JSON: {e}") from e
    return CleaningSchedulePlan.from_dict(payload, keep_chemical=False)

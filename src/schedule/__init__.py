"""
Cleaning schedule package.

Schedule data model, parsing of generated schedules, and chemical
auto-association over every task slot, slot edits and the completion
checklist.
"""

from src.schedule.models import (
    FREQUENCIES,
    CleaningSchedulePlan,
    ScheduleCategory,
    ScheduleFormatError,
    ScheduleItem,
    TaskDetail,
    parse_generated_schedule,
)
from src.schedule.association import (
    AssociationSummary,
    assign_chemical,
    association_summary,
    auto_associate_chemicals,
    clear_missing_references,
    slot_rows,
    update_task_notes,
)
from src.schedule.checklist import ChecklistState, ChecklistStatus

__all__ = [
    "FREQUENCIES",
    "CleaningSchedulePlan",
    "ScheduleCategory",
    "ScheduleFormatError",
    "ScheduleItem",
    "TaskDetail",
    "parse_generated_schedule",
    "AssociationSummary",
    "assign_chemical",
    "association_summary",
    "auto_associate_chemicals",
    "clear_missing_references",
    "slot_rows",
    "update_task_notes",
    "ChecklistState",
    "ChecklistStatus",
]

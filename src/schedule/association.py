"""
Chemical auto-association for cleaning schedules.

Backfills empty chemical references across a whole schedule with the
matcher's suggestion. Slots that already reference a chemical (for
example a manual selection) are never overwritten.
"""

import copy
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from src.catalog.models import Chemical
from src.matching.chemical_matcher import ChemicalMatcher
from src.schedule.models import CleaningSchedulePlan, ScheduleItem, TaskDetail


@dataclass
class AssociationSummary:
    """Counts of task slots with and without a chemical."""
    total_slots: int = 0
    with_chemical: int = 0
    without_chemical: int = 0

    @property
    def coverage(self) -> float:
        """Fraction of slots referencing a chemical."""
        return self.with_chemical / self.total_slots if self.total_slots else 0.0


def _match_slot(matcher: ChemicalMatcher, item: ScheduleItem, detail: TaskDetail,
                chemicals: Sequence[Chemical]) -> Optional[str]:
    return matcher.match(item.item_name, detail.task, chemicals)


def auto_associate_chemicals(
    plan: CleaningSchedulePlan,
    chemicals: Sequence[Chemical],
    matcher: Optional[ChemicalMatcher] = None,
    max_workers: int = 1,
) -> CleaningSchedulePlan:
    """
    Fill every empty chemical reference in a schedule.

    The input plan is not modified. Each slot is matched independently,
    so running them in a thread pool gives the same plan as a sequential
    pass.

    Args:
        plan: Schedule to associate
        chemicals: Catalog snapshot
        matcher: ChemicalMatcher (default weights if None)
        max_workers: Worker threads; 1 runs sequentially

    Returns:
        New CleaningSchedulePlan with empty slots filled where a match exists
    """
    result = copy.deepcopy(plan)
    if not chemicals:
        logger.info("Empty chemical catalog, skipping auto-association")
        return result

    matcher = matcher or ChemicalMatcher()
    catalog = list(chemicals)

    pending = [
        (item, detail)
        for _, _, _, item, detail in result.iter_slots()
        if detail.chemical_id is None
    ]
    logger.info(
        f"Auto-associating {len(pending)} empty task slots "
        f"against {len(catalog)} chemicals (workers={max_workers})"
    )

    if max_workers > 1 and len(pending) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            matches = list(executor.map(
                lambda slot: _match_slot(matcher, slot[0], slot[1], catalog), pending
            ))
    else:
        matches = [_match_slot(matcher, item, detail, catalog) for item, detail in pending]

    filled = 0
    for (item, detail), chemical_id in zip(pending, matches):
        if chemical_id is not None:
            detail.chemical_id = chemical_id
            filled += 1
        else:
            logger.debug(f"No chemical for '{item.item_name}': {detail.task!r}")

    logger.info(f"Auto-association filled {filled}/{len(pending)} slots")
    return result


def assign_chemical(
    plan: CleaningSchedulePlan,
    category_index: int,
    item_index: int,
    frequency: str,
    chemical_id: Optional[str],
) -> CleaningSchedulePlan:
    """
    Manually set (or clear) one slot's chemical reference.

    Args:
        plan: Schedule to update (not modified)
        category_index: Index into plan.schedule
        item_index: Index into the category's items
        frequency: 'daily', 'weekly' or 'monthly'
        chemical_id: Chemical to assign, or None to clear

    Returns:
        New CleaningSchedulePlan with the slot updated

    Raises:
        IndexError: If the category or item index is out of range
        ValueError: If frequency is invalid
    """
    result = copy.deepcopy(plan)
    item = result.schedule[category_index].items[item_index]
    detail = item.task_for(frequency)
    logger.debug(
        f"Assigning chemical {chemical_id!r} to '{item.item_name}' {frequency} "
        f"(was {detail.chemical_id!r})"
    )
    detail.chemical_id = chemical_id
    return result


def update_task_notes(
    plan: CleaningSchedulePlan,
    category_index: int,
    item_index: int,
    frequency: str,
    notes: str,
) -> CleaningSchedulePlan:
    """
    Replace one slot's notes.

    Args:
        plan: Schedule to update (not modified)
        category_index: Index into plan.schedule
        item_index: Index into the category's items
        frequency: 'daily', 'weekly' or 'monthly'
        notes: New notes text (None clears to "")

    Returns:
        New CleaningSchedulePlan with the slot's notes updated

    Raises:
        IndexError: If the category or item index is out of range
        ValueError: If frequency is invalid
    """
    result = copy.deepcopy(plan)
    item = result.schedule[category_index].items[item_index]
    item.task_for(frequency).notes = notes or ""
    logger.debug(f"Updated notes for '{item.item_name}' {frequency}")
    return result


def clear_missing_references(plan: CleaningSchedulePlan,
                             chemicals: Sequence[Chemical]) -> CleaningSchedulePlan:
    """
    Clear references to chemicals no longer in the catalog.

    Args:
        plan: Schedule to check (not modified)
        chemicals: Current catalog

    Returns:
        New plan where dangling chemical ids are reset to None
    """
    known = {chemical.id for chemical in chemicals}
    result = copy.deepcopy(plan)
    cleared = 0
    for _, _, _, _, detail in result.iter_slots():
        if detail.chemical_id is not None and detail.chemical_id not in known:
            detail.chemical_id = None
            cleared += 1
    if cleared:
        logger.info(f"Cleared {cleared} references to deleted chemicals")
    return result


def association_summary(plan: CleaningSchedulePlan) -> AssociationSummary:
    """Count slots with and without a chemical reference."""
    summary = AssociationSummary()
    for _, _, _, _, detail in plan.iter_slots():
        summary.total_slots += 1
        if detail.chemical_id is None:
            summary.without_chemical += 1
        else:
            summary.with_chemical += 1
    return summary


def slot_rows(plan: CleaningSchedulePlan, chemicals: Sequence[Chemical]) -> List[dict]:
    """
    Flatten a plan into one row per task slot for reporting.

    Returns:
        Dicts with category, item, frequency, task, notes, chemical id and name
    """
    names = {chemical.id: chemical.name for chemical in chemicals}
    rows = []
    for cat_index, _, frequency, item, detail in plan.iter_slots():
        rows.append({
            'category': plan.schedule[cat_index].category,
            'item': item.item_name,
            'frequency': frequency,
            'task': detail.task,
            'notes': detail.notes,
            'chemical_id': detail.chemical_id,
            'chemical_name': names.get(detail.chemical_id, ''),
        })
    return rows

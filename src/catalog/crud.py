"""
Catalog edit operations.

Each operation takes a catalog snapshot and returns a new list; the input
list and its records are never modified.
"""

import logging
from dataclasses import replace
from typing import List, Sequence

from src.catalog.loader import CatalogError, new_chemical_id
from src.catalog.models import Chemical

logger = logging.getLogger(__name__)


# ============================================================================
# CHEMICAL CRUD OPERATIONS
# ============================================================================

def add_chemical(chemicals: Sequence[Chemical], name: str, **fields) -> List[Chemical]:
    """
    Append a new chemical with a generated id.

    Args:
        chemicals: Current catalog
        name: Product name
        **fields: Other Chemical fields (used_for, application, ...)

    Returns:
        New catalog list ending with the added chemical

    Raises:
        CatalogError: If name is empty or fields include 'id'
    """
    if not name or not name.strip():
        raise CatalogError("Chemical name is required")
    if 'id' in fields:
        raise CatalogError("Chemical ids are generated, do not pass 'id'")
    chemical = Chemical(id=new_chemical_id(), name=name, **fields)
    logger.info(f"Added chemical '{chemical.name}' ({chemical.id})")
    return [*chemicals, chemical]


def update_chemical(chemicals: Sequence[Chemical], chemical_id: str, **changes) -> List[Chemical]:
    """
    Replace fields of one chemical.

    Args:
        chemicals: Current catalog
        chemical_id: Chemical to update
        **changes: Fields to change; 'id' cannot be changed

    Returns:
        New catalog list, in the same order

    Raises:
        KeyError: If no chemical has chemical_id
        CatalogError: If changes include 'id'
    """
    if 'id' in changes:
        raise CatalogError("Chemical id cannot be changed")
    if not any(chemical.id == chemical_id for chemical in chemicals):
        raise KeyError(f"Chemical not found: {chemical_id}")
    return [
        replace(chemical, **changes) if chemical.id == chemical_id else chemical
        for chemical in chemicals
    ]


def delete_chemical(chemicals: Sequence[Chemical], chemical_id: str) -> List[Chemical]:
    """
    Remove a chemical by id.

    Schedule slots that still reference it are left as they are; run
    clear_missing_references on the plan to reset them.

    Returns:
        New catalog list without the chemical (unchanged if absent)
    """
    remaining = [chemical for chemical in chemicals if chemical.id != chemical_id]
    if len(remaining) == len(chemicals):
        logger.warning(f"Delete requested for unknown chemical {chemical_id}")
    return remaining

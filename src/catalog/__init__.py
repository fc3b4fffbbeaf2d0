"""
Chemical catalog package.

Catalog records, the snapshot loaders that feed the matcher, and
catalog edit operations.
"""

from src.catalog.models import Chemical, find_chemical, NOT_SPECIFIED
from src.catalog.loader import (
    BulkImportResult,
    CatalogError,
    load_catalog,
    new_chemical_id,
    parse_bulk_import,
    save_catalog,
)
from src.catalog.crud import add_chemical, delete_chemical, update_chemical

__all__ = [
    "Chemical",
    "find_chemical",
    "NOT_SPECIFIED",
    "BulkImportResult",
    "CatalogError",
    "load_catalog",
    "new_chemical_id",
    "parse_bulk_import",
    "save_catalog",
    "add_chemical",
    "delete_chemical",
    "update_chemical",
]

"""
Catalog loading and bulk import.

Reads a read-only snapshot of the chemical catalog from JSON, YAML, CSV or
Excel files, and parses the semicolon-delimited bulk import format:

    name; active ingredient; used for; application; toxicology; PPE[; #color]
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
import yaml

from src.catalog.models import Chemical

logger = logging.getLogger(__name__)

# Minimum number of ';' separated fields for a bulk import line
BULK_IMPORT_MIN_FIELDS = 6

OPTIONAL_TEXT_FIELDS = ('toxicologicalInfo', 'personalProtection', 'color', 'image',
                        'toxicological_info', 'personal_protection')


class CatalogError(ValueError):
    """Raised when a catalog source cannot be read as chemical records."""


@dataclass
class BulkImportResult:
    """
    Outcome of a bulk import.

    Attributes:
        chemicals: Parsed chemicals, each with a freshly generated id
        failed_count: Number of non-blank lines that were skipped
    """
    chemicals: List[Chemical] = field(default_factory=list)
    failed_count: int = 0

    @property
    def imported_count(self) -> int:
        return len(self.chemicals)


def new_chemical_id() -> str:
    """Generate a unique chemical identifier."""
    return uuid.uuid4().hex


def load_catalog(path: Union[str, Path]) -> List[Chemical]:
    """
    Load a chemical catalog file.

    Supported formats: .json (list, or object with a 'chemicals' list),
    .yaml/.yml (same shape), .csv and .xlsx (one row per chemical, columns
    named after the record keys).

    Args:
        path: Catalog file path

    Returns:
        List of Chemical records in file order

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the format is unsupported or records are malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    logger.info(f"Loading chemical catalog: {path}")

    if suffix == '.json':
        with open(path, 'r', encoding='utf-8') as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise CatalogError(f"Invalid JSON in {path}: {e}") from e
        records = _unwrap_records(raw, path)
    elif suffix in ('.yaml', '.yml'):
        with open(path, 'r', encoding='utf-8') as f:
            try:
                raw = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise CatalogError(f"Invalid YAML in {path}: {e}") from e
        records = _unwrap_records(raw, path)
    elif suffix == '.csv':
        records = _frame_to_records(pd.read_csv(path, dtype=str, keep_default_na=False))
    elif suffix in ('.xlsx', '.xls'):
        records = _frame_to_records(pd.read_excel(path, dtype=str))
    else:
        raise CatalogError(f"Unsupported catalog format: {path.suffix}")

    chemicals = [_record_to_chemical(record, index) for index, record in enumerate(records, 1)]
    logger.info(f"Loaded {len(chemicals)} chemicals from {path.name}")
    return chemicals


def save_catalog(chemicals: List[Chemical], path: Union[str, Path]) -> None:
    """
    Write a catalog to JSON.

    Args:
        chemicals: Chemicals to write
        path: Destination .json path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([chemical.to_dict() for chemical in chemicals], f, indent=2, ensure_ascii=False)
    logger.info(f"Saved {len(chemicals)} chemicals to {path}")


def parse_bulk_import(text: str) -> BulkImportResult:
    """
    Parse semicolon-delimited chemical lines.

    Each non-blank line holds at least six fields: name, active ingredient,
    used-for keywords, application, toxicological info, personal protection.
    An optional seventh field is kept as the display color only when it
    starts with '#'. Blank toxicology/PPE fields become None.

    Args:
        text: Multi-line import text

    Returns:
        BulkImportResult with parsed chemicals and the skipped line count

    Raises:
        CatalogError: If the text is empty or whitespace only
    """
    if not text or not text.strip():
        raise CatalogError("Bulk import text is empty")

    result = BulkImportResult()
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(';')]
        if len(parts) < BULK_IMPORT_MIN_FIELDS:
            logger.debug(f"Skipping bulk import line with {len(parts)} fields: {line!r}")
            result.failed_count += 1
            continue

        color = parts[6] if len(parts) > 6 and parts[6].startswith('#') else None
        result.chemicals.append(Chemical(
            id=new_chemical_id(),
            name=parts[0],
            active_ingredient=parts[1],
            used_for=parts[2],
            application=parts[3],
            toxicological_info=parts[4] or None,
            personal_protection=parts[5] or None,
            color=color,
        ))

    logger.info(
        f"Bulk import parsed {result.imported_count} chemicals, "
        f"skipped {result.failed_count} lines"
    )
    return result


def _unwrap_records(raw: Any, path: Path) -> List[Dict[str, Any]]:
    """Accept either a bare list or {'chemicals': [...]}."""
    if isinstance(raw, dict):
        raw = raw.get('chemicals')
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CatalogError(f"Catalog {path} must contain a list of chemicals")
    return raw


def _frame_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a tabular catalog to dictionaries, blank cells dropped."""
    df = df.fillna('')
    records = []
    for row in df.to_dict(orient='records'):
        records.append({
            str(key).strip(): value.strip() if isinstance(value, str) else value
            for key, value in row.items()
        })
    return records


def _record_to_chemical(record: Any, index: int) -> Chemical:
    """
    Validate one raw record and build a Chemical.

    Args:
        record: Raw record from the catalog file
        index: 1-based position for error messages

    Raises:
        CatalogError: If the record is not a mapping or has no name
    """
    if not isinstance(record, dict):
        raise CatalogError(f"Catalog record {index} is not a mapping: {record!r}")
    if not record.get('name'):
        raise CatalogError(f"Catalog record {index} has no name")

    data = dict(record)
    if not data.get('id'):
        data['id'] = new_chemical_id()
    for key in OPTIONAL_TEXT_FIELDS:
        if key in data and data[key] == '':
            data[key] = None

    return Chemical.from_dict(data)

"""
Batch chemical matching for a list of cleaning tasks.

Reads a task sheet (Excel or CSV) with item and task columns, picks the best
chemical for every row, and writes the rows back with the chemical id, name,
score and score breakdown.

Usage:
    python scripts/match_tasks.py --input tasks.xlsx --catalog chemicals.json --output matched.xlsx
    python scripts/match_tasks.py -i tasks.csv -c chemicals.yaml -o matched.csv --item-column Equipment --task-column Task
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Dict, Optional

import pandas as pd
from tqdm import tqdm

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog import Chemical, load_catalog
from src.matching import ChemicalMatcher, build_matcher

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

ITEM_COLUMN_CANDIDATES = ['item', 'item name', 'itemname', 'equipment', 'tool']
TASK_COLUMN_CANDIDATES = ['task', 'task description', 'description', 'cleaning task']


def detect_column(df: pd.DataFrame, candidates: List[str]) -> Optional[str]:
    """
    Find a column whose name matches one of the candidates (case-insensitive).

    Args:
        df: DataFrame to analyze
        candidates: Lowercase names in priority order

    Returns:
        Column name or None if not detected
    """
    columns_lower = {str(col).strip().lower(): col for col in df.columns}
    for candidate in candidates:
        if candidate in columns_lower:
            logger.info(f"Auto-detected column: '{columns_lower[candidate]}'")
            return columns_lower[candidate]
    return None


def load_task_file(file_path: Path) -> pd.DataFrame:
    """
    Load a task sheet.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    if file_path.suffix.lower() in ['.xlsx', '.xls']:
        df = pd.read_excel(file_path, dtype=str)
    elif file_path.suffix.lower() == '.csv':
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}")

    logger.info(f"Loaded {len(df)} rows, {len(df.columns)} columns")
    return df.fillna('')


def match_rows(df: pd.DataFrame, item_column: str, task_column: str,
               chemicals: List[Chemical], matcher: ChemicalMatcher) -> List[Dict]:
    """
    Match every row of a task sheet.

    Returns:
        One result dictionary per input row
    """
    results = []
    for row in tqdm(df.to_dict(orient='records'), desc="Matching tasks"):
        item_name = row[item_column]
        task = row[task_column]
        outcome = matcher.explain(item_name, task, chemicals)
        best = outcome.best_candidate

        result = dict(row)
        result.update({
            'chemical_id': outcome.chemical_id,
            'chemical_name': best.chemical_name if best else '',
            'score': outcome.score,
            'item_score': best.item_score if best else 0,
            'task_score': best.task_score if best else 0,
            'safety_penalty': best.safety_penalty if best else 0,
            'matched_keywords': ', '.join(sorted(set(best.matched_keywords.values()))) if best else '',
            'no_match_reason': outcome.reason or '',
        })
        results.append(result)
    return results


def main():
    """Main entry point for batch task matching CLI."""
    parser = argparse.ArgumentParser(
        description="Match cleaning tasks to chemicals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--input', '-i', required=True, help='Task sheet (Excel or CSV)')
    parser.add_argument('--catalog', '-c', required=True, help='Chemical catalog (JSON, YAML, CSV or Excel)')
    parser.add_argument('--output', '-o', required=True, help='Output file (.xlsx or .csv)')
    parser.add_argument('--item-column', help='Column with item names (auto-detect if not specified)')
    parser.add_argument('--task-column', help='Column with task descriptions (auto-detect if not specified)')
    parser.add_argument('--config', help='Matcher config YAML')

    args = parser.parse_args()

    try:
        df = load_task_file(Path(args.input))

        item_column = args.item_column or detect_column(df, ITEM_COLUMN_CANDIDATES)
        task_column = args.task_column or detect_column(df, TASK_COLUMN_CANDIDATES)
        for label, column in (('item', item_column), ('task', task_column)):
            if column is None or column not in df.columns:
                raise ValueError(
                    f"Could not find the {label} column. Please specify with --{label}-column.\n"
                    f"Available columns: {', '.join(map(str, df.columns))}"
                )

        chemicals = load_catalog(args.catalog)
        matcher = build_matcher(Path(args.config) if args.config else None)

        results = match_rows(df, item_column, task_column, chemicals, matcher)
        out = pd.DataFrame(results)

        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.suffix.lower() == '.csv':
            out.to_csv(output_path, index=False)
        else:
            out.to_excel(output_path, index=False, engine='openpyxl')

        matched = sum(1 for r in results if r['chemical_id'] is not None)
        logger.info(f"Matched {matched}/{len(results)} tasks, output written to: {output_path}")

    except Exception as e:
        logger.error(f"Task matching failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

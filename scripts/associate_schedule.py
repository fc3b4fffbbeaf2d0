"""
Auto-associate chemicals with a cleaning schedule.

Reads a schedule (JSON, as produced by the schedule generator or saved
from a previous run) and a chemical catalog, fills every task slot that
has no chemical yet, and writes the updated schedule. Existing chemical
references are kept.

Usage:
    python scripts/associate_schedule.py --schedule schedule.json --catalog chemicals.json --output associated.json
    python scripts/associate_schedule.py -s generated.json -c chemicals.csv -o out.json --generated --report slots.xlsx --workers 4
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Dict, Optional

import pandas as pd
from openpyxl.styles import Font, PatternFill, Alignment

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog import load_catalog
from src.matching import build_matcher
from src.schedule import (
    CleaningSchedulePlan,
    association_summary,
    auto_associate_chemicals,
    clear_missing_references,
    parse_generated_schedule,
    slot_rows,
)
from src.utils.config_manager import ConfigManager, DEFAULT_CONFIG_PATH

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def resolve_workers(cli_workers: Optional[int], config_path: Path) -> int:
    """
    Pick the association worker count.

    An explicit --workers value (including 0) overrides the config file.

    Raises:
        ValueError: If the resulting count is below 1
    """
    if cli_workers is not None:
        workers = cli_workers
    else:
        workers = ConfigManager(config_path).get_association_param('max_workers')
    if workers < 1:
        raise ValueError(f"Worker count must be positive, got {workers}")
    return workers


def load_schedule(path: Path, generated: bool) -> CleaningSchedulePlan:
    """
    Load a schedule JSON file.

    Args:
        path: Schedule file
        generated: Treat as raw generator output (all chemical ids reset)

    Returns:
        CleaningSchedulePlan
    """
    if not path.exists():
        raise FileNotFoundError(f"Schedule file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if generated:
        return parse_generated_schedule(data)
    return CleaningSchedulePlan.from_dict(data)


def write_slot_report(rows: List[Dict], output_path: Path, sheet_name: str = "Task Slots"):
    """
    Write one row per task slot to Excel, highlighting slots without a chemical.

    Args:
        rows: Rows from slot_rows()
        output_path: Path to output Excel file
        sheet_name: Name of worksheet
    """
    df = pd.DataFrame(rows)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        ws = writer.sheets[sheet_name]

        header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        header_font = Font(color="FFFFFF", bold=True)
        for cell in ws[1]:
            cell.fill = header_fill
            cell.font = header_font
            cell.alignment = Alignment(horizontal='center', vertical='center')

        for column in ws.columns:
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)

        # Slots without a chemical
        yellow_fill = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
        for row_idx, row in enumerate(rows, start=2):
            if row['chemical_id'] is None:
                for col_idx in range(1, len(df.columns) + 1):
                    ws.cell(row=row_idx, column=col_idx).fill = yellow_fill

    logger.info(f"Slot report written to: {output_path}")


def main():
    """Main entry point for schedule association CLI."""
    parser = argparse.ArgumentParser(
        description="Fill empty chemical references in a cleaning schedule",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Associate a saved schedule
  python scripts/associate_schedule.py --schedule schedule.json --catalog chemicals.json --output associated.json

  # Fresh generator output, Excel report, 4 worker threads
  python scripts/associate_schedule.py -s generated.json -c chemicals.csv -o out.json --generated --report slots.xlsx -w 4
        """
    )

    parser.add_argument('--schedule', '-s', required=True, help='Schedule JSON file')
    parser.add_argument('--catalog', '-c', required=True, help='Chemical catalog (JSON, YAML, CSV or Excel)')
    parser.add_argument('--output', '-o', required=True, help='Output JSON file for the associated schedule')
    parser.add_argument('--report', '-r', help='Optional Excel report with one row per task slot')
    parser.add_argument('--generated', action='store_true',
                        help='Input is raw schedule generator output (chemical ids ignored)')
    parser.add_argument('--workers', '-w', type=int, help='Worker threads (default: from config)')
    parser.add_argument('--config', help=f'Matcher config YAML (default: {DEFAULT_CONFIG_PATH})')

    args = parser.parse_args()

    try:
        config_path = Path(args.config) if args.config else DEFAULT_CONFIG_PATH
        matcher = build_matcher(config_path)
        workers = resolve_workers(args.workers, config_path)

        chemicals = load_catalog(args.catalog)
        plan = load_schedule(Path(args.schedule), args.generated)
        plan = clear_missing_references(plan, chemicals)

        before = association_summary(plan)
        associated = auto_associate_chemicals(plan, chemicals, matcher=matcher, max_workers=workers)
        after = association_summary(associated)

        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(associated.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Associated schedule written to: {output_path}")

        if args.report:
            write_slot_report(slot_rows(associated, chemicals), Path(args.report))

        print(f"Task slots:            {after.total_slots}")
        print(f"With chemical before:  {before.with_chemical}")
        print(f"With chemical after:   {after.with_chemical} ({after.coverage:.1%})")
        print(f"Still without:         {after.without_chemical}")

    except Exception as e:
        logger.error(f"Schedule association failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

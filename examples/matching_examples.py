"""
Example usage of the chemical matching engine.

This script demonstrates matching single cleaning tasks, inspecting the
score breakdown, and auto-associating a generated schedule.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.catalog import Chemical, find_chemical
from src.matching import ChemicalMatcher, MatcherConfig, build_matcher
from src.schedule import (
    association_summary,
    auto_associate_chemicals,
    parse_generated_schedule,
)


CATALOG = [
    Chemical(
        id="degreaser",
        name="Suma Grill D9",
        active_ingredient="Sodium hydroxide",
        used_for="oven, grill, fryer, stainless steel",
        application="Spray onto warm surface, leave for 10-30 minutes, wipe clean.",
        toxicological_info="Causes skin irritation.",
        personal_protection="Gloves and goggles.",
    ),
    Chemical(
        id="glass",
        name="Glass Cleaner",
        active_ingredient="Isopropanol",
        used_for="glass, mirror, door",
        application="Spray and wipe with a lint-free cloth.",
        toxicological_info="Not specified",
        personal_protection="Not specified",
    ),
    Chemical(
        id="descaler",
        name="Descaler",
        active_ingredient="Citric acid",
        used_for="coffee, kettle, dishwasher, limescale",
        application="Run a descaling cycle.",
    ),
]


def example_single_task():
    """Example: Match a single cleaning task."""
    print("=" * 80)
    print("EXAMPLE 1: Single Task")
    print("=" * 80)

    matcher = build_matcher()

    item, task = "Flat Top Grill", "Scrape and degrease cooking surface"
    print(f"\nItem: '{item}'  Task: '{task}'")

    chemical_id = matcher.match(item, task, CATALOG)
    chemical = find_chemical(CATALOG, chemical_id)
    if chemical:
        print(f"\n✓ MATCHED: {chemical.name}")
        print(f"  Application: {chemical.application}")
    else:
        print("\n✗ NO MATCH")


def example_score_breakdown():
    """Example: Inspect why a chemical was chosen."""
    print("\n" + "=" * 80)
    print("EXAMPLE 2: Score Breakdown")
    print("=" * 80)

    matcher = ChemicalMatcher()
    outcome = matcher.explain("Espresso Machine", "Descale coffee boiler", CATALOG)

    print(f"\n{'Chemical':<20} {'Item':>6} {'Task':>6} {'Penalty':>8} {'Final':>6}")
    print("-" * 50)
    for candidate in outcome.candidates:
        if candidate.skipped:
            print(f"{candidate.chemical_name:<20} (skipped: no keywords)")
            continue
        print(
            f"{candidate.chemical_name:<20} {candidate.item_score:>6} {candidate.task_score:>6} "
            f"{candidate.safety_penalty:>8} {candidate.final_score:>6}"
        )
    print(f"\nSelected: {outcome.chemical_id} (reason: {outcome.reason or 'best score'})")


def example_custom_weights():
    """Example: Change field weights."""
    print("\n" + "=" * 80)
    print("EXAMPLE 3: Custom Weights")
    print("=" * 80)

    item, task = "Oven Door", "Polish glass window"
    for config in (MatcherConfig(), MatcherConfig(item_name_weight=1, task_description_weight=5)):
        matcher = ChemicalMatcher(config=config)
        print(
            f"\nitem x{config.item_name_weight}, task x{config.task_description_weight}: "
            f"{matcher.match(item, task, CATALOG)}"
        )


def example_schedule_association():
    """Example: Fill a generated schedule."""
    print("\n" + "=" * 80)
    print("EXAMPLE 4: Schedule Auto-Association")
    print("=" * 80)

    plan = parse_generated_schedule({
        "schedule": [{
            "category": "Cooking Equipment",
            "items": [{
                "itemName": "Combi Oven",
                "daily": {"task": "Wipe glass door", "notes": "Ensure oven is cool"},
                "weekly": {"task": "Degrease cavity and racks"},
                "monthly": {"task": "N/A"},
            }],
        }]
    })

    associated = auto_associate_chemicals(plan, CATALOG, max_workers=2)
    for _, _, frequency, item, detail in associated.iter_slots():
        chemical = find_chemical(CATALOG, detail.chemical_id)
        print(f"  {item.item_name:<12} {frequency:<8} {detail.task:<28} -> "
              f"{chemical.name if chemical else '-'}")

    summary = association_summary(associated)
    print(f"\nCoverage: {summary.with_chemical}/{summary.total_slots} ({summary.coverage:.0%})")


if __name__ == "__main__":
    example_single_task()
    example_score_breakdown()
    example_custom_weights()
    example_schedule_association()

"""Summarise personal records from a CSV export of logged sets."""
from __future__ import annotations

import argparse
import csv
import logging
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from app.logging_config import configure_logging
from app.models.schemas import LiftObservation
from app.services.strength_history import (
    MAIN_LIFT_NAMES,
    calculate_monthly_progress,
    get_personal_records,
    workouts_for_lift,
)
from app.services.strength_metrics import get_training_percentages, round_half_up
from app.services.units import convert_weight


logger = logging.getLogger("summarize_lifts")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Summarise main-lift personal records from a CSV of sets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
CSV columns: exercise_name, weight, reps, date (YYYY-MM-DD, optional)

Examples:
  # Records as of today
  python scripts/summarize_lifts.py sets.csv

  # Records as of a past date, with training percentages
  python scripts/summarize_lifts.py sets.csv --as-of 2025-06-30 --percentages

  # Sets logged in kg, report in lbs
  python scripts/summarize_lifts.py sets.csv --unit kg --display-unit lbs
        """
    )
    parser.add_argument("csv_path", type=Path, help="Path to the CSV export")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date for monthly progress (default: today)",
    )
    parser.add_argument(
        "--unit",
        choices=["kg", "lbs"],
        default=None,
        help="Unit the CSV weights are logged in (default: DEFAULT_WEIGHT_UNIT)",
    )
    parser.add_argument(
        "--display-unit",
        choices=["kg", "lbs"],
        default=None,
        help="Unit to report in; weights are converted from --unit (default: same as --unit)",
    )
    parser.add_argument("--percentages", action="store_true", help="Print training percentages per lift")
    return parser.parse_args(argv)


def load_workouts(csv_path: Path) -> list[LiftObservation]:
    """Read logged sets from CSV, skipping rows that cannot be parsed."""
    workouts: list[LiftObservation] = []

    with csv_path.open("r", encoding="utf-8", newline="") as fh:
        for line_no, row in enumerate(csv.DictReader(fh), start=2):
            try:
                workouts.append(
                    LiftObservation(
                        exercise_name=(row.get("exercise_name") or "").strip() or None,
                        weight=float(row["weight"]),
                        reps=int(row["reps"]),
                        date=date.fromisoformat(row["date"]) if row.get("date") else None,
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping line %d of %s: %s", line_no, csv_path, exc)

    return workouts


def summarize(
    workouts: list[LiftObservation],
    as_of: date,
    unit: str,
    include_percentages: bool = False,
    display_unit: str | None = None,
) -> list[str]:
    """
    Format one report line per main lift with a usable record.

    Weights in ``workouts`` are in ``unit``; the report is converted to
    ``display_unit`` when given.
    """
    display_unit = display_unit or unit

    def shown(value: float) -> float:
        return round_half_up(convert_weight(value, unit, display_unit), 1)

    settings = get_settings()
    records = get_personal_records(workouts)
    lines: list[str] = []

    for lift, display_name in MAIN_LIFT_NAMES.items():
        if lift not in records:
            continue

        estimate, achieved_at = records[lift]
        progress = calculate_monthly_progress(
            estimate.e1rm,
            workouts_for_lift(workouts, lift),
            as_of,
            lookback_days=settings.progress_lookback_days,
            sample_limit=settings.progress_sample_limit,
        )
        when = achieved_at.isoformat() if achieved_at else "undated"
        lines.append(
            f"{display_name}: {shown(estimate.e1rm)} {display_unit} e1RM "
            f"({estimate.confidence} confidence, {estimate.source.weight:g} x {estimate.source.reps}, {when}) "
            f"| {settings.progress_lookback_days}d change {shown(progress):+.1f} {display_unit}"
        )

        if include_percentages:
            tiers = get_training_percentages(shown(estimate.e1rm))
            lines.append(
                f"  light {tiers.light} | moderate {tiers.moderate} | "
                f"heavy {tiers.heavy} | max effort {tiers.max_effort}"
            )

    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    if not args.csv_path.exists():
        logger.error("CSV file not found: %s", args.csv_path)
        return 1

    workouts = load_workouts(args.csv_path)
    unit = args.unit or get_settings().default_weight_unit
    lines = summarize(
        workouts,
        args.as_of or date.today(),
        unit,
        include_percentages=args.percentages,
        display_unit=args.display_unit,
    )

    if not lines:
        print("No main-lift records found.")
        return 0

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Activity Engine — Main Pipeline
Processes the activity monitor export through the full pipeline:
Load → Daily totals → Interval profile → Imputation → Weekday/weekend → Report
"""
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from activity_engine.config import CHART_DIR, OUTPUT_DIR, SUMMARY_JSON, TOP_K
from activity_engine.etl.activity_loader import check_grid, load_activity
from activity_engine.data_prep.daily_totals import DailyTotal, aggregate_daily
from activity_engine.data_prep.interval_profile import IntervalProfile, build_profile
from activity_engine.data_prep.imputer import fully_imputed_dates, impute, imputed_count
from activity_engine.data_prep.day_kind import DayKind, day_kind_profiles
from activity_engine.output.report import (
    build_summary,
    count_missing,
    print_daily_summary,
    print_dataset_overview,
    print_day_kind_comparison,
    print_peak_intervals,
    save_summary_json,
    summarize_daily_totals,
)


@dataclass
class PipelineResult:
    """Every table the pipeline derives, raw and imputed."""
    records: pd.DataFrame
    imputed: pd.DataFrame
    raw_daily_totals: List[DailyTotal]
    profile: IntervalProfile
    imputed_daily_totals: List[DailyTotal]
    day_kind_profiles: Dict[DayKind, IntervalProfile]
    outputs: Dict[str, Path] = field(default_factory=dict)


def compute(records: pd.DataFrame) -> PipelineResult:
    """Run every stage on an already-loaded record table. No printing, no files."""
    raw_daily_totals = aggregate_daily(records, column="steps")
    profile = build_profile(records, column="steps")
    imputed = impute(records, profile)
    imputed_daily_totals = aggregate_daily(imputed, column="imputed_steps")
    kind_profiles = day_kind_profiles(imputed, column="imputed_steps")

    return PipelineResult(
        records=records,
        imputed=imputed,
        raw_daily_totals=raw_daily_totals,
        profile=profile,
        imputed_daily_totals=imputed_daily_totals,
        day_kind_profiles=kind_profiles,
    )


def run_pipeline(
    source: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    top_k: int = TOP_K,
    charts: bool = True,
) -> PipelineResult:
    """
    Execute the full activity pipeline.

    Args:
        source: activity.csv or activity.zip (defaults to the data directory).
        output_dir: Where the JSON summary and charts go.
        top_k: Number of peak intervals to report.
        charts: Render PNG charts (requires matplotlib).
    """
    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    chart_dir = output_dir / CHART_DIR.name
    summary_path = output_dir / SUMMARY_JSON.name

    print("=" * 60)
    print("ACTIVITY ENGINE — Activity Monitoring Pipeline")
    print("=" * 60)

    # ── Phase 1: Load ───────────────────────────────────────────
    print("\n▶ Phase 1: Loading activity data...")
    records = load_activity(source)
    print(f"  → {len(records)} records, {records['date'].nunique()} days, "
          f"{records['interval'].nunique()} intervals")
    print(f"  → {count_missing(records)} missing step counts")
    for warning in check_grid(records):
        print(f"  Warning: {warning}")

    # ── Phase 2: Aggregate, profile, impute ─────────────────────
    print("\n▶ Phase 2: Aggregating and imputing...")
    result = compute(records)
    raw_missing = sum(1 for t in result.raw_daily_totals if t.is_missing)
    print(f"  → {len(result.raw_daily_totals)} daily totals ({raw_missing} incomplete days)")
    print(f"  → Interval profile over {len(result.profile)} intervals")
    if result.profile.missing_intervals():
        print(f"  Warning: {len(result.profile.missing_intervals())} interval(s) have no observed steps")
    print(f"  → Imputed {imputed_count(result.imputed)} step counts from interval means")
    empty_days = fully_imputed_dates(result.imputed)
    if empty_days:
        print(f"  Warning: {len(empty_days)} day(s) are entirely imputed: "
              f"{', '.join(str(d) for d in empty_days)}")

    # ── Phase 3: Report ─────────────────────────────────────────
    print("\n▶ Phase 3: Reporting...")
    print_dataset_overview(records)
    print_daily_summary(
        summarize_daily_totals(result.raw_daily_totals),
        summarize_daily_totals(result.imputed_daily_totals),
    )
    print_peak_intervals(result.profile, top_k)
    print_day_kind_comparison(result.day_kind_profiles)

    print()
    result.outputs["summary"] = save_summary_json(build_summary(result, top_k), summary_path)

    if charts:
        from activity_engine.output.charts import (
            plot_daily_histogram,
            plot_day_kind_profiles,
            plot_interval_profile,
        )
        result.outputs["histogram"] = plot_daily_histogram(
            result.raw_daily_totals, result.imputed_daily_totals, chart_dir
        )
        result.outputs["interval_profile"] = plot_interval_profile(result.profile, chart_dir)
        result.outputs["day_kind_profiles"] = plot_day_kind_profiles(
            result.day_kind_profiles, chart_dir
        )
        print(f"  → Saved {len(result.outputs) - 1} charts to {chart_dir}")

    # ── Summary ─────────────────────────────────────────────────
    print("\n" + "=" * 60)
    print("PIPELINE COMPLETE")
    print("=" * 60)
    print(f"  Records processed: {len(records)}")
    print(f"  Values imputed: {imputed_count(result.imputed)}")
    print(f"  Output: {output_dir}")
    print()

    return result


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Activity Engine")
    parser.add_argument("--source", type=Path, default=None,
                        help="activity.csv or activity.zip (default: data/activity.csv, then data/activity.zip)")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help=f"Output directory (default: {OUTPUT_DIR})")
    parser.add_argument("--top-k", type=int, default=TOP_K,
                        help=f"Number of peak intervals to report (default: {TOP_K})")
    parser.add_argument("--no-charts", action="store_true", help="Skip PNG charts")
    args = parser.parse_args(argv)

    run_pipeline(
        source=args.source,
        output_dir=args.output_dir,
        top_k=args.top_k,
        charts=not args.no_charts,
    )


if __name__ == "__main__":
    main()

"""
Console report and JSON summary.

Consumes the pipeline's data products (daily totals before and after
imputation, the interval profile, the weekday/weekend profiles) and renders
them as printed sections and a JSON bundle.
"""
import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from activity_engine.config import SUMMARY_JSON
from activity_engine.data_prep.daily_totals import DailyTotal, present_totals
from activity_engine.data_prep.day_kind import DayKind
from activity_engine.data_prep.interval_profile import IntervalMean, IntervalProfile


@dataclass
class DailySummary:
    """Mean and median of daily totals, ignoring missing days."""
    days: int
    missing_days: int
    mean_steps: Optional[float]
    median_steps: Optional[float]


def summarize_daily_totals(totals: List[DailyTotal]) -> DailySummary:
    values = present_totals(totals)
    if len(values) == 0:
        mean, median = None, None
    else:
        mean, median = float(np.mean(values)), float(np.median(values))
    return DailySummary(
        days=len(totals),
        missing_days=len(totals) - len(values),
        mean_steps=mean,
        median_steps=median,
    )


def count_missing(records: pd.DataFrame) -> int:
    """Number of records with no step count."""
    return int(records["steps"].isna().sum())


def _fmt(value: Optional[float], digits: int = 2) -> str:
    return "n/a" if value is None else f"{value:,.{digits}f}"


def _interval_line(rank: int, entry: IntervalMean) -> str:
    return (f"    {rank}. interval {entry.interval:>4d} ({entry.time_of_day.label()}): "
            f"{entry.mean_steps:.2f} steps")


def print_dataset_overview(records: pd.DataFrame):
    print("\n" + "=" * 60)
    print("DATASET")
    print("=" * 60)
    missing = count_missing(records)
    print(f"  Records: {len(records)}")
    print(f"  Dates: {records['date'].min()} to {records['date'].max()} "
          f"({records['date'].nunique()} days)")
    print(f"  Intervals per day: {records['interval'].nunique()}")
    print(f"  Missing step counts: {missing} ({missing / max(len(records), 1):.1%})")


def print_daily_summary(raw: DailySummary, imputed: DailySummary):
    """Daily totals before vs after imputation."""
    print("\n" + "=" * 60)
    print("TOTAL STEPS PER DAY")
    print("=" * 60)
    print(f"  {'':14s}{'raw':>14s}{'imputed':>14s}")
    print(f"  {'days':14s}{raw.days:>14d}{imputed.days:>14d}")
    print(f"  {'missing days':14s}{raw.missing_days:>14d}{imputed.missing_days:>14d}")
    print(f"  {'mean':14s}{_fmt(raw.mean_steps):>14s}{_fmt(imputed.mean_steps):>14s}")
    print(f"  {'median':14s}{_fmt(raw.median_steps):>14s}{_fmt(imputed.median_steps):>14s}")

    if raw.mean_steps is not None and imputed.mean_steps is not None:
        print(f"\n  Imputation shifted the mean by {imputed.mean_steps - raw.mean_steps:+.2f} "
              f"and the median by {imputed.median_steps - raw.median_steps:+.2f}")


def print_peak_intervals(profile: IntervalProfile, top_k: int):
    print("\n" + "=" * 60)
    print("AVERAGE DAILY ACTIVITY PATTERN")
    print("=" * 60)
    print(f"  Intervals: {len(profile)}, without data: {len(profile.missing_intervals())}")
    print(f"  Top {top_k} intervals by mean steps:")
    for rank, entry in enumerate(profile.top(top_k), start=1):
        print(_interval_line(rank, entry))


def print_day_kind_comparison(profiles: Dict[DayKind, IntervalProfile]):
    print("\n" + "=" * 60)
    print("WEEKDAY vs WEEKEND")
    print("=" * 60)
    for kind, profile in profiles.items():
        if len(profile) == 0:
            print(f"\n  {kind.value}: no data")
            continue
        peak = profile.peak()
        print(f"\n  {kind.value}:")
        print(f"    Average day: {_fmt(profile.total_daily_steps())} steps")
        print(f"    Peak: interval {peak.interval} ({peak.time_of_day.label()}), "
              f"{peak.mean_steps:.2f} steps")


# ══════════════════════════════════════════════════════════════════
# JSON SUMMARY
# ══════════════════════════════════════════════════════════════════

def _totals_to_json(totals: List[DailyTotal]) -> List[Dict]:
    return [{"date": t.date.isoformat(), "total_steps": t.total_steps} for t in totals]


def _profile_to_json(profile: IntervalProfile) -> List[Dict]:
    frame = profile.to_frame()
    return [
        {
            "interval": int(row.interval),
            "time_of_day": row.time_of_day,
            "mean_steps": None if np.isnan(row.mean_steps) else float(row.mean_steps),
        }
        for row in frame.itertuples(index=False)
    ]


def build_summary(result, top_k: int) -> Dict:
    """
    JSON-ready bundle of the pipeline's data products.

    `result` is a PipelineResult from run_pipeline.
    """
    raw_summary = summarize_daily_totals(result.raw_daily_totals)
    imputed_summary = summarize_daily_totals(result.imputed_daily_totals)

    return {
        "metadata": {
            "records": len(result.records),
            "missing_steps": count_missing(result.records),
            "date_range": {
                "start": str(result.records["date"].min()),
                "end": str(result.records["date"].max()),
            },
        },
        "daily_summary": {
            "raw": asdict(raw_summary),
            "imputed": asdict(imputed_summary),
        },
        "raw_daily_totals": _totals_to_json(result.raw_daily_totals),
        "imputed_daily_totals": _totals_to_json(result.imputed_daily_totals),
        "interval_profile": _profile_to_json(result.profile),
        "peak_intervals": [
            {"interval": e.interval, "time_of_day": e.time_of_day.label(), "mean_steps": e.mean_steps}
            for e in result.profile.top(top_k)
        ],
        "day_kind_profiles": {
            kind.value: _profile_to_json(profile)
            for kind, profile in result.day_kind_profiles.items()
        },
    }


def save_summary_json(summary: Dict, output_path=None):
    """Save the summary bundle as JSON."""
    output_path = Path(output_path or SUMMARY_JSON)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    class NumpyEncoder(json.JSONEncoder):
        def default(self, obj):
            if isinstance(obj, (np.integer,)):
                return int(obj)
            if isinstance(obj, (np.floating,)):
                return float(obj)
            if isinstance(obj, np.ndarray):
                return obj.tolist()
            return super().default(obj)

    with open(output_path, "w") as f:
        json.dump(summary, f, indent=2, cls=NumpyEncoder)

    print(f"Saved activity summary to {output_path}")
    return output_path

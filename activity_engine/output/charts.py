"""
Activity charts.

Renders the pipeline's aggregate tables to PNG:
  - histogram of total steps per day, raw vs imputed
  - average daily activity pattern (interval profile over time of day)
  - weekday vs weekend activity pattern, one panel each

The x-axis of the pattern charts is minutes since midnight, ticked every
two hours, so the HHMM gaps (55 -> 100) never show up as jumps.
"""
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from activity_engine.config import CHART_DIR, CHART_DPI, HISTOGRAM_BINS
from activity_engine.data_prep.daily_totals import DailyTotal, present_totals
from activity_engine.data_prep.day_kind import DayKind
from activity_engine.data_prep.interval_profile import IntervalProfile

_HOUR_TICKS = list(range(0, 24 * 60 + 1, 120))
_HOUR_LABELS = [f"{m // 60:02d}:00" for m in _HOUR_TICKS]


def _chart_path(name: str, chart_dir: Optional[Path]) -> Path:
    chart_dir = Path(chart_dir or CHART_DIR)
    chart_dir.mkdir(parents=True, exist_ok=True)
    return chart_dir / name


def _time_axis(ax):
    ax.set_xlim(0, 24 * 60)
    ax.set_xticks(_HOUR_TICKS)
    ax.set_xticklabels(_HOUR_LABELS, rotation=45)
    ax.set_xlabel("Time of day")


def plot_daily_histogram(
    raw_totals: List[DailyTotal],
    imputed_totals: List[DailyTotal],
    chart_dir: Optional[Path] = None,
    bins: int = HISTOGRAM_BINS,
) -> Path:
    """Histogram of total steps per day before and after imputation."""
    raw = present_totals(raw_totals)
    imputed = present_totals(imputed_totals)

    fig, axes = plt.subplots(1, 2, figsize=(12, 4), sharey=True)
    for ax, values, title in ((axes[0], raw, "Raw (missing days dropped)"),
                              (axes[1], imputed, "Imputed")):
        ax.hist(values, bins=bins, color="steelblue", edgecolor="white")
        if len(values):
            ax.axvline(values.mean(), color="darkred", linestyle="--",
                       label=f"mean {values.mean():,.0f}")
            ax.axvline(np.median(values), color="orange", linestyle=":",
                       label=f"median {np.median(values):,.0f}")
            ax.legend(loc="upper right")
        ax.set_title(title)
        ax.set_xlabel("Total steps per day")
    axes[0].set_ylabel("Days")
    fig.tight_layout()

    path = _chart_path("daily_totals_histogram.png", chart_dir)
    fig.savefig(path, dpi=CHART_DPI)
    plt.close(fig)
    return path


def plot_interval_profile(
    profile: IntervalProfile,
    chart_dir: Optional[Path] = None,
) -> Path:
    """Line chart of mean steps per 5-minute interval, peak marked."""
    frame = profile.to_frame()

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(frame["minutes"], frame["mean_steps"], color="steelblue", linewidth=1)
    if profile.ranked():
        peak = profile.peak()
        ax.scatter([peak.time_of_day.minutes], [peak.mean_steps], color="darkred", zorder=3,
                   label=f"peak {peak.time_of_day.label()} ({peak.mean_steps:.1f})")
        ax.legend(loc="upper right")
    _time_axis(ax)
    ax.set_ylabel("Mean steps")
    ax.set_title("Average daily activity pattern")
    fig.tight_layout()

    path = _chart_path("interval_profile.png", chart_dir)
    fig.savefig(path, dpi=CHART_DPI)
    plt.close(fig)
    return path


def plot_day_kind_profiles(
    profiles: Dict[DayKind, IntervalProfile],
    chart_dir: Optional[Path] = None,
) -> Path:
    """Two stacked panels, weekend over weekday, sharing both axes."""
    fig, axes = plt.subplots(2, 1, figsize=(12, 7), sharex=True, sharey=True)
    for ax, kind in zip(axes, (DayKind.WEEKEND, DayKind.WEEKDAY)):
        frame = profiles[kind].to_frame()
        ax.plot(frame["minutes"], frame["mean_steps"], color="steelblue", linewidth=1)
        ax.set_title(kind.value)
        ax.set_ylabel("Mean steps")
    _time_axis(axes[-1])
    fig.tight_layout()

    path = _chart_path("day_kind_profiles.png", chart_dir)
    fig.savefig(path, dpi=CHART_DPI)
    plt.close(fig)
    return path

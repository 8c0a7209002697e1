"""
Weekday / weekend split.

Labels each calendar date by its day of week (Saturday and Sunday are
weekend) and rebuilds the interval profile separately for each label, so the
two daily activity patterns can be compared.
"""
from datetime import date
from enum import Enum
from typing import Dict

import pandas as pd

from activity_engine.config import WEEKEND_DAYS
from activity_engine.data_prep.interval_profile import IntervalProfile, build_profile


class DayKind(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"


def classify(day: date) -> DayKind:
    """Weekend for Saturday/Sunday on the proleptic Gregorian calendar, weekday otherwise."""
    return DayKind.WEEKEND if day.weekday() in WEEKEND_DAYS else DayKind.WEEKDAY


def label_day_kinds(records: pd.DataFrame) -> pd.DataFrame:
    """Copy of `records` with a `day_kind` column holding "weekday" / "weekend"."""
    labeled = records.copy()
    kinds = {day: classify(day).value for day in labeled["date"].unique()}
    labeled["day_kind"] = labeled["date"].map(lambda d: kinds[d])
    return labeled


def partition_by_day_kind(records: pd.DataFrame) -> Dict[DayKind, pd.DataFrame]:
    """Split records by day kind. Both kinds are always present, possibly empty."""
    labeled = label_day_kinds(records)
    return {
        kind: records[(labeled["day_kind"] == kind.value).to_numpy(dtype=bool)].reset_index(drop=True)
        for kind in DayKind
    }


def day_kind_profiles(
    imputed: pd.DataFrame,
    column: str = "imputed_steps",
) -> Dict[DayKind, IntervalProfile]:
    """Interval profile of `column` built independently for weekdays and weekends."""
    return {
        kind: build_profile(subset, column=column)
        for kind, subset in partition_by_day_kind(imputed).items()
    }

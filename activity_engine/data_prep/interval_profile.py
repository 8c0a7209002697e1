"""
Average daily activity pattern.

Groups records by interval id across all dates and averages the step count of
each 5-minute slot. Missing records are left out of both the sum and the
count. A slot where every record is missing has no mean; asking for it raises
InsufficientDataError instead of returning 0 or NaN.

Ranking orders slots by mean descending, breaking ties by ascending interval
id, so the peak-activity interval is always well defined.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd

from activity_engine.errors import InsufficientDataError
from activity_engine.etl.time_of_day import TimeOfDay


@dataclass(frozen=True)
class IntervalMean:
    """Mean step count of one interval id."""
    interval: int
    mean_steps: float

    @property
    def time_of_day(self) -> TimeOfDay:
        return TimeOfDay.from_interval(self.interval)


class IntervalProfile:
    """
    Read-only mapping of interval id -> mean steps.

    Intervals with zero observed values are kept as keys so callers can see
    them, but `mean_for` / `[]` raise InsufficientDataError for them.
    """

    def __init__(self, means: pd.Series):
        means = means.sort_index()
        self._means = pd.Series(
            means.to_numpy(dtype="float64", na_value=np.nan),
            index=means.index.astype("int64"),
            name="mean_steps",
        )
        self._means.index.name = "interval"

    def __len__(self) -> int:
        return len(self._means)

    def __iter__(self) -> Iterator[int]:
        return (int(i) for i in self._means.index)

    def __contains__(self, interval) -> bool:
        return interval in self._means.index

    def __getitem__(self, interval: int) -> float:
        return self.mean_for(interval)

    def __repr__(self) -> str:
        return f"IntervalProfile({len(self)} intervals, {len(self.missing_intervals())} without data)"

    def keys(self) -> List[int]:
        return list(self)

    def items(self) -> Iterator[Tuple[int, Optional[float]]]:
        """(interval, mean) pairs in interval order; mean is None where nothing was observed."""
        for interval, mean in self._means.items():
            yield int(interval), (None if np.isnan(mean) else float(mean))

    def mean_for(self, interval: int) -> float:
        """Mean steps for `interval`, or InsufficientDataError if there is nothing to average."""
        if interval not in self._means.index:
            raise InsufficientDataError(interval, f"Interval {interval} not present in profile")
        mean = self._means.loc[interval]
        if np.isnan(mean):
            raise InsufficientDataError(interval)
        return float(mean)

    def missing_intervals(self) -> List[int]:
        """Intervals with zero observed step counts."""
        return [int(i) for i in self._means.index[self._means.isna()]]

    def ranked(self) -> List[IntervalMean]:
        """Intervals by mean descending, ties broken by ascending interval id."""
        frame = self._means.dropna().reset_index()
        frame = frame.sort_values(
            ["mean_steps", "interval"], ascending=[False, True], kind="mergesort"
        )
        return [
            IntervalMean(interval=int(row.interval), mean_steps=float(row.mean_steps))
            for row in frame.itertuples(index=False)
        ]

    def top(self, k: int = 1) -> List[IntervalMean]:
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        return self.ranked()[:k]

    def peak(self) -> IntervalMean:
        """Interval with the highest mean."""
        ranked = self.ranked()
        if not ranked:
            raise InsufficientDataError(message="Profile has no interval with observed step counts")
        return ranked[0]

    def total_daily_steps(self) -> Optional[float]:
        """Sum of the interval means: the step count of an average day."""
        if self._means.isna().any() or self._means.empty:
            return None
        return float(self._means.sum())

    def to_frame(self) -> pd.DataFrame:
        """Profile as a chronological frame with interval, time_of_day, minutes and mean_steps."""
        frame = self._means.reset_index()
        times = [TimeOfDay.from_interval(int(i)) for i in frame["interval"]]
        frame.insert(1, "time_of_day", [t.label() for t in times])
        frame.insert(2, "minutes", [t.minutes for t in times])
        return frame.sort_values("minutes", kind="mergesort").reset_index(drop=True)


def build_profile(records: pd.DataFrame, column: str = "steps") -> IntervalProfile:
    """
    Mean of `column` per interval id over all dates, ignoring missing values.

    One entry per interval id present in `records`.
    """
    if column not in records.columns:
        raise KeyError(f"Column '{column}' not in record table")

    means = records.groupby("interval", sort=True)[column].mean()
    return IntervalProfile(means)

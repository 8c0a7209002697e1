"""
Daily step totals.

Groups the record table by calendar date and sums a step column. A day with
any missing slot totals to missing rather than to the sum of what is there,
so raw totals show exactly which days are incomplete. Run once on `steps`
and again on `imputed_steps` after imputation.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class DailyTotal:
    """Total steps for one calendar date; None when any slot was missing."""
    date: date
    total_steps: Optional[float] = None

    @property
    def is_missing(self) -> bool:
        return self.total_steps is None


def aggregate_daily(records: pd.DataFrame, column: str = "steps") -> List[DailyTotal]:
    """
    Sum `column` per date, ascending by date.

    Missingness propagates: if any record of a date is missing in `column`,
    that date's total is None. It is never coerced to zero.
    """
    if column not in records.columns:
        raise KeyError(f"Column '{column}' not in record table")

    grouped = records.groupby("date", sort=True)[column]
    sums = grouped.sum()
    complete = grouped.count() == grouped.size()

    totals = []
    for day, total in sums.items():
        totals.append(DailyTotal(
            date=day,
            total_steps=float(total) if complete[day] else None,
        ))
    return totals


def present_totals(totals: List[DailyTotal]) -> np.ndarray:
    """Totals of the days that are not missing, as a float array."""
    return np.array([t.total_steps for t in totals if not t.is_missing], dtype=float)


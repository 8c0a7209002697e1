"""
Missing-value imputation.

Every record whose step count is missing takes the mean of its interval id
from an IntervalProfile (the average for that 5-minute slot across the whole
dataset). Observed counts pass through unchanged. The result carries both
`steps` (as loaded) and `imputed_steps` (never missing) so raw and imputed
distributions can be compared side by side.

Assumes activity is periodic by time of day and stationary across the date
range; no per-weekday or model-based strategy is applied.
"""
from typing import List

import numpy as np
import pandas as pd

from activity_engine.data_prep.interval_profile import IntervalProfile


def impute(records: pd.DataFrame, profile: IntervalProfile) -> pd.DataFrame:
    """
    Return a copy of `records` with an `imputed_steps` float column.

    Raises InsufficientDataError if a missing record's interval has no mean in
    `profile`. No zero is ever substituted.
    """
    imputed = records.copy()
    missing = imputed["steps"].isna()

    # Resolve each needed interval once; mean_for raises on absent/degenerate slots
    needed = imputed.loc[missing, "interval"].unique()
    fill_values = {int(interval): profile.mean_for(int(interval)) for interval in needed}

    values = imputed["steps"].to_numpy(dtype="float64", na_value=np.nan, copy=True)
    if missing.any():
        fills = imputed.loc[missing, "interval"].map(lambda i: fill_values[int(i)])
        values[missing.to_numpy()] = fills.to_numpy(dtype="float64")

    imputed["imputed_steps"] = values
    return imputed


def imputed_count(imputed: pd.DataFrame) -> int:
    """Number of records whose value came from the profile."""
    return int(imputed["steps"].isna().sum())


def fully_imputed_dates(imputed: pd.DataFrame) -> List:
    """Dates on which every record was missing, so the whole day is profile means."""
    all_missing = imputed["steps"].isna().groupby(imputed["date"], sort=True).all()
    return list(all_missing[all_missing].index)

"""
Activity monitor loader.

Reads the tracker export (activity.csv, or the activity.zip archive it ships
in) and returns one row per 5-minute slot per day with typed columns:

  steps        nullable Int64, <NA> where the device recorded nothing
  date         datetime.date
  interval     int, HHMM-encoded slot id (835 = 08:35)
  time_of_day  TimeOfDay decoded from interval

Any malformed row aborts the load with FormatError. Every later stage assumes
a dense date x interval grid, so rows are never skipped.
"""
import fnmatch
import re
import zipfile
from pathlib import Path
from typing import Optional

import pandas as pd

from activity_engine.config import (
    ACTIVITY_CSV,
    ACTIVITY_ZIP,
    COLUMNS,
    DATE_FORMAT,
    INTERVALS_PER_DAY,
    MISSING_MARKERS,
)
from activity_engine.errors import FormatError
from activity_engine.etl.time_of_day import TimeOfDay

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_STEPS_PATTERN = r"\d+"

# Data starts on line 2 of the file, after the header
_FIRST_DATA_LINE = 2


def _line_of(mask: pd.Series) -> int:
    """1-based file line of the first True entry in a row mask."""
    return int(mask.idxmax()) + _FIRST_DATA_LINE


def _find_csv_member(names: list, archive: Path) -> str:
    """Pick the single CSV member of an archive."""
    members = [n for n in names if fnmatch.fnmatch(n.lower(), "*.csv") and not n.startswith("__MACOSX")]
    if len(members) != 1:
        raise FormatError(
            f"Expected exactly one CSV in {archive.name}, found {len(members)}: {members}"
        )
    return members[0]


def _read_raw(source: Path) -> pd.DataFrame:
    """Read the source as all-string columns so missingness stays under our control."""
    # Blank lines are kept as rows so reported line numbers match the file
    read_kwargs = {
        "dtype": str,
        "keep_default_na": False,
        "skipinitialspace": True,
        "skip_blank_lines": False,
    }
    try:
        if source.suffix.lower() == ".zip":
            with zipfile.ZipFile(source) as zf:
                member = _find_csv_member(zf.namelist(), source)
                with zf.open(member) as fh:
                    return pd.read_csv(fh, **read_kwargs)
        return pd.read_csv(source, **read_kwargs)
    except (pd.errors.ParserError, pd.errors.EmptyDataError,
            UnicodeDecodeError, zipfile.BadZipFile) as e:
        raise FormatError(f"Cannot read {source.name}: {e}") from e


def _parse_steps(raw: pd.Series) -> pd.Series:
    values = raw.str.strip()
    missing = values.isin(MISSING_MARKERS)
    bad = ~missing & ~values.str.fullmatch(_STEPS_PATTERN, na=False).astype(bool)
    if bad.any():
        line = _line_of(bad)
        raise FormatError(
            f"Step count {values[bad].iloc[0]!r} is not a non-negative integer", line=line
        )
    return pd.to_numeric(values.where(~missing), errors="coerce").astype("Int64")


def _parse_dates(raw: pd.Series) -> pd.Series:
    values = raw.str.strip()
    shaped = values.str.match(_DATE_PATTERN, na=False)
    parsed = pd.to_datetime(values.where(shaped), format=DATE_FORMAT, errors="coerce")

    bad = parsed.isna()
    if bad.any():
        line = _line_of(bad)
        raise FormatError(f"Unparseable date {values[bad].iloc[0]!r}", line=line)
    return parsed.dt.date


def _parse_intervals(raw: pd.Series) -> pd.DataFrame:
    values = raw.str.strip()
    numeric = pd.to_numeric(values, errors="coerce")

    bad = numeric.isna() | (numeric % 1 != 0)
    if bad.any():
        line = _line_of(bad)
        raise FormatError(f"Interval id {values[bad].iloc[0]!r} is not an integer", line=line)
    intervals = numeric.astype("int64")

    # Decode each distinct id once; a real export has 288 of them
    decoded = {}
    for interval_id in intervals.unique():
        try:
            decoded[int(interval_id)] = TimeOfDay.from_interval(int(interval_id))
        except FormatError as e:
            line = _line_of(intervals == interval_id)
            raise FormatError(str(e), line=line) from e

    return pd.DataFrame({
        "interval": intervals,
        "time_of_day": intervals.map(lambda i: decoded[int(i)]),
    })


def parse_activity(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Validate and type an all-string activity table.

    Raises FormatError on a wrong header, a blank row, unparseable values, or a
    duplicated (date, interval) slot.
    """
    raw = raw.rename(columns=lambda c: str(c).strip())
    if list(raw.columns) != COLUMNS:
        raise FormatError(
            f"Expected columns {COLUMNS}, got {list(raw.columns)}", line=1
        )
    if raw.empty:
        raise FormatError("Activity source has a header but no records")

    raw = raw.reset_index(drop=True)
    blank = raw.apply(lambda col: col.fillna("").astype(str).str.strip().eq("")).all(axis=1)
    if blank.any():
        raise FormatError("Blank row", line=_line_of(blank))

    intervals = _parse_intervals(raw["interval"])
    records = pd.DataFrame({
        "steps": _parse_steps(raw["steps"]),
        "date": _parse_dates(raw["date"]),
        "interval": intervals["interval"],
        "time_of_day": intervals["time_of_day"],
    })

    duplicated = records.duplicated(subset=["date", "interval"])
    if duplicated.any():
        row = records[duplicated].iloc[0]
        raise FormatError(
            f"Duplicate slot {row['date']} interval {row['interval']}",
            line=_line_of(duplicated),
        )

    return records


def check_grid(records: pd.DataFrame) -> list:
    """
    Report dates whose interval set differs from the rest of the dataset.

    The grid is expected to be dense (every date carries every interval id).
    Returns warning strings; an empty list means the grid is regular.
    """
    warnings = []
    all_intervals = set(records["interval"].unique())
    for day, group in records.groupby("date", sort=True):
        intervals = set(group["interval"])
        if intervals != all_intervals:
            missing = len(all_intervals - intervals)
            warnings.append(f"{day}: {missing} interval(s) absent from this date")

    if len(all_intervals) != INTERVALS_PER_DAY:
        warnings.append(
            f"{len(all_intervals)} distinct interval ids (expected {INTERVALS_PER_DAY})"
        )
    return warnings


def default_source() -> Path:
    """Prefer an unpacked activity.csv, fall back to the shipped archive."""
    if ACTIVITY_CSV.exists():
        return ACTIVITY_CSV
    return ACTIVITY_ZIP


def load_activity(source: Optional[Path] = None) -> pd.DataFrame:
    """
    Load the activity monitor export from a CSV file or a zip archive.

    Returns the typed record table in source order.
    """
    source = Path(source) if source is not None else default_source()
    if not source.exists():
        raise FileNotFoundError(f"Activity data not found: {source}")

    raw = _read_raw(source)
    return parse_activity(raw)


if __name__ == "__main__":
    import sys

    path = Path(sys.argv[1]) if len(sys.argv) > 1 else default_source()
    df = load_activity(path)
    print(f"Loaded {len(df)} records from {path}")
    print(f"Date range: {df['date'].min()} to {df['date'].max()} ({df['date'].nunique()} days)")
    print(f"Intervals per day: {df['interval'].nunique()}")
    print(f"Missing step counts: {df['steps'].isna().sum()}")
    for warning in check_grid(df):
        print(f"  Warning: {warning}")

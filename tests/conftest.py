import sys
from datetime import date, timedelta
from pathlib import Path

import pandas as pd
import pytest

# Ensure repository root is on sys.path so tests can import local modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from activity_engine.etl.activity_loader import parse_activity  # noqa: E402

# Monday 2012-10-01 through Sunday 2012-10-07
WEEK_START = date(2012, 10, 1)
ALL_INTERVALS = [h * 100 + m for h in range(24) for m in range(0, 60, 5)]


def rows_to_records(rows):
    """Typed record table from (steps, date, interval) tuples; steps None means missing."""
    raw = pd.DataFrame(
        [("" if s is None else str(s), str(d), str(i)) for s, d, i in rows],
        columns=["steps", "date", "interval"],
    )
    return parse_activity(raw)


def write_csv(path: Path, rows) -> Path:
    lines = ['"steps","date","interval"']
    for steps, day, interval in rows:
        value = "NA" if steps is None else str(steps)
        lines.append(f'{value},"{day}",{interval}')
    path.write_text("\n".join(lines) + "\n")
    return path


def week_rows():
    """
    Seven full days on the 288-slot grid.

    Monday is entirely missing, Tuesday misses 08:35 and 08:40, the rest are
    complete. Step values are deterministic.
    """
    rows = []
    for day_index in range(7):
        day = WEEK_START + timedelta(days=day_index)
        for slot, interval in enumerate(ALL_INTERVALS):
            if day_index == 0:
                steps = None
            elif day_index == 1 and interval in (835, 840):
                steps = None
            else:
                steps = (slot * 7 + day_index * 3) % 50
            rows.append((steps, day.isoformat(), interval))
    return rows


@pytest.fixture
def make_records():
    return rows_to_records


@pytest.fixture
def week_records():
    return rows_to_records(week_rows())


@pytest.fixture
def week_csv(tmp_path):
    return write_csv(tmp_path / "activity.csv", week_rows())


@pytest.fixture
def write_activity_csv():
    return write_csv

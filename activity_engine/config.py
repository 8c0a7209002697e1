"""
Activity Engine — Configuration
Paths, constants, and global settings.
"""
from pathlib import Path

# ── Base paths ──────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = BASE_DIR / "activity_engine" / "output_data"
CHART_DIR = OUTPUT_DIR / "charts"

# ── Data files ──────────────────────────────────────────────────
ACTIVITY_ZIP = DATA_DIR / "activity.zip"
ACTIVITY_CSV = DATA_DIR / "activity.csv"
SUMMARY_JSON = OUTPUT_DIR / "activity_summary.json"

# ── Input schema ────────────────────────────────────────────────
# Fixed column order of the tracker export: steps, date, interval
COLUMNS = ["steps", "date", "interval"]
MISSING_MARKERS = ["", "NA"]
DATE_FORMAT = "%Y-%m-%d"

# ── Interval grid ───────────────────────────────────────────────
SLOT_MINUTES = 5
INTERVALS_PER_DAY = 24 * 60 // SLOT_MINUTES   # 288
MAX_INTERVAL_ID = 2359

# Python weekday(): Monday=0 ... Sunday=6
WEEKEND_DAYS = (5, 6)

# ── Reporting ───────────────────────────────────────────────────
TOP_K = 5
HISTOGRAM_BINS = 20
CHART_DPI = 100

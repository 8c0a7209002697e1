import json
from datetime import date

from activity_engine.data_prep.daily_totals import DailyTotal
from activity_engine.output.report import (
    count_missing,
    print_daily_summary,
    print_peak_intervals,
    save_summary_json,
    summarize_daily_totals,
)
from activity_engine.data_prep.interval_profile import build_profile


def test_summary_ignores_missing_days():
    totals = [
        DailyTotal(date(2012, 10, 1), None),
        DailyTotal(date(2012, 10, 2), 100.0),
        DailyTotal(date(2012, 10, 3), 300.0),
        DailyTotal(date(2012, 10, 4), 200.0),
    ]
    summary = summarize_daily_totals(totals)
    assert summary.days == 4
    assert summary.missing_days == 1
    assert summary.mean_steps == 200.0
    assert summary.median_steps == 200.0


def test_summary_of_all_missing():
    summary = summarize_daily_totals([DailyTotal(date(2012, 10, 1), None)])
    assert summary.mean_steps is None
    assert summary.median_steps is None


def test_count_missing(week_records):
    assert count_missing(week_records) == 290


def test_print_daily_summary_shows_shift(capsys):
    raw = summarize_daily_totals([DailyTotal(date(2012, 10, 1), 10.0)])
    imputed = summarize_daily_totals([DailyTotal(date(2012, 10, 1), 10.0),
                                      DailyTotal(date(2012, 10, 2), 20.0)])
    print_daily_summary(raw, imputed)
    out = capsys.readouterr().out
    assert "TOTAL STEPS PER DAY" in out
    assert "shifted the mean by +5.00" in out


def test_print_peak_intervals(make_records, capsys):
    records = make_records([(200, "2012-10-01", 835), (200, "2012-10-01", 830)])
    print_peak_intervals(build_profile(records), top_k=2)
    lines = [l for l in capsys.readouterr().out.splitlines() if "interval " in l and ":" in l]
    assert "08:30" in lines[0]
    assert "08:35" in lines[1]


def test_save_summary_json_creates_parent(tmp_path):
    path = save_summary_json({"a": 1}, tmp_path / "nested" / "summary.json")
    with open(path) as f:
        assert json.load(f) == {"a": 1}

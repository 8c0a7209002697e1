import pytest

from activity_engine.data_prep.interval_profile import IntervalMean, build_profile
from activity_engine.errors import InsufficientDataError
from activity_engine.etl.time_of_day import TimeOfDay


def test_mean_over_dates(make_records):
    records = make_records([
        (150, "2012-10-01", 835),
        (200, "2012-10-02", 835),
        (250, "2012-10-03", 835),
    ])
    profile = build_profile(records)
    assert profile.mean_for(835) == 200.0
    assert profile[835] == 200.0


def test_missing_excluded_from_sum_and_count(make_records):
    records = make_records([
        (10, "2012-10-01", 0), (None, "2012-10-02", 0), (30, "2012-10-03", 0),
    ])
    assert build_profile(records).mean_for(0) == 20.0


def test_all_missing_interval_raises(make_records):
    records = make_records([
        (None, "2012-10-01", 835), (None, "2012-10-02", 835),
        (5, "2012-10-01", 840), (7, "2012-10-02", 840),
    ])
    profile = build_profile(records)

    assert 835 in profile
    assert profile.missing_intervals() == [835]
    with pytest.raises(InsufficientDataError) as exc:
        profile.mean_for(835)
    assert exc.value.interval == 835
    assert dict(profile.items()) == {835: None, 840: 6.0}


def test_unknown_interval_raises(make_records):
    profile = build_profile(make_records([(1, "2012-10-01", 0)]))
    assert 5 not in profile
    with pytest.raises(InsufficientDataError):
        profile.mean_for(5)


def test_keys_follow_observed_ids(make_records):
    records = make_records([(1, "2012-10-01", 2355), (2, "2012-10-01", 0), (3, "2012-10-01", 1203)])
    profile = build_profile(records)
    assert profile.keys() == [0, 1203, 2355]
    assert len(profile) == 3


def test_full_grid_has_288_groups(week_records):
    assert len(build_profile(week_records)) == 288


def test_ranking_ties_break_by_ascending_interval(make_records):
    records = make_records([
        (200, "2012-10-01", 835), (200, "2012-10-01", 830),
        (50, "2012-10-01", 0), (300, "2012-10-01", 1800),
    ])
    ranked = build_profile(records).ranked()
    assert [e.interval for e in ranked] == [1800, 830, 835, 0]
    assert ranked[1] == IntervalMean(830, 200.0)


def test_top_k_and_peak(make_records):
    records = make_records([
        (200, "2012-10-01", 835), (200, "2012-10-01", 830), (300, "2012-10-01", 1800),
    ])
    profile = build_profile(records)
    assert [e.interval for e in profile.top(2)] == [1800, 830]
    assert profile.top(0) == []
    assert profile.peak().time_of_day == TimeOfDay(18, 0)
    with pytest.raises(ValueError):
        profile.top(-1)


def test_ranking_skips_intervals_without_data(make_records):
    records = make_records([(None, "2012-10-01", 0), (4, "2012-10-01", 5)])
    assert [e.interval for e in build_profile(records).ranked()] == [5]


def test_peak_of_empty_profile(make_records):
    profile = build_profile(make_records([(None, "2012-10-01", 0)]))
    with pytest.raises(InsufficientDataError):
        profile.peak()


def test_to_frame_is_chronological(make_records):
    records = make_records([(1, "2012-10-01", 100), (2, "2012-10-01", 55), (3, "2012-10-01", 0)])
    frame = build_profile(records).to_frame()
    assert list(frame.columns) == ["interval", "time_of_day", "minutes", "mean_steps"]
    assert list(frame["time_of_day"]) == ["00:00", "00:55", "01:00"]
    assert list(frame["minutes"]) == [0, 55, 60]


def test_total_daily_steps(make_records):
    records = make_records([(4, "2012-10-01", 0), (6, "2012-10-01", 5)])
    assert build_profile(records).total_daily_steps() == 10.0

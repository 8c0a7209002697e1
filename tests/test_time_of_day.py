import numpy as np
import pytest

from activity_engine.errors import FormatError
from activity_engine.etl.time_of_day import TimeOfDay


def test_decodes_hhmm_not_flat_index():
    t = TimeOfDay.from_interval(835)
    assert (t.hour, t.minute) == (8, 35)
    assert t.minutes == 515
    assert t.slot == 103
    assert t.label() == "08:35"
    assert t.interval_id == 835


def test_midnight_and_last_slot():
    assert TimeOfDay.from_interval(0) == TimeOfDay(0, 0)
    assert TimeOfDay.from_interval(2355).slot == 287


def test_accepts_numpy_integers():
    assert TimeOfDay.from_interval(np.int64(1205)) == TimeOfDay(12, 5)


def test_chronological_ordering_across_hour_gap():
    times = [TimeOfDay.from_interval(i) for i in (100, 55, 2355, 0)]
    assert [t.interval_id for t in sorted(times)] == [0, 55, 100, 2355]


@pytest.mark.parametrize("bad", [-5, 2360, 2400, 160, 975])
def test_rejects_ids_outside_hhmm(bad):
    with pytest.raises(FormatError):
        TimeOfDay.from_interval(bad)


@pytest.mark.parametrize("bad", ["835", 8.35, True, None])
def test_rejects_non_integers(bad):
    with pytest.raises(FormatError):
        TimeOfDay.from_interval(bad)

"""
Time-of-day value for 5-minute interval ids.

The tracker encodes each slot as hour*100 + minute, so 08:35 is 835 and the
id sequence jumps from 55 to 100 at every hour. TimeOfDay decodes that into an
(hour, minute) pair with no calendar date attached.
"""
import numbers
from typing import NamedTuple

from activity_engine.config import MAX_INTERVAL_ID, SLOT_MINUTES
from activity_engine.errors import FormatError


class TimeOfDay(NamedTuple):
    """Clock time of an interval's start."""
    hour: int
    minute: int

    @classmethod
    def from_interval(cls, interval_id) -> "TimeOfDay":
        """Decode an HHMM interval id."""
        if isinstance(interval_id, bool) or not isinstance(interval_id, numbers.Integral):
            raise FormatError(f"Interval id must be an integer, got {interval_id!r}")
        interval_id = int(interval_id)
        if interval_id < 0 or interval_id > MAX_INTERVAL_ID:
            raise FormatError(f"Interval id {interval_id} outside [0, {MAX_INTERVAL_ID}]")
        hour, minute = divmod(interval_id, 100)
        if minute > 59:
            raise FormatError(f"Interval id {interval_id} is not an HHMM time (minute {minute})")
        return cls(hour, minute)

    @property
    def interval_id(self) -> int:
        return self.hour * 100 + self.minute

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    @property
    def slot(self) -> int:
        """0-based position on the daily 5-minute grid."""
        return self.minutes // SLOT_MINUTES

    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.label()

"""Time of day with millisecond precision, and spans of time."""

from __future__ import annotations

import re
import time as _time
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone

from mdbplus.exceptions import InvalidTimeError

MS_PER_SECOND = 1000
MS_PER_MINUTE = MS_PER_SECOND * 60
MS_PER_HOUR = MS_PER_MINUTE * 60
MS_PER_DAY = MS_PER_HOUR * 24

_TIME_PATTERN = re.compile(r"\s*(\d+)(?:\D(\d+)(?:\D(\d+)(?:\D(\d+))?)?)?\s*")


@dataclass
class TimeSpan:
    """A duration split into days, hours, minutes, seconds and milliseconds."""

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    negative: bool = False

    @property
    def total_milliseconds(self) -> int:
        """The signed length of the span in milliseconds."""
        magnitude = (
            self.days * MS_PER_DAY
            + self.hours * MS_PER_HOUR
            + self.minutes * MS_PER_MINUTE
            + self.seconds * MS_PER_SECOND
            + self.milliseconds
        )
        return -magnitude if self.negative else magnitude

    @classmethod
    def from_milliseconds(cls, total: int) -> TimeSpan:
        """Split a signed number of milliseconds into a span."""
        negative = total < 0
        rest = abs(total)
        days, rest = divmod(rest, MS_PER_DAY)
        hours, rest = divmod(rest, MS_PER_HOUR)
        minutes, rest = divmod(rest, MS_PER_MINUTE)
        seconds, milliseconds = divmod(rest, MS_PER_SECOND)
        return cls(days, hours, minutes, seconds, milliseconds, negative)

    def __neg__(self) -> TimeSpan:
        return replace(self, negative=not self.negative)


def _valid(hour: int, minute: int, second: int, millisecond: int) -> bool:
    return 0 <= hour < 24 and 0 <= minute < 60 and 0 <= second <= 61 and 0 <= millisecond < 1000


class Time:
    """A time of day: hour 0-23, minute 0-59, second 0-61, millisecond 0-999."""

    __hash__ = None  # mutable

    def __init__(self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> None:
        self._hour = 0
        self._minute = 0
        self._second = 0
        self._millisecond = 0
        Time.set(self, hour, minute, second, millisecond)

    # construction -------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> Time:
        """Build a time from ``hh[:mm][:ss][.nnn]``; any non-digit may delimit."""
        result = cls()
        result.set_from_string(text)
        return result

    @classmethod
    def from_struct_time(cls, t: _time.struct_time) -> Time:
        """Build a time from a ``time.struct_time``; no milliseconds are set."""
        return cls(t.tm_hour, t.tm_min, t.tm_sec, 0)

    @classmethod
    def from_timestamp(cls, timestamp: float) -> Time:
        """Build a time from a POSIX timestamp in the local time zone."""
        return cls.from_struct_time(_time.localtime(timestamp))

    @classmethod
    def now(cls) -> Time:
        """The current local time."""
        current = datetime.now()
        return cls(current.hour, current.minute, current.second, current.microsecond // 1000)

    @classmethod
    def now_utc(cls) -> Time:
        """The current time in UTC."""
        current = datetime.now(timezone.utc)
        return cls(current.hour, current.minute, current.second, current.microsecond // 1000)

    # fields -------------------------------------------------------------

    @property
    def hour(self) -> int:
        return self._hour

    @hour.setter
    def hour(self, value: int) -> None:
        if not 0 <= value < 24:
            raise InvalidTimeError(value, self._minute, self._second, self._millisecond)
        self._hour = value

    @property
    def minute(self) -> int:
        return self._minute

    @minute.setter
    def minute(self, value: int) -> None:
        if not 0 <= value < 60:
            raise InvalidTimeError(self._hour, value, self._second, self._millisecond)
        self._minute = value

    @property
    def second(self) -> int:
        return self._second

    @second.setter
    def second(self, value: int) -> None:
        if not 0 <= value <= 61:
            raise InvalidTimeError(self._hour, self._minute, value, self._millisecond)
        self._second = value

    @property
    def millisecond(self) -> int:
        return self._millisecond

    @millisecond.setter
    def millisecond(self, value: int) -> None:
        if not 0 <= value < 1000:
            raise InvalidTimeError(self._hour, self._minute, self._second, value)
        self._millisecond = value

    def set(self, hour: int, minute: int, second: int, millisecond: int) -> bool:
        """Set every field at once; raise InvalidTimeError on invalid values."""
        if not _valid(hour, minute, second, millisecond):
            raise InvalidTimeError(hour, minute, second, millisecond)
        self._hour = hour
        self._minute = minute
        self._second = second
        self._millisecond = millisecond
        return True

    def set_from_string(self, text: str) -> bool:
        """Set the time from ``hh[:mm][:ss][.nnn]``; raise ValueError if malformed."""
        match = _TIME_PATTERN.fullmatch(text)
        if match is None:
            raise ValueError("invalid time format")
        hour, minute, second, millisecond = (int(part) if part else 0 for part in match.groups())
        return Time.set(self, hour, minute, second, millisecond)

    # comparison ---------------------------------------------------------

    def _fields(self) -> tuple[int, int, int, int]:
        return (self._hour, self._minute, self._second, self._millisecond)

    def _milliseconds_of_day(self) -> int:
        return (
            self._hour * MS_PER_HOUR
            + self._minute * MS_PER_MINUTE
            + self._second * MS_PER_SECOND
            + self._millisecond
        )

    def compare(self, other: Time) -> int:
        """Return 1 if this time is later, -1 if earlier, 0 if equal."""
        mine, theirs = Time._fields(self), Time._fields(other)
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) >= 0

    # arithmetic ---------------------------------------------------------

    @staticmethod
    def _from_milliseconds_of_day(total: int) -> Time:
        total %= MS_PER_DAY
        hour, rest = divmod(total, MS_PER_HOUR)
        minute, rest = divmod(rest, MS_PER_MINUTE)
        second, millisecond = divmod(rest, MS_PER_SECOND)
        return Time(hour, minute, second, millisecond)

    def add_hours(self, hours: int) -> Time:
        """Add hours, wrapping around midnight; negative values subtract."""
        return Time((self._hour + hours) % 24, self._minute, self._second, self._millisecond)

    def add_minutes(self, minutes: int) -> Time:
        """Add minutes, wrapping around midnight; negative values subtract."""
        total = (self._hour * 60 + self._minute + minutes) % (24 * 60)
        hour, minute = divmod(total, 60)
        return Time(hour, minute, self._second, self._millisecond)

    def add_seconds(self, seconds: int) -> Time:
        """Add seconds, wrapping around midnight; negative values subtract."""
        total = (self._hour * 3600 + self._minute * 60 + self._second + seconds) % (24 * 3600)
        hour, rest = divmod(total, 3600)
        minute, second = divmod(rest, 60)
        return Time(hour, minute, second, self._millisecond)

    def add_milliseconds(self, milliseconds: int) -> Time:
        """Add milliseconds, wrapping around midnight; negative values subtract."""
        return Time._from_milliseconds_of_day(Time._milliseconds_of_day(self) + milliseconds)

    def add(self, span: TimeSpan) -> Time:
        """Add a span of time, wrapping around midnight."""
        return Time.add_milliseconds(self, span.total_milliseconds)

    def subtract(self, span: TimeSpan) -> Time:
        """Subtract a span of time, wrapping around midnight."""
        return Time.add(self, -span)

    def time_between(self, other: Time) -> TimeSpan:
        """The span from ``other`` to this time; negative if ``other`` is later."""
        return TimeSpan.from_milliseconds(
            Time._milliseconds_of_day(self) - Time._milliseconds_of_day(other)
        )

    # conversion ---------------------------------------------------------

    def mktime(self) -> int:
        """The POSIX timestamp of this time on the current local date."""
        today = date.today()
        return int(
            _time.mktime(
                (today.year, today.month, today.day, self._hour, self._minute, self._second, 0, 0, -1)
            )
        )

    def diff_time(self, other: Time) -> float:
        """Seconds from ``other`` to this time, at second precision."""
        return float(Time.mktime(self) - Time.mktime(other))

    def str_time(self, with_millisecond: bool = False) -> str:
        """Format as ``hh:mm:ss`` or ``hh:mm:ss.nnn``."""
        text = f"{self._hour:02d}:{self._minute:02d}:{self._second:02d}"
        if with_millisecond:
            text += f".{self._millisecond:03d}"
        return text

    def __str__(self) -> str:
        return self.str_time(True)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._hour}, {self._minute}, "
            f"{self._second}, {self._millisecond})"
        )
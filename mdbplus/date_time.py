"""Calendar date combined with a time of day, with millisecond precision."""

from __future__ import annotations

import copy
import re
import time as _time
from datetime import datetime, timezone

from mdbplus import calendar_math as cal
from mdbplus.exceptions import InvalidDateTimeError
from mdbplus.timeofday import MS_PER_DAY, Time, TimeSpan

_MAX_YEAR = 65535

_DATE_PATTERN = re.compile(
    r"\s*(\d+)(?:\s*[^\d\s]\s*(\d+)(?:\s*[^\d\s]\s*(\d+)(.*))?)?",
    re.DOTALL,
)


class DateTime(Time):
    """A date and time of day; invalid values raise InvalidDateTimeError."""

    __hash__ = None  # mutable

    def __init__(
        self,
        year: int = 1970,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> None:
        super().__init__()
        self._year = 1970
        self._month = 1
        self._day = 1
        self.set(year, month, day, hour, minute, second, millisecond)

    # construction -------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> DateTime:
        """Build a date and time from ``yyyy-mm-dd[ hh:mm:ss[.nnn]]``."""
        result = cls()
        result.set_from_string(text)
        return result

    @classmethod
    def from_time(cls, t: Time) -> DateTime:
        """Build a date and time from a time of day, dated 1 January 1900."""
        return cls(1900, 1, 1, t.hour, t.minute, t.second, t.millisecond)

    @classmethod
    def from_struct_time(cls, t: _time.struct_time) -> DateTime:
        """Build a date and time from a ``time.struct_time``; no milliseconds are set."""
        return cls(t.tm_year, t.tm_mon, t.tm_mday, t.tm_hour, t.tm_min, t.tm_sec, 0)

    @classmethod
    def from_timestamp(cls, timestamp: float) -> DateTime:
        """Build a date and time from a POSIX timestamp in the local time zone."""
        return cls.from_struct_time(_time.localtime(timestamp))

    @classmethod
    def reverse_day_of_year(cls, year: int, day_of_year: int) -> DateTime:
        """The date on which position ``day_of_year`` of ``year`` falls."""
        month, day = cal.reverse_day_of_year(year, day_of_year)
        return cls(year, month, day)

    @classmethod
    def now(cls) -> DateTime:
        """The current local date and time."""
        return cls._from_datetime(datetime.now())

    @classmethod
    def now_utc(cls) -> DateTime:
        """The current date and time in UTC."""
        return cls._from_datetime(datetime.now(timezone.utc))

    @classmethod
    def _from_datetime(cls, value: datetime) -> DateTime:
        return cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond // 1000,
        )

    # fields -------------------------------------------------------------

    @property
    def year(self) -> int:
        return self._year

    @year.setter
    def year(self, value: int) -> None:
        """Set the year; an impossible date is reset to 1 January."""
        if value < 1:
            raise InvalidDateTimeError(
                value, self._month, self._day, self.hour, self.minute, self.second, self.millisecond
            )
        self._year = value
        if not cal.valid_date(value, self._month, self._day):
            self._month = 1
            self._day = 1

    @property
    def month(self) -> int:
        return self._month

    @month.setter
    def month(self, value: int) -> None:
        """Set the month; a day past its end is reset to 1."""
        if not 1 <= value <= 12:
            raise InvalidDateTimeError(
                self._year, value, self._day, self.hour, self.minute, self.second, self.millisecond
            )
        self._month = value
        if self._day > cal.days_in_month(self._year, value):
            self._day = 1

    @property
    def day(self) -> int:
        return self._day

    @day.setter
    def day(self, value: int) -> None:
        if not 1 <= value <= cal.days_in_month(self._year, self._month):
            raise InvalidDateTimeError(
                self._year, self._month, value, self.hour, self.minute, self.second, self.millisecond
            )
        self._day = value

    @property
    def day_of_year(self) -> int:
        """Position of the date within its year, starting at 1."""
        return cal.day_of_year(self._year, self._month, self._day)

    @day_of_year.setter
    def day_of_year(self, value: int) -> None:
        month, day = cal.reverse_day_of_year(self._year, value)
        self.month = month
        self.day = day

    def set_date(self, year: int, month: int, day: int) -> bool:
        """Set only the date part; raise InvalidDateTimeError if it does not exist."""
        if not cal.valid_date(year, month, day):
            raise InvalidDateTimeError(year, month, day, 0, 0, 0, 0)
        self._year = year
        self._month = month
        self._day = day
        return True

    def set(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        millisecond: int,
    ) -> bool:
        """Set every field; raise InvalidDateTimeError on invalid values."""
        if (
            not cal.valid_date(year, month, day)
            or not 0 <= hour < 24
            or not 0 <= minute < 60
            or not 0 <= second < 60
            or not 0 <= millisecond < 1000
        ):
            raise InvalidDateTimeError(year, month, day, hour, minute, second, millisecond)
        self._year = year
        self._month = month
        self._day = day
        return Time.set(self, hour, minute, second, millisecond)

    def set_from_string(self, text: str) -> bool:
        """Set from ``yyyy-mm-dd[ hh:mm:ss[.nnn]]``; a date alone keeps the time.

        Raises ValueError when the text is malformed and InvalidDateTimeError
        when it names a date that does not exist.
        """
        match = _DATE_PATTERN.fullmatch(text)
        if match is None:
            raise ValueError("invalid date format")
        year_text, month_text, day_text, rest = match.groups()
        year = int(year_text)
        if year > _MAX_YEAR:
            raise ValueError("invalid date format")
        if month_text is None:
            return self.set_date(year, 0, 0)
        month = int(month_text)
        if month >= 13:
            raise ValueError("invalid date format")
        if day_text is None:
            return self.set_date(year, month, 0)
        day = int(day_text)
        if day >= 32:
            raise ValueError("invalid date format")
        self.set_date(year, month, day)
        if not rest:
            return True
        return Time.set_from_string(self, rest)

    # comparison ---------------------------------------------------------

    def compare(self, other: DateTime) -> int:
        """Return 1 if this moment is later, -1 if earlier, 0 if equal."""
        mine = (self._year, self._month, self._day)
        theirs = (other.year, other.month, other.day)
        if mine != theirs:
            return 1 if mine > theirs else -1
        return Time.compare(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) >= 0

    # arithmetic ---------------------------------------------------------

    def _copy(self) -> DateTime:
        return copy.copy(self)

    def add_years(self, years: int) -> DateTime:
        """A copy moved by ``years``; an impossible date becomes 1 January."""
        result = self._copy()
        if years:
            result.year = self._year + years
        return result

    def add_months(self, months: int) -> DateTime:
        """A copy moved by ``months``; a day past the month's end becomes 1."""
        if not months:
            return self._copy()
        years, month_index = divmod(self._month - 1 + months, 12)
        result = self.add_years(years) if years else self._copy()
        result.month = month_index + 1
        return result

    def add_days(self, days: int) -> DateTime:
        """A copy moved by ``days``, wrapping across months and years."""
        if not days:
            return self._copy()
        year = self._year
        position = self.day_of_year + days
        while position > cal.days_in_year(year):
            position -= cal.days_in_year(year)
            year += 1
        while position < 1:
            year -= 1
            if year < 1:
                raise InvalidDateTimeError(
                    year, self._month, self._day, self.hour, self.minute, self.second, self.millisecond
                )
            position += cal.days_in_year(year)
        result = self._copy()
        result.year = year
        result.day_of_year = position
        return result

    def add_hours(self, hours: int) -> DateTime:
        """A copy moved by ``hours``, wrapping into days."""
        if not hours:
            return self._copy()
        days, hour = divmod(self.hour + hours, 24)
        result = self.add_days(days) if days else self._copy()
        result.hour = hour
        return result

    def add_minutes(self, minutes: int) -> DateTime:
        """A copy moved by ``minutes``, wrapping into hours."""
        if not minutes:
            return self._copy()
        hours, minute = divmod(self.minute + minutes, 60)
        result = self.add_hours(hours) if hours else self._copy()
        result.minute = minute
        return result

    def add_seconds(self, seconds: int) -> DateTime:
        """A copy moved by ``seconds``, wrapping into minutes."""
        if not seconds:
            return self._copy()
        minutes, second = divmod(self.second + seconds, 60)
        result = self.add_minutes(minutes) if minutes else self._copy()
        result.second = second
        return result

    def add_milliseconds(self, milliseconds: int) -> DateTime:
        """A copy moved by ``milliseconds``, wrapping into seconds."""
        if not milliseconds:
            return self._copy()
        seconds, millisecond = divmod(self.millisecond + milliseconds, 1000)
        result = self.add_seconds(seconds) if seconds else self._copy()
        result.millisecond = millisecond
        return result

    def add(self, span: TimeSpan) -> DateTime:
        """A copy moved forward by ``span`` (backward if it is negative)."""
        return self.add_milliseconds(span.total_milliseconds)

    def subtract(self, span: TimeSpan) -> DateTime:
        """A copy moved backward by ``span``."""
        return self.add(-span)

    def add_time(self, t: Time) -> DateTime:
        """A copy moved forward by the hours, minutes, seconds and milliseconds of ``t``."""
        return (
            self.add_hours(t.hour)
            .add_minutes(t.minute)
            .add_seconds(t.second)
            .add_milliseconds(t.millisecond)
        )

    def subtract_time(self, t: Time) -> DateTime:
        """A copy moved backward by the hours, minutes, seconds and milliseconds of ``t``."""
        return (
            self.add_hours(-t.hour)
            .add_minutes(-t.minute)
            .add_seconds(-t.second)
            .add_milliseconds(-t.millisecond)
        )

    def _ordinal_milliseconds(self) -> int:
        previous = self._year - 1
        ordinal = (
            previous * 365
            + previous // 4
            - previous // 100
            + previous // 400
            + self.day_of_year
        )
        return ordinal * MS_PER_DAY + self._milliseconds_of_day()

    def time_between(self, other: DateTime) -> TimeSpan:
        """The span from ``other`` to this moment; negative if ``other`` is later."""
        return TimeSpan.from_milliseconds(
            self._ordinal_milliseconds() - other._ordinal_milliseconds()
        )

    # conversion ---------------------------------------------------------

    def mktime(self) -> int:
        """The POSIX timestamp of this local date and time, at second precision."""
        return int(
            _time.mktime(
                (self._year, self._month, self._day, self.hour, self.minute, self.second, 0, 0, -1)
            )
        )

    def diff_time(self, other: DateTime) -> float:
        """Seconds from ``other`` to this moment, at second precision."""
        return float(self.mktime() - other.mktime())

    def date(self) -> DateTime:
        """Only the date part, at midnight."""
        return DateTime(self._year, self._month, self._day)

    def str_date(self) -> str:
        """Format the date as ``yyyy-mm-dd``."""
        return f"{self._year:04d}-{self._month:02d}-{self._day:02d}"

    def format(self, with_millisecond: bool = False) -> str:
        """Format as ``yyyy-mm-dd hh:mm:ss`` with optional ``.nnn``."""
        return f"{self.str_date()} {self.str_time(with_millisecond)}"

    def __str__(self) -> str:
        return self.format(True)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._year}, {self._month}, {self._day}, "
            f"{self.hour}, {self.minute}, {self.second}, {self.millisecond})"
        )
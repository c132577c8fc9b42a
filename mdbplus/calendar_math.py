"""Gregorian calendar arithmetic used by the date and time types."""

from __future__ import annotations

from mdbplus.exceptions import InvalidDateTimeError

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Whether ``year`` is a leap year in the Gregorian calendar."""
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_year(year: int) -> int:
    """Number of days in ``year``: 366 in leap years, otherwise 365."""
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``, accounting for leap years."""
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    length = _MONTH_LENGTHS[month - 1]
    if month == 2 and is_leap_year(year):
        length += 1
    return length


def valid_date(year: int, month: int, day: int) -> bool:
    """Whether year, month and day name a date that exists."""
    if year <= 0 or month <= 0 or day <= 0:
        return False
    if month > 12:
        return False
    return day <= days_in_month(year, month)


def day_of_year(year: int, month: int, day: int) -> int:
    """Position of the given date within its year, starting at 1."""
    return sum(days_in_month(year, m) for m in range(1, month)) + day


def reverse_day_of_year(year: int, day_of_year: int) -> tuple[int, int]:
    """The ``(month, day)`` that ``day_of_year`` falls on in ``year``.

    Raises InvalidDateTimeError when the position does not lie within the year.
    """
    remaining = day_of_year
    month = 1
    while month < 12:
        length = days_in_month(year, month)
        if length >= remaining:
            break
        remaining -= length
        month += 1
    if not valid_date(year, month, remaining):
        raise InvalidDateTimeError(year, month, remaining, 0, 0, 0, 0)
    return month, remaining
"""Exception types raised by the package."""

from __future__ import annotations


class MariaDBError(Exception):
    """Base class of every error raised by the package."""


class DatabaseConnectionError(MariaDBError):
    """An error reported by the database server or client library."""

    def __init__(self, error_id: int, error: str) -> None:
        self.error_id = error_id
        self.error = error
        super().__init__(f"MariaDB Error({error_id}): {error}")


class InvalidDateTimeError(MariaDBError, ValueError):
    """A date and time whose fields do not form a valid value."""

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        millisecond: int,
    ) -> None:
        self.year = year
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute
        self.second = second
        self.millisecond = millisecond
        super().__init__(
            f"Invalid date time: year - {year}, month - {month}, day - {day}, "
            f"hour - {hour}, minute - {minute}, second - {second}, "
            f"millisecond - {millisecond}"
        )


class InvalidTimeError(MariaDBError, ValueError):
    """A time of day whose fields do not form a valid value."""

    def __init__(self, hour: int, minute: int, second: int, millisecond: int) -> None:
        self.hour = hour
        self.minute = minute
        self.second = second
        self.millisecond = millisecond
        super().__init__(
            f"Invalid time: hour - {hour}, minute - {minute}, second - {second}, "
            f"millisecond - {millisecond}"
        )
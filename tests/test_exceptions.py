import pytest

from mdbplus.exceptions import (
    DatabaseConnectionError,
    InvalidDateTimeError,
    InvalidTimeError,
    MariaDBError,
)


def test_connection_error_keeps_id_and_text():
    err = DatabaseConnectionError(1045, "Access denied")
    assert err.error_id == 1045
    assert err.error == "Access denied"
    assert str(err) == "MariaDB Error(1045): Access denied"


def test_connection_error_is_package_error():
    err = DatabaseConnectionError(0, "Cannot create MYSQL object.")
    assert isinstance(err, MariaDBError)
    assert err.error_id == 0
    assert err.error == "Cannot create MYSQL object."
    assert str(err) == "MariaDB Error(0): Cannot create MYSQL object."


def test_time_error_message():
    err = InvalidTimeError(25, 0, 0, 0)
    assert str(err) == "Invalid time: hour - 25, minute - 0, second - 0, millisecond - 0"
    assert (err.hour, err.minute, err.second, err.millisecond) == (25, 0, 0, 0)


def test_date_time_error_message():
    err = InvalidDateTimeError(2020, 13, 1, 2, 3, 4, 5)
    assert str(err) == (
        "Invalid date time: year - 2020, month - 13, day - 1, hour - 2, "
        "minute - 3, second - 4, millisecond - 5"
    )
    assert (err.year, err.month, err.day) == (2020, 13, 1)


@pytest.mark.parametrize(
    ("error", "prefix"),
    [
        (InvalidTimeError(24, 0, 0, 0), "Invalid time: hour - 24"),
        (InvalidDateTimeError(0, 1, 1, 0, 0, 0, 0), "Invalid date time: year - 0"),
    ],
)
def test_invalid_values_are_value_errors(error, prefix):
    assert isinstance(error, ValueError)
    assert isinstance(error, MariaDBError)
    assert str(error).startswith(prefix)
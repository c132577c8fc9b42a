# mdbplus

A small client layer for MariaDB and MySQL servers. It bundles connection
settings into an `Account`, opens and manages a `Connection` to the server
(through PyMySQL), and provides SQL-style `Time`, `DateTime` and `TimeSpan`
values with calendar arithmetic.

## Installation

```
pip install mdbplus
```

For running the test suite:

```
pip install "mdbplus[test]"
pytest
```

## Accounts

`mdbplus.account.Account` is a dataclass holding everything needed to reach
a server: host, user, password, default schema, port (3306 unless given),
an optional unix socket and the auto-commit setting (on by default). It can
also carry SSL file paths, named session options and connect options.

```python
from mdbplus.account import Account

password = "password"
account = Account(host_name="localhost", user_name="user", password=password, schema="shop")

account.set_ssl("client-key.pem", "client-cert.pem", "ca.pem", "", "")
account.set_option("sql_mode", "'STRICT_ALL_TABLES'")
print(account.option("sql_mode"))   # 'STRICT_ALL_TABLES'
print(account.option("missing"))    # "" for options that were never set
```

- `set_option` / `clear_options`: named options, applied after connecting
  as `SET OPTION name=value`.
- `set_connect_option` / `clear_connect_options`: values (`bool`, `int` or
  `str`, anything else raises `TypeError`) passed as keyword arguments to
  `pymysql.connect`; option names must be strings when connecting.

Changing an account after a connection has been made has no effect on that
connection.

## Connections

`mdbplus.connection.Connection` connects lazily: `set_schema`,
`set_charset`, `set_auto_commit`, `execute` and `insert` connect first when
needed. It can also be used as a context manager, which connects on entry
and disconnects on leaving the block.

```python
from mdbplus.connection import Connection

with Connection(account) as conn:
    conn.set_charset("utf8mb4")
    affected = conn.execute("UPDATE stock SET amount = amount - 1 WHERE id = 7")
    new_id = conn.insert("INSERT INTO orders (item) VALUES (7)")
```

`execute` runs one or more statements (multi-statements are enabled),
discards any result sets, and returns the number of affected rows summed
over all statements. `insert` returns the id of the last inserted row.
`connected` pings the server to tell whether the connection is still alive.

Server failures raise `DatabaseConnectionError`, which carries `error_id`
and `error`; the connection also remembers them in its `error_no` and
`error` attributes (from `mdbplus.last_error.LastError`).

## Dates and times

```python
from mdbplus.date_time import DateTime
from mdbplus.timeofday import Time, TimeSpan

moment = DateTime.parse("2024-02-28 23:30:00")
later = moment.add_days(1)
print(later.format(False))            # 2024-02-29 23:30:00
print(later.str_date())               # 2024-02-29

span = later.time_between(moment)     # TimeSpan(days=1, ...)
back = later.subtract(span)           # equal to moment

t = Time.parse("12:05:30.250")
print(t.str_time(True))               # 12:05:30.250
```

`Time` and `DateTime` are mutable and compare with the usual operators.
Their `add_*` methods return new values: `Time` wraps around midnight,
`DateTime` carries over into days, months and years. `TimeSpan` is a
dataclass of days, hours, minutes, seconds and milliseconds with a
`negative` flag; `total_milliseconds` and `from_milliseconds` convert it.

Invalid values are refused at once: a date that does not exist raises
`InvalidDateTimeError`, an out-of-range time of day raises
`InvalidTimeError`, and malformed text given to `parse` raises
`ValueError`. Both error types derive from `ValueError` and, like
`DatabaseConnectionError`, from `MariaDBError` (all in
`mdbplus.exceptions`).

The calendar helpers used by `DateTime` are available on their own in
`mdbplus.calendar_math`: `is_leap_year`, `valid_date`, `days_in_year`,
`days_in_month`, `day_of_year` and `reverse_day_of_year`.

## What it does not do

`Connection` does not return rows: there is no query method yielding a
result set, no prepared statements, and no transaction or savepoint
objects beyond turning auto-commit on or off. There is no background queue
for running queries asynchronously, and no command-line tool.
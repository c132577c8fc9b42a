"""Client layer for MariaDB/MySQL servers: accounts, connections and SQL date and time values."""

__version__ = "0.1.0"

__all__ = [
    "account",
    "calendar_math",
    "connection",
    "date_time",
    "exceptions",
    "last_error",
    "timeofday",
]
"""Remembering the last error reported by the server."""

from __future__ import annotations


class LastError:
    """Holds the number and text of the most recent error."""

    def __init__(self) -> None:
        self._error_no = 0
        self._error = ""

    @property
    def error_no(self) -> int:
        """Number of the last error, 0 if none."""
        return self._error_no

    @property
    def error(self) -> str:
        """Text of the last error, empty if none."""
        return self._error

    def record(self, error_no: int, error: str) -> None:
        """Remember an error."""
        self._error_no = error_no
        self._error = error

    def clear(self) -> None:
        """Forget the last error."""
        self._error_no = 0
        self._error = ""
"""A connection to a MariaDB or MySQL server."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import pymysql
from pymysql.constants import CLIENT

from mdbplus.account import Account
from mdbplus.exceptions import DatabaseConnectionError
from mdbplus.last_error import LastError


def _error_parts(exc: BaseException) -> tuple[int, str]:
    args = exc.args
    if len(args) >= 2 and isinstance(args[0], int):
        return args[0], str(args[1])
    return 0, str(exc)


class Connection(LastError):
    """A database connection opened with the settings of an account.

    The connection is opened lazily: every operation connects first when
    needed. Errors reported by the server are remembered in ``error_no`` and
    ``error`` and raised as DatabaseConnectionError.
    """

    def __init__(self, account: Account) -> None:
        super().__init__()
        self._account = account
        self._conn: Any = None
        self._auto_commit = True
        self._schema = ""
        self._charset = ""

    # state --------------------------------------------------------------

    @property
    def account(self) -> Account:
        """The account this connection uses."""
        return self._account

    @property
    def schema(self) -> str:
        """The schema selected on this connection, empty if none."""
        return self._schema

    @property
    def charset(self) -> str:
        """The character set set on this connection, empty if none."""
        return self._charset

    @property
    def auto_commit(self) -> bool:
        """Whether changes are committed automatically."""
        return self._auto_commit

    @property
    def connected(self) -> bool:
        """Whether the connection is open and the server still answers."""
        if self._conn is None:
            return False
        try:
            self._conn.ping(reconnect=False)
        except pymysql.err.Error:
            return False
        return True

    # errors -------------------------------------------------------------

    def _fail(self, error_no: int, error: str, disconnect: bool = False) -> DatabaseConnectionError:
        self.record(error_no, error)
        if disconnect:
            self.disconnect()
        return DatabaseConnectionError(error_no, error)

    def _fail_from(self, exc: BaseException, disconnect: bool = False) -> DatabaseConnectionError:
        error_no, error = _error_parts(exc)
        return self._fail(error_no, error, disconnect)

    # connecting ---------------------------------------------------------

    def _connect_arguments(self) -> dict[str, Any]:
        account = self._account
        arguments: dict[str, Any] = {
            "host": account.host_name,
            "user": account.user_name,
            "password": account.password,
            "port": account.port,
            "unix_socket": account.unix_socket or None,
            "client_flag": CLIENT.MULTI_STATEMENTS,
            "autocommit": None,
        }
        if account.ssl_key:
            ssl = {
                "key": account.ssl_key,
                "cert": account.ssl_certificate,
                "ca": account.ssl_ca,
                "capath": account.ssl_ca_path,
                "cipher": account.ssl_cipher,
            }
            arguments["ssl"] = {name: value for name, value in ssl.items() if value}
        for option, value in account.connect_options.items():
            if not isinstance(option, str):
                raise self._fail(0, f"unsupported connect option: {option!r}", disconnect=True)
            arguments[option] = value
        return arguments

    def connect(self) -> bool:
        """Open the connection if it is not open; apply auto-commit, schema and options."""
        if self.connected:
            return True
        self.disconnect()

        arguments = self._connect_arguments()
        try:
            self._conn = pymysql.connect(**arguments)
        except pymysql.err.Error as exc:
            raise self._fail_from(exc, disconnect=True) from exc
        except TypeError as exc:
            raise self._fail(0, str(exc), disconnect=True) from exc

        account = self._account
        self.set_auto_commit(account.auto_commit)

        if account.schema:
            self.set_schema(account.schema)

        for name, value in account.options.items():
            if self.execute(f"SET OPTION {name}={value}") != 1:
                raise self._fail(self.error_no, f"cannot set option {name}", disconnect=True)

        return True

    def disconnect(self) -> None:
        """Close the connection if it is open."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            conn.close()
        except pymysql.err.Error:
            pass

    # settings -----------------------------------------------------------

    def set_schema(self, schema: str) -> bool:
        """Select the schema (database) to use."""
        self.connect()
        try:
            self._conn.select_db(schema)
        except pymysql.err.Error as exc:
            raise self._fail_from(exc) from exc
        self._schema = schema
        return True

    def set_charset(self, value: str) -> bool:
        """Set the character set of the connection."""
        self.connect()
        try:
            self._conn.set_character_set(value)
        except pymysql.err.Error as exc:
            raise self._fail_from(exc) from exc
        self._charset = value
        return True

    def set_auto_commit(self, auto_commit: bool) -> bool:
        """Turn automatic commits on or off; does nothing if already so."""
        if self._auto_commit == auto_commit:
            return True
        self.connect()
        try:
            self._conn.autocommit(auto_commit)
        except pymysql.err.Error as exc:
            raise self._fail_from(exc) from exc
        self._auto_commit = auto_commit
        return True

    # queries ------------------------------------------------------------

    def execute(self, query: str) -> int:
        """Run one or more statements and return the total number of affected rows.

        Result sets produced by the statements are read and discarded.
        """
        self.connect()
        affected_rows = 0
        try:
            with self._conn.cursor() as cursor:
                cursor.execute(query)
                while True:
                    if cursor.description is None:
                        affected_rows += max(cursor.rowcount, 0)
                    else:
                        cursor.fetchall()
                    if not cursor.nextset():
                        break
        except pymysql.err.Error as exc:
            raise self._fail_from(exc) from exc
        return affected_rows

    def insert(self, query: str) -> int:
        """Run a statement and return the id of the last inserted row."""
        self.connect()
        try:
            with self._conn.cursor() as cursor:
                cursor.execute(query)
            return int(self._conn.insert_id())
        except pymysql.err.Error as exc:
            raise self._fail_from(exc) from exc

    # context management -------------------------------------------------

    def __enter__(self) -> Connection:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.disconnect()
from unittest import mock

import pymysql
import pytest
from pymysql.constants import CLIENT

from mdbplus.account import Account
from mdbplus.connection import Connection
from mdbplus.exceptions import DatabaseConnectionError

password = "password"


class FakeCursor:
    def __init__(self, results, fail_on_nextset=None):
        self.results = results
        self.fail_on_nextset = fail_on_nextset
        self.executed = []
        self._index = 0
        self.fetched = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query):
        self.executed.append(query)
        self._index = 0
        return self.rowcount

    @property
    def description(self):
        return self.results[self._index][0]

    @property
    def rowcount(self):
        return self.results[self._index][1]

    def fetchall(self):
        self.fetched += 1
        return ()

    def nextset(self):
        if self.fail_on_nextset is not None:
            raise self.fail_on_nextset
        if self._index + 1 < len(self.results):
            self._index += 1
            return True
        return None


def make_account(**kwargs):
    return Account("db.example.com", "user", password, **kwargs)


def make_conn(cursor=None, insert_id=0):
    conn = mock.MagicMock()
    conn.cursor.return_value = cursor if cursor is not None else FakeCursor([(None, 1)])
    conn.insert_id.return_value = insert_id
    return conn


def test_connect_passes_account_settings():
    conn = make_conn()
    with mock.patch("pymysql.connect", return_value=conn) as connect:
        connection = Connection(make_account(port=3307))
        assert connection.connect() is True
    kwargs = connect.call_args.kwargs
    assert kwargs["host"] == "db.example.com"
    assert kwargs["user"] == "user"
    assert kwargs["password"] == password
    assert kwargs["port"] == 3307
    assert kwargs["unix_socket"] is None
    assert kwargs["client_flag"] & CLIENT.MULTI_STATEMENTS
    assert "ssl" not in kwargs


def test_connect_passes_ssl_and_connect_options():
    account = make_account(unix_socket="/tmp/db.sock")
    account.set_ssl("key.pem", "cert.pem", "ca.pem", "", "")
    account.set_connect_option("connect_timeout", 5)
    with mock.patch("pymysql.connect", return_value=make_conn()) as connect:
        connection = Connection(account)
        assert connection.connect() is True
        assert connection.connected is True
    kwargs = connect.call_args.kwargs
    assert kwargs["ssl"] == {"key": "key.pem", "cert": "cert.pem", "ca": "ca.pem"}
    assert kwargs["connect_timeout"] == 5
    assert kwargs["unix_socket"] == "/tmp/db.sock"


def test_non_string_connect_option_is_rejected():
    account = make_account()
    account.set_connect_option(42, True)
    with mock.patch("pymysql.connect", return_value=make_conn()) as connect:
        with pytest.raises(DatabaseConnectionError):
            Connection(account).connect()
    assert connect.call_count == 0


def test_connect_selects_schema():
    conn = make_conn()
    with mock.patch("pymysql.connect", return_value=conn):
        connection = Connection(make_account(schema="shop"))
        connection.connect()
    conn.select_db.assert_called_once_with("shop")
    assert connection.schema == "shop"


def test_connect_applies_disabled_auto_commit():
    conn = make_conn()
    with mock.patch("pymysql.connect", return_value=conn):
        connection = Connection(make_account(auto_commit=False))
        connection.connect()
    conn.autocommit.assert_called_once_with(False)
    assert connection.auto_commit is False


def test_connect_applies_options():
    cursor = FakeCursor([(None, 1)])
    conn = make_conn(cursor)
    account = make_account()
    account.set_option("sql_mode", "ANSI")
    with mock.patch("pymysql.connect", return_value=conn):
        assert Connection(account).connect() is True
    assert cursor.executed == ["SET OPTION sql_mode=ANSI"]


def test_option_not_affecting_one_row_fails_and_disconnects():
    conn = make_conn(FakeCursor([(None, 0)]))
    account = make_account()
    account.set_option("sql_mode", "ANSI")
    with mock.patch("pymysql.connect", return_value=conn):
        connection = Connection(account)
        with pytest.raises(DatabaseConnectionError):
            connection.connect()
    assert connection.connected is False
    conn.close.assert_called_once()


def test_connect_failure_records_error():
    failure = pymysql.err.OperationalError(2003, "cannot reach server")
    with mock.patch("pymysql.connect", side_effect=failure):
        connection = Connection(make_account())
        with pytest.raises(DatabaseConnectionError) as info:
            connection.connect()
    assert info.value.error_id == 2003
    assert connection.error_no == 2003
    assert connection.error == "cannot reach server"
    assert connection.connected is False


def test_connected_reflects_ping():
    conn = make_conn()
    with mock.patch("pymysql.connect", return_value=conn):
        connection = Connection(make_account())
        assert connection.connected is False
        connection.connect()
        assert connection.connected is True
        conn.ping.side_effect = pymysql.err.OperationalError(2006, "gone away")
        assert connection.connected is False


def test_connect_twice_opens_once():
    with mock.patch("pymysql.connect", return_value=make_conn()) as connect:
        connection = Connection(make_account())
        assert connection.connect() is True
        assert connection.connect() is True
    assert connect.call_count == 1


def test_execute_sums_affected_rows_and_skips_result_sets():
    cursor = FakeCursor([(None, 2), ((("id",),), 7), (None, 3)])
    with mock.patch("pymysql.connect", return_value=make_conn(cursor)):
        connection = Connection(make_account())
        assert connection.execute("UPDATE a; SELECT 1; DELETE b") == 5
    assert cursor.fetched == 1
    assert cursor.executed == ["UPDATE a; SELECT 1; DELETE b"]


def test_execute_error_is_raised_and_recorded():
    cursor = FakeCursor([(None, 1)], fail_on_nextset=pymysql.err.ProgrammingError(1064, "syntax"))
    with mock.patch("pymysql.connect", return_value=make_conn(cursor)):
        connection = Connection(make_account())
        with pytest.raises(DatabaseConnectionError) as info:
            connection.execute("BROKEN")
    assert info.value.error_id == 1064
    assert connection.error == "syntax"


def test_insert_returns_last_id():
    cursor = FakeCursor([(None, 1)])
    with mock.patch("pymysql.connect", return_value=make_conn(cursor, insert_id=17)):
        connection = Connection(make_account())
        assert connection.insert("INSERT INTO t VALUES (1)") == 17
    assert cursor.executed == ["INSERT INTO t VALUES (1)"]


def test_set_auto_commit_unchanged_does_not_connect():
    with mock.patch("pymysql.connect", return_value=make_conn()) as connect:
        connection = Connection(make_account())
        assert connection.set_auto_commit(True) is True
    assert connect.call_count == 0


def test_set_charset_and_schema():
    conn = make_conn()
    with mock.patch("pymysql.connect", return_value=conn):
        connection = Connection(make_account())
        connection.set_charset("utf8mb4")
        connection.set_schema("archive")
    conn.set_character_set.assert_called_once_with("utf8mb4")
    conn.select_db.assert_called_once_with("archive")
    assert connection.charset == "utf8mb4"
    assert connection.schema == "archive"


def test_set_schema_error_raises():
    conn = make_conn()
    conn.select_db.side_effect = pymysql.err.OperationalError(1049, "unknown database")
    with mock.patch("pymysql.connect", return_value=conn):
        connection = Connection(make_account())
        with pytest.raises(DatabaseConnectionError):
            connection.set_schema("missing")
    assert connection.schema == ""
    assert connection.error_no == 1049


def test_context_manager_connects_and_closes():
    conn = make_conn()
    account = make_account()
    with mock.patch("pymysql.connect", return_value=conn):
        with Connection(account) as connection:
            assert connection.connected is True
            assert connection.account is account
    conn.close.assert_called_once()
    assert connection.connected is False
from mdbplus.last_error import LastError


def test_starts_empty():
    last = LastError()
    assert last.error_no == 0
    assert last.error == ""


def test_record_keeps_latest():
    last = LastError()
    last.record(1146, "Table doesn't exist")
    last.record(1064, "Syntax error")
    assert last.error_no == 1064
    assert last.error == "Syntax error"


def test_clear_resets():
    last = LastError()
    last.record(2006, "Server has gone away")
    last.clear()
    assert (last.error_no, last.error) == (0, "")
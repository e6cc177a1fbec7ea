from pathlib import Path

import pytest

from hmpssh.core.exceptions import RecordIndexError, StoreIOError, ValidationError
from hmpssh.domain.records import ConnectionRecord, parse_selection
from hmpssh.infrastructure.state import FlatFileRecordStore


def _store(tmp_path: Path) -> FlatFileRecordStore:
    return FlatFileRecordStore(tmp_path / "connections.conf")


def test_append_then_load_keeps_order_and_fields(tmp_path: Path):
    store = _store(tmp_path)
    records = [
        ConnectionRecord("web", "deploy", "web.example.com", "22"),
        ConnectionRecord("db", "postgres", "10.0.0.7", "5432"),
        ConnectionRecord("nas", "admin", "nas.local", "2222"),
    ]
    for record in records:
        store.append(record)

    assert store.load() == records


def test_empty_port_defaults_to_22(tmp_path: Path):
    store = _store(tmp_path)
    store.append(ConnectionRecord.create("home", "alice", "10.0.0.5", ""))

    assert store.path.read_text() == "home|alice|10.0.0.5|22\n"


def test_create_trims_input():
    record = ConnectionRecord.create("  home ", " alice", "10.0.0.5  ", " 80 ")
    assert record == ConnectionRecord("home", "alice", "10.0.0.5", "80")


@pytest.mark.parametrize(
    "name,user,host",
    [("", "alice", "h"), ("n", "", "h"), ("n", "alice", ""), ("n", "  ", "h")],
)
def test_empty_required_field_rejected_and_file_unchanged(tmp_path: Path, name, user, host):
    store = _store(tmp_path)
    store.append(ConnectionRecord("keep", "bob", "keep.example.com"))
    before = store.path.read_bytes()

    with pytest.raises(ValidationError):
        store.append(ConnectionRecord.create(name, user, host, ""))
    with pytest.raises(ValidationError):
        store.append(ConnectionRecord(name, user, host, "22"))

    assert store.path.read_bytes() == before


def test_port_length_and_digits():
    with pytest.raises(ValidationError):
        ConnectionRecord.create("n", "u", "h", "123456")
    with pytest.raises(ValidationError):
        ConnectionRecord.create("n", "u", "h", "8o")
    with pytest.raises(ValidationError):
        ConnectionRecord.create("n", "u", "h", "-22")

    assert ConnectionRecord.create("n", "u", "h", "80").port == "80"
    assert ConnectionRecord.create("n", "u", "h", "65535").port == "65535"


def test_delimiter_in_field_rejected(tmp_path: Path):
    store = _store(tmp_path)
    with pytest.raises(ValidationError):
        store.append(ConnectionRecord("a|b", "u", "h"))
    assert not store.path.exists() or store.path.read_text() == ""


def test_delete_middle_record_keeps_relative_order(tmp_path: Path):
    store = _store(tmp_path)
    records = [ConnectionRecord(f"s{i}", "u", f"host{i}") for i in range(4)]
    for record in records:
        store.append(record)

    removed = store.delete(1)

    assert removed == records[1]
    assert store.load() == [records[0], records[2], records[3]]
    assert store.path.read_text() == "s0|u|host0|22\ns2|u|host2|22\ns3|u|host3|22\n"


def test_delete_out_of_range_twice(tmp_path: Path):
    store = _store(tmp_path)
    store.append(ConnectionRecord("a", "u", "h1"))
    store.append(ConnectionRecord("b", "u", "h2"))

    store.delete(1)
    after_first = store.path.read_bytes()

    with pytest.raises(RecordIndexError):
        store.delete(1)
    with pytest.raises(IndexError):
        store.delete(1)
    assert store.path.read_bytes() == after_first


def test_delete_last_record_truncates(tmp_path: Path):
    store = _store(tmp_path)
    store.append(ConnectionRecord("only", "u", "h"))

    store.delete(0)

    assert store.path.read_bytes() == b""
    assert store.load() == []


def test_empty_and_missing_file_load_as_no_records(tmp_path: Path):
    store = _store(tmp_path)
    assert store.load() == []

    store.ensure()
    assert store.path.exists()
    assert store.load() == []


def test_unreadable_file_is_an_error_not_empty(tmp_path: Path):
    store = FlatFileRecordStore(tmp_path)  # a directory

    with pytest.raises(StoreIOError):
        store.load()


def test_loaded_ports_are_default_or_digits(tmp_path: Path):
    path = tmp_path / "connections.conf"
    path.write_text(
        "a|u|h1|2222\n"
        "b|u|h2\n"
        "c|u|h3|ssh\n"
        "broken line\n"
        "\n"
        "d|u|h4|123456\n"
        "e|u|h5|22|extra\n"
    )
    records = FlatFileRecordStore(path).load()

    assert [r.name for r in records] == ["a", "b", "e"]
    for record in records:
        assert record.port == "22" or (record.port.isdigit() and 1 <= len(record.port) <= 5)


def test_delete_keeps_unparsed_lines(tmp_path: Path):
    path = tmp_path / "connections.conf"
    path.write_text("a|u|h1|22\n# note\nb|u|h2|22\n")
    store = FlatFileRecordStore(path)

    store.delete(1)

    assert path.read_text() == "a|u|h1|22\n# note\n"


def test_append_after_hand_edit_without_trailing_newline(tmp_path: Path):
    path = tmp_path / "connections.conf"
    path.write_text("a|u|h1|22")
    store = FlatFileRecordStore(path)

    store.append(ConnectionRecord("b", "u", "h2"))

    assert path.read_text() == "a|u|h1|22\nb|u|h2|22\n"


def test_ensure_creates_private_file(tmp_path: Path):
    store = FlatFileRecordStore(tmp_path / ".ssh" / "connections.conf")
    store.ensure()

    assert store.path.exists()
    assert store.path.stat().st_mode & 0o777 == 0o600


def test_get_is_bounds_checked(tmp_path: Path):
    store = _store(tmp_path)
    store.append(ConnectionRecord("a", "u", "h"))

    assert store.get(0).name == "a"
    with pytest.raises(RecordIndexError):
        store.get(1)
    with pytest.raises(RecordIndexError):
        store.get(-1)


def test_parse_selection():
    assert parse_selection(" 2 ", 3) == 2
    with pytest.raises(ValidationError):
        parse_selection("two", 3)
    with pytest.raises(RecordIndexError):
        parse_selection("3", 3)
    with pytest.raises(RecordIndexError):
        parse_selection("-1", 3)


def test_record_line_format():
    record = ConnectionRecord("web", "deploy", "web.example.com", "2200")

    assert record.to_line() == "web|deploy|web.example.com|2200"
    assert ConnectionRecord.from_line(record.to_line()) == record

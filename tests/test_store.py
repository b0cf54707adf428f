from __future__ import annotations

import json

import pytest

from visitorlog.errors import ErrorKind, VisitorLogError
from visitorlog.models import VisitorRecord, parse_record_id, record_filename
from visitorlog.store import RecordStore


def _touch_records(data_dir, *ids):
    data_dir.mkdir(parents=True, exist_ok=True)
    for record_id in ids:
        (data_dir / record_filename(record_id)).write_text("{}")


# ---------------------------------------------------------------------------
# filenames
# ---------------------------------------------------------------------------


def test_filename_mapping():
    assert record_filename(7) == "visitor_7.json"
    assert parse_record_id("visitor_7.json") == 7
    assert parse_record_id("notes.txt") is None
    assert parse_record_id("visitor_7.json.tmp") is None
    with pytest.raises(ValueError, match="Malformed"):
        parse_record_id("visitor_abc.json")


# ---------------------------------------------------------------------------
# generate_id
# ---------------------------------------------------------------------------


def test_generate_id_missing_dir(store, data_dir):
    assert not data_dir.exists()
    assert store.generate_id() == 1
    assert data_dir.is_dir()


def test_generate_id_after_existing_files(store, data_dir):
    _touch_records(data_dir, 1, 2, 3)
    (data_dir / "readme.txt").write_text("ignored")
    assert store.generate_id() == 4


def test_generate_id_uses_max_not_count(store, data_dir):
    _touch_records(data_dir, 2, 10)
    assert store.generate_id() == 11


def test_generate_id_malformed_name_raises(store, data_dir):
    _touch_records(data_dir, 1)
    (data_dir / "visitor_x.json").write_text("{}")
    with pytest.raises(ValueError, match="visitor_x.json"):
        store.generate_id()


# ---------------------------------------------------------------------------
# save
# ---------------------------------------------------------------------------


def test_save_new_record_writes_file(store, data_dir, jane):
    result = store.save(jane)

    assert result == "Visitor data saved to visitor_1.json."
    assert jane.id == 1
    data = json.loads((data_dir / "visitor_1.json").read_text())
    assert data == {
        "fullName": "Jane Doe",
        "age": 25,
        "date": "2023-10-27",
        "time": "11:00",
        "comments": "Comment",
        "assistant": "Bob Smith",
        "id": 1,
    }


def test_save_twice_updates_same_file(store, data_dir, jane):
    store.save(jane)
    jane.comments = "Follow up"
    result = store.save(jane)

    assert result == "Visitor data for visitor_1.json has been updated."
    assert jane.id == 1
    assert sorted(p.name for p in data_dir.iterdir()) == ["visitor_1.json"]
    assert json.loads((data_dir / "visitor_1.json").read_text())["comments"] == "Follow up"


def test_save_assigns_distinct_ids(store, jane):
    other = VisitorRecord("John Doe", 30, "2023-10-28", "12:00", "New product launch", "Alice Smith")
    store.save(jane)
    store.save(other)
    assert jane.id == 1
    assert other.id == 2


def test_save_stale_id_refused(store, data_dir, jane):
    jane.assign_id(999)
    with pytest.raises(VisitorLogError) as excinfo:
        store.save(jane)
    assert excinfo.value.kind is ErrorKind.CANNOT_UPDATE
    assert str(excinfo.value) == "No visitor found with ID 999. Cannot update."
    assert not (data_dir / "visitor_999.json").exists()


def test_save_revalidates_mutated_fields(store, data_dir, jane):
    jane.age = -3
    with pytest.raises(VisitorLogError) as excinfo:
        store.save(jane)
    assert excinfo.value.kind is ErrorKind.INVALID_AGE
    assert jane.id is None
    assert not data_dir.exists() or not any(data_dir.iterdir())


def test_save_uses_injected_allocator(data_dir, jane):
    class FixedAllocator:
        def next_id(self) -> int:
            return 42

    store = RecordStore(data_dir, allocator=FixedAllocator())
    assert store.save(jane) == "Visitor data saved to visitor_42.json."
    assert store.exists(42)


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


def test_save_then_load_round_trip(store, jane):
    store.save(jane)
    loaded = store.load(jane.id)
    assert loaded == jane


def test_load_reads_stored_document(store, data_dir):
    data_dir.mkdir()
    (data_dir / "visitor_1.json").write_text(json.dumps({
        "fullName": "Jane Smith",
        "age": 25,
        "date": "2023-10-27",
        "time": "11:00",
        "comments": "Follow up",
        "assistant": "Bob Smith",
        "id": 1,
    }))

    loaded = store.load(1)

    assert loaded.full_name == "Jane Smith"
    assert loaded.age == 25
    assert loaded.date == "2023-10-27"
    assert loaded.time == "11:00"
    assert loaded.comments == "Follow up"
    assert loaded.assistant == "Bob Smith"
    assert loaded.id == 1


def test_load_missing_record(store):
    with pytest.raises(VisitorLogError) as excinfo:
        store.load(999)
    assert excinfo.value.kind is ErrorKind.RECORD_NOT_FOUND
    assert str(excinfo.value) == "No visitor found with ID 999."


@pytest.mark.parametrize("bad_id", ["abc", "1", 1.0, None, True])
def test_load_invalid_id(store, data_dir, bad_id):
    with pytest.raises(VisitorLogError) as excinfo:
        store.load(bad_id)
    assert excinfo.value.kind is ErrorKind.INVALID_ID
    assert str(excinfo.value) == "ID should be a number."
    assert not data_dir.exists()


def test_load_revalidates_stored_fields(store, data_dir):
    data_dir.mkdir()
    (data_dir / "visitor_5.json").write_text(json.dumps({"fullName": "Jane Smith", "age": -1, "id": 5}))
    with pytest.raises(VisitorLogError) as excinfo:
        store.load(5)
    assert excinfo.value.kind is ErrorKind.INVALID_AGE


def test_list_and_iter_records(store, jane):
    assert store.list_ids() == []
    other = VisitorRecord("John Doe", 30, "2023-10-28", "12:00", "", "Alice Smith")
    store.save(jane)
    store.save(other)

    assert store.list_ids() == [1, 2]
    assert [r.full_name for r in store.iter_records()] == ["Jane Doe", "John Doe"]


def test_load_null_id_keeps_file_identity(store, data_dir, jane):
    data_dir.mkdir()
    (data_dir / "visitor_1.json").write_text(json.dumps({**jane.to_dict(), "id": None}))

    loaded = store.load(1)
    assert loaded.id == 1
    assert store.save(loaded) == "Visitor data for visitor_1.json has been updated."
    assert store.list_ids() == [1]


def test_load_non_object_document(store, data_dir):
    data_dir.mkdir()
    (data_dir / "visitor_1.json").write_text("[]")
    with pytest.raises(ValueError, match="visitor_1.json does not hold a JSON object"):
        store.load(1)


def test_failed_write_leaves_no_temp_file(store, data_dir, jane, monkeypatch):
    def broken_dump(*args, **kwargs):
        raise TypeError("not serializable")

    monkeypatch.setattr("visitorlog.store.json.dump", broken_dump)
    with pytest.raises(TypeError):
        store.save(jane)
    assert list(data_dir.iterdir()) == []
    assert jane.id is None


def test_save_refuses_allocated_id_already_on_disk(data_dir, jane):
    class StuckAllocator:
        def next_id(self) -> int:
            return 1

    store = RecordStore(data_dir, allocator=StuckAllocator())
    store.save(jane)
    other = VisitorRecord("John Doe", 30, "2023-10-28", "12:00", "", "Alice Smith")
    with pytest.raises(FileExistsError, match="visitor_1.json already exists"):
        store.save(other)
    assert other.id is None
    assert store.load(1).full_name == "Jane Doe"

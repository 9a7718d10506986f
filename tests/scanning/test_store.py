import json
from datetime import datetime, timedelta

import pytest

from linkscan.errors import NotEnoughSnapshotsError, SnapshotExistsError, SnapshotFormatError
from linkscan.models import LinkCategory, LinkRecord, Snapshot
from linkscan.store import SnapshotStore


def _snapshot(offset: int = 0, target: str = "x") -> Snapshot:
    snapshot = Snapshot(timestamp=datetime(2024, 5, 1, 12, 0, 0) + timedelta(seconds=offset))
    snapshot.add("/a", LinkRecord(target=target, category=LinkCategory.VALID))
    return snapshot


def test_missing_directory_has_no_snapshots(db_dir):
    assert SnapshotStore(db_dir).list_snapshots() == []


def test_ensure_directory_creates_parents(tmp_path):
    directory = tmp_path / "a" / "b" / "db"
    SnapshotStore(directory).ensure_directory()
    assert directory.is_dir()


def test_save_writes_timestamp_named_file(db_dir):
    store = SnapshotStore(db_dir)
    path = store.save(_snapshot())
    assert path == db_dir / "2024-05-01-12-00-00.000000"
    assert json.loads(path.read_text(encoding="utf-8"))["Links"]["/a"] == {"Target": "x", "Typ": "Good"}


def test_save_refuses_to_overwrite(db_dir):
    store = SnapshotStore(db_dir)
    store.save(_snapshot())
    with pytest.raises(SnapshotExistsError):
        store.save(_snapshot(target="other"))


def test_save_leaves_no_temporary_files(db_dir):
    store = SnapshotStore(db_dir)
    store.save(_snapshot())
    assert [path.name for path in db_dir.iterdir()] == ["2024-05-01-12-00-00.000000"]


def test_list_snapshots_sorted_and_ignores_other_files(db_dir):
    store = SnapshotStore(db_dir)
    store.save(_snapshot(offset=60))
    store.save(_snapshot(offset=0))
    (db_dir / "notes.txt").write_text("hello")
    (db_dir / ".DS_Store").write_text("")
    assert [path.name for path in store.list_snapshots()] == [
        "2024-05-01-12-00-00.000000",
        "2024-05-01-12-01-00.000000",
    ]


def test_latest_returns_newest_first(db_dir):
    store = SnapshotStore(db_dir)
    store.save(_snapshot(offset=0, target="old"))
    store.save(_snapshot(offset=1, target="new"))
    newer, older = store.latest(2)
    assert newer.links["/a"].target == "new"
    assert older.links["/a"].target == "old"


def test_latest_requires_enough_snapshots(db_dir):
    store = SnapshotStore(db_dir)
    store.save(_snapshot())
    with pytest.raises(NotEnoughSnapshotsError) as exc_info:
        store.latest(2)
    assert exc_info.value.required == 2
    assert exc_info.value.found == 1


def test_load_round_trip(db_dir):
    store = SnapshotStore(db_dir)
    snapshot = _snapshot()
    assert store.load(store.save(snapshot)) == snapshot


def test_load_rejects_invalid_json(db_dir):
    db_dir.mkdir()
    path = db_dir / "2024-05-01-12-00-00.000000"
    path.write_text("{not json")
    with pytest.raises(SnapshotFormatError):
        SnapshotStore(db_dir).load(path)


def test_load_rejects_unknown_category(db_dir):
    db_dir.mkdir()
    path = db_dir / "2024-05-01-12-00-00.000000"
    path.write_text(
        json.dumps(
            {
                "TimeStamp": "2024-05-01T12:00:00Z",
                "Links": {"/a": {"Target": "x", "Typ": "Weird"}},
            }
        )
    )
    with pytest.raises(SnapshotFormatError):
        SnapshotStore(db_dir).load(path)


def test_load_missing_file(db_dir):
    with pytest.raises(SnapshotFormatError):
        SnapshotStore(db_dir).load(db_dir / "2024-05-01-12-00-00.000000")

import os
import stat
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from minisql.errors import InvalidTableNameError, StorageError
from minisql.storage import TableStore


def test_root_directory_is_created(tmp_path):
    root = tmp_path / "nested" / "data"
    store = TableStore(str(root))
    assert root.is_dir()
    assert store.root_dir == str(root)


def test_store_and_load_round_trip(tmp_path):
    store = TableStore(str(tmp_path))
    rows = [["id", "name"], ["1", "a, b"]]
    store.store("people", rows)

    assert (tmp_path / "people.csv").read_text(encoding="utf-8") == 'id,name\n1,"a, b"\n'
    assert store.exists("people")
    assert store.load("people") == rows


def test_load_missing_table_is_empty(tmp_path):
    store = TableStore(str(tmp_path))
    assert store.load("nothing") == []
    assert not store.exists("nothing")


def test_resolve_rejects_unsafe_names(tmp_path):
    store = TableStore(str(tmp_path))
    for name in ["../evil", "a/b", "", "a.b", "-x"]:
        with pytest.raises(InvalidTableNameError):
            store.resolve(name)
    assert store.resolve("my_table-2") == os.path.join(str(tmp_path), "my_table-2.csv")


def test_failed_store_keeps_previous_content(tmp_path, monkeypatch):
    store = TableStore(str(tmp_path))
    store.store("t", [["a"], ["1"]])

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)
    with pytest.raises(StorageError, match="disk full"):
        store.store("t", [["a"], ["2"]])
    monkeypatch.undo()

    assert store.load("t") == [["a"], ["1"]]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["t.csv"]


def test_drop_and_list_tables(tmp_path):
    store = TableStore(str(tmp_path))
    store.store("b", [["x"]])
    store.store("a", [["x"]])
    (tmp_path / "notes.txt").write_text("ignored")

    assert store.list_tables() == ["a", "b"]
    store.drop("a")
    assert store.list_tables() == ["b"]

    with pytest.raises(StorageError):
        store.drop("a")


@pytest.mark.skipif(os.name == "nt", reason="permissions POSIX")
def test_store_keeps_file_permissions(tmp_path):
    store = TableStore(str(tmp_path))
    path = tmp_path / "t.csv"

    old_umask = os.umask(0o022)
    try:
        store.store("t", [["a"]])
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644

    path.chmod(0o640)
    store.store("t", [["a"], ["1"]])
    assert stat.S_IMODE(path.stat().st_mode) == 0o640

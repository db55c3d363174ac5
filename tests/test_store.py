import json

import pytest

from gameshelf.errors import BadRequest, DuplicateEntry, NotFound
from gameshelf.models import EnrichmentMetadata
from gameshelf.store import LibraryStore


def test_missing_store_is_initialized(tmp_path):
    f = tmp_path / "sub" / "games.json"
    store = LibraryStore(f)
    assert json.loads(f.read_text("utf-8")) == {"games": []}
    assert store.list() == []


def test_add_derives_name_and_round_trips(store):
    entry = store.add("/games/Foo.exe")
    assert entry.name == "Foo"
    assert entry.path == "/games/Foo.exe"
    assert entry.metadata is None

    [listed] = store.list()
    assert listed.id == entry.id
    assert listed.path == entry.path
    assert listed.name == entry.name
    assert listed.added_at == entry.added_at


def test_name_keeps_inner_dots_and_windows_paths(store):
    assert store.add(r"C:\Games\Doom.v1.9.exe").name == "Doom.v1.9"
    assert store.add("/games/runme").name == "runme"


def test_duplicate_path_rejected(store):
    store.add("/games/Foo.exe")
    with pytest.raises(DuplicateEntry):
        store.add("/games/Foo.exe")
    assert [g.path for g in store.list()] == ["/games/Foo.exe"]


def test_ids_are_unique_even_within_one_millisecond(store, monkeypatch):
    import gameshelf.store as S
    monkeypatch.setattr(S, "timestamp_id", lambda: "1700000000000")
    a = store.add("/games/A.exe")
    b = store.add("/games/B.exe")
    assert a.id == "1700000000000"
    assert b.id == "1700000000001"


def test_remove_and_remove_absent(store):
    a = store.add("/games/A.exe")
    b = store.add("/games/B.exe")
    store.remove(a.id)
    assert [g.id for g in store.list()] == [b.id]

    before = store.library_file.read_text("utf-8")
    store.remove("nope")
    assert store.library_file.read_text("utf-8") == before


def test_remove_leaves_the_file_alone(tmp_path, store):
    exe = tmp_path / "Game.exe"
    exe.write_bytes(b"stub")
    entry = store.add(str(exe))
    store.remove(entry.id)
    assert exe.exists()


def test_update_name_only_changes_name(store):
    entry = store.add("/games/Foo.exe")
    store.update(entry.id, {"metadata": EnrichmentMetadata(source_id=1, name="Foo")})
    before = store.get(entry.id)

    after = store.update(entry.id, {"name": "X"})
    assert after.name == "X"
    assert after.path == before.path
    assert after.added_at == before.added_at
    assert after.metadata == before.metadata


def test_update_replaces_metadata_wholesale(store):
    entry = store.add("/games/Foo.exe")
    store.update(entry.id, {"metadata": {"sourceId": 1, "genres": ["Action"], "criticScore": 80}})
    updated = store.update(entry.id, {"metadata": {"sourceId": 2, "description": "new"}})
    assert updated.metadata.source_id == 2
    assert updated.metadata.genres == []
    assert updated.metadata.critic_score is None

    cleared = store.update(entry.id, {"metadata": None})
    assert cleared.metadata is None


def test_update_ignores_immutable_and_unknown(store):
    entry = store.add("/games/Foo.exe")
    updated = store.update(entry.id, {"id": "x", "addedAt": "then", "favorite": True})
    assert updated.id == entry.id
    assert updated.added_at == entry.added_at


def test_update_errors(store):
    a = store.add("/games/A.exe")
    store.add("/games/B.exe")
    with pytest.raises(NotFound):
        store.update("missing", {"name": "X"})
    with pytest.raises(DuplicateEntry):
        store.update(a.id, {"path": "/games/B.exe"})
    with pytest.raises(BadRequest):
        store.update(a.id, {"name": ""})
    with pytest.raises(BadRequest):
        store.update(a.id, {"metadata": {"description": "no id"}})


def test_malformed_store_reads_as_empty(store):
    store.library_file.write_text("{not json", encoding="utf-8")
    assert store.list() == []
    store.library_file.write_text('{"games": {}}', encoding="utf-8")
    assert store.list() == []


def test_malformed_entries_are_skipped(store):
    good = store.add("/games/Good.exe")
    data = json.loads(store.library_file.read_text("utf-8"))
    data["games"].extend([{"name": "no id"}, "oops", 7, None, {"id": "1", "name": "x", "path": "/p", "addedAt": "t", "metadata": "junk"}])
    store.library_file.write_text(json.dumps(data), encoding="utf-8")
    assert [g.id for g in store.list()] == [good.id]
    assert store.add("/games/Other.exe").name == "Other"


def test_writes_leave_no_temp_files(store):
    store.add("/games/A.exe")
    store.add("/games/B.exe")
    names = sorted(p.name for p in store.library_file.parent.iterdir())
    assert names == ["games.json"]


def test_document_shape_on_disk(store):
    entry = store.add("/games/Foo.exe")
    data = json.loads(store.library_file.read_text("utf-8"))
    assert data == {"games": [{
        "id": entry.id,
        "name": "Foo",
        "path": "/games/Foo.exe",
        "addedAt": entry.added_at,
        "metadata": None,
    }]}


def test_concurrent_adds_are_all_kept(store):
    import threading
    paths = [f"/games/G{i}.exe" for i in range(20)]
    threads = [threading.Thread(target=store.add, args=(p,)) for p in paths]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(g.path for g in store.list()) == sorted(paths)

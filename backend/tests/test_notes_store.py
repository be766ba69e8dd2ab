import json
import logging
from datetime import datetime, timedelta, timezone

from app.storage.notes_store import SEED_NOTES, Note, NotesStore, utc_iso


def test_load_seeds_missing_file(data_dir):
    store = NotesStore(data_dir)
    assert not data_dir.exists()

    notes = store.load()

    assert [n.title for n in notes] == [t for t, _ in SEED_NOTES]
    assert len({n.id for n in notes}) == 2
    for n in notes:
        assert n.created_at == n.updated_at

    # seed is written to disk straight away
    on_disk = json.loads(store.path.read_text(encoding="utf-8"))
    assert [n["id"] for n in on_disk] == [n.id for n in notes]


def test_load_reads_existing_file(data_dir):
    data_dir.mkdir()
    raw = [
        {
            "id": "a1",
            "title": "t",
            "content": "c",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-02T00:00:00.000Z",
        }
    ]
    (data_dir / "notes.json").write_text(json.dumps(raw), encoding="utf-8")

    notes = NotesStore(data_dir).load()

    assert notes == [
        Note(
            id="a1",
            title="t",
            content="c",
            created_at="2024-01-01T00:00:00.000Z",
            updated_at="2024-01-02T00:00:00.000Z",
        )
    ]


def test_truncated_file_loads_as_empty_and_warns(data_dir, caplog):
    data_dir.mkdir()
    (data_dir / "notes.json").write_text('[{"id": "a1", "title": ', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="app.storage.notes_store"):
        notes = NotesStore(data_dir).load()

    assert notes == []
    assert "not valid JSON" in caplog.text


def test_deeply_nested_document_loads_as_empty(data_dir, caplog):
    data_dir.mkdir()
    (data_dir / "notes.json").write_text("[" * 200_000, encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="app.storage.notes_store"):
        assert NotesStore(data_dir).load() == []
    assert "not valid JSON" in caplog.text


def test_file_with_utf8_bom_loads(data_dir):
    data_dir.mkdir()
    raw = [{"id": "a1", "title": "t", "content": "c", "createdAt": "t0", "updatedAt": "t1"}]
    (data_dir / "notes.json").write_bytes(b"\xef\xbb\xbf" + json.dumps(raw).encode("utf-8"))

    notes = NotesStore(data_dir).load()

    assert [n.id for n in notes] == ["a1"]


def test_utc_iso_is_fixed_width_utc():
    assert utc_iso(datetime(2024, 1, 1, tzinfo=timezone.utc)) == "2024-01-01T00:00:00.000000+00:00"
    offset = timezone(timedelta(hours=2))
    assert utc_iso(datetime(2024, 1, 1, 2, 0, 0, 5, tzinfo=offset)) == "2024-01-01T00:00:00.000005+00:00"


def test_non_list_document_loads_as_empty(data_dir, caplog):
    data_dir.mkdir()
    (data_dir / "notes.json").write_text('{"notes": []}', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="app.storage.notes_store"):
        assert NotesStore(data_dir).load() == []
    assert "instead of a list" in caplog.text


def test_malformed_note_loads_as_empty(data_dir):
    data_dir.mkdir()
    (data_dir / "notes.json").write_text('[{"id": "a1", "title": 5}]', encoding="utf-8")
    assert NotesStore(data_dir).load() == []


def test_corrupted_file_is_not_overwritten_on_load(data_dir):
    data_dir.mkdir()
    path = data_dir / "notes.json"
    path.write_text("not json", encoding="utf-8")

    NotesStore(data_dir).load()

    assert path.read_text(encoding="utf-8") == "not json"


def test_save_is_idempotent(data_dir):
    store = NotesStore(data_dir)
    store.save(store.load())
    first = store.path.read_bytes()

    store.save(store.load())
    second = store.path.read_bytes()

    assert first == second


def test_save_writes_readable_array_and_no_temp_file(data_dir):
    store = NotesStore(data_dir)
    note = Note(id="x", title="Zürich", content="ü", created_at="t0", updated_at="t1")

    store.save([note])

    text = store.path.read_text(encoding="utf-8")
    assert "\n  " in text  # indented
    assert "Zürich" in text
    assert json.loads(text) == [
        {"id": "x", "title": "Zürich", "content": "ü", "createdAt": "t0", "updatedAt": "t1"}
    ]
    assert list(data_dir.glob("*.tmp")) == []


def test_save_creates_missing_directory(tmp_path):
    store = NotesStore(tmp_path / "nested" / "dir")
    store.save([])
    assert json.loads(store.path.read_text(encoding="utf-8")) == []


def test_custom_file_name(data_dir):
    store = NotesStore(data_dir, "other.json")
    store.load()
    assert (data_dir / "other.json").exists()
    assert not (data_dir / "notes.json").exists()

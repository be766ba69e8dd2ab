import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.notes_service import NoteService
from app.storage.notes_store import NotesStore


@pytest.fixture()
def data_dir(tmp_path):
    # isolate data dir per test
    return tmp_path / "data"


@pytest.fixture()
def store(data_dir):
    return NotesStore(data_dir)


@pytest.fixture()
def service(store):
    svc = NoteService(store)
    # start from an empty collection instead of the two seed notes
    for note in svc.list_notes():
        svc.delete_note(note.id)
    return svc


@pytest.fixture()
def client(data_dir):
    # entering the context runs the lifespan, which loads the store
    with TestClient(create_app(data_dir=data_dir)) as c:
        yield c

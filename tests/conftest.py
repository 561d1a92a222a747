"""Shared fixtures: every test gets its own backing file under tmp_path."""

import pytest
from fastapi.testclient import TestClient

from emojidict.config import Settings
from emojidict.data.entry_repo import EntryRepo
from emojidict.main import create_app
from emojidict.models.entry import Entry
from emojidict.service.entry_store import EntryStore


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "entries.plist"


@pytest.fixture
def repo(data_path):
    return EntryRepo(data_path)


@pytest.fixture
def store(repo):
    return EntryStore(repo)


@pytest.fixture
def abcd():
    return [Entry(symbol=s, name=s, description=f"{s} desc", usage=f"{s} usage", id=f"id-{s}") for s in "ABCD"]


@pytest.fixture
def abcd_store(repo, abcd):
    repo.write(abcd)
    return EntryStore(repo)


@pytest.fixture
def client(data_path):
    app = create_app(Settings(DATA_PATH=data_path))
    with TestClient(app) as c:
        yield c

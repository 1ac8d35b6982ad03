# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from study_tracker.config import Settings
from study_tracker.main import create_app
from study_tracker.services.kv_store import MemoryStore
from study_tracker.services.ledger import Ledger
from study_tracker.services.storage import CourseStore
from study_tracker.services.writer import SnapshotWriter


class FailingStore:
    """Key-value store whose reads and/or writes blow up."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.data: dict[str, str] = {}

    async def get(self, key):
        if self.fail_get:
            raise OSError("read failed")
        return self.data.get(key)

    async def set(self, key, value):
        if self.fail_set:
            raise OSError("write failed")
        self.data[key] = value


@pytest.fixture()
def kv():
    return MemoryStore()


@pytest.fixture()
def store(kv):
    return CourseStore(kv)


@pytest.fixture()
def ledger(store):
    # No running loop in plain tests, so every save completes inline.
    return Ledger(store, SnapshotWriter(store))


@pytest.fixture()
def client(kv):
    app = create_app(Settings(store_backend="memory"), kv=kv)
    with TestClient(app) as c:
        yield c

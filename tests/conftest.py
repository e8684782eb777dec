from datetime import date
import pytest
from fastapi.testclient import TestClient
from hms.core.exceptions import StorageUnavailable
from hms.core.security import create_token
from hms.main import app
from hms.platform.adapters.kv_memory import InMemoryStorage
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store
from hms.store.seed import default_seed

TODAY = date(2025, 12, 20)


class FlakyStorage(InMemoryStorage):
    """In-memory storage whose writes can be switched off."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False
        self.fail_on: set[str] = set()

    def set(self, key: str, value: str) -> None:
        if self.fail_writes or key in self.fail_on:
            raise StorageUnavailable(f"could not write {key}")
        super().set(key, value)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def store(storage):
    return EntityStore.load(storage, default_seed(today=TODAY), key_prefix="ls_")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def clerk_headers():
    token = create_token("clerk-1", "clerk", email="clerk@hospital.test", name="Clerk One")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_token("chief-1", "admin", email="chief@hospital.test", name="Chief")
    return {"Authorization": f"Bearer {token}"}

import os
import tempfile

# Бэкенд при импорте создаёт БД и каталог хранилища, уводим их во временный каталог
_tmp = tempfile.mkdtemp()
os.environ.setdefault("FILEDASH_DATABASE_URL", f"sqlite:///{_tmp}/files.db")
os.environ.setdefault("FILEDASH_STORAGE_DIR", os.path.join(_tmp, "storage"))

import httpx
import pytest
from fastapi.testclient import TestClient

from filedash.backend.database import Base
from filedash.backend.main import app, get_db
from filedash.client import BackendClient
from filedash.dashboard import Dashboard
from filedash.mutations import ConfirmationDialog

from .helpers import RecordingSink, engine, override_get_db

app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(test_db):
    return TestClient(app)


@pytest.fixture
def backend(test_db):
    transport = httpx.ASGITransport(app=app)
    http = httpx.AsyncClient(transport=transport, base_url="http://testserver")
    return BackendClient(base_url="http://testserver", client=http)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def dashboard(backend, sink):
    return Dashboard(
        client=backend,
        sink=sink,
        delete_prompt=ConfirmationDialog(),
        cleanup_prompt=ConfirmationDialog(),
        settle_delay=0,
    )

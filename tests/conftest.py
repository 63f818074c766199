import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.student.store import StudentStore
from app.services.student.student import StudentService
from app.services.student.uploads import UploadManager


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATA_FILE=tmp_path / "data" / "students.json",
        UPLOAD_DIR=tmp_path / "data" / "uploads",
        ORPHAN_SWEEP_ENABLED=False,
    )


@pytest.fixture
def store(settings):
    return StudentStore(settings.DATA_FILE)


@pytest.fixture
def uploads(settings):
    manager = UploadManager(settings.UPLOAD_DIR)
    manager.ensure_dir()
    return manager


@pytest.fixture
def service(store, uploads):
    return StudentService(store, uploads)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client

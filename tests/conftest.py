import pytest
from fastapi.testclient import TestClient

from app.factory import create_app
from app.settings import Settings
from domain.errors import StoreUnavailable
from infra.storage.object_store import LocalObjectStore

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class FailingStore:
    backend = "failing"

    def __init__(self):
        self.calls = 0

    def put_object(self, key, data, content_type, metadata):
        self.calls += 1
        raise ConnectionError("object store unreachable")

    def exists(self, key):
        return False

    def ping(self):
        raise StoreUnavailable("Resume storage unavailable: object store unreachable")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        STORAGE_DIR=str(tmp_path / "resumes"),
        RESUME_STORAGE_TYPE="local",
        API_PREFIX="/api",
        ALLOW_STATUS_REDECISION=True,
    )


@pytest.fixture
def store(settings):
    return LocalObjectStore(settings.STORAGE_DIR)


@pytest.fixture
def app(settings, store):
    return create_app(settings, object_store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_job(client):
    def _make(title="Backend Engineer", description="Build APIs", **extra):
        body = {"title": title, "description": description, **extra}
        resp = client.post("/api/jobs", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["job"]
    return _make


@pytest.fixture
def submit(client):
    def _submit(job=None, resume=None, **fields):
        data = {"fullName": "Ada Lovelace", "email": "ada@example.com"}
        if job is not None:
            data["jobId"] = job["jobId"]
            data["jobTitle"] = job["title"]
        data.update({k: str(v) for k, v in fields.items()})
        files = {"resumeFile": resume} if resume is not None else None
        return client.post("/api/applications", data=data, files=files)
    return _submit

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from storagehub.config import Settings
from storagehub.context import AppContext
from storagehub.database import Base, make_session_factory
from storagehub.drive import DriveError
from storagehub.main import create_app


class FakeDrive:
    """Stands in for the Cloudinary client; records what it was sent."""

    def __init__(self, fail=False):
        self.fail = fail
        self.uploads = []
        self.deleted = []

    def upload(self, path, name, mime_type=None):
        with open(path, "rb") as fh:
            data = fh.read()
        if self.fail:
            raise DriveError("quota exceeded")
        self.uploads.append((name, mime_type, data))
        return f"obj-{len(self.uploads)}"

    def delete(self, object_id):
        self.deleted.append(object_id)


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url="sqlite://", upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


def make_client(settings, engine, drive=None, **client_options):
    context = AppContext.from_settings(settings, engine=engine, drive=drive)
    return TestClient(create_app(context=context), **client_options)


@pytest.fixture
def client(settings, engine):
    return make_client(settings, engine)


@pytest.fixture
def drive():
    return FakeDrive()


@pytest.fixture
def drive_client(settings, engine, drive):
    return make_client(settings, engine, drive)


@pytest.fixture
def session(engine):
    db = make_session_factory(engine)()
    yield db
    db.close()


@pytest.fixture
def alice(client):
    resp = client.post("/api/signup", json={"username": "alice", "email": "alice@example.com", "password": "pw1"})
    return resp.json()["user"]


@pytest.fixture
def bob(client):
    resp = client.post("/api/signup", json={"username": "bob", "email": "bob@example.com", "password": "pw2"})
    return resp.json()["user"]

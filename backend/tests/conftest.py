"""
Shared fixtures: SQLite in place of PostgreSQL, a recording stand-in for
the Redis pipeline and the analysis worker, and a TestClient wired to them.
"""

import os
import tempfile

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("INGESTION_API_KEY", "test-secret")
os.environ.setdefault("MEDIA_STORAGE_ROOT", tempfile.mkdtemp(prefix="emotion-media-"))

import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  # pylint: disable=unused-import
from app.core.cache import get_redis
from app.core.database import Base, get_db
from app.core.deps import get_analysis_worker, get_file_storage
from app.core.file_storage import FileStorageService
from app.core.security import StaticTokenVerifier, get_credential_verifier
from main import app as fastapi_app


TEST_TOKEN = "test-secret"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_TOKEN}"}


class RecordingPipeline:
    """Queues HSET calls and applies them on execute, like a redis-py pipeline"""

    def __init__(self, cache: "RecordingRedis"):
        self._cache = cache
        self._commands = []

    def hset(self, name, key=None, value=None, mapping=None):
        fields = dict(mapping or {})
        if key is not None:
            fields[key] = value
        self._commands.append((name, fields))
        return self

    def execute(self):
        self._cache.pipelines_executed += 1
        if self._cache.fail_pipeline:
            raise redis.ConnectionError("connection lost mid-pipeline")
        results = []
        for name, fields in self._commands:
            self._cache.hashes.setdefault(name, {}).update(fields)
            results.append(len(fields))
        self._commands = []
        return results


class RecordingRedis:
    """Holds hashes in memory and can be told to fail pipelines"""

    def __init__(self):
        self.hashes = {}
        self.fail_pipeline = False
        self.pipelines_executed = 0

    def pipeline(self, transaction=True):  # pylint: disable=unused-argument
        return RecordingPipeline(self)

    def ping(self):
        return True


class RecordingWorker:
    """Records dispatched videos instead of calling the analysis worker"""

    def __init__(self):
        self.dispatched = []
        self.error = None

    async def dispatch(self, video_id, filename, file_data, mime_type="video/mp4"):
        if self.error is not None:
            raise self.error
        self.dispatched.append({
            "video_id": video_id,
            "filename": filename,
            "size": len(file_data),
            "mime_type": mime_type,
        })


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def cache():
    return RecordingRedis()


@pytest.fixture
def worker():
    return RecordingWorker()


@pytest.fixture
def file_storage(tmp_path):
    return FileStorageService(str(tmp_path / "media"))


@pytest.fixture
def client(session_factory, cache, worker, file_storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_redis] = lambda: cache
    fastapi_app.dependency_overrides[get_analysis_worker] = lambda: worker
    fastapi_app.dependency_overrides[get_file_storage] = lambda: file_storage
    fastapi_app.dependency_overrides[get_credential_verifier] = lambda: StaticTokenVerifier(TEST_TOKEN)
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return dict(AUTH_HEADERS)

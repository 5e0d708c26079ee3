import os
import tempfile

# Keep the app's startup side effects (assets dir, sqlite file) out of the working tree
os.environ.setdefault("ASSETS_ROOT", tempfile.mkdtemp(prefix="tubely-assets-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tubely.auth import create_access_token, hash_password
from tubely.config import Settings, get_settings
from tubely.database import Base, get_db
from tubely.main import app
from tubely.models import User, Video
from tubely.services.storage import get_storage

CDN_HOST = "d111111abcdef8.cloudfront.net"


class FakeStorage:
    """Stands in for ObjectStorage; keeps what was uploaded, keyed by object key."""

    def __init__(self):
        self.bucket = "tubely-test"
        self.objects = {}

    def upload_file(self, key, file_path, content_type):
        with open(file_path, "rb") as f:
            self.objects[key] = (f.read(), content_type)


@pytest.fixture
def settings(tmp_path):
    assets = tmp_path / "assets"
    staging = tmp_path / "tmp"
    assets.mkdir()
    staging.mkdir()
    return Settings(
        _env_file=None,
        secret_key="test-secret",
        port=8091,
        assets_root=str(assets),
        tmp_dir=str(staging),
        s3_bucket="tubely-test",
        s3_cf_distribution=CDN_HOST,
        media_tool_timeout_seconds=5,
    )


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(db, settings, storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, email):
    user = User(email=email, password=hash_password("secret123"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def owner(db):
    return make_user(db, "owner@example.com")


@pytest.fixture
def stranger(db):
    return make_user(db, "stranger@example.com")


@pytest.fixture
def video(db, owner):
    v = Video(user_id=owner.id, title="Boots", description="A walk in the park")
    db.add(v)
    db.commit()
    db.refresh(v)
    return v


def auth_header(user, settings):
    return {"Authorization": f"Bearer {create_access_token(user.id, settings)}"}

import io
import os
import shutil
import tempfile

# Must be set before the application modules read their settings
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="homeforge-test-")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app, init_db
from core.config import settings
from core.database import Base, engine
from core.rate_limit import auth_limiter

ADMIN = {"username": "admin", "password": "admin-pass", "displayName": "Alex Admin"}
MEMBER = {"username": "sam", "password": "sam-pass", "displayName": "Sam Member"}


@pytest.fixture(autouse=True)
def fresh_state():
    """Empty schema with default spaces, an empty uploads dir and a fresh rate limiter."""
    Base.metadata.drop_all(bind=engine)
    shutil.rmtree(settings.UPLOADS_DIR, ignore_errors=True)
    os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
    init_db()
    auth_limiter.reset()
    yield


@pytest.fixture
def make_client():
    clients = []

    def _make():
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def admin_client(client):
    r = client.post("/api/auth/register", json=ADMIN)
    assert r.status_code == 201, r.text
    return client


@pytest.fixture
def member(admin_client):
    r = admin_client.post("/api/auth/register", json=MEMBER)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def member_client(member, make_client):
    c = make_client()
    r = c.post("/api/auth/login", json={"username": MEMBER["username"], "password": MEMBER["password"]})
    assert r.status_code == 200, r.text
    return c


@pytest.fixture
def project(admin_client):
    r = admin_client.post("/api/projects", json={"title": "Retile backsplash", "spaceId": "sp_kitchen"})
    assert r.status_code == 201, r.text
    return r.json()


def image_bytes(fmt="PNG", color="red", size=(48, 48)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def stored_files() -> list[str]:
    return sorted(os.listdir(settings.UPLOADS_DIR))

"""Fixtures communes — DB SQLite temporaire + client FastAPI avec token admin."""
import os
import sys
import tempfile

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Avant tout import de longboard_cms.database (l'engine lit DB_PATH à l'import)
os.environ["DB_PATH"] = os.path.join(tempfile.mkdtemp(prefix="longboard_cms_"), "test.db")
os.environ["ADMIN_TOKEN"] = "test-token"

import pytest
from fastapi.testclient import TestClient

ADMIN = {"X-Admin-Token": "test-token"}


@pytest.fixture
def db_reset():
    from longboard_cms.database import ENGINE, init_db
    from longboard_cms.models import Base
    Base.metadata.drop_all(bind=ENGINE)
    init_db()


@pytest.fixture
def client(db_reset):
    from longboard_cms.api.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(db_reset):
    from longboard_cms.database import new_session
    session = new_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_headers():
    return dict(ADMIN)


def create_page(client, **fields) -> dict:
    """Crée une page via l'API admin, retourne son JSON."""
    body = {"slug": "lezioni", "title": "Lezioni", "published": True, **fields}
    r = client.post("/api/admin/custom-pages", json=body, headers=ADMIN)
    assert r.status_code == 201, r.text
    return r.json()


def create_block(client, page_id: str, block_type: str, content=None, **extra) -> dict:
    body = {"type": block_type, **extra}
    if content is not None:
        body["contentJson"] = content
    r = client.post(f"/api/admin/custom-pages/{page_id}/blocks", json=body, headers=ADMIN)
    assert r.status_code == 201, r.text
    return r.json()

import os

# Environment defaults must be in place before the app (and its Settings) is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("AUTH_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from catalog_api import models  # noqa: E402,F401
from catalog_api.core.db import Base, create_db_engine  # noqa: E402
from catalog_api.core.deps import get_db  # noqa: E402
from catalog_api.main import app  # noqa: E402


@pytest.fixture()
def engine():
    # One in-memory database per test, shared by every connection through StaticPool.
    eng = create_db_engine("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


# -------------------------
# API factories
# -------------------------
@pytest.fixture()
def make_category(client):
    def _make(name: str = "Electronics", description: str = "Electronic devices") -> dict:
        r = client.post("/api/v1/categories", json={"name": name, "description": description})
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture()
def make_product(client):
    def _make(category_id: int, name: str = "iPhone 15", **overrides) -> dict:
        payload = {
            "name": name,
            "description": "Latest iPhone model",
            "basePrice": "999.99",
            "brand": "Apple",
            "categoryId": category_id,
        }
        payload.update(overrides)
        r = client.post("/api/v1/products", json=payload)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture()
def make_sku(client):
    def _make(product_id: int, sku_code: str = "IPHONE15-128-BLK", **overrides) -> dict:
        payload = {
            "skuCode": sku_code,
            "name": "iPhone 15 128GB Black",
            "attributes": "color=black;storage=128GB",
            "price": "999.99",
            "quantity": 50,
        }
        payload.update(overrides)
        r = client.post(f"/api/v1/products/{product_id}/skus", json=payload)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


# -------------------------
# Live service (optional)
# -------------------------
@pytest.fixture(scope="session")
def base_url() -> str:
    """
    Base URL of a running catalog-api, e.g. http://localhost:8002.
    HTTP smoke tests are skipped unless CATALOG_BASE_URL is set.
    """
    url = os.getenv("CATALOG_BASE_URL", "").strip()
    if not url:
        pytest.skip("CATALOG_BASE_URL not set; skipping tests against a live service")
    return url.rstrip("/")

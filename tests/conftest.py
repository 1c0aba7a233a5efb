import os

# Must be set before product_api builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from product_api.db.base import Base
from product_api.db.repository import ProductRepository
from product_api.db.session import SessionLocal, engine
from product_api.main import app


@pytest.fixture(autouse=True)
def _tables():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    """TestClient running the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repo(db_session):
    return ProductRepository(db_session)


@pytest.fixture()
def sample_product(repo):
    """A persisted, available product."""
    return repo.create(name="Monitor Led 42", price=300)

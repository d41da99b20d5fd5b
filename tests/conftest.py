# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-api-key"


@pytest.fixture
def settings():
    return Settings(API_KEY=API_KEY, SEED_DATA=True, MAX_PAGE_SIZE=50)


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    c = TestClient(app)
    c.headers.update({"X-API-Key": API_KEY})
    return c


@pytest.fixture
def anon_client(app):
    return TestClient(app)


@pytest.fixture
def new_product():
    return {
        "name": "Webcam HD",
        "description": "1080p webcam with privacy shutter.",
        "price": 59.99,
        "category": "Electronics",
        "inStock": True,
    }

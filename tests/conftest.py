import os
import sys

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEMO_DATA", "false")

# --- path to backend ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
BACKEND_DIR = os.path.join(BASE_DIR, "backend")
sys.path.insert(0, BACKEND_DIR)

from main import app  # noqa: E402
from auth import AuthClient  # noqa: E402
from database import Base  # noqa: E402
from errors import StoreError  # noqa: E402
from schemas import Car  # noqa: E402
from store import DataStore  # noqa: E402

# ------------------ engine ------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(bind=engine)
Base.metadata.create_all(bind=engine)


# ------------------ fixtures ------------------
@pytest.fixture(autouse=True)
def override_db(monkeypatch):
    monkeypatch.setattr("main.SessionLocal", TestingSessionLocal)
    yield
    # wipe tables after each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def store():
    return DataStore(TestingSessionLocal)


@pytest.fixture
def auth():
    return AuthClient(TestingSessionLocal)


@pytest.fixture
def add_car(store):
    categories = {}

    def _add(category="Luxury", **values):
        if category not in categories:
            categories[category] = store.insert("categories", {"name": category})["id"]
        row = {
            "brand": "Toyota",
            "model": "Alphard",
            "year": 2023,
            "color": "White",
            "price_per_day": 500000,
            "transmission": "automatic",
            "fuel_type": "petrol",
            "category_id": categories[category],
        }
        row.update(values)
        return store.insert("cars", row)

    return _add


def make_car(**values):
    data = {
        "id": "car-1",
        "brand": "Toyota",
        "model": "Alphard",
        "year": 2023,
        "color": "White",
        "price_per_day": 500000,
        "transmission": "automatic",
        "fuel_type": "petrol",
    }
    data.update(values)
    return Car(**data)


class RecordingStore:
    """Stand-in for DataStore that records inserts and can be made to fail."""

    def __init__(self, fail=False):
        self.fail = fail
        self.inserted = []

    def insert(self, table, values):
        if self.fail:
            raise StoreError("connection refused")
        row = dict(values, id=f"row-{len(self.inserted) + 1}")
        self.inserted.append((table, row))
        return row


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def car():
    return make_car()

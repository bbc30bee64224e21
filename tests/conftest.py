import os

os.environ.setdefault("APP_ENV", "test")

from datetime import datetime

import mongomock
import pytest
from fastapi.testclient import TestClient

from database import get_collection
from main import app


def make_record(title, price, month, *, sold=False, category=None, description=None, day=15):
    return {
        "title": title,
        "description": description,
        "price": price,
        "category": category,
        "dateOfSale": datetime(2024, month, day, 12, 0, 0),
        "sold": sold,
    }


SAMPLE_RECORDS = [
    make_record("Mens Casual Slim Fit", 15.99, 3, sold=True, category="men's clothing", description="Cotton tee"),
    make_record("WD 2TB Elements Drive", 64.0, 3, sold=False, category="electronics", description="USB 3.0 portable storage"),
    make_record("Samsung 49-Inch Monitor", 999.99, 3, sold=True, category="electronics", description="Curved gaming screen"),
    make_record("Solid Gold Petite Micropave", 168.0, 3, sold=True, category="jewelery", description="Gold ring"),
    make_record("Rain Jacket", 100.5, 3, sold=True, category="women's clothing", description="Lightweight hooded jacket"),
    make_record("Backpack", 109.95, 3, sold=False, category=None, description="Fits 15 inch laptops"),
    make_record("SanDisk SSD PLUS 1TB", 109.0, 7, sold=True, category="electronics", description="Internal SSD"),
    make_record("Opna Short Sleeve", 7.95, 7, sold=False, category="women's clothing", description="Moisture wicking"),
]


@pytest.fixture
def collection():
    return mongomock.MongoClient().db.transaction


@pytest.fixture
def seeded(collection):
    collection.insert_many([dict(record) for record in SAMPLE_RECORDS])
    return collection


@pytest.fixture
def client(collection):
    app.dependency_overrides[get_collection] = lambda: collection
    yield TestClient(app)
    app.dependency_overrides.clear()

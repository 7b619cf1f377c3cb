"""Pytest configuration and fixtures."""

import os

# Console logging only while testing
os.environ["LOG_DIR"] = ""
os.environ.setdefault("APP_TIMEZONE", "UTC")

import pytest
from datetime import timedelta
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from database import Database
from main import create_app
from models.ingredient import Ingredient
from models.inventory_batch import InventoryBatch
from utils.clock import now, today

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    """A fresh in-memory database per test."""
    database = Database(TEST_DATABASE_URL).connect()
    yield database
    database.close()


@pytest.fixture(scope="function")
def db_session(database: Database) -> Generator[Session, None, None]:
    with database.session_scope() as session:
        yield session


@pytest.fixture(scope="function")
def client(database: Database) -> Generator[TestClient, None, None]:
    """Test client for an app bound to the test database."""
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def milk(db_session: Session) -> Ingredient:
    stamp = now()
    ingredient = Ingredient(name="Milk", required_amount=20, unit="liters", created_at=stamp, modified_at=stamp)
    db_session.add(ingredient)
    db_session.commit()
    db_session.refresh(ingredient)
    return ingredient


@pytest.fixture
def milk_batch(db_session: Session, milk: Ingredient) -> InventoryBatch:
    stamp = now()
    batch = InventoryBatch(
        ingredient_id=milk.id,
        initial_amount=5,
        current_amount=5,
        expiration_date=today() + timedelta(days=10),
        total_cost=12.5,
        created_at=stamp,
        modified_at=stamp,
    )
    db_session.add(batch)
    db_session.commit()
    db_session.refresh(batch)
    return batch

from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from streamlit.testing.v1 import AppTest

import database
import expense_service as service
from database import get_db, init_db
from server import app

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def page(engine, monkeypatch):
    """The Streamlit page wired to the in-memory database."""
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(
        database, "SessionLocal", sessionmaker(autocommit=False, autoflush=False, bind=engine)
    )
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception
    return at


@pytest.fixture
def sample_expenses(db_session):
    rows = [
        ("Food", 450.0, date(2025, 8, 1), "Lunch at Starbucks with friends"),
        ("Bills", 50.0, date(2025, 8, 3), "Water bill"),
        ("Transportation", 120.0, date(2025, 7, 20), "Uber to airport"),
    ]
    return [
        service.create_expense(db_session, category, amount, expense_date, description)
        for category, amount, expense_date, description in rows
    ]

"""Pytest configuration and fixtures for TaskFlow tests."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from taskflow.api import create_app
from taskflow.config import DatabaseSettings, ServerSettings, TaskflowSettings
from taskflow.database import build_engine, create_db_and_tables
from taskflow.services import TaskStore


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir) / "tasks.db"


@pytest.fixture
def test_settings(temp_db_path):
    """Settings pointing at a temporary database, without a route prefix."""
    return TaskflowSettings(
        database=DatabaseSettings(url=f"sqlite:///{temp_db_path}"),
        server=ServerSettings(api_prefix=""),
    )


@pytest.fixture
def temp_engine(test_settings):
    """Engine on the temporary database with all tables created."""
    engine = build_engine(test_settings.database)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_session(temp_engine):
    """Database session on the temporary database."""
    with Session(temp_engine) as session:
        yield session


@pytest.fixture
def store(temp_engine):
    """Task store on the temporary database."""
    return TaskStore(temp_engine)


@pytest.fixture
def app(store, test_settings):
    """Task API application serving the temporary store."""
    return create_app(store=store, settings=test_settings)


@pytest.fixture
def api_client(app):
    """FastAPI test client."""
    with TestClient(app) as client:
        yield client

"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.database import get_db, create_tables, drop_tables
from backend.main import app

SQLALCHEMY_DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections."""
    test_engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=test_engine)
    yield test_engine
    drop_tables(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    """Database session bound to the test engine."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(engine):
    """API client whose requests use the test database."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_district():
    """Payload for a sample district."""
    return {
        "name": "Garut",
        "province": "West Java",
        "latitude": -7.2279,
        "longitude": 107.9087,
        "elevation": 717.0,
        "slope_angle": 24.5,
        "soil_type": "andosol"
    }


@pytest.fixture
def sample_weather_data():
    """Payloads for two days of weather observations (district id filled in by tests)."""
    return [
        {
            "date": "2024-01-15",
            "rainfall": 85.5,
            "humidity": 92.0,
            "temperature": 24.0,
            "wind_speed": 12.5
        },
        {
            "date": "2024-01-16",
            "rainfall": 40.2,
            "humidity": 88.0,
            "temperature": 25.5,
            "wind_speed": 8.0
        }
    ]


@pytest.fixture
def sample_historical_disaster():
    """Payload for a historical landslide (district id filled in by tests)."""
    return {
        "disaster_type": "landslide",
        "date": "2023-12-02",
        "severity_score": 7,
        "casualties": 3,
        "economic_loss": 1250000000.50,
        "description": "Slope failure after three days of heavy rain"
    }


@pytest.fixture
def sample_task():
    return {"title": "Check rain gauges", "description": "Visit the upstream stations"}


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        # Mark tests with 'integration' in the name as integration tests
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)

        # Mark tests with 'slow' in the name as slow tests
        if "slow" in item.name:
            item.add_marker(pytest.mark.slow)

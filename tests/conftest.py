import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
_test_db_dir = tempfile.mkdtemp()
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_db_dir, 'test_metricmeta.db')}"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["FRONTEND_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from metricmeta.api.deps import get_db
from metricmeta.db.base import Base
from metricmeta.db import models  # noqa: F401  registers tables on Base.metadata
from metricmeta.main import create_app


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh SQLite database for each test."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_engine = create_engine(
        f"sqlite:///{test_db_path}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=test_engine)

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()
        try:
            os.remove(test_db_path)
            os.rmdir(temp_db_dir)
        except OSError as e:
            print(f"Cleanup failed: {e}")


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def recorded_errors() -> list:
    """(error, log_context) pairs handed to the error recorder."""
    return []


@pytest.fixture(scope="function")
def app(db_session, recorded_errors):
    """Application with a recording error recorder and the test database."""

    def recorder(error, log_context):
        recorded_errors.append((error, log_context))

    application = create_app(recorder=recorder)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app):
    """Test client that returns 500 responses instead of re-raising."""
    return TestClient(app, raise_server_exceptions=False)

"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities and row factories, see tests/__init__.py
"""

import os
import pytest

# Force the log channel so no test ever reaches Firebase
os.environ.setdefault("NOTIFICATION_DRY_RUN", "true")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring PostgreSQL (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_session():
    """In-memory SQLite session with all tables created."""
    from tests import create_test_session, close_test_session

    session = create_test_session()
    yield session
    close_test_session(session)


@pytest.fixture(scope="session")
def postgres_url():
    """URL of a real PostgreSQL for `db`-marked tests."""
    url = os.environ.get("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not set")
    return url

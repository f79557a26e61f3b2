"""Root pytest configuration for shared markers."""

import os

# The API must not try to reach PostgreSQL during unit tests
os.environ["DATABASE_URL"] = ""
os.environ.setdefault("JWT_SECRET", "test-secret-for-unit-tests")


def pytest_configure(config):
    """Register custom markers used across test directories."""
    config.addinivalue_line(
        "markers", "requires_database: mark test as requiring a PostgreSQL DATABASE_URL"
    )

"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at a throwaway in-memory SQLite database before anything imports it.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-key-with-at-least-32-bytes!"
os.environ["LOG_LEVEL"] = "WARNING"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from domain.models import Base, engine  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Every test starts from empty tables"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

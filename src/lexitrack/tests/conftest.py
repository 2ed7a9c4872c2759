"""Test configuration."""
import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from lexitrack.models.base import drop_db, init_db


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Create fresh tables before each test."""
    init_db()

    yield

    drop_db()

"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.config import Settings  # noqa: E402
from src.directory.store import Directory  # noqa: E402
from src.index import create_app  # noqa: E402


@pytest.fixture
def directory():
    """Empty student and group registries"""
    return Directory()


@pytest.fixture
def app():
    """Application with default settings and an empty directory"""
    return create_app(Settings())


@pytest.fixture
def client(app):
    """Test client bound to a fresh application"""
    return TestClient(app)

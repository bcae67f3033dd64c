"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from core.storage import InMemoryStorageGateway
from services.transform_service import TransformService


@pytest.fixture(scope="function")
def api_storage():
    """In-memory storage shared by the app and the test"""
    return InMemoryStorageGateway(denied_containers=["private"])


@pytest.fixture(scope="function")
def client(api_storage):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh service to avoid state contamination.
    """
    from main import app

    app.state.transform_service = TransformService(storage=api_storage)

    # Create test client (no context manager to avoid running the lifespan)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    app.state.transform_service = None

"""
Fixtures for API tests.

The app is built around a mocked graph store and used without entering
its lifespan, so no database connection is attempted.
"""

import pytest
from fastapi.testclient import TestClient

from app import create_app


@pytest.fixture
def api_app(test_config, mock_graph_store):
    return create_app(test_config, mock_graph_store)


@pytest.fixture
def client(api_app):
    return TestClient(api_app, raise_server_exceptions=False)

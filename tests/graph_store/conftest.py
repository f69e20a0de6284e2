"""
Shared test fixtures for graph store tests.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from syllabus_graph.core.graph_store.neo4j_store import Neo4jGraphStore


@pytest.fixture
def neo4j_store():
    """Create Neo4j store for testing."""
    return Neo4jGraphStore(
        uri="bolt://localhost:7687",
        username="neo4j",
        password="password",
        database="neo4j",
    )


def create_mock_session():
    """Create a properly configured mock session for async context manager."""
    mock_session = AsyncMock()
    mock_session_context = MagicMock()
    mock_session_context.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session_context.__aexit__ = AsyncMock(return_value=None)
    return mock_session, mock_session_context


@pytest.fixture
def mock_driver():
    """Driver mock with a single reusable session."""
    driver = MagicMock()
    driver.verify_connectivity = AsyncMock()
    driver.close = AsyncMock()
    session, session_context = create_mock_session()
    driver.session = MagicMock(return_value=session_context)
    driver.mock_session = session
    return driver

"""
Shared test fixtures.
"""

from unittest.mock import AsyncMock

import pytest

from syllabus_graph.config import Config, Neo4jConfig
from syllabus_graph.core.graph_store.base import GraphStore


@pytest.fixture
def test_config() -> Config:
    """Configuration with fixed values, independent of the environment."""
    return Config(
        neo4j=Neo4jConfig(uri="bolt://localhost:7687", username="neo4j", password="secret"),
    )


@pytest.fixture
def mock_graph_store():
    """Graph store whose reads and writes return no records unless told otherwise."""
    store = AsyncMock(spec=GraphStore)
    store.execute_read.return_value = []
    store.execute_write.return_value = []
    store.health_check.return_value = True
    return store

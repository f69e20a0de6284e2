"""
Factory for creating graph store backends.
"""

from syllabus_graph.config import Config
from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.core.graph_store.neo4j_store import Neo4jGraphStore


class GraphStoreFactory:
    """Factory for creating graph store backends from configuration."""

    @staticmethod
    def create(config: Config) -> GraphStore:
        """
        Create graph store from configuration.

        Args:
            config: Main configuration object

        Returns:
            Graph store instance
        """
        return Neo4jGraphStore(
            uri=config.neo4j.uri,
            username=config.neo4j.username,
            password=config.neo4j.password,
            database=config.neo4j.database,
            enable_query_logging=config.logging.enable_query_logging,
        )

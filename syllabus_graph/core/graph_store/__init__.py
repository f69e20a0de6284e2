"""
Graph store implementations for Syllabus Graph.

Available backends:
- Neo4jGraphStore: async Neo4j driver
"""

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.core.graph_store.factory import GraphStoreFactory
from syllabus_graph.core.graph_store.neo4j_store import Neo4jGraphStore

__all__ = [
    "GraphStore",
    "GraphStoreFactory",
    "Neo4jGraphStore",
]

"""Fixtures for service tests.

`concept_store` is an in-memory stand-in for Neo4j that understands the
statements used by the hierarchy importer, the graph validator and the
syllabus tree read, so an import can be followed by validation without a
database.
"""

from collections import Counter
from typing import Any

import pytest

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.services import concept_service, graph_validator, hierarchy_importer


class InMemoryConceptStore(GraphStore):
    """Concept nodes and CONTAINS edges held in dicts."""

    def __init__(self):
        self.concepts: dict[str, dict[str, Any]] = {}
        self.contains: set[tuple[str, str]] = set()
        self.writes: list[tuple[str, dict]] = []
        self.fail_on_write: int | None = None

    async def connect(self) -> None:
        pass

    async def initialize(self) -> None:
        pass

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    async def execute_write(self, cypher: str, params: dict | None = None) -> list[dict]:
        params = params or {}
        self.writes.append((cypher, params))
        if self.fail_on_write is not None and len(self.writes) > self.fail_on_write:
            raise RuntimeError("write failed")

        if cypher == hierarchy_importer.UPSERT_CONCEPT:
            node = self.concepts.setdefault(params["id"], {"id": params["id"], "createdAt": "t0"})
            node.update(name=params["name"], type=params["type"])
            return [{"id": params["id"]}]

        if cypher == hierarchy_importer.UPSERT_CONTAINS:
            parent, child = params["parentId"], params["childId"]
            if parent not in self.concepts or child not in self.concepts:
                return []
            self.contains.add((parent, child))
            return [{"parentId": parent, "childId": child}]

        raise AssertionError(f"Unexpected write: {cypher}")

    async def execute_read(self, cypher: str, params: dict | None = None) -> list[dict]:
        params = params or {}

        if cypher == graph_validator.COUNT_CONCEPTS:
            return [{"count": len(self.concepts)}]
        if cypher == graph_validator.COUNT_CONTAINS:
            return [{"count": len(self.contains)}]
        if cypher == graph_validator.FIND_ROOT:
            root = self.concepts.get(params["rootId"])
            return [{"name": root["name"], "type": root["type"]}] if root else []
        if cypher == graph_validator.TYPE_DISTRIBUTION:
            counts = Counter(c["type"] for c in self.concepts.values())
            rows = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
            return [{"type": t, "count": n} for t, n in rows]
        if cypher == graph_validator.MAX_DEPTH:
            depth = self._depth(params["rootId"])
            return [{"depth": depth}] if depth else []
        if cypher == graph_validator.MULTI_PARENT:
            parents = Counter(child for _, child in self.contains)
            return [{"id": i} for i in sorted(i for i, n in parents.items() if n > 1)]

        if cypher == concept_service.ALL_CONCEPTS:
            rows = sorted(self.concepts.values(), key=lambda c: (c["type"], c["name"]))
            return [{"concept": dict(c)} for c in rows]
        if cypher == concept_service.ALL_CONTAINS:
            return [{"parentId": p, "childId": c} for p, c in sorted(self.contains)]

        raise AssertionError(f"Unexpected read: {cypher}")

    def _depth(self, node_id: str) -> int:
        children = [c for p, c in self.contains if p == node_id]
        return max((1 + self._depth(c) for c in children), default=0)


@pytest.fixture
def concept_store() -> InMemoryConceptStore:
    return InMemoryConceptStore()

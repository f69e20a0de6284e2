"""
Graph Validator - read-only sanity checks over the imported concept graph.
"""

from pydantic import BaseModel, Field

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

COUNT_CONCEPTS = "MATCH (c:Concept) RETURN count(c) AS count"

COUNT_CONTAINS = "MATCH (:Concept)-[:CONTAINS]->(:Concept) RETURN count(*) AS count"

FIND_ROOT = "MATCH (c:Concept {id: $rootId}) RETURN c.name AS name, c.type AS type"

TYPE_DISTRIBUTION = """
MATCH (c:Concept)
RETURN c.type AS type, count(c) AS count
ORDER BY count DESC, type
"""

MAX_DEPTH = """
MATCH p = (root:Concept {id: $rootId})-[:CONTAINS*]->(leaf:Concept)
WHERE NOT (leaf)-[:CONTAINS]->()
RETURN length(p) AS depth
ORDER BY depth DESC
LIMIT 1
"""

MULTI_PARENT = """
MATCH (p:Concept)-[:CONTAINS]->(c:Concept)
WITH c, count(p) AS parents
WHERE parents > 1
RETURN c.id AS id
ORDER BY id
"""


class GraphValidationReport(BaseModel):
    """Aggregate facts about the concept graph."""

    root_id: str
    concept_count: int = 0
    contains_count: int = 0
    root_exists: bool = False
    root_name: str | None = None
    root_type: str | None = None
    type_distribution: dict[str, int] = Field(default_factory=dict)
    max_depth: int | None = None
    multi_parent_ids: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Root present and every concept has at most one CONTAINS parent."""
        return self.root_exists and not self.multi_parent_ids


class GraphValidator:
    """Runs aggregate queries and reports on the concept graph."""

    def __init__(self, graph_store: GraphStore, root_id: str = "OLM001"):
        self.graph_store = graph_store
        self.root_id = root_id

    async def count_concepts(self) -> int:
        records = await self.graph_store.execute_read(COUNT_CONCEPTS)
        return records[0]["count"] if records else 0

    async def count_contains(self) -> int:
        records = await self.graph_store.execute_read(COUNT_CONTAINS)
        return records[0]["count"] if records else 0

    async def find_root(self) -> dict | None:
        records = await self.graph_store.execute_read(FIND_ROOT, {"rootId": self.root_id})
        return records[0] if records else None

    async def type_distribution(self) -> dict[str, int]:
        records = await self.graph_store.execute_read(TYPE_DISTRIBUTION)
        return {r["type"]: r["count"] for r in records}

    async def max_depth(self) -> int | None:
        records = await self.graph_store.execute_read(MAX_DEPTH, {"rootId": self.root_id})
        return records[0]["depth"] if records else None

    async def multi_parent_ids(self) -> list[str]:
        records = await self.graph_store.execute_read(MULTI_PARENT)
        return [r["id"] for r in records]

    async def validate(self) -> GraphValidationReport:
        """
        Run all checks.

        Returns:
            GraphValidationReport

        Raises:
            GraphStoreError: If any read fails
        """
        root = await self.find_root()
        report = GraphValidationReport(
            root_id=self.root_id,
            concept_count=await self.count_concepts(),
            contains_count=await self.count_contains(),
            root_exists=root is not None,
            root_name=root["name"] if root else None,
            root_type=root["type"] if root else None,
            type_distribution=await self.type_distribution(),
            max_depth=await self.max_depth(),
            multi_parent_ids=await self.multi_parent_ids(),
        )

        logger.info(f"Total concepts: {report.concept_count}")
        logger.info(f"Total CONTAINS relationships: {report.contains_count}")
        if report.root_exists:
            logger.info(f"Root concept: {report.root_name} ({report.root_type})")
        else:
            logger.warning(f"Root concept {self.root_id} not found")
        for concept_type, count in report.type_distribution.items():
            logger.info(f"  {concept_type}: {count}")
        if report.max_depth is not None:
            logger.info(f"Maximum hierarchy depth: {report.max_depth}")
        if report.multi_parent_ids:
            logger.warning(
                f"Concepts with more than one CONTAINS parent: {', '.join(report.multi_parent_ids)}"
            )

        return report

"""
Grade/Topic Seeder - the grade-based view of the curriculum.

Seeds, under the curriculum root:
- Grade concepts (root CONTAINS grade) and Topic concepts (grade CONTAINS topic)
- Resource nodes that EXPLAIN their topic
- Topic HAS_PREREQUISITE edges to the particles the topic builds on
- Topic SAME_AS edges to other concepts with the topic's canonical name
- HAS_PREREQUISITE edges between particles

Every statement is a MERGE keyed by a stable id, so seeding twice is a no-op.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.models.base import GraphModel
from syllabus_graph.utils.exceptions import ValidationError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

UPSERT_UNDER_PARENT = """
MATCH (p:Concept {id: $parentId})
MERGE (c:Concept {id: $id})
SET c.name = $name,
    c.type = $type,
    c.description = $description,
    c.createdAt = coalesce(c.createdAt, datetime())
MERGE (p)-[:CONTAINS]->(c)
RETURN c.id AS id
"""

UPSERT_RESOURCE = """
MATCH (t:Concept {id: $topicId})
MERGE (r:Resource {resourceId: $resourceId})
SET r.title = $title,
    r.type = $type,
    r.url = $url,
    r.price = $price,
    r.grade = $grade,
    r.isPublic = true,
    r.createdAt = coalesce(r.createdAt, datetime())
MERGE (r)-[:EXPLAINS]->(t)
"""

LINK_PREREQUISITE = """
MATCH (c:Concept {id: $id})
MATCH (p:Concept {id: $prerequisiteId})
MERGE (c)-[:HAS_PREREQUISITE]->(p)
RETURN count(*) AS linked
"""

LINK_SAME_AS = """
MATCH (t:Concept {id: $topicId})
MATCH (other:Concept {name: $name})
WHERE other.id <> t.id
MERGE (t)-[:SAME_AS]->(other)
RETURN count(other) AS linked
"""


class ResourceSeed(GraphModel):
    resource_id: str
    title: str
    type: str = "Notes"
    url: str
    price: float = 0


class TopicSeed(GraphModel):
    id: str
    name: str
    description: str | None = None
    linked_concepts: list[str] = Field(default_factory=list)
    resources: list[ResourceSeed] = Field(default_factory=list)
    same_concept: str | None = None


class GradeSeed(GraphModel):
    id: str
    name: str
    description: str | None = None
    topics: list[TopicSeed] = Field(default_factory=list)


class PrerequisiteSeed(GraphModel):
    concept: str
    prerequisite: str


class GradeTopicData(GraphModel):
    """Contents of the grade/topic seed file."""

    grades: list[GradeSeed] = Field(default_factory=list)
    particle_prerequisites: list[PrerequisiteSeed] = Field(default_factory=list)


class SeedSummary(BaseModel):
    grades: int = 0
    topics: int = 0
    resources: int = 0
    prerequisites: int = 0
    same_as: int = 0


def load_grade_file(path: str | Path) -> GradeTopicData:
    """
    Read the grade/topic seed file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file content is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Grade file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            return GradeTopicData.model_validate(json.load(f))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise ValidationError(f"Invalid grade file {path}: {e}", {"path": str(path)}) from e


class GradeTopicSeeder:
    """Seeds grades, topics, resources and prerequisite links."""

    def __init__(self, graph_store: GraphStore, root_id: str = "OLM001"):
        self.graph_store = graph_store
        self.root_id = root_id

    async def seed_file(self, path: str | Path) -> SeedSummary:
        logger.info(f"Reading grade topics from {path}")
        return await self.seed(load_grade_file(path))

    async def seed(self, data: GradeTopicData) -> SeedSummary:
        """
        Seed all grade data.

        Raises:
            GraphStoreError: On the first failed write
        """
        summary = SeedSummary()

        for grade in data.grades:
            await self._upsert_concept(self.root_id, grade.id, grade.name, "Grade", grade.description)
            summary.grades += 1

            for topic in grade.topics:
                await self._upsert_concept(grade.id, topic.id, topic.name, "Topic", topic.description)
                summary.topics += 1

                for resource in topic.resources:
                    await self.graph_store.execute_write(
                        UPSERT_RESOURCE,
                        {
                            "topicId": topic.id,
                            "resourceId": resource.resource_id,
                            "title": resource.title,
                            "type": resource.type,
                            "url": resource.url,
                            "price": resource.price,
                            "grade": grade.name,
                        },
                    )
                    summary.resources += 1

                for linked_id in topic.linked_concepts:
                    summary.prerequisites += await self._link_prerequisite(topic.id, linked_id)

                if topic.same_concept:
                    records = await self.graph_store.execute_write(
                        LINK_SAME_AS, {"topicId": topic.id, "name": topic.same_concept}
                    )
                    summary.same_as += records[0]["linked"] if records else 0

        for link in data.particle_prerequisites:
            summary.prerequisites += await self._link_prerequisite(link.concept, link.prerequisite)

        logger.info(
            f"Seeded {summary.grades} grades, {summary.topics} topics, "
            f"{summary.resources} resources, {summary.prerequisites} prerequisites, "
            f"{summary.same_as} SAME_AS links"
        )
        return summary

    async def _upsert_concept(
        self, parent_id: str, concept_id: str, name: str, concept_type: str, description: str | None
    ) -> None:
        records = await self.graph_store.execute_write(
            UPSERT_UNDER_PARENT,
            {
                "parentId": parent_id,
                "id": concept_id,
                "name": name,
                "type": concept_type,
                "description": description,
            },
        )
        if not records:
            raise ValidationError(
                f"Cannot seed {concept_type} {concept_id}: parent {parent_id} not found",
                {"concept_id": concept_id, "parent_id": parent_id},
            )

    async def _link_prerequisite(self, concept_id: str, prerequisite_id: str) -> int:
        records = await self.graph_store.execute_write(
            LINK_PREREQUISITE, {"id": concept_id, "prerequisiteId": prerequisite_id}
        )
        linked = records[0]["linked"] if records else 0
        if not linked:
            logger.warning(f"Skipped prerequisite {concept_id} -> {prerequisite_id}: concept missing")
        return linked

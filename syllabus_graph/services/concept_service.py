"""
Concept Service - queries and mutations over curriculum concepts.

Handles:
- Lookups by id, layer, parent and children
- Create/update/delete with hierarchy layer rules
- HAS_PREREQUISITE links with cycle protection
- The nested syllabus tree over every CONTAINS edge
"""

from datetime import UTC, datetime
from typing import Any

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.models.concept import (
    Concept,
    ConceptType,
    SyllabusNode,
    SyllabusTree,
    can_contain,
)
from syllabus_graph.utils.exceptions import ConflictError, NotFoundError, ValidationError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

LIST_CONCEPTS = """
MATCH (c:Concept)
WHERE $type IS NULL OR c.type = $type
RETURN c {.*} AS concept
ORDER BY c.id
"""

GET_CONCEPT = "MATCH (c:Concept {id: $id}) RETURN c {.*} AS concept"

GET_CHILDREN = """
MATCH (:Concept {id: $id})-[:CONTAINS]->(c:Concept)
RETURN c {.*} AS concept
ORDER BY c.id
"""

GET_PARENT = """
MATCH (p:Concept)-[:CONTAINS]->(:Concept {id: $id})
RETURN p {.*} AS concept
LIMIT 1
"""

GET_PREREQUISITES = """
MATCH (:Concept {id: $id})-[:HAS_PREREQUISITE]->(p:Concept)
RETURN p {.*} AS concept
ORDER BY p.id
"""

CREATE_CONCEPT = """
CREATE (c:Concept {id: $id, name: $name, type: $type, createdAt: datetime()})
SET c.description = $description
WITH c
OPTIONAL MATCH (p:Concept {id: $parentId})
FOREACH (_ IN CASE WHEN p IS NULL THEN [] ELSE [1] END | MERGE (p)-[:CONTAINS]->(c))
RETURN c {.*} AS concept
"""

UPDATE_CONCEPT = """
MATCH (c:Concept {id: $id})
SET c.name = coalesce($name, c.name),
    c.type = coalesce($type, c.type),
    c.description = coalesce($description, c.description),
    c.updatedAt = datetime()
RETURN c {.*} AS concept
"""

DETACH_PARENT = """
MATCH (:Concept)-[r:CONTAINS]->(:Concept {id: $id})
DELETE r
"""

ATTACH_PARENT = """
MATCH (p:Concept {id: $parentId})
MATCH (c:Concept {id: $id})
MERGE (p)-[:CONTAINS]->(c)
"""

IS_DESCENDANT = """
MATCH (:Concept {id: $id})-[:CONTAINS*]->(d:Concept {id: $candidateId})
RETURN count(d) > 0 AS found
"""

ALL_CONCEPTS = """
MATCH (c:Concept)
RETURN c {.*} AS concept
ORDER BY c.type, c.name
"""

ALL_CONTAINS = """
MATCH (p:Concept)-[:CONTAINS]->(c:Concept)
RETURN p.id AS parentId, c.id AS childId
"""

# Sibling order in the syllabus view; layers not listed sort last.
SIBLING_ORDER = ["Matter", "Grade", "Molecule", "Topic", "Atom", "Particle"]

DELETE_CONCEPT = "MATCH (c:Concept {id: $id}) DETACH DELETE c"

HAS_PREREQUISITE = """
MATCH (:Concept {id: $id})-[r:HAS_PREREQUISITE]->(:Concept {id: $prerequisiteId})
RETURN count(r) > 0 AS found
"""

REQUIRES_TRANSITIVELY = """
MATCH (:Concept {id: $prerequisiteId})-[:HAS_PREREQUISITE*]->(c:Concept {id: $id})
RETURN count(c) > 0 AS found
"""

ADD_PREREQUISITE = """
MATCH (c:Concept {id: $id})
MATCH (p:Concept {id: $prerequisiteId})
MERGE (c)-[:HAS_PREREQUISITE]->(p)
"""


def _concepts(records: list[dict[str, Any]]) -> list[Concept]:
    return [Concept.model_validate(r["concept"]) for r in records]


def _sibling_key(node: SyllabusNode) -> tuple[int, str]:
    layer = node.type.value
    rank = SIBLING_ORDER.index(layer) if layer in SIBLING_ORDER else len(SIBLING_ORDER)
    return rank, node.name


class ConceptService:
    """CRUD and traversal over Concept nodes."""

    def __init__(self, graph_store: GraphStore):
        self.graph_store = graph_store

    # QUERIES

    async def list_concepts(self, concept_type: ConceptType | None = None) -> list[Concept]:
        """List concepts, optionally restricted to one layer."""
        records = await self.graph_store.execute_read(
            LIST_CONCEPTS, {"type": concept_type.value if concept_type else None}
        )
        return _concepts(records)

    async def find_concept(self, concept_id: str) -> Concept | None:
        records = await self.graph_store.execute_read(GET_CONCEPT, {"id": concept_id})
        return Concept.model_validate(records[0]["concept"]) if records else None

    async def get_concept(self, concept_id: str) -> Concept:
        """
        Get a concept by id.

        Raises:
            NotFoundError: If no concept has this id
        """
        concept = await self.find_concept(concept_id)
        if concept is None:
            logger.warning(f"Concept not found: {concept_id}")
            raise NotFoundError(f"Concept with ID {concept_id} not found", {"concept_id": concept_id})
        return concept

    async def get_children(self, concept_id: str) -> list[Concept]:
        """Concepts directly CONTAINed by `concept_id`."""
        await self.get_concept(concept_id)
        records = await self.graph_store.execute_read(GET_CHILDREN, {"id": concept_id})
        return _concepts(records)

    async def get_parent(self, concept_id: str) -> Concept:
        """
        The CONTAINS parent of a concept.

        Raises:
            NotFoundError: If the concept is missing or is a root
        """
        await self.get_concept(concept_id)
        records = await self.graph_store.execute_read(GET_PARENT, {"id": concept_id})
        if not records:
            raise NotFoundError(
                f"Concept with ID {concept_id} has no parent", {"concept_id": concept_id}
            )
        return Concept.model_validate(records[0]["concept"])

    async def get_prerequisites(self, concept_id: str) -> list[Concept]:
        """Concepts that `concept_id` directly requires."""
        await self.get_concept(concept_id)
        records = await self.graph_store.execute_read(GET_PREREQUISITES, {"id": concept_id})
        return _concepts(records)

    async def get_syllabus_tree(self) -> SyllabusTree:
        """
        Build the nested syllabus from every concept and CONTAINS edge.

        Roots are concepts that no edge points at, in type then name order.
        Siblings are ordered by layer (see SIBLING_ORDER) and then by name.
        """
        concepts = _concepts(await self.graph_store.execute_read(ALL_CONCEPTS, {}))
        edges = await self.graph_store.execute_read(ALL_CONTAINS, {})
        logger.debug(f"Syllabus: {len(concepts)} concepts, {len(edges)} CONTAINS edges")

        by_id = {c.id: c for c in concepts}
        children: dict[str, list[str]] = {}
        for edge in edges:
            children.setdefault(edge["parentId"], []).append(edge["childId"])
        child_ids = {edge["childId"] for edge in edges}

        def build(concept: Concept, seen: frozenset[str]) -> SyllabusNode:
            seen = seen | {concept.id}
            nodes = [
                build(by_id[child_id], seen)
                for child_id in children.get(concept.id, [])
                if child_id in by_id and child_id not in seen
            ]
            nodes.sort(key=_sibling_key)
            return SyllabusNode(
                id=concept.id,
                name=concept.name,
                type=concept.type,
                description=concept.description,
                created_at=concept.created_at,
                children=nodes,
            )

        roots = [build(c, frozenset()) for c in concepts if c.id not in child_ids]
        logger.info(f"Built syllabus tree with {len(roots)} roots over {len(concepts)} concepts")
        return SyllabusTree(
            syllabus=roots,
            total_concepts=len(concepts),
            retrieved_at=datetime.now(UTC).isoformat(),
        )

    # MUTATIONS

    async def create_concept(
        self,
        concept_id: str,
        name: str,
        concept_type: ConceptType,
        description: str | None = None,
        parent_id: str | None = None,
    ) -> Concept:
        """
        Create a concept, optionally under a parent.

        Raises:
            ConflictError: If the id is taken
            NotFoundError: If the parent doesn't exist
            ValidationError: If the parent's layer cannot contain this layer
        """
        if await self.find_concept(concept_id) is not None:
            raise ConflictError(
                f"Concept with ID {concept_id} already exists", {"concept_id": concept_id}
            )

        if parent_id:
            parent = await self.get_concept(parent_id)
            self._check_layers(parent, concept_type)

        records = await self.graph_store.execute_write(
            CREATE_CONCEPT,
            {
                "id": concept_id,
                "name": name,
                "type": concept_type.value,
                "description": description,
                "parentId": parent_id,
            },
        )
        logger.info(f"Created concept {concept_id} ({concept_type.value})")
        return Concept.model_validate(records[0]["concept"])

    async def update_concept(self, concept_id: str, changes: dict[str, Any]) -> Concept:
        """
        Partially update a concept.

        Args:
            concept_id: Concept to update
            changes: Any of name, type, description, parent_id. A parent_id of
                None or "" detaches the concept from its parent.

        Raises:
            NotFoundError: If the concept or the new parent doesn't exist
            ValidationError: If the change breaks the hierarchy rules
        """
        current = await self.get_concept(concept_id)
        new_type = ConceptType(changes.get("type") or current.type)

        if "parent_id" in changes:
            parent_id = changes["parent_id"]
            if parent_id:
                await self._check_new_parent(concept_id, parent_id, new_type)
        elif new_type != current.type:
            parent = await self._find_parent(concept_id)
            if parent is not None:
                self._check_layers(parent, new_type)

        if new_type != current.type:
            for child in await self.get_children(concept_id):
                if not can_contain(new_type, child.type):
                    raise ValidationError(
                        f"A {new_type.value} cannot contain {child.type.value} {child.id}",
                        {"concept_id": concept_id, "child_id": child.id},
                    )

        records = await self.graph_store.execute_write(
            UPDATE_CONCEPT,
            {
                "id": concept_id,
                "name": changes.get("name"),
                "type": new_type.value,
                "description": changes.get("description"),
            },
        )

        if "parent_id" in changes:
            await self.graph_store.execute_write(DETACH_PARENT, {"id": concept_id})
            if changes["parent_id"]:
                await self.graph_store.execute_write(
                    ATTACH_PARENT, {"id": concept_id, "parentId": changes["parent_id"]}
                )
            logger.info(f"Re-parented concept {concept_id} to {changes['parent_id'] or 'none'}")

        logger.info(f"Updated concept {concept_id}")
        return Concept.model_validate(records[0]["concept"])

    async def delete_concept(self, concept_id: str) -> None:
        """
        Delete a concept and its edges. Children are left in place.

        Raises:
            NotFoundError: If the concept doesn't exist
        """
        await self.get_concept(concept_id)
        await self.graph_store.execute_write(DELETE_CONCEPT, {"id": concept_id})
        logger.info(f"Deleted concept {concept_id}")

    async def add_prerequisite(self, concept_id: str, prerequisite_id: str) -> None:
        """
        Record that `concept_id` requires `prerequisite_id`.

        Raises:
            NotFoundError: If either concept doesn't exist
            ValidationError: On self-links, duplicates or links that would close a cycle
        """
        await self.get_concept(concept_id)
        await self.get_concept(prerequisite_id)

        params = {"id": concept_id, "prerequisiteId": prerequisite_id}
        context = {"concept_id": concept_id, "prerequisite_id": prerequisite_id}

        if concept_id == prerequisite_id:
            raise ValidationError("A concept cannot be its own prerequisite", context)
        if await self._found(HAS_PREREQUISITE, params):
            raise ValidationError("Prerequisite relationship already exists", context)
        if await self._found(REQUIRES_TRANSITIVELY, params):
            raise ValidationError(
                f"Adding {prerequisite_id} as a prerequisite of {concept_id} would create a cycle",
                context,
            )

        await self.graph_store.execute_write(ADD_PREREQUISITE, params)
        logger.info(f"Added prerequisite {concept_id} -> {prerequisite_id}")

    # HELPER METHODS

    async def _find_parent(self, concept_id: str) -> Concept | None:
        records = await self.graph_store.execute_read(GET_PARENT, {"id": concept_id})
        return Concept.model_validate(records[0]["concept"]) if records else None

    async def _check_new_parent(
        self, concept_id: str, parent_id: str, concept_type: ConceptType
    ) -> None:
        context = {"concept_id": concept_id, "parent_id": parent_id}
        if parent_id == concept_id:
            raise ValidationError("A concept cannot contain itself", context)
        parent = await self.get_concept(parent_id)
        if await self._found(IS_DESCENDANT, {"id": concept_id, "candidateId": parent_id}):
            raise ValidationError(
                f"Concept {parent_id} is a descendant of {concept_id}", context
            )
        self._check_layers(parent, concept_type)

    async def _found(self, cypher: str, params: dict[str, Any]) -> bool:
        records = await self.graph_store.execute_read(cypher, params)
        return bool(records and records[0]["found"])

    @staticmethod
    def _check_layers(parent: Concept, child_type: ConceptType) -> None:
        if not can_contain(parent.type, child_type):
            raise ValidationError(
                f"A {parent.type.value} cannot contain a {child_type.value}",
                {"parent_id": parent.id, "child_type": child_type.value},
            )

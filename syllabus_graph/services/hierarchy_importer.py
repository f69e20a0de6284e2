"""
Concept Hierarchy Importer - loads a nested curriculum description into the graph.

The hierarchy file looks like:

    {"hierarchy": {"id": "OLM001", "name": "...", "layer": "Subject",
                   "children": [...], "particles": [...]}}

Import happens in two passes:
1. Flatten the tree depth-first into concepts and CONTAINS links
2. Upsert every concept, then every link, one statement at a time

Both upserts are MERGE-based, so re-running an import leaves node and
edge counts unchanged. The first failed write aborts the run.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.models.concept import (
    ConceptType,
    ContainsLink,
    FlatConcept,
    HierarchyNode,
    ImportSummary,
    can_contain,
)
from syllabus_graph.utils.exceptions import GraphStoreError, ValidationError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

UPSERT_CONCEPT = """
MERGE (c:Concept {id: $id})
SET c.name = $name,
    c.type = $type,
    c.createdAt = coalesce(c.createdAt, datetime())
RETURN c.id AS id
"""

UPSERT_CONTAINS = """
MATCH (parent:Concept {id: $parentId})
MATCH (child:Concept {id: $childId})
MERGE (parent)-[:CONTAINS]->(child)
RETURN parent.id AS parentId, child.id AS childId
"""


def parse_hierarchy(data: dict[str, Any]) -> HierarchyNode:
    """
    Parse hierarchy data into a HierarchyNode tree.

    Accepts either the file layout ({"hierarchy": {...}}) or a bare root node.

    Raises:
        ValidationError: If the data does not describe a hierarchy
    """
    root = data.get("hierarchy", data) if isinstance(data, dict) else data
    try:
        return HierarchyNode.model_validate(root)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid hierarchy data: {e}") from e


def load_hierarchy_file(path: str | Path) -> HierarchyNode:
    """
    Read and parse a hierarchy JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file is not valid hierarchy JSON
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Hierarchy file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Hierarchy file is not valid JSON: {e}", {"path": str(path)}) from e

    return parse_hierarchy(data)


def _layer(node_id: str, layer: str) -> ConceptType:
    try:
        return ConceptType(layer)
    except ValueError as e:
        raise ValidationError(
            f"Concept {node_id} has unknown layer '{layer}'",
            {"concept_id": node_id, "layer": layer},
        ) from e


def flatten_hierarchy(root: HierarchyNode) -> tuple[list[FlatConcept], list[ContainsLink]]:
    """
    Flatten a hierarchy into concept and CONTAINS link lists.

    Depth-first, pre-order: a node is emitted before its children, and
    children before the particles of an Atom. Particles become Particle
    concepts one level below their Atom.

    Args:
        root: Root of the hierarchy

    Returns:
        (concepts, links) in traversal order

    Raises:
        ValidationError: On unknown layers, duplicate ids or illegal nesting
    """
    concepts: list[FlatConcept] = []
    links: list[ContainsLink] = []
    seen: set[str] = set()

    def add(concept_id: str, name: str, layer: ConceptType, parent: FlatConcept | None):
        if concept_id in seen:
            raise ValidationError(
                f"Duplicate concept id in hierarchy: {concept_id}",
                {"concept_id": concept_id},
            )
        if parent is not None and not can_contain(parent.layer, layer):
            raise ValidationError(
                f"A {parent.layer.value} cannot contain a {layer.value} "
                f"({parent.id} -> {concept_id})",
                {"parent_id": parent.id, "child_id": concept_id},
            )
        seen.add(concept_id)
        concept = FlatConcept(
            id=concept_id,
            name=name,
            layer=layer,
            parent_id=parent.id if parent else None,
        )
        concepts.append(concept)
        if parent is not None:
            links.append(ContainsLink(parent_id=parent.id, child_id=concept_id))
        return concept

    def traverse(node: HierarchyNode, parent: FlatConcept | None) -> None:
        current = add(node.id, node.name, _layer(node.id, node.layer), parent)

        for child in node.children:
            traverse(child, current)

        if node.particles:
            if current.layer is ConceptType.ATOM:
                for particle in node.particles:
                    add(particle.id, particle.name, ConceptType.PARTICLE, current)
            else:
                logger.warning(
                    f"Ignoring {len(node.particles)} particles on non-Atom concept {node.id}"
                )

    traverse(root, None)
    return concepts, links


class HierarchyImporter:
    """
    Imports a concept hierarchy into the graph store.

    No batching: one round trip per concept and per link. Meant to run
    offline from the setup tool.
    """

    def __init__(self, graph_store: GraphStore):
        """
        Initialize importer.

        Args:
            graph_store: Target graph store
        """
        self.graph_store = graph_store

    async def import_file(self, path: str | Path) -> ImportSummary:
        """Load a hierarchy file and import it."""
        logger.info(f"Reading concept hierarchy from {path}")
        return await self.import_hierarchy(load_hierarchy_file(path))

    async def import_hierarchy(self, root: HierarchyNode) -> ImportSummary:
        """
        Flatten and import a hierarchy.

        Raises:
            ValidationError: If the hierarchy is malformed (nothing is written)
            GraphStoreError: On the first failed write
        """
        concepts, links = flatten_hierarchy(root)
        logger.info(f"Found {len(concepts)} concepts and {len(links)} relationships to import")

        await self.upsert_concepts(concepts)
        await self.upsert_links(links)

        summary = ImportSummary(
            root_id=root.id,
            concepts=len(concepts),
            relationships=len(links),
            type_counts=dict(Counter(c.layer.value for c in concepts)),
        )
        logger.info(
            f"Concept graph import completed: {summary.concepts} concepts, "
            f"{summary.relationships} CONTAINS relationships"
        )
        return summary

    async def upsert_concepts(self, concepts: list[FlatConcept]) -> None:
        """Upsert concept nodes one by one."""
        for concept in concepts:
            await self.graph_store.execute_write(
                UPSERT_CONCEPT,
                {"id": concept.id, "name": concept.name, "type": concept.layer.value},
            )
            logger.debug(f"Upserted concept {concept.name} ({concept.id})")

    async def upsert_links(self, links: list[ContainsLink]) -> None:
        """Upsert CONTAINS edges one by one."""
        for link in links:
            records = await self.graph_store.execute_write(
                UPSERT_CONTAINS,
                {"parentId": link.parent_id, "childId": link.child_id},
            )
            if not records:
                raise GraphStoreError(
                    f"Failed to create CONTAINS edge {link.parent_id} -> {link.child_id}",
                    {"parent_id": link.parent_id, "child_id": link.child_id},
                )
            logger.debug(f"Upserted relationship {link.parent_id} -> {link.child_id}")

"""
Curriculum concept models.

The curriculum is a forest of concepts joined by CONTAINS edges:
Subject -> Matter -> Molecule -> Atom -> Particle, and
Subject -> Grade -> Topic for the grade-based syllabus.
"""

from enum import Enum

from pydantic import BaseModel, Field

from syllabus_graph.models.base import GraphModel


class ConceptType(str, Enum):
    """Layer of a concept in the curriculum graph."""

    SUBJECT = "Subject"
    MATTER = "Matter"
    MOLECULE = "Molecule"
    ATOM = "Atom"
    PARTICLE = "Particle"
    GRADE = "Grade"
    TOPIC = "Topic"


# Which layers a concept of each layer may CONTAIN.
ALLOWED_CHILDREN: dict[ConceptType, frozenset[ConceptType]] = {
    ConceptType.SUBJECT: frozenset({ConceptType.MATTER, ConceptType.GRADE}),
    ConceptType.MATTER: frozenset({ConceptType.MOLECULE}),
    ConceptType.MOLECULE: frozenset({ConceptType.ATOM}),
    ConceptType.ATOM: frozenset({ConceptType.PARTICLE}),
    ConceptType.PARTICLE: frozenset(),
    ConceptType.GRADE: frozenset({ConceptType.TOPIC}),
    ConceptType.TOPIC: frozenset(),
}


def can_contain(parent: ConceptType, child: ConceptType) -> bool:
    """Return True if a `parent` concept may have a CONTAINS edge to a `child`."""
    return child in ALLOWED_CHILDREN[parent]


class Concept(GraphModel):
    """A concept node as stored in the graph."""

    id: str = Field(..., description="Stable business key, e.g. PAR001")
    name: str = Field(..., description="Display name")
    type: ConceptType = Field(..., description="Curriculum layer")
    description: str | None = Field(default=None, description="Optional description")
    created_at: str | None = Field(default=None, description="ISO creation timestamp")


class Particle(BaseModel):
    """Particle entry attached to an Atom in the hierarchy file."""

    id: str
    name: str


class HierarchyNode(BaseModel):
    """
    One node of the nested hierarchy description fed to the importer.

    `layer` is kept as a raw string so the importer can report unknown
    layers with its own error type.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    layer: str
    children: list["HierarchyNode"] = Field(default_factory=list)
    particles: list[Particle] = Field(default_factory=list)


class FlatConcept(BaseModel):
    """A concept produced by flattening the hierarchy."""

    id: str
    name: str
    layer: ConceptType
    parent_id: str | None = None


class ContainsLink(BaseModel):
    """A parent -> child CONTAINS edge produced by flattening the hierarchy."""

    parent_id: str
    child_id: str


class ImportSummary(BaseModel):
    """Outcome of a hierarchy import."""

    root_id: str
    concepts: int
    relationships: int
    type_counts: dict[str, int] = Field(default_factory=dict)


class SyllabusNode(GraphModel):
    """A concept with its CONTAINS subtree, as served by the syllabus view."""

    id: str
    name: str
    type: ConceptType
    description: str | None = None
    created_at: str | None = None
    children: list["SyllabusNode"] = Field(default_factory=list)


class SyllabusTree(GraphModel):
    """The whole curriculum forest, one entry per root concept."""

    syllabus: list[SyllabusNode]
    total_concepts: int
    retrieved_at: str

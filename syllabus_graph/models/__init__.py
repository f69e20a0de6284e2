"""
Data models for Syllabus Graph.

Core models:
- Concept, ConceptType: curriculum concept nodes and their layers
- SyllabusNode, SyllabusTree: nested read view of the concept forest
- HierarchyNode, FlatConcept, ContainsLink, ImportSummary: hierarchy import
- RelationshipType: edge labels
- Resource, ResourceType: learning resources
- Question: multiple-choice questions
- LearningPath, LearningPathStep, LearningPathStatus: per-user learning plans
- UserContext, Role: caller identity forwarded by the gateway
"""

from syllabus_graph.models.concept import (
    ALLOWED_CHILDREN,
    Concept,
    ConceptType,
    ContainsLink,
    FlatConcept,
    HierarchyNode,
    ImportSummary,
    Particle,
    SyllabusNode,
    SyllabusTree,
    can_contain,
)
from syllabus_graph.models.learning_path import (
    LearningPath,
    LearningPathStatus,
    LearningPathStep,
    can_transition,
)
from syllabus_graph.models.question import Question
from syllabus_graph.models.relationships import RelationshipType
from syllabus_graph.models.resource import Resource, ResourceType
from syllabus_graph.models.user import Role, UserContext

__all__ = [
    # Concept models
    "Concept",
    "ConceptType",
    "ALLOWED_CHILDREN",
    "can_contain",
    "HierarchyNode",
    "Particle",
    "FlatConcept",
    "ContainsLink",
    "ImportSummary",
    "SyllabusNode",
    "SyllabusTree",
    # Relationship models
    "RelationshipType",
    # Content models
    "Resource",
    "ResourceType",
    "Question",
    # Learning path models
    "LearningPath",
    "LearningPathStep",
    "LearningPathStatus",
    "can_transition",
    # Caller identity
    "Role",
    "UserContext",
]

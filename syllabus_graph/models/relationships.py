"""
Relationship types used in the curriculum graph.
"""

from enum import Enum


class RelationshipType(str, Enum):
    """Edge labels in the curriculum graph."""

    # Hierarchy (parent -> child, forms a tree)
    CONTAINS = "CONTAINS"

    # Concept -> concept it requires first (forms a DAG)
    HAS_PREREQUISITE = "HAS_PREREQUISITE"

    # Topic -> canonical concept with the same name
    SAME_AS = "SAME_AS"

    # Resource -> Topic/Concept it explains
    EXPLAINS = "EXPLAINS"

    # User -> Resource they published
    PUBLISHED = "PUBLISHED"

    # Learning paths
    HAS_LEARNING_PATH = "HAS_LEARNING_PATH"
    HAS_STEP = "HAS_STEP"

"""API routers."""

from syllabus_graph.api.routers import (
    concepts,
    health,
    learning_paths,
    questions,
    resources,
    syllabus,
)

__all__ = ["concepts", "health", "learning_paths", "questions", "resources", "syllabus"]

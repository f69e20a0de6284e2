"""
Question models.
"""

from pydantic import Field

from syllabus_graph.models.base import GraphModel


class Question(GraphModel):
    """A multiple-choice question node."""

    id: str
    question_text: str
    options: list[str] = Field(default_factory=list)
    correct_answer: str
    explanation: str | None = None
    tags: list[str] = Field(default_factory=list)
    concept_id: str | None = None
    created_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

"""
Learning resource models.
"""

from enum import Enum

from pydantic import Field

from syllabus_graph.models.base import GraphModel


class ResourceType(str, Enum):
    """Kinds of resource accepted through the API."""

    VIDEO = "video"
    DOCUMENT = "document"
    NOTES = "notes"
    IMAGE = "image"
    AUDIO = "audio"
    INTERACTIVE = "interactive"
    QUIZ = "quiz"
    ASSIGNMENT = "assignment"
    OTHER = "other"


class Resource(GraphModel):
    """
    A resource node as stored in the graph.

    `type` is a plain string because seeded resources predate the API's
    enum (e.g. "Notes").
    """

    resource_id: str
    title: str
    type: str
    url: str | None = None
    description: str | None = None
    price: float | None = None
    grade: str | None = None
    is_public: bool = True
    tags: list[str] = Field(default_factory=list)
    concept_id: str | None = None
    published_by: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

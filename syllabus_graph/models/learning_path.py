"""
Learning path models with a processing -> completed lifecycle.
"""

from enum import Enum

from pydantic import Field

from syllabus_graph.models.base import GraphModel


class LearningPathStatus(str, Enum):
    """Learning path generation status."""

    PROCESSING = "processing"
    COMPLETED = "completed"


# Legal status transitions
STATUS_TRANSITIONS: dict[LearningPathStatus, frozenset[LearningPathStatus]] = {
    LearningPathStatus.PROCESSING: frozenset({LearningPathStatus.COMPLETED}),
    LearningPathStatus.COMPLETED: frozenset(),
}


def can_transition(current: LearningPathStatus, target: LearningPathStatus) -> bool:
    """Return True if a path may move from `current` to `target`."""
    return target in STATUS_TRANSITIONS[current]


class LearningPathStep(GraphModel):
    """A single ordered step of a learning path."""

    step_number: int = Field(..., ge=1)
    title: str
    description: str | None = None
    estimated_duration: str | None = None
    resources: list[str] = Field(default_factory=list)
    prerequisites: list[int] = Field(default_factory=list)


class LearningPath(GraphModel):
    """A per-user learning plan."""

    id: str
    user_id: str
    learning_goal: str
    status: LearningPathStatus = LearningPathStatus.PROCESSING
    request_id: str | None = None
    difficulty_level: str | None = None
    total_duration: str | None = None
    steps: list[LearningPathStep] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

"""
Learning Path Service - per-user learning plans.

Graph shape:
    (User)-[:HAS_LEARNING_PATH]->(LearningPath)-[:HAS_STEP]->(LearningPathStep)

A path is created in `processing` state with no steps, then completed
once its steps have been generated.
"""

from uuid import uuid4

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.models.learning_path import (
    LearningPath,
    LearningPathStatus,
    LearningPathStep,
    can_transition,
)
from syllabus_graph.utils.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

CREATE_PATH = """
MERGE (u:User {id: $userId})
CREATE (lp:LearningPath {
    id: $id,
    learningGoal: $learningGoal,
    status: $status,
    createdAt: datetime(),
    updatedAt: datetime()
})
SET lp.requestId = $requestId,
    lp.difficultyLevel = $difficultyLevel
CREATE (u)-[:HAS_LEARNING_PATH]->(lp)
RETURN lp {.*, userId: u.id} AS path, [] AS steps
"""

COMPLETE_PATH = """
MATCH (lp:LearningPath {id: $id})
SET lp.status = $status,
    lp.totalDuration = coalesce($totalDuration, lp.totalDuration),
    lp.difficultyLevel = coalesce($difficultyLevel, lp.difficultyLevel),
    lp.updatedAt = datetime()
WITH lp
UNWIND $steps AS step
CREATE (s:LearningPathStep {id: $id + '_step_' + toString(step.stepNumber)})
SET s += step
CREATE (lp)-[:HAS_STEP]->(s)
RETURN count(s) AS steps
"""

GET_PATH = """
MATCH (u:User)-[:HAS_LEARNING_PATH]->(lp:LearningPath {id: $id})
OPTIONAL MATCH (lp)-[:HAS_STEP]->(s:LearningPathStep)
WITH u, lp, s
ORDER BY s.stepNumber
WITH u, lp, collect(s {.*}) AS steps
RETURN lp {.*, userId: u.id} AS path, steps
"""

LIST_PATHS = """
MATCH (u:User {id: $userId})-[:HAS_LEARNING_PATH]->(lp:LearningPath)
OPTIONAL MATCH (lp)-[:HAS_STEP]->(s:LearningPathStep)
WITH u, lp, s
ORDER BY s.stepNumber
WITH u, lp, collect(s {.*}) AS steps
RETURN lp {.*, userId: u.id} AS path, steps
ORDER BY lp.createdAt DESC
"""


def _path(record: dict) -> LearningPath:
    steps = sorted(
        (LearningPathStep.model_validate(s) for s in record.get("steps") or []),
        key=lambda s: s.step_number,
    )
    return LearningPath.model_validate({**record["path"], "steps": steps})


class LearningPathService:
    """Creates, completes and reads learning paths."""

    def __init__(self, graph_store: GraphStore):
        self.graph_store = graph_store

    async def create_learning_path(
        self,
        user_id: str,
        learning_goal: str,
        request_id: str | None = None,
        difficulty_level: str | None = None,
    ) -> LearningPath:
        """Create a `processing` learning path with no steps for `user_id`."""
        path_id = f"lp_{uuid4().hex}"
        records = await self.graph_store.execute_write(
            CREATE_PATH,
            {
                "id": path_id,
                "userId": user_id,
                "learningGoal": learning_goal,
                "status": LearningPathStatus.PROCESSING.value,
                "requestId": request_id,
                "difficultyLevel": difficulty_level,
            },
        )
        logger.bind(user_id=user_id).info(f"Created learning path {path_id}")
        return _path(records[0])

    async def complete_learning_path(
        self,
        path_id: str,
        user_id: str,
        steps: list[LearningPathStep],
        total_duration: str | None = None,
        difficulty_level: str | None = None,
        status: LearningPathStatus = LearningPathStatus.COMPLETED,
    ) -> LearningPath:
        """
        Attach generated steps and move the path to `status`.

        Raises:
            NotFoundError: If the path doesn't exist
            AuthorizationError: If the path belongs to another user
            ConflictError: If the path cannot move to `status`
            ValidationError: If two steps share a step number
        """
        path = await self.get_learning_path(path_id)
        if path.user_id != user_id:
            raise AuthorizationError(
                "Learning path belongs to another user",
                {"path_id": path_id, "user_id": user_id},
            )

        target = LearningPathStatus(status)
        if not can_transition(path.status, target):
            raise ConflictError(
                f"Learning path {path_id} cannot move from {path.status.value} to {target.value}",
                {"path_id": path_id, "status": path.status.value},
            )

        numbers = [s.step_number for s in steps]
        if len(numbers) != len(set(numbers)):
            raise ValidationError("Step numbers must be unique", {"path_id": path_id})

        await self.graph_store.execute_write(
            COMPLETE_PATH,
            {
                "id": path_id,
                "status": target.value,
                "totalDuration": total_duration,
                "difficultyLevel": difficulty_level,
                "steps": [s.to_properties() for s in steps],
            },
        )
        logger.info(f"Completed learning path {path_id} with {len(steps)} steps")
        return await self.get_learning_path(path_id)

    async def get_learning_path(self, path_id: str) -> LearningPath:
        """
        Get a learning path with its steps ordered by step number.

        Raises:
            NotFoundError: If the path doesn't exist
        """
        records = await self.graph_store.execute_read(GET_PATH, {"id": path_id})
        if not records:
            logger.warning(f"Learning path not found: {path_id}")
            raise NotFoundError(f"Learning path {path_id} not found", {"path_id": path_id})
        return _path(records[0])

    async def list_learning_paths(self, user_id: str) -> list[LearningPath]:
        """All learning paths of a user, newest first."""
        records = await self.graph_store.execute_read(LIST_PATHS, {"userId": user_id})
        return [_path(r) for r in records]

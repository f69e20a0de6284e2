"""
Tests for the learning path service.
"""

import pytest

from syllabus_graph.models.learning_path import LearningPathStatus, LearningPathStep
from syllabus_graph.services import learning_path_service as queries
from syllabus_graph.services.learning_path_service import LearningPathService
from syllabus_graph.utils.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def path_record(status="processing", user_id="student-1", steps=None):
    return {
        "path": {
            "id": "lp_1",
            "userId": user_id,
            "learningGoal": "Master fractions",
            "status": status,
        },
        "steps": steps or [],
    }


STEPS = [
    LearningPathStep(step_number=2, title="Divide fractions"),
    LearningPathStep(step_number=1, title="Multiply fractions", estimated_duration="1h"),
    LearningPathStep(step_number=3, title="Mixed practice"),
]


@pytest.mark.unit
@pytest.mark.asyncio
class TestLearningPathService:
    """Test the processing -> completed lifecycle."""

    async def test_create(self, mock_graph_store):
        mock_graph_store.execute_write.return_value = [path_record()]

        path = await LearningPathService(mock_graph_store).create_learning_path(
            "student-1", "Master fractions"
        )

        assert path.status is LearningPathStatus.PROCESSING
        assert path.steps == []
        cypher, params = mock_graph_store.execute_write.await_args.args
        assert cypher == queries.CREATE_PATH
        assert params["id"].startswith("lp_")
        assert params["status"] == "processing"

    async def test_complete(self, mock_graph_store):
        stored_steps = [s.to_properties() for s in STEPS]
        mock_graph_store.execute_read.side_effect = [
            [path_record()],
            [path_record(status="completed", steps=stored_steps)],
        ]

        path = await LearningPathService(mock_graph_store).complete_learning_path(
            "lp_1", "student-1", STEPS, total_duration="3h"
        )

        assert path.status is LearningPathStatus.COMPLETED
        assert [s.step_number for s in path.steps] == [1, 2, 3]
        cypher, params = mock_graph_store.execute_write.await_args.args
        assert cypher == queries.COMPLETE_PATH
        assert params["status"] == "completed"
        assert params["totalDuration"] == "3h"
        assert params["steps"][1]["stepNumber"] == 1

    async def test_complete_other_users_path(self, mock_graph_store):
        mock_graph_store.execute_read.return_value = [path_record(user_id="student-2")]

        with pytest.raises(AuthorizationError):
            await LearningPathService(mock_graph_store).complete_learning_path(
                "lp_1", "student-1", STEPS
            )

    async def test_complete_twice(self, mock_graph_store):
        mock_graph_store.execute_read.return_value = [path_record(status="completed")]

        with pytest.raises(ConflictError, match="cannot move from completed"):
            await LearningPathService(mock_graph_store).complete_learning_path(
                "lp_1", "student-1", STEPS
            )

        mock_graph_store.execute_write.assert_not_awaited()

    async def test_duplicate_step_numbers(self, mock_graph_store):
        mock_graph_store.execute_read.return_value = [path_record()]
        steps = [
            LearningPathStep(step_number=1, title="a"),
            LearningPathStep(step_number=1, title="b"),
        ]

        with pytest.raises(ValidationError):
            await LearningPathService(mock_graph_store).complete_learning_path(
                "lp_1", "student-1", steps
            )

    async def test_get_missing(self, mock_graph_store):
        with pytest.raises(NotFoundError):
            await LearningPathService(mock_graph_store).get_learning_path("lp_missing")

    async def test_list(self, mock_graph_store):
        mock_graph_store.execute_read.return_value = [path_record(), path_record()]

        paths = await LearningPathService(mock_graph_store).list_learning_paths("student-1")

        assert len(paths) == 2
        mock_graph_store.execute_read.assert_awaited_once_with(
            queries.LIST_PATHS, {"userId": "student-1"}
        )

"""
Question Service - multiple-choice questions stored as graph nodes.
"""

from typing import Any

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.models.question import Question
from syllabus_graph.models.user import UserContext
from syllabus_graph.utils.exceptions import ConflictError, NotFoundError, ValidationError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

CREATE_QUESTION = """
CREATE (q:Question)
SET q = $properties,
    q.createdAt = datetime(),
    q.updatedAt = datetime()
RETURN q {.*} AS question
"""

LIST_QUESTIONS = """
MATCH (q:Question)
WHERE ($conceptId IS NULL OR q.conceptId = $conceptId)
  AND ($tag IS NULL OR $tag IN q.tags)
RETURN q {.*} AS question
ORDER BY q.createdAt DESC, q.id
"""

GET_QUESTION = "MATCH (q:Question {id: $id}) RETURN q {.*} AS question"

UPDATE_QUESTION = """
MATCH (q:Question {id: $id})
SET q += $changes,
    q.updatedAt = datetime()
RETURN q {.*} AS question
"""

DELETE_QUESTION = "MATCH (q:Question {id: $id}) DETACH DELETE q"

FIELD_PROPERTIES = {
    "question_text": "questionText",
    "options": "options",
    "correct_answer": "correctAnswer",
    "explanation": "explanation",
    "tags": "tags",
    "concept_id": "conceptId",
}


def _properties(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        FIELD_PROPERTIES[k]: v
        for k, v in fields.items()
        if k in FIELD_PROPERTIES and v is not None
    }


def check_answer(options: list[str], correct_answer: str) -> None:
    """
    Raises:
        ValidationError: If `correct_answer` is not one of `options`
    """
    if correct_answer not in options:
        raise ValidationError(
            "Correct answer must be one of the options",
            {"correct_answer": correct_answer},
        )


class QuestionService:
    """CRUD over Question nodes."""

    def __init__(self, graph_store: GraphStore):
        self.graph_store = graph_store

    async def create_question(
        self, question_id: str, fields: dict[str, Any], user: UserContext
    ) -> Question:
        """
        Create a question under `question_id` (caller-chosen or generated by the router).

        Raises:
            ConflictError: If a question with this id exists
            ValidationError: If the correct answer is not among the options
        """
        check_answer(fields.get("options") or [], fields.get("correct_answer"))

        if await self._find(question_id) is not None:
            raise ConflictError(
                f"Question with ID {question_id} already exists", {"question_id": question_id}
            )

        properties = {"id": question_id, "createdBy": user.id, **_properties(fields)}
        records = await self.graph_store.execute_write(CREATE_QUESTION, {"properties": properties})

        logger.bind(user_id=user.id).info(f"Created question {question_id}")
        return Question.model_validate(records[0]["question"])

    async def list_questions(
        self, concept_id: str | None = None, tag: str | None = None
    ) -> list[Question]:
        records = await self.graph_store.execute_read(
            LIST_QUESTIONS, {"conceptId": concept_id, "tag": tag}
        )
        return [Question.model_validate(r["question"]) for r in records]

    async def get_question(self, question_id: str) -> Question:
        """
        Raises:
            NotFoundError: If the question doesn't exist
        """
        question = await self._find(question_id)
        if question is None:
            logger.warning(f"Question not found: {question_id}")
            raise NotFoundError(
                f"Question with ID {question_id} not found", {"question_id": question_id}
            )
        return question

    async def update_question(self, question_id: str, changes: dict[str, Any]) -> Question:
        """
        Partially update a question. The answer/options pair is re-checked
        against the merged result.

        Raises:
            NotFoundError: If the question doesn't exist
            ValidationError: If the correct answer would not be among the options
        """
        current = await self.get_question(question_id)
        check_answer(
            changes.get("options") or current.options,
            changes.get("correct_answer") or current.correct_answer,
        )

        records = await self.graph_store.execute_write(
            UPDATE_QUESTION, {"id": question_id, "changes": _properties(changes)}
        )
        logger.info(f"Updated question {question_id}")
        return Question.model_validate(records[0]["question"])

    async def delete_question(self, question_id: str) -> None:
        """
        Raises:
            NotFoundError: If the question doesn't exist
        """
        await self.get_question(question_id)
        await self.graph_store.execute_write(DELETE_QUESTION, {"id": question_id})
        logger.info(f"Deleted question {question_id}")

    async def _find(self, question_id: str) -> Question | None:
        records = await self.graph_store.execute_read(GET_QUESTION, {"id": question_id})
        return Question.model_validate(records[0]["question"]) if records else None

"""Question endpoints."""

from uuid import uuid4

from fastapi import APIRouter, Depends, Query, status

from syllabus_graph.api.auth import require_author
from syllabus_graph.api.dependencies import get_question_service
from syllabus_graph.api.schemas import CreateQuestionRequest, UpdateQuestionRequest
from syllabus_graph.models.question import Question
from syllabus_graph.models.user import UserContext
from syllabus_graph.services.question_service import QuestionService

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post("", response_model=Question, status_code=status.HTTP_201_CREATED)
async def create_question(
    body: CreateQuestionRequest,
    user: UserContext = Depends(require_author),
    service: QuestionService = Depends(get_question_service),
):
    question_id = str(body.id or uuid4())
    return await service.create_question(question_id, body.model_dump(exclude={"id"}), user)


@router.get("", response_model=list[Question])
async def list_questions(
    concept_id: str | None = Query(default=None, alias="conceptId"),
    tag: str | None = Query(default=None),
    service: QuestionService = Depends(get_question_service),
):
    return await service.list_questions(concept_id=concept_id, tag=tag)


@router.get("/{question_id}", response_model=Question)
async def get_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    return await service.get_question(question_id)


@router.put("/{question_id}", response_model=Question)
async def update_question(
    question_id: str,
    body: UpdateQuestionRequest,
    user: UserContext = Depends(require_author),
    service: QuestionService = Depends(get_question_service),
):
    return await service.update_question(question_id, body.model_dump(exclude_unset=True))


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    user: UserContext = Depends(require_author),
    service: QuestionService = Depends(get_question_service),
):
    await service.delete_question(question_id)

"""Learning path endpoints. Every route acts on the calling user's paths."""

from fastapi import APIRouter, Depends, status

from syllabus_graph.api.auth import require_user
from syllabus_graph.api.dependencies import get_learning_path_service
from syllabus_graph.api.schemas import CreateLearningPathRequest, UpdateLearningPathRequest
from syllabus_graph.models.learning_path import LearningPath
from syllabus_graph.models.user import UserContext
from syllabus_graph.services.learning_path_service import LearningPathService
from syllabus_graph.utils.exceptions import NotFoundError

router = APIRouter(prefix="/learning-paths", tags=["learning-paths"])


@router.post("", response_model=LearningPath, status_code=status.HTTP_201_CREATED)
async def create_learning_path(
    body: CreateLearningPathRequest,
    user: UserContext = Depends(require_user),
    service: LearningPathService = Depends(get_learning_path_service),
):
    """Start a learning path; it stays `processing` until its steps arrive."""
    return await service.create_learning_path(
        user_id=user.id,
        learning_goal=body.learning_goal,
        request_id=body.request_id,
        difficulty_level=body.difficulty_level,
    )


@router.put("/{path_id}", response_model=LearningPath)
async def update_learning_path(
    path_id: str,
    body: UpdateLearningPathRequest,
    user: UserContext = Depends(require_user),
    service: LearningPathService = Depends(get_learning_path_service),
):
    return await service.complete_learning_path(
        path_id=path_id,
        user_id=user.id,
        steps=body.steps,
        total_duration=body.total_duration,
        difficulty_level=body.difficulty_level,
        status=body.status,
    )


@router.get("", response_model=list[LearningPath])
async def list_learning_paths(
    user: UserContext = Depends(require_user),
    service: LearningPathService = Depends(get_learning_path_service),
):
    return await service.list_learning_paths(user.id)


@router.get("/{path_id}", response_model=LearningPath)
async def get_learning_path(
    path_id: str,
    user: UserContext = Depends(require_user),
    service: LearningPathService = Depends(get_learning_path_service),
):
    path = await service.get_learning_path(path_id)
    if path.user_id != user.id and not user.is_admin:
        raise NotFoundError(f"Learning path {path_id} not found", {"path_id": path_id})
    return path

"""Public syllabus tree endpoint."""

from fastapi import APIRouter, Depends

from syllabus_graph.api.dependencies import get_concept_service
from syllabus_graph.models.concept import SyllabusTree
from syllabus_graph.services.concept_service import ConceptService

router = APIRouter(tags=["syllabus"])


@router.get("/syllabus", response_model=SyllabusTree)
@router.get("/api/content/syllabus", response_model=SyllabusTree, include_in_schema=False)
async def get_syllabus(service: ConceptService = Depends(get_concept_service)):
    """The whole concept forest nested along CONTAINS edges. No auth required."""
    return await service.get_syllabus_tree()

"""Concept endpoints."""

from fastapi import APIRouter, Depends, Query, status

from syllabus_graph.api.auth import require_admin
from syllabus_graph.api.dependencies import get_concept_service
from syllabus_graph.api.schemas import (
    CreateConceptRequest,
    CreatePrerequisiteRequest,
    MessageResponse,
    UpdateConceptRequest,
)
from syllabus_graph.models.concept import Concept, ConceptType
from syllabus_graph.models.user import UserContext
from syllabus_graph.services.concept_service import ConceptService

router = APIRouter(prefix="/concepts", tags=["concepts"])


@router.get("", response_model=list[Concept])
async def list_concepts(
    type: ConceptType | None = Query(default=None, description="Only concepts of this layer"),
    service: ConceptService = Depends(get_concept_service),
):
    return await service.list_concepts(type)


@router.get("/{concept_id}", response_model=Concept)
async def get_concept(concept_id: str, service: ConceptService = Depends(get_concept_service)):
    return await service.get_concept(concept_id)


@router.get("/{concept_id}/children", response_model=list[Concept])
async def get_children(concept_id: str, service: ConceptService = Depends(get_concept_service)):
    return await service.get_children(concept_id)


@router.get("/{concept_id}/parent", response_model=Concept)
async def get_parent(concept_id: str, service: ConceptService = Depends(get_concept_service)):
    return await service.get_parent(concept_id)


@router.get("/{concept_id}/prerequisites", response_model=list[Concept])
async def get_prerequisites(
    concept_id: str, service: ConceptService = Depends(get_concept_service)
):
    return await service.get_prerequisites(concept_id)


@router.post("", response_model=Concept, status_code=status.HTTP_201_CREATED)
async def create_concept(
    body: CreateConceptRequest,
    user: UserContext = Depends(require_admin),
    service: ConceptService = Depends(get_concept_service),
):
    return await service.create_concept(
        concept_id=body.id,
        name=body.name,
        concept_type=body.type,
        description=body.description,
        parent_id=body.parent_id,
    )


@router.put("/{concept_id}", response_model=Concept)
async def update_concept(
    concept_id: str,
    body: UpdateConceptRequest,
    user: UserContext = Depends(require_admin),
    service: ConceptService = Depends(get_concept_service),
):
    changes = body.model_dump(exclude_unset=True)
    if changes.get("type") is not None:
        changes["type"] = changes["type"].value
    return await service.update_concept(concept_id, changes)


@router.delete("/{concept_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_concept(
    concept_id: str,
    user: UserContext = Depends(require_admin),
    service: ConceptService = Depends(get_concept_service),
):
    await service.delete_concept(concept_id)


@router.post(
    "/{concept_id}/prerequisites",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_prerequisite(
    concept_id: str,
    body: CreatePrerequisiteRequest,
    user: UserContext = Depends(require_admin),
    service: ConceptService = Depends(get_concept_service),
):
    await service.add_prerequisite(concept_id, body.prerequisite_id)
    return MessageResponse(message="Prerequisite relationship created successfully")

"""Resource endpoints."""

from fastapi import APIRouter, Depends, Query, status

from syllabus_graph.api.auth import require_author
from syllabus_graph.api.dependencies import get_resource_service
from syllabus_graph.api.schemas import (
    CreateResourceRequest,
    CreateResourceResponse,
    UpdateResourceRequest,
)
from syllabus_graph.models.resource import Resource
from syllabus_graph.models.user import UserContext
from syllabus_graph.services.resource_service import ResourceService

router = APIRouter(prefix="/resources", tags=["resources"])


@router.post("", response_model=CreateResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    body: CreateResourceRequest,
    user: UserContext = Depends(require_author),
    service: ResourceService = Depends(get_resource_service),
):
    """Create a resource for a concept and hand back an upload URL."""
    resource, upload_url = await service.create_resource(body.concept_id, body.to_fields(), user)
    return CreateResourceResponse(resource=resource, upload_url=upload_url)


@router.get("", response_model=list[Resource])
async def list_resources(
    concept_id: str | None = Query(default=None, alias="conceptId"),
    service: ResourceService = Depends(get_resource_service),
):
    return await service.list_resources(concept_id)


@router.get("/{resource_id}", response_model=Resource)
async def get_resource(resource_id: str, service: ResourceService = Depends(get_resource_service)):
    return await service.get_resource(resource_id)


@router.put("/{resource_id}", response_model=Resource)
async def update_resource(
    resource_id: str,
    body: UpdateResourceRequest,
    user: UserContext = Depends(require_author),
    service: ResourceService = Depends(get_resource_service),
):
    return await service.update_resource(resource_id, body.to_changes(), user)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: str,
    user: UserContext = Depends(require_author),
    service: ResourceService = Depends(get_resource_service),
):
    await service.delete_resource(resource_id, user)

"""
Resource Service - learning resources attached to concepts.

A resource EXPLAINS one concept and is PUBLISHED by one user. Admins may
change any resource; other publishers only their own.
"""

import time
from typing import Any
from uuid import uuid4

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.models.resource import Resource
from syllabus_graph.models.user import UserContext
from syllabus_graph.utils.exceptions import AuthorizationError, NotFoundError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

CONCEPT_EXISTS = "MATCH (c:Concept {id: $conceptId}) RETURN c.id AS id"

CREATE_RESOURCE = """
MATCH (c:Concept {id: $conceptId})
MERGE (u:User {id: $userId})
CREATE (r:Resource)
SET r = $properties,
    r.createdAt = datetime(),
    r.updatedAt = datetime()
CREATE (r)-[:EXPLAINS]->(c)
CREATE (u)-[:PUBLISHED]->(r)
RETURN r {.*, conceptId: c.id, publishedBy: u.id} AS resource
"""

LIST_RESOURCES = """
MATCH (r:Resource)
OPTIONAL MATCH (r)-[:EXPLAINS]->(c:Concept)
OPTIONAL MATCH (u:User)-[:PUBLISHED]->(r)
WITH r, c, u
WHERE $conceptId IS NULL OR c.id = $conceptId
RETURN r {.*, conceptId: c.id, publishedBy: u.id} AS resource
ORDER BY r.createdAt DESC, r.resourceId
"""

GET_RESOURCE = """
MATCH (r:Resource {resourceId: $resourceId})
OPTIONAL MATCH (r)-[:EXPLAINS]->(c:Concept)
OPTIONAL MATCH (u:User)-[:PUBLISHED]->(r)
RETURN r {.*, conceptId: c.id, publishedBy: u.id} AS resource
LIMIT 1
"""

UPDATE_RESOURCE = """
MATCH (r:Resource {resourceId: $resourceId})
SET r += $changes,
    r.updatedAt = datetime()
WITH r
OPTIONAL MATCH (r)-[:EXPLAINS]->(c:Concept)
OPTIONAL MATCH (u:User)-[:PUBLISHED]->(r)
RETURN r {.*, conceptId: c.id, publishedBy: u.id} AS resource
LIMIT 1
"""

DELETE_RESOURCE = "MATCH (r:Resource {resourceId: $resourceId}) DETACH DELETE r"

# Stored property names for API field names
FIELD_PROPERTIES = {
    "title": "title",
    "type": "type",
    "url": "url",
    "description": "description",
    "price": "price",
    "grade": "grade",
    "is_public": "isPublic",
    "tags": "tags",
}


def _properties(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        FIELD_PROPERTIES[k]: v
        for k, v in fields.items()
        if k in FIELD_PROPERTIES and v is not None
    }


class ResourceService:
    """CRUD over Resource nodes."""

    def __init__(self, graph_store: GraphStore, upload_base_url: str):
        """
        Initialize resource service.

        Args:
            graph_store: Graph database
            upload_base_url: Base URL handed out for file uploads
        """
        self.graph_store = graph_store
        self.upload_base_url = upload_base_url.rstrip("/")

    def upload_url(self, resource_id: str) -> str:
        """
        Build the upload URL for a new resource.

        Signing is done by the gateway, so the signature here is a placeholder.
        """
        timestamp = int(time.time() * 1000)
        return f"{self.upload_base_url}/{resource_id}?timestamp={timestamp}&signature=mock-signature"

    async def create_resource(
        self, concept_id: str, fields: dict[str, Any], user: UserContext
    ) -> tuple[Resource, str]:
        """
        Create a resource explaining `concept_id`, published by `user`.

        Returns:
            (resource, upload_url)

        Raises:
            NotFoundError: If the concept doesn't exist
        """
        records = await self.graph_store.execute_read(CONCEPT_EXISTS, {"conceptId": concept_id})
        if not records:
            raise NotFoundError(f"Concept with ID {concept_id} not found", {"concept_id": concept_id})

        resource_id = str(uuid4())
        properties = {"resourceId": resource_id, **_properties(fields)}

        records = await self.graph_store.execute_write(
            CREATE_RESOURCE,
            {"conceptId": concept_id, "userId": user.id, "properties": properties},
        )
        resource = Resource.model_validate(records[0]["resource"])

        logger.bind(resource_id=resource_id, user_id=user.id).info(
            f"Created resource {resource_id} for concept {concept_id}"
        )
        return resource, self.upload_url(resource_id)

    async def list_resources(self, concept_id: str | None = None) -> list[Resource]:
        """List resources, optionally only those explaining `concept_id`."""
        records = await self.graph_store.execute_read(LIST_RESOURCES, {"conceptId": concept_id})
        return [Resource.model_validate(r["resource"]) for r in records]

    async def get_resource(self, resource_id: str) -> Resource:
        """
        Get a resource by id.

        Raises:
            NotFoundError: If the resource doesn't exist
        """
        records = await self.graph_store.execute_read(GET_RESOURCE, {"resourceId": resource_id})
        if not records:
            logger.warning(f"Resource not found: {resource_id}")
            raise NotFoundError(
                f"Resource with ID {resource_id} not found", {"resource_id": resource_id}
            )
        return Resource.model_validate(records[0]["resource"])

    async def update_resource(
        self, resource_id: str, changes: dict[str, Any], user: UserContext
    ) -> Resource:
        """
        Partially update a resource.

        Raises:
            NotFoundError: If the resource doesn't exist
            AuthorizationError: If a non-admin user did not publish it
        """
        resource = await self.get_resource(resource_id)
        self._check_owner(resource, user)

        records = await self.graph_store.execute_write(
            UPDATE_RESOURCE, {"resourceId": resource_id, "changes": _properties(changes)}
        )
        logger.bind(user_id=user.id).info(f"Updated resource {resource_id}")
        return Resource.model_validate(records[0]["resource"])

    async def delete_resource(self, resource_id: str, user: UserContext) -> None:
        """
        Delete a resource.

        Raises:
            NotFoundError: If the resource doesn't exist
            AuthorizationError: If a non-admin user did not publish it
        """
        resource = await self.get_resource(resource_id)
        self._check_owner(resource, user)

        await self.graph_store.execute_write(DELETE_RESOURCE, {"resourceId": resource_id})
        logger.bind(user_id=user.id).info(f"Deleted resource {resource_id}")

    @staticmethod
    def _check_owner(resource: Resource, user: UserContext) -> None:
        if user.is_admin or resource.published_by == user.id:
            return
        raise AuthorizationError(
            "You can only modify resources you published",
            {"resource_id": resource.resource_id, "user_id": user.id},
        )

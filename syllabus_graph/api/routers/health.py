"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request

from syllabus_graph.api.dependencies import get_graph_store
from syllabus_graph.api.schemas import HealthResponse
from syllabus_graph.core.graph_store.base import GraphStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def health_check(request: Request, graph_store: GraphStore = Depends(get_graph_store)):
    """Liveness of the service plus a database round trip."""
    database_ok = await graph_store.health_check()
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC).isoformat(),
        service=request.app.state.config.api.service_name,
        database="up" if database_ok else "down",
    )

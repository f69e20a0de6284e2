"""
Setup script types.
"""

from collections.abc import Awaitable, Callable
from enum import Enum

from pydantic import BaseModel, Field

from syllabus_graph.core.graph_store.base import GraphStore


class SetupPhase(str, Enum):
    """Stage of the setup a script belongs to."""

    PREPARATION = "preparation"
    SEEDING = "seeding"
    VALIDATION = "validation"
    CLEANUP = "cleanup"


class SetupScript(BaseModel):
    """A named, one-shot database setup step."""

    name: str
    description: str
    execute: Callable[[GraphStore], Awaitable[None]]
    depends_on: list[str] = Field(default_factory=list)
    phase: SetupPhase = SetupPhase.SEEDING


class SetupOptions(BaseModel):
    """Options for one orchestrator run."""

    scripts: list[str] | None = None  # None runs every registered script
    phases: list[SetupPhase] | None = None
    continue_on_error: bool = False
    verbose: bool = False


class SetupResult(BaseModel):
    """Outcome of one script."""

    script_name: str
    success: bool
    duration_ms: float
    error: str | None = None

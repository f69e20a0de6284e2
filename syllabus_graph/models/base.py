"""
Shared base model for graph-backed entities.

Node properties are stored camelCase in Neo4j (createdAt, stepNumber, ...)
and the HTTP API speaks the same names, while Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GraphModel(BaseModel):
    """Base model mapping snake_case fields to camelCase graph properties."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_properties(self, exclude: set[str] | None = None) -> dict:
        """Dump as camelCase node properties (None values kept)."""
        return self.model_dump(by_alias=True, exclude=exclude, mode="json")

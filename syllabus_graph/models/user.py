"""
Caller identity as forwarded by the API gateway.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Roles the content service understands."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class UserContext(BaseModel):
    """Identity of the caller of a request; `id` is None for anonymous calls."""

    id: str | None = None
    roles: list[str] = Field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.id)

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN.value in self.roles

    def has_any_role(self, *roles: str | Role) -> bool:
        """Return True if the user holds at least one of `roles`."""
        wanted = {r.value if isinstance(r, Role) else r for r in roles}
        return any(role in wanted for role in self.roles)

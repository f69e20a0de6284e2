"""
Tests for gateway header parsing and role guards.
"""

import pytest

from syllabus_graph.api.auth import require_roles, user_from_headers
from syllabus_graph.models.user import Role, UserContext
from syllabus_graph.utils.exceptions import AuthenticationError, AuthorizationError


@pytest.mark.unit
class TestUserFromHeaders:
    def test_roles_are_normalised(self):
        user = user_from_headers({"x-user-id": "u1", "x-user-roles": " Admin, teacher ,,"})

        assert user.id == "u1"
        assert user.roles == ["admin", "teacher"]

    def test_anonymous(self):
        user = user_from_headers({})

        assert user.id is None
        assert user.roles == []


@pytest.mark.unit
@pytest.mark.asyncio
class TestRequireRoles:
    async def test_unauthenticated(self):
        with pytest.raises(AuthenticationError):
            await require_roles()(UserContext())

    async def test_missing_role(self):
        guard = require_roles(Role.ADMIN)

        with pytest.raises(AuthorizationError, match="admin"):
            await guard(UserContext(id="u1", roles=["student"]))

    async def test_any_listed_role_passes(self):
        user = UserContext(id="u1", roles=["teacher"])

        assert await require_roles(Role.ADMIN, Role.TEACHER)(user) is user

"""
Header-based caller identity.

The API gateway authenticates callers and forwards their identity as
`x-user-id` and `x-user-roles` (comma-separated). Nothing here verifies
those headers; the service must only be reachable through the gateway.
"""

from uuid import uuid4

from fastapi import Depends, Request

from syllabus_graph.models.user import Role, UserContext
from syllabus_graph.utils.exceptions import AuthenticationError, AuthorizationError

USER_ID_HEADER = "x-user-id"
USER_ROLES_HEADER = "x-user-roles"
REQUEST_ID_HEADER = "x-request-id"


def user_from_headers(headers) -> UserContext:
    """Build the caller identity from gateway headers."""
    roles = headers.get(USER_ROLES_HEADER) or ""
    return UserContext(
        id=headers.get(USER_ID_HEADER) or None,
        roles=[r.strip().lower() for r in roles.split(",") if r.strip()],
    )


async def auth_middleware(request: Request, call_next):
    """Attach the caller identity and a request id to every request."""
    request.state.user = user_from_headers(request.headers)
    request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex

    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request.state.request_id
    return response


def get_current_user(request: Request) -> UserContext:
    user = getattr(request.state, "user", None)
    return user if user is not None else user_from_headers(request.headers)


def require_roles(*roles: Role):
    """
    Dependency factory guarding a route.

    With no roles it only requires an authenticated caller. Raises
    AuthenticationError (401) without a user id and AuthorizationError
    (403) when the caller holds none of `roles`.
    """

    async def dependency(user: UserContext = Depends(get_current_user)) -> UserContext:
        if not user.is_authenticated:
            raise AuthenticationError("User not authenticated")
        if roles and not user.has_any_role(*roles):
            raise AuthorizationError(
                f"Requires one of roles: {', '.join(r.value for r in roles)}",
                {"user_id": user.id, "roles": user.roles},
            )
        return user

    return dependency


require_user = require_roles()
require_admin = require_roles(Role.ADMIN)
require_author = require_roles(Role.ADMIN, Role.TEACHER)

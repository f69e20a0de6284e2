"""
HTTP API for the content service.

Routers live in `syllabus_graph.api.routers`; the application itself is
assembled in the top-level `app` module.
"""

from syllabus_graph.api.auth import auth_middleware, require_roles
from syllabus_graph.api.errors import register_exception_handlers

__all__ = ["auth_middleware", "register_exception_handlers", "require_roles"]

"""Utility modules for Syllabus Graph."""

from syllabus_graph.utils.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    GraphStoreError,
    NotFoundError,
    SetupError,
    StoreError,
    SyllabusGraphError,
    ValidationError,
)
from syllabus_graph.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "SyllabusGraphError",
    "StoreError",
    "GraphStoreError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "SetupError",
]

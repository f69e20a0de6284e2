"""
Exception hierarchy for Syllabus Graph.

All exceptions inherit from SyllabusGraphError so callers can catch
service errors in one place. The API layer maps each type to an HTTP
status code.
"""


class SyllabusGraphError(Exception):
    """
    Base exception for all Syllabus Graph errors.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(SyllabusGraphError):
    """Base exception for store operations."""

    pass


class GraphStoreError(StoreError):
    """
    Graph store operation errors.
    Raised when connecting to, reading from or writing to Neo4j fails.
    """

    pass


class ValidationError(SyllabusGraphError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class NotFoundError(SyllabusGraphError):
    """
    Resource not found errors.
    Raised when a requested concept, resource, question or learning path doesn't exist.
    """

    pass


class ConflictError(SyllabusGraphError):
    """Raised when creating an entity whose id already exists."""

    pass


class AuthenticationError(SyllabusGraphError):
    """Raised when a request carries no user identity."""

    pass


class AuthorizationError(SyllabusGraphError):
    """Raised when the caller lacks a required role or ownership."""

    pass


class ConfigurationError(SyllabusGraphError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class SetupError(SyllabusGraphError):
    """
    Setup orchestration errors.
    Raised for unknown scripts, dependency cycles and script failures.
    """

    pass

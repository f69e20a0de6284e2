"""
Base interface for graph storage.

Services and setup scripts talk to the database only through this
interface: parameterized Cypher in, plain dict records out.
"""

from abc import ABC, abstractmethod
from typing import Any


class GraphStore(ABC):
    """Abstract base class for graph storage implementations."""

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish the connection and verify the server is reachable.

        Raises:
            GraphStoreError: If the database cannot be reached
        """
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Create constraints and indexes."""
        pass

    @abstractmethod
    async def execute_read(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Run a read-only statement.

        Args:
            cypher: Cypher statement
            params: Statement parameters

        Returns:
            Records as plain dicts
        """
        pass

    @abstractmethod
    async def execute_write(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """
        Run a write statement.

        Args:
            cypher: Cypher statement
            params: Statement parameters

        Returns:
            Records as plain dicts
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the database answers a trivial query. Never raises."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the connection."""
        pass

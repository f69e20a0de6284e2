"""
Neo4j graph store implementation.

Wraps the async Neo4j driver. Every call opens its own session and
releases it when the call finishes; statements run inside the driver's
managed transactions, so the driver's transaction retry is the only
retry applied.
"""

import time
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncManagedTransaction

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.utils.exceptions import GraphStoreError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = [
    "CREATE CONSTRAINT concept_id IF NOT EXISTS FOR (c:Concept) REQUIRE c.id IS UNIQUE",
    "CREATE CONSTRAINT resource_id IF NOT EXISTS FOR (r:Resource) REQUIRE r.resourceId IS UNIQUE",
    "CREATE CONSTRAINT question_id IF NOT EXISTS FOR (q:Question) REQUIRE q.id IS UNIQUE",
    "CREATE CONSTRAINT learning_path_id IF NOT EXISTS FOR (lp:LearningPath) REQUIRE lp.id IS UNIQUE",
    "CREATE CONSTRAINT user_id IF NOT EXISTS FOR (u:User) REQUIRE u.id IS UNIQUE",
    "CREATE INDEX concept_type IF NOT EXISTS FOR (c:Concept) ON (c.type)",
    "CREATE INDEX concept_name IF NOT EXISTS FOR (c:Concept) ON (c.name)",
    "CREATE INDEX learning_path_status IF NOT EXISTS FOR (lp:LearningPath) ON (lp.status)",
]


def _preview(cypher: str) -> str:
    """Collapse whitespace and truncate a statement for logging."""
    flat = " ".join(cypher.split())
    return flat[:100] + ("..." if len(flat) > 100 else "")


def _to_native(value: Any) -> Any:
    """Convert driver values (temporal types, nested lists/maps) to plain Python."""
    if isinstance(value, dict):
        return {k: _to_native(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_native(v) for v in value]
    if hasattr(value, "iso_format"):
        return value.iso_format()
    return value


class Neo4jGraphStore(GraphStore):
    """
    Neo4j-based graph store.

    Features:
    - One session per statement, closed in all cases
    - Managed read/write transactions with driver-level retry
    - Records returned as plain dicts
    - Optional per-statement query logging
    """

    def __init__(
        self,
        uri: str = "bolt://localhost:7687",
        username: str = "neo4j",
        password: str = "password",
        database: str | None = None,
        enable_query_logging: bool = False,
    ):
        """
        Initialize Neo4j graph store.

        Args:
            uri: Neo4j connection URI
            username: Username
            password: Password
            database: Database name (None for the server default)
            enable_query_logging: Log each statement and its duration at debug level
        """
        self.uri = uri
        self.username = username
        self.password = password
        self.database = database
        self.enable_query_logging = enable_query_logging
        self.driver: AsyncDriver | None = None

    async def connect(self) -> None:
        """
        Establish connection to Neo4j and verify connectivity.

        Raises:
            GraphStoreError: If connection fails
        """
        if self.driver is not None:
            return

        try:
            self.driver = AsyncGraphDatabase.driver(
                self.uri,
                auth=(self.username, self.password),
            )
            await self.driver.verify_connectivity()
            logger.info(f"Connected to Neo4j at {self.uri}")
        except Exception as e:
            logger.bind(uri=self.uri).error(f"Failed to connect to Neo4j: {e}")
            if self.driver is not None:
                await self.driver.close()
                self.driver = None
            raise GraphStoreError(f"Failed to connect to Neo4j: {e}", {"uri": self.uri}) from e

    async def initialize(self) -> None:
        """
        Create constraints and indexes.

        Raises:
            GraphStoreError: If initialization fails
        """
        await self.connect()

        try:
            async with self.driver.session(database=self.database) as session:
                for statement in SCHEMA_STATEMENTS:
                    await session.run(statement)
        except Exception as e:
            logger.bind(database=self.database).error(f"Failed to initialize Neo4j schema: {e}")
            raise GraphStoreError(f"Failed to initialize Neo4j: {e}") from e

    async def execute_read(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Run a statement in a managed read transaction."""
        return await self._execute("read", cypher, params)

    async def execute_write(
        self, cypher: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Run a statement in a managed write transaction."""
        return await self._execute("write", cypher, params)

    async def health_check(self) -> bool:
        """Check the database answers `RETURN 1`."""
        try:
            await self.connect()
            async with self.driver.session(database=self.database) as session:
                result = await session.run("RETURN 1 AS ok")
                record = await result.single()
                return record is not None and record["ok"] == 1
        except Exception as e:
            logger.warning(f"Neo4j health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the Neo4j driver."""
        if self.driver is not None:
            await self.driver.close()
            self.driver = None
            logger.info("Disconnected from Neo4j")

    # HELPER METHODS

    async def _execute(
        self, mode: str, cypher: str, params: dict[str, Any] | None
    ) -> list[dict[str, Any]]:
        await self.connect()

        params = params or {}
        started = time.perf_counter()

        if self.enable_query_logging:
            logger.bind(params=params).debug(f"Executing {mode} query: {_preview(cypher)}")

        try:
            async with self.driver.session(database=self.database) as session:
                if mode == "read":
                    records = await session.execute_read(self._run, cypher, params)
                else:
                    records = await session.execute_write(self._run, cypher, params)
        except Exception as e:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.bind(
                query=_preview(cypher),
                duration_ms=round(duration_ms, 2),
                error_type=type(e).__name__,
            ).error(f"{mode.capitalize()} query failed: {e}")
            raise GraphStoreError(
                f"{mode.capitalize()} query failed: {e}", {"query": _preview(cypher)}
            ) from e

        if self.enable_query_logging:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.debug(
                f"{mode.capitalize()} query returned {len(records)} records in {duration_ms:.1f}ms"
            )

        return records

    @staticmethod
    async def _run(
        tx: AsyncManagedTransaction, cypher: str, params: dict[str, Any]
    ) -> list[dict[str, Any]]:
        result = await tx.run(cypher, params)
        return [_to_native(record.data()) async for record in result]

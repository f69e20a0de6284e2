"""
Setup orchestrator - runs named database setup scripts in dependency order.

Scripts run one after another against a single store connection. There is
no rollback: a failed script leaves whatever it already wrote in place.
"""

import time

from syllabus_graph.config import Config
from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.core.graph_store.factory import GraphStoreFactory
from syllabus_graph.setup.script import SetupOptions, SetupPhase, SetupResult, SetupScript
from syllabus_graph.setup.scripts import default_scripts
from syllabus_graph.utils.exceptions import SetupError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)


class SetupOrchestrator:
    """
    Registry and runner for setup scripts.

    Dependencies are expanded depth-first: a script's dependencies come
    before it, in the order they are declared, and a script that is
    reached twice runs once, at its first position.
    """

    def __init__(
        self,
        config: Config,
        graph_store: GraphStore | None = None,
        scripts: list[SetupScript] | None = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: System configuration
            graph_store: Store to run against (built from config if omitted)
            scripts: Scripts to register (the default set if omitted)
        """
        self.config = config
        self.graph_store = graph_store or GraphStoreFactory.create(config)
        self.scripts: dict[str, SetupScript] = {}
        self.results: list[SetupResult] = []

        for script in scripts if scripts is not None else default_scripts(config):
            self.register(script)

    def register(self, script: SetupScript) -> None:
        """
        Add a script to the registry.

        Raises:
            SetupError: If a script with the same name is registered
        """
        if script.name in self.scripts:
            raise SetupError(f"Script already registered: {script.name}", {"script": script.name})
        self.scripts[script.name] = script

    def available_scripts(self) -> list[str]:
        """Registered script names in registration order."""
        return list(self.scripts)

    def script_info(self, name: str) -> SetupScript | None:
        return self.scripts.get(name)

    def execution_order(
        self,
        requested: list[str] | None = None,
        phases: list[SetupPhase] | None = None,
    ) -> list[str]:
        """
        Resolve the scripts to run, dependencies first.

        Args:
            requested: Script names to run; None runs all scripts, minus the
                cleanup phase unless dropping existing data and minus the
                seeding phase when seeding is disabled
            phases: Only keep scripts in these phases

        Returns:
            Script names in execution order

        Raises:
            SetupError: If the dependencies contain a cycle
        """
        order: list[str] = []
        visiting: list[str] = []

        def visit(name: str) -> None:
            if name in order:
                return
            if name in visiting:
                cycle = visiting[visiting.index(name):] + [name]
                raise SetupError(
                    f"Dependency cycle between setup scripts: {' -> '.join(cycle)}",
                    {"cycle": cycle},
                )

            visiting.append(name)
            for dependency in self.scripts[name].depends_on:
                if dependency in self.scripts:
                    visit(dependency)
                else:
                    logger.warning(f"Script {name} depends on unknown script {dependency}")
            visiting.pop()
            order.append(name)

        for name in requested if requested is not None else self.available_scripts():
            if name not in self.scripts:
                logger.warning(f"Skipping unknown setup script: {name}")
                continue
            visit(name)

        if requested is None:
            seeding = self.config.seeding
            order = [
                name
                for name in order
                if (self.scripts[name].phase is not SetupPhase.CLEANUP or seeding.drop_existing)
                and (self.scripts[name].phase is not SetupPhase.SEEDING or seeding.seed_data)
            ]

        if phases is not None:
            order = [name for name in order if self.scripts[name].phase in phases]

        return order

    async def execute(self, options: SetupOptions | None = None) -> list[SetupResult]:
        """
        Connect, run the resolved scripts in order and disconnect.

        With `continue_on_error` off the first failure is recorded and then
        re-raised, so later scripts do not run. With it on every script runs
        and all results are returned. `self.results` holds the results of
        the latest run in both cases.

        Args:
            options: Run options (defaults taken from config)

        Returns:
            One SetupResult per executed script
        """
        if options is None:
            options = SetupOptions(
                continue_on_error=self.config.continue_on_error,
                verbose=self.config.verbose,
            )

        self.results = []
        started = time.perf_counter()

        logger.info("Starting database setup")
        if options.verbose:
            logger.info(f"Configuration: {self.config.safe_dump()}")

        try:
            await self.graph_store.connect()

            order = self.execution_order(options.scripts, options.phases)
            if options.verbose:
                logger.info(f"Execution order: {', '.join(order) or '(none)'}")

            for name in order:
                await self._run_script(self.scripts[name], options)

            total_ms = (time.perf_counter() - started) * 1000
            logger.info(f"Database setup completed in {total_ms:.0f}ms")
        finally:
            await self.graph_store.close()

        return self.results

    async def health_check(self) -> bool:
        """Connect, check the database answers and disconnect. Never raises."""
        try:
            await self.graph_store.connect()
            return await self.graph_store.health_check()
        except Exception as e:
            logger.warning(f"Setup health check failed: {e}")
            return False
        finally:
            await self.graph_store.close()

    async def _run_script(self, script: SetupScript, options: SetupOptions) -> None:
        logger.info(f"Executing: {script.name} ({script.description})")
        script_started = time.perf_counter()

        try:
            await script.execute(self.graph_store)
        except Exception as e:
            duration_ms = (time.perf_counter() - script_started) * 1000
            self.results.append(
                SetupResult(
                    script_name=script.name,
                    success=False,
                    duration_ms=duration_ms,
                    error=str(e),
                )
            )
            logger.bind(script=script.name, error_type=type(e).__name__).error(
                f"Failed: {script.name} ({duration_ms:.0f}ms): {e}"
            )
            if not options.continue_on_error:
                raise
            return

        duration_ms = (time.perf_counter() - script_started) * 1000
        self.results.append(
            SetupResult(script_name=script.name, success=True, duration_ms=duration_ms)
        )
        logger.info(f"Completed: {script.name} ({duration_ms:.0f}ms)")

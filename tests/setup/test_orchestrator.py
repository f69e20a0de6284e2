"""
Tests for the setup orchestrator.
"""

import pytest

from syllabus_graph.config import Config, SeedingConfig
from syllabus_graph.setup.orchestrator import SetupOrchestrator
from syllabus_graph.setup.script import SetupOptions, SetupPhase, SetupScript
from syllabus_graph.setup.scripts import (
    CLEANUP_DATABASE,
    DELETE_ALL,
    IMPORT_CONCEPTS_GRAPH,
    QUERY_IMPORTED_CONCEPTS,
    SEED_GRADE_TOPICS,
    VALIDATE_IMPORTED_GRAPH,
    default_scripts,
)
from syllabus_graph.utils.exceptions import SetupError


def recording_script(name, calls, depends_on=None, phase=SetupPhase.SEEDING, fail=False):
    async def execute(store):
        calls.append(name)
        if fail:
            raise RuntimeError(f"{name} broke")

    return SetupScript(
        name=name,
        description=f"{name} script",
        execute=execute,
        depends_on=depends_on or [],
        phase=phase,
    )


@pytest.fixture
def calls():
    return []


@pytest.mark.unit
class TestExecutionOrder:
    """Test dependency resolution."""

    def test_default_scripts(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store)

        assert orchestrator.available_scripts() == [
            CLEANUP_DATABASE,
            IMPORT_CONCEPTS_GRAPH,
            SEED_GRADE_TOPICS,
            VALIDATE_IMPORTED_GRAPH,
            QUERY_IMPORTED_CONCEPTS,
        ]
        assert orchestrator.script_info(VALIDATE_IMPORTED_GRAPH).depends_on == [
            IMPORT_CONCEPTS_GRAPH
        ]
        assert orchestrator.script_info("nope") is None

    def test_dependencies_come_first(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store)

        order = orchestrator.execution_order([QUERY_IMPORTED_CONCEPTS, VALIDATE_IMPORTED_GRAPH])

        assert order == [IMPORT_CONCEPTS_GRAPH, QUERY_IMPORTED_CONCEPTS, VALIDATE_IMPORTED_GRAPH]

    def test_run_all_skips_cleanup_by_default(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store)

        order = orchestrator.execution_order()

        assert CLEANUP_DATABASE not in order
        assert order[0] == IMPORT_CONCEPTS_GRAPH

    def test_run_all_with_drop_existing(self, mock_graph_store):
        config = Config(seeding=SeedingConfig(drop_existing=True))
        orchestrator = SetupOrchestrator(config, mock_graph_store)

        assert orchestrator.execution_order()[0] == CLEANUP_DATABASE

    def test_run_all_without_seeding(self, mock_graph_store):
        config = Config(seeding=SeedingConfig(seed_data=False))
        orchestrator = SetupOrchestrator(config, mock_graph_store)

        assert orchestrator.execution_order() == [VALIDATE_IMPORTED_GRAPH, QUERY_IMPORTED_CONCEPTS]

    def test_named_cleanup_runs_even_without_drop_existing(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store)

        assert orchestrator.execution_order([CLEANUP_DATABASE]) == [CLEANUP_DATABASE]

    def test_unknown_script_skipped(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store)

        assert orchestrator.execution_order(["does-not-exist"]) == []

    def test_phase_filter(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store)

        order = orchestrator.execution_order(phases=[SetupPhase.VALIDATION])

        assert order == [VALIDATE_IMPORTED_GRAPH, QUERY_IMPORTED_CONCEPTS]

    def test_cycle_detected(self, test_config, mock_graph_store, calls):
        scripts = [
            recording_script("a", calls, depends_on=["b"]),
            recording_script("b", calls, depends_on=["a"]),
        ]
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, scripts)

        with pytest.raises(SetupError, match="a -> b -> a"):
            orchestrator.execution_order(["a"])

    def test_shared_dependency_runs_once(self, test_config, mock_graph_store, calls):
        scripts = [
            recording_script("base", calls),
            recording_script("left", calls, depends_on=["base"]),
            recording_script("right", calls, depends_on=["base"]),
        ]
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, scripts)

        assert orchestrator.execution_order(["left", "right"]) == ["base", "left", "right"]

    def test_duplicate_registration(self, test_config, mock_graph_store, calls):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, [])
        orchestrator.register(recording_script("a", calls))

        with pytest.raises(SetupError, match="already registered"):
            orchestrator.register(recording_script("a", calls))


@pytest.mark.unit
@pytest.mark.asyncio
class TestExecute:
    """Test running scripts."""

    async def test_runs_in_order_and_closes(self, test_config, mock_graph_store, calls):
        scripts = [
            recording_script("import", calls),
            recording_script("validate", calls, depends_on=["import"], phase=SetupPhase.VALIDATION),
        ]
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, scripts)

        results = await orchestrator.execute(SetupOptions(scripts=["validate"]))

        assert calls == ["import", "validate"]
        assert [r.script_name for r in results] == ["import", "validate"]
        assert all(r.success for r in results)
        mock_graph_store.connect.assert_awaited_once()
        mock_graph_store.close.assert_awaited_once()

    async def test_stops_on_first_failure(self, test_config, mock_graph_store, calls):
        scripts = [
            recording_script("first", calls, fail=True),
            recording_script("second", calls),
        ]
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, scripts)

        with pytest.raises(RuntimeError, match="first broke"):
            await orchestrator.execute(SetupOptions())

        assert calls == ["first"]
        assert len(orchestrator.results) == 1
        assert orchestrator.results[0].error == "first broke"
        mock_graph_store.close.assert_awaited_once()

    async def test_continue_on_error(self, test_config, mock_graph_store, calls):
        scripts = [
            recording_script("first", calls, fail=True),
            recording_script("second", calls),
        ]
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, scripts)

        results = await orchestrator.execute(SetupOptions(continue_on_error=True))

        assert calls == ["first", "second"]
        assert [r.success for r in results] == [False, True]

    async def test_connect_failure_still_closes(self, test_config, mock_graph_store, calls):
        mock_graph_store.connect.side_effect = RuntimeError("no database")
        orchestrator = SetupOrchestrator(
            test_config, mock_graph_store, [recording_script("a", calls)]
        )

        with pytest.raises(RuntimeError):
            await orchestrator.execute()

        assert calls == []
        mock_graph_store.close.assert_awaited_once()

    async def test_health_check(self, test_config, mock_graph_store):
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, [])

        assert await orchestrator.health_check() is True
        mock_graph_store.close.assert_awaited_once()

    async def test_health_check_failure(self, test_config, mock_graph_store):
        mock_graph_store.connect.side_effect = RuntimeError("no database")
        orchestrator = SetupOrchestrator(test_config, mock_graph_store, [])

        assert await orchestrator.health_check() is False


@pytest.mark.unit
@pytest.mark.asyncio
class TestDefaultScripts:
    """Test the built-in scripts against a mocked store."""

    def scripts(self, config):
        return {s.name: s for s in default_scripts(config)}

    async def test_cleanup_deletes_everything(self, test_config, mock_graph_store):
        await self.scripts(test_config)[CLEANUP_DATABASE].execute(mock_graph_store)

        mock_graph_store.execute_write.assert_awaited_once_with(DELETE_ALL)

    async def test_validate_requires_root(self, test_config, mock_graph_store):
        with pytest.raises(SetupError, match="Root concept OLM001 not found"):
            await self.scripts(test_config)[VALIDATE_IMPORTED_GRAPH].execute(mock_graph_store)

    async def test_query_tolerates_empty_graph(self, test_config, mock_graph_store):
        await self.scripts(test_config)[QUERY_IMPORTED_CONCEPTS].execute(mock_graph_store)

        assert mock_graph_store.execute_read.await_count == 5

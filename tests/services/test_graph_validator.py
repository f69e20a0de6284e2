"""
Tests for the graph validator.
"""

import pytest

from syllabus_graph.config import DEFAULT_HIERARCHY_FILE
from syllabus_graph.services.graph_validator import (
    FIND_ROOT,
    GraphValidationReport,
    GraphValidator,
)
from syllabus_graph.services.hierarchy_importer import HierarchyImporter
from syllabus_graph.utils.exceptions import GraphStoreError


@pytest.mark.unit
@pytest.mark.asyncio
class TestGraphValidator:
    """Test the aggregate checks."""

    async def test_report_after_import(self, concept_store):
        await HierarchyImporter(concept_store).import_file(DEFAULT_HIERARCHY_FILE)

        report = await GraphValidator(concept_store).validate()

        assert report.root_exists
        assert report.root_name == "Ordinary Level Mathematics"
        assert report.root_type == "Subject"
        assert report.concept_count == 34
        assert report.contains_count == 33
        assert report.type_distribution == {
            "Particle": 18,
            "Atom": 11,
            "Molecule": 3,
            "Matter": 1,
            "Subject": 1,
        }
        assert list(report.type_distribution) == ["Particle", "Atom", "Molecule", "Matter", "Subject"]
        assert report.max_depth == 4
        assert report.multi_parent_ids == []
        assert report.is_valid

    async def test_empty_graph(self, concept_store):
        report = await GraphValidator(concept_store).validate()

        assert not report.root_exists
        assert report.concept_count == 0
        assert report.type_distribution == {}
        assert report.max_depth is None
        assert not report.is_valid

    async def test_multi_parent_detected(self, concept_store):
        await HierarchyImporter(concept_store).import_file(DEFAULT_HIERARCHY_FILE)
        concept_store.contains.add(("ATM002", "PAR001"))

        report = await GraphValidator(concept_store).validate()

        assert report.multi_parent_ids == ["PAR001"]
        assert not report.is_valid

    async def test_custom_root(self, mock_graph_store):
        mock_graph_store.execute_read.return_value = [{"name": "Grade6", "type": "Grade"}]
        validator = GraphValidator(mock_graph_store, root_id="GRD006")

        root = await validator.find_root()

        assert root == {"name": "Grade6", "type": "Grade"}
        mock_graph_store.execute_read.assert_awaited_once_with(FIND_ROOT, {"rootId": "GRD006"})

    async def test_read_failure_propagates(self, mock_graph_store):
        mock_graph_store.execute_read.side_effect = GraphStoreError("Read query failed")

        with pytest.raises(GraphStoreError):
            await GraphValidator(mock_graph_store).validate()


@pytest.mark.unit
class TestGraphValidationReport:
    def test_defaults(self):
        report = GraphValidationReport(root_id="OLM001")

        assert report.concept_count == 0
        assert not report.is_valid

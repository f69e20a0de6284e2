"""
Services layer for Syllabus Graph.

- HierarchyImporter: loads the concept hierarchy into the graph
- GradeTopicSeeder: seeds grades, topics, resources and prerequisite links
- GraphValidator: aggregate sanity checks on the imported graph
- ConceptService, ResourceService, QuestionService, LearningPathService: API operations
"""

from syllabus_graph.services.concept_service import ConceptService
from syllabus_graph.services.grade_seeder import GradeTopicSeeder
from syllabus_graph.services.graph_validator import GraphValidationReport, GraphValidator
from syllabus_graph.services.hierarchy_importer import HierarchyImporter, flatten_hierarchy
from syllabus_graph.services.learning_path_service import LearningPathService
from syllabus_graph.services.question_service import QuestionService
from syllabus_graph.services.resource_service import ResourceService

__all__ = [
    "ConceptService",
    "GradeTopicSeeder",
    "GraphValidationReport",
    "GraphValidator",
    "HierarchyImporter",
    "LearningPathService",
    "QuestionService",
    "ResourceService",
    "flatten_hierarchy",
]

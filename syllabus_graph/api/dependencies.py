"""
FastAPI dependencies resolving the services built at startup.
"""

from fastapi import Request

from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.services.concept_service import ConceptService
from syllabus_graph.services.learning_path_service import LearningPathService
from syllabus_graph.services.question_service import QuestionService
from syllabus_graph.services.resource_service import ResourceService


def get_graph_store(request: Request) -> GraphStore:
    return request.app.state.graph_store


def get_concept_service(request: Request) -> ConceptService:
    return request.app.state.concept_service


def get_resource_service(request: Request) -> ResourceService:
    return request.app.state.resource_service


def get_question_service(request: Request) -> QuestionService:
    return request.app.state.question_service


def get_learning_path_service(request: Request) -> LearningPathService:
    return request.app.state.learning_path_service

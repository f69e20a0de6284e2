"""
Syllabus Graph FastAPI Application

REST API of the content service: the syllabus tree, concepts, resources,
questions and learning paths stored in the Neo4j curriculum graph.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from syllabus_graph import __version__
from syllabus_graph.api import auth_middleware, register_exception_handlers
from syllabus_graph.api.routers import (
    concepts,
    health,
    learning_paths,
    questions,
    resources,
    syllabus,
)
from syllabus_graph.config import Config
from syllabus_graph.core.graph_store import GraphStore, GraphStoreFactory
from syllabus_graph.services import (
    ConceptService,
    LearningPathService,
    QuestionService,
    ResourceService,
)
from syllabus_graph.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(config: Config | None = None, graph_store: GraphStore | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Configuration (loaded from the environment if omitted)
        graph_store: Graph store to use (built from config if omitted)
    """
    config = config or Config.from_env()
    graph_store = graph_store or GraphStoreFactory.create(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown."""
        setup_logging(
            level=config.logging.level,
            log_to_file=config.logging.log_to_file,
            log_dir=config.logging.log_dir,
            file_rotation=config.logging.file_rotation,
            file_retention=config.logging.file_retention,
            compression=config.logging.compression,
            serialize=config.logging.serialize,
        )

        logger.info(f"Starting {config.api.service_name}")
        logger.info(f"Configuration: Neo4j={config.neo4j.uri}, database={config.neo4j.database}")

        await graph_store.connect()
        await graph_store.initialize()
        logger.info("Graph store initialized")

        yield

        logger.info(f"Shutting down {config.api.service_name}")
        await graph_store.close()
        logger.info("Cleanup complete")

    app = FastAPI(
        title="Syllabus Graph API",
        description="Content service over the curriculum concept graph",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.graph_store = graph_store
    app.state.concept_service = ConceptService(graph_store)
    app.state.resource_service = ResourceService(graph_store, config.api.upload_base_url)
    app.state.question_service = QuestionService(graph_store)
    app.state.learning_path_service = LearningPathService(graph_store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(auth_middleware)
    register_exception_handlers(app)

    for module in (health, syllabus, concepts, resources, questions, learning_paths):
        app.include_router(module.router)

    return app


app = create_app()

"""
Built-in setup scripts.

`default_scripts(config)` returns them in registration order; each script
closes over the config it needs and only receives the store when run.
"""

from syllabus_graph.config import Config
from syllabus_graph.core.graph_store.base import GraphStore
from syllabus_graph.services.grade_seeder import GradeTopicSeeder
from syllabus_graph.services.graph_validator import GraphValidator
from syllabus_graph.services.hierarchy_importer import HierarchyImporter
from syllabus_graph.setup.script import SetupPhase, SetupScript
from syllabus_graph.utils.exceptions import SetupError
from syllabus_graph.utils.logger import get_logger

logger = get_logger(__name__)

CLEANUP_DATABASE = "cleanup-database"
IMPORT_CONCEPTS_GRAPH = "import-concepts-graph"
SEED_GRADE_TOPICS = "seed-grade-topics"
VALIDATE_IMPORTED_GRAPH = "validate-imported-graph"
QUERY_IMPORTED_CONCEPTS = "query-imported-concepts"

DELETE_ALL = "MATCH (n) DETACH DELETE n"

QUERY_ROOT = "MATCH (c:Concept {id: $rootId}) RETURN c.id AS id, c.name AS name, c.type AS type"

QUERY_MATTERS = """
MATCH (:Concept {id: $rootId})-[:CONTAINS]->(m:Concept {type: 'Matter'})
RETURN m.id AS id, m.name AS name, m.type AS type
ORDER BY m.name
"""

QUERY_CHILDREN = """
MATCH (:Concept {id: $id})-[:CONTAINS]->(c:Concept)
RETURN c.id AS id, c.name AS name, c.type AS type
ORDER BY c.id
"""

QUERY_PATH = """
MATCH path = (:Concept {id: $rootId})-[:CONTAINS*]->(:Concept {id: $leafId})
RETURN [n IN nodes(path) | n.name + ' (' + n.type + ')'] AS steps
LIMIT 1
"""


def default_scripts(config: Config) -> list[SetupScript]:
    """Build the standard setup scripts for `config`."""
    seeding = config.seeding

    async def cleanup_database(store: GraphStore) -> None:
        logger.warning("Deleting all nodes and relationships")
        await store.execute_write(DELETE_ALL)
        logger.info("Database cleaned")

    async def import_concepts_graph(store: GraphStore) -> None:
        await store.initialize()
        await HierarchyImporter(store).import_file(seeding.hierarchy_file)

    async def seed_grade_topics(store: GraphStore) -> None:
        seeder = GradeTopicSeeder(store, root_id=seeding.root_concept_id)
        await seeder.seed_file(seeding.grades_file)

    async def validate_imported_graph(store: GraphStore) -> None:
        report = await GraphValidator(store, root_id=seeding.root_concept_id).validate()
        if not report.root_exists:
            raise SetupError(
                f"Root concept {seeding.root_concept_id} not found after import",
                {"root_id": seeding.root_concept_id},
            )
        if not report.is_valid:
            logger.warning("Concept hierarchy is not a tree")

    async def query_imported_concepts(store: GraphStore) -> None:
        root_id = seeding.root_concept_id

        for row in await store.execute_read(QUERY_ROOT, {"rootId": root_id}):
            logger.info(f"Root concept: {row['name']} ({row['id']}) - {row['type']}")

        for i, row in enumerate(await store.execute_read(QUERY_MATTERS, {"rootId": root_id}), 1):
            logger.info(f"Matter {i}: {row['name']} ({row['id']})")

        for parent_id in ("MOL001", "ATM001"):
            rows = await store.execute_read(QUERY_CHILDREN, {"id": parent_id})
            logger.info(f"Children of {parent_id}:")
            for i, row in enumerate(rows, 1):
                logger.info(f"  {i}. {row['name']} ({row['id']}) - {row['type']}")

        rows = await store.execute_read(QUERY_PATH, {"rootId": root_id, "leafId": "PAR001"})
        if rows:
            logger.info(f"Path to PAR001: {' -> '.join(rows[0]['steps'])}")

    return [
        SetupScript(
            name=CLEANUP_DATABASE,
            description="Delete every node and relationship in the database",
            execute=cleanup_database,
            phase=SetupPhase.CLEANUP,
        ),
        SetupScript(
            name=IMPORT_CONCEPTS_GRAPH,
            description="Import the concept hierarchy with CONTAINS relationships",
            execute=import_concepts_graph,
            phase=SetupPhase.SEEDING,
        ),
        SetupScript(
            name=SEED_GRADE_TOPICS,
            description="Seed grades, topics, resources and prerequisite links",
            execute=seed_grade_topics,
            depends_on=[IMPORT_CONCEPTS_GRAPH],
            phase=SetupPhase.SEEDING,
        ),
        SetupScript(
            name=VALIDATE_IMPORTED_GRAPH,
            description="Validate the imported concept graph structure",
            execute=validate_imported_graph,
            depends_on=[IMPORT_CONCEPTS_GRAPH],
            phase=SetupPhase.VALIDATION,
        ),
        SetupScript(
            name=QUERY_IMPORTED_CONCEPTS,
            description="Query and display information about imported concepts",
            execute=query_imported_concepts,
            depends_on=[IMPORT_CONCEPTS_GRAPH],
            phase=SetupPhase.VALIDATION,
        ),
    ]

"""
Command line interface for database setup.

Usage:
    syllabus-setup run [script ...]   Run setup scripts (all if none given)
    syllabus-setup list               List available scripts
    syllabus-setup health             Check the database connection
    syllabus-setup config             Show the current configuration
"""

import argparse
import asyncio
import json
import sys

from syllabus_graph.config import Config
from syllabus_graph.setup.orchestrator import SetupOrchestrator
from syllabus_graph.setup.script import SetupOptions
from syllabus_graph.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

ENVIRONMENT_HELP = """environment variables:
  NEO4J_URI           Neo4j connection URI
  NEO4J_USERNAME      Neo4j username
  NEO4J_PASSWORD      Neo4j password
  NEO4J_DATABASE      Neo4j database name
  DROP_EXISTING_DATA  Drop existing data before seeding ("true")
  SEED_DATA           Seed curriculum data (default: true)
  CONTINUE_ON_ERROR   Keep running after a script fails ("true")
  VERBOSE             Verbose output ("true")
  LOG_LEVEL           Log level (default: INFO)
"""


class SetupArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = SetupArgumentParser(
        prog="syllabus-setup",
        description="Set up the syllabus graph database",
        epilog=ENVIRONMENT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    run = commands.add_parser("run", help="Run setup scripts (runs all if none specified)")
    run.add_argument("scripts", nargs="*", help="Script names")
    commands.add_parser("list", help="List all available scripts")
    commands.add_parser("health", help="Check database connection health")
    commands.add_parser("config", help="Show current configuration")

    return parser


async def run_scripts(orchestrator: SetupOrchestrator, config: Config, scripts: list[str]) -> int:
    options = SetupOptions(
        scripts=scripts or None,
        continue_on_error=config.continue_on_error,
        verbose=config.verbose,
    )

    try:
        results = await orchestrator.execute(options)
    except Exception as e:
        logger.error(f"Setup failed: {e}")
        return 1

    failed = [r for r in results if not r.success]
    if failed:
        logger.error(f"{len(failed)} script(s) failed:")
        for result in failed:
            logger.error(f"  - {result.script_name}: {result.error}")
        return 1

    logger.info(f"All {len(results)} scripts executed successfully")
    return 0


def list_scripts(orchestrator: SetupOrchestrator) -> int:
    print("Available scripts:")
    for name in orchestrator.available_scripts():
        script = orchestrator.script_info(name)
        print(f"  - {name}: {script.description}")
        if script.depends_on:
            print(f"    Dependencies: {', '.join(script.depends_on)}")
    return 0


async def check_health(orchestrator: SetupOrchestrator) -> int:
    if await orchestrator.health_check():
        print("Database connection is healthy")
        return 0
    print("Database connection is unhealthy")
    return 1


def show_config(config: Config) -> int:
    print("Current configuration:")
    print(json.dumps(config.safe_dump(), indent=2))
    return 0


def main(argv: list[str] | None = None, config: Config | None = None) -> int:
    """
    Entry point for the setup CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = config or Config.from_env()
    setup_logging(level=config.logging.level, log_to_file=config.logging.log_to_file)

    if args.command == "config":
        return show_config(config)

    orchestrator = SetupOrchestrator(config)

    if args.command == "list":
        return list_scripts(orchestrator)
    if args.command == "health":
        return asyncio.run(check_health(orchestrator))
    return asyncio.run(run_scripts(orchestrator, config, args.scripts))


if __name__ == "__main__":
    sys.exit(main())

"""
Configuration for Syllabus Graph.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from syllabus_graph.utils.exceptions import ConfigurationError

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_HIERARCHY_FILE = str(DATA_DIR / "concept_hierarchy.json")
DEFAULT_GRADES_FILE = str(DATA_DIR / "grade_topics.json")


class Neo4jConfig(BaseModel):
    """Neo4j graph database configuration."""

    uri: str = "bolt://localhost:7687"
    username: str = "neo4j"
    password: str = "password"
    database: str | None = None  # None uses the server's default database


class SeedingConfig(BaseModel):
    """Seeding behaviour for the setup tool."""

    drop_existing: bool = False
    seed_data: bool = True
    hierarchy_file: str = DEFAULT_HIERARCHY_FILE
    grades_file: str = DEFAULT_GRADES_FILE
    root_concept_id: str = "OLM001"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    enable_query_logging: bool = False
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    service_name: str = "content-service"
    upload_base_url: str = "https://api-gateway.example.com/upload"


class Config(BaseModel):
    """Main configuration."""

    neo4j: Neo4jConfig = Field(default_factory=Neo4jConfig)
    seeding: SeedingConfig = Field(default_factory=SeedingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    # Setup tool run options
    continue_on_error: bool = False
    verbose: bool = False

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in working directory)

        Returns:
            Config instance

        Environment variables:
            NEO4J_URI: Neo4j URI
            NEO4J_USERNAME: Neo4j username
            NEO4J_PASSWORD: Neo4j password
            NEO4J_DATABASE: Neo4j database name (optional)
            DROP_EXISTING_DATA: Drop existing data before seeding ("true")
            SEED_DATA: Seed curriculum data (default true, "false" disables)
            HIERARCHY_FILE: Path to the concept hierarchy JSON
            GRADES_FILE: Path to the grade/topic JSON
            ROOT_CONCEPT_ID: Id of the curriculum root concept
            CONTINUE_ON_ERROR: Keep running setup scripts after a failure
            VERBOSE: Verbose setup output
            LOG_LEVEL: Log level
            ENABLE_QUERY_LOGGING: Log every Cypher statement at debug level
            LOG_TO_FILE: Also write JSON logs to LOG_DIR
            API_HOST / API_PORT: HTTP bind address
            CORS_ORIGINS: Comma-separated allowed origins
            UPLOAD_BASE_URL: Base URL for resource upload links
        """
        # Load .env file if provided or exists
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None:
                return default
            if value == "":
                return default
            # Flags are on only for the exact string "true"
            if isinstance(default, bool):
                return value == "true"
            # Convert numeric strings
            try:
                if isinstance(default, int):
                    return int(value)
                if isinstance(default, float):
                    return float(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {key}: {value}", {"key": key}) from e
            return value

        cors = get_env("CORS_ORIGINS")

        return cls(
            neo4j=Neo4jConfig(
                uri=get_env("NEO4J_URI", "bolt://localhost:7687"),
                username=get_env("NEO4J_USERNAME", "neo4j"),
                password=get_env("NEO4J_PASSWORD", "password"),
                database=get_env("NEO4J_DATABASE"),
            ),
            seeding=SeedingConfig(
                drop_existing=get_env("DROP_EXISTING_DATA", False),
                seed_data=get_env("SEED_DATA") != "false",
                hierarchy_file=get_env("HIERARCHY_FILE", DEFAULT_HIERARCHY_FILE),
                grades_file=get_env("GRADES_FILE", DEFAULT_GRADES_FILE),
                root_concept_id=get_env("ROOT_CONCEPT_ID", "OLM001"),
            ),
            logging=LoggingConfig(
                level=get_env("LOG_LEVEL", "INFO").upper(),
                enable_query_logging=get_env("ENABLE_QUERY_LOGGING", False),
                log_to_file=get_env("LOG_TO_FILE", False),
                log_dir=get_env("LOG_DIR", "logs"),
            ),
            api=ApiConfig(
                host=get_env("API_HOST", "0.0.0.0"),
                port=get_env("API_PORT", 8000),
                cors_origins=[o.strip() for o in cors.split(",")] if cors else ["*"],
                upload_base_url=get_env(
                    "UPLOAD_BASE_URL", "https://api-gateway.example.com/upload"
                ),
            ),
            continue_on_error=get_env("CONTINUE_ON_ERROR", False),
            verbose=get_env("VERBOSE", False),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        final_dict = {**config_dict}

        # Apply env overrides (non-default values)
        default = cls()
        for section in ("neo4j", "seeding", "logging", "api"):
            if getattr(env_config, section) != getattr(default, section):
                final_dict[section] = getattr(env_config, section).model_dump()
        for flag in ("continue_on_error", "verbose"):
            if getattr(env_config, flag) != getattr(default, flag):
                final_dict[flag] = getattr(env_config, flag)

        return cls(**final_dict) if final_dict else env_config

    def safe_dump(self) -> dict[str, Any]:
        """Dump configuration with the database password masked."""
        data = self.model_dump()
        if data["neo4j"].get("password"):
            data["neo4j"]["password"] = "********"
        return data


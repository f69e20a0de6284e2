"""
Tests for configuration loading.
"""

import pytest

from syllabus_graph.config import DEFAULT_HIERARCHY_FILE, Config
from syllabus_graph.utils.exceptions import ConfigurationError

ENV_VARS = [
    "NEO4J_URI",
    "NEO4J_USERNAME",
    "NEO4J_PASSWORD",
    "NEO4J_DATABASE",
    "DROP_EXISTING_DATA",
    "SEED_DATA",
    "HIERARCHY_FILE",
    "LOG_LEVEL",
    "ENABLE_QUERY_LOGGING",
    "CONTINUE_ON_ERROR",
    "VERBOSE",
    "CORS_ORIGINS",
    "API_PORT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no config variables set."""
    for var in ENV_VARS:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.mark.unit
class TestConfig:
    """Test configuration defaults and sources."""

    def test_defaults(self):
        config = Config()

        assert config.neo4j.uri == "bolt://localhost:7687"
        assert config.neo4j.database is None
        assert config.seeding.drop_existing is False
        assert config.seeding.seed_data is True
        assert config.seeding.hierarchy_file == DEFAULT_HIERARCHY_FILE
        assert config.logging.level == "INFO"
        assert config.continue_on_error is False

    def test_from_env_without_variables_uses_defaults(self, clean_env):
        config = Config.from_env()

        assert config.neo4j.username == "neo4j"
        assert config.seeding.seed_data is True
        assert config.api.cors_origins == ["*"]

    def test_from_env_reads_variables(self, clean_env):
        clean_env.setenv("NEO4J_URI", "bolt://db:7687")
        clean_env.setenv("NEO4J_DATABASE", "curriculum")
        clean_env.setenv("DROP_EXISTING_DATA", "true")
        clean_env.setenv("SEED_DATA", "false")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("ENABLE_QUERY_LOGGING", "true")
        clean_env.setenv("CONTINUE_ON_ERROR", "true")
        clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
        clean_env.setenv("API_PORT", "9000")

        config = Config.from_env()

        assert config.neo4j.uri == "bolt://db:7687"
        assert config.neo4j.database == "curriculum"
        assert config.seeding.drop_existing is True
        assert config.seeding.seed_data is False
        assert config.logging.level == "DEBUG"
        assert config.logging.enable_query_logging is True
        assert config.continue_on_error is True
        assert config.api.cors_origins == ["http://a.test", "http://b.test"]
        assert config.api.port == 9000

    def test_config_built_only_on_request(self):
        import syllabus_graph.config as config_module

        assert not [v for v in vars(config_module).values() if isinstance(v, Config)]

    @pytest.mark.parametrize("value", ["no", "1", "yes", "TRUE"])
    def test_drop_existing_requires_true(self, clean_env, value):
        clean_env.setenv("DROP_EXISTING_DATA", value)

        assert Config.from_env().seeding.drop_existing is False

    @pytest.mark.parametrize("value", ["no", "0", "FALSE"])
    def test_seed_data_only_disabled_by_false(self, clean_env, value):
        clean_env.setenv("SEED_DATA", value)

        assert Config.from_env().seeding.seed_data is True

    def test_invalid_number(self, clean_env):
        clean_env.setenv("API_PORT", "eighty")

        with pytest.raises(ConfigurationError, match="API_PORT"):
            Config.from_env()

    def test_from_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / "test.env"
        env_file.write_text("NEO4J_USERNAME=reader\nVERBOSE=true\n")

        config = Config.from_env(env_file=env_file)

        assert config.neo4j.username == "reader"
        assert config.verbose is True

    def test_from_yaml(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            "neo4j:\n  uri: bolt://yaml:7687\nseeding:\n  drop_existing: true\n"
        )

        config = Config.from_yaml(yaml_file)

        assert config.neo4j.uri == "bolt://yaml:7687"
        assert config.seeding.drop_existing is True

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "missing.yaml")

    def test_env_overrides_yaml(self, clean_env, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("neo4j:\n  uri: bolt://yaml:7687\nverbose: false\n")
        clean_env.setenv("NEO4J_URI", "bolt://env:7687")
        clean_env.setenv("VERBOSE", "true")

        config = Config.from_env_or_yaml(yaml_path=yaml_file)

        assert config.neo4j.uri == "bolt://env:7687"
        assert config.verbose is True

    def test_safe_dump_masks_password(self, test_config):
        dumped = test_config.safe_dump()

        assert dumped["neo4j"]["password"] == "********"
        assert test_config.neo4j.password == "secret"

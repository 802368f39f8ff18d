"""Tests for configuration and the command line entry point."""

import logging
import tempfile
from pathlib import Path

import pytest

from chargeledger import Database, DatabaseConfig
from chargeledger.config import DEFAULT_SCHEMA_PATH
from chargeledger.main import TABLES, build_parser, check, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() installs its own handlers on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def db_path():
    with tempfile.TemporaryDirectory() as tmp:
        yield str(Path(tmp) / "cli.db")


@pytest.mark.unit
class TestDatabaseConfig:
    def test_defaults(self):
        config = DatabaseConfig()

        assert config.path == "chargeledger.db"
        assert config.journal_mode == "WAL"
        assert config.schema_path == DEFAULT_SCHEMA_PATH
        assert DEFAULT_SCHEMA_PATH.exists()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CHARGELEDGER_DB", "/tmp/env.db")
        monkeypatch.setenv("CHARGELEDGER_BUSY_TIMEOUT", "2.5")

        config = DatabaseConfig.from_env()

        assert config.path == "/tmp/env.db"
        assert config.busy_timeout == 2.5

    def test_from_env_override_wins(self, monkeypatch):
        monkeypatch.setenv("CHARGELEDGER_DB", "/tmp/env.db")

        config = DatabaseConfig.from_env(path="/tmp/cli.db")

        assert config.path == "/tmp/cli.db"

    def test_is_immutable(self):
        config = DatabaseConfig()

        with pytest.raises(AttributeError):
            config.path = "other.db"


@pytest.mark.unit
class TestCommandLine:
    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    async def test_init_db_then_check(self, db_path, capsys):
        assert await main(["--db", db_path, "init-db"]) == 0
        assert await main(["--db", db_path, "check"]) == 0

        output = capsys.readouterr().out
        for table in TABLES:
            assert f"{table}: 0" in output

    async def test_initialize_schema_is_repeatable(self, db_path):
        db = Database(DatabaseConfig(path=db_path))
        await db.initialize_schema()
        await db.initialize_schema()

        counts = await check(db)
        await db.disconnect()

        assert set(counts) == set(TABLES)

    async def test_check_without_schema_fails(self, db_path):
        assert await main(["--db", db_path, "check"]) == 1

"""Unit tests for the command line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from cleanblog.cli.main import cli
from cleanblog.utils.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    root.propagate = propagate


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    for name in ("CLEANBLOG_DATABASE_URL", "CLEANBLOG_JWT_SECRET", "CLEANBLOG_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        f"database:\n"
        f"  url: sqlite+aiosqlite:///{tmp_path / 'blog.db'}\n"
        f"jwt:\n"
        f"  secret: cli-secret\n"
        f"logger:\n"
        f"  level: WARNING\n"
    )
    return str(path)


@pytest.mark.unit
class TestCLI:
    """Test the cleanblog CLI."""

    def test_show_config_masks_secret(self, runner, config_path):
        """Test show-config masks the JWT secret."""
        result = runner.invoke(cli, ["--config", config_path, "show-config"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["jwt"]["secret"] == "********"
        assert data["database"]["url"].startswith("sqlite+aiosqlite://")

    def test_invalid_config(self, runner, tmp_path):
        """Test an invalid config file."""
        path = tmp_path / "bad.yaml"
        path.write_text("- not a mapping\n")

        result = runner.invoke(cli, ["--config", str(path), "show-config"])

        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_register_and_login(self, runner, config_path):
        """Test register followed by login."""
        assert runner.invoke(cli, ["--config", config_path, "init-db"]).exit_code == 0

        registered = runner.invoke(
            cli, ["--config", config_path, "register", "alice", "alice@example.com", "--password", "s3cret"]
        )
        assert registered.exit_code == 0
        assert "Registered alice" in registered.output

        login = runner.invoke(cli, ["--config", config_path, "login", "alice", "--password", "s3cret"])
        assert login.exit_code == 0
        assert login.output.strip()

    def test_business_errors_exit_with_one(self, runner, config_path):
        """Test business errors exit with status 1."""
        runner.invoke(cli, ["--config", config_path, "init-db"])
        runner.invoke(
            cli, ["--config", config_path, "register", "alice", "alice@example.com", "--password", "s3cret"]
        )

        duplicate = runner.invoke(
            cli, ["--config", config_path, "register", "alice", "alice@example.com", "--password", "x"]
        )
        wrong = runner.invoke(cli, ["--config", config_path, "login", "alice", "--password", "nope"])

        assert duplicate.exit_code == 1
        assert '"code": 20001' in duplicate.output
        assert wrong.exit_code == 1
        assert '"code": 20003' in wrong.output

"""Tests for the tierfix command-line interface."""

from __future__ import annotations

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from tierfix.cli import EXIT_OTHER, EXIT_PARSE_ARGS, app
from tierfix.infrastructure.logging import reset_logging
from tierfix.stores.backends.memory import MemoryStorageClient
from tierfix.stores.tiering.base import TierType

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TIERFIX_"):
            monkeypatch.delenv(key)
    yield
    reset_logging()


@pytest.fixture
def client() -> MemoryStorageClient:
    client = MemoryStorageClient()
    client.add("data", "hot-1", TierType.HOT)
    client.add("data", "old-1", TierType.ARCHIVE)
    client.add("data", "hot-2", TierType.HOT)
    client.add("data", "old-2", TierType.ARCHIVE)
    return client


@pytest.fixture
def factory(client: MemoryStorageClient):
    with patch("tierfix.cli.get_storage_client", return_value=client) as mock_factory:
        yield mock_factory


class TestRunCommand:
    """Tests for `tierfix run`."""

    def test_help(self):
        """Test the run command lists its options."""
        result = runner.invoke(app, ["run", "--help"])

        assert result.exit_code == 0
        assert "--max-blobs" in result.output
        assert "--dry-run" in result.output

    def test_missing_container(self, factory: MagicMock):
        """Test a missing container is an argument error."""
        result = runner.invoke(app, ["run"])

        assert result.exit_code == EXIT_PARSE_ARGS
        factory.assert_not_called()

    def test_invalid_tier(self, factory: MagicMock):
        """Test an unknown tier is an argument error."""
        result = runner.invoke(app, ["run", "--container", "data", "--tier", "glacier"])

        assert result.exit_code == EXIT_PARSE_ARGS

    def test_archives_warm_blobs(self, factory: MagicMock, client: MemoryStorageClient):
        """Test a normal run archives the hot blobs only."""
        result = runner.invoke(
            app,
            [
                "run",
                "--container", "data",
                "--connection-string", "UseDevelopmentStorage=true",
                "--max-blobs", "10",
                "--json",
                "--log-level", "error",
            ],
        )

        assert result.exit_code == 0
        assert client.tier_calls == [
            ("hot-1", TierType.ARCHIVE),
            ("hot-2", TierType.ARCHIVE),
        ]
        data = json.loads(result.stdout)
        assert data["result"]["items_transitioned"] == 2
        assert data["config"]["connection_string"] == "***"
        factory.assert_called_once_with(
            "azure",
            connection_string="UseDevelopmentStorage=true",
            account_url=None,
        )

    def test_dry_run(self, factory: MagicMock, client: MemoryStorageClient):
        """Test a dry run changes nothing."""
        result = runner.invoke(app, ["run", "--container", "data", "--dry-run"])

        assert result.exit_code == 0
        assert client.tier_calls == []

    def test_cap_exceeded(self, factory: MagicMock, client: MemoryStorageClient):
        """Test exceeding the cap exits non-zero without tier changes."""
        result = runner.invoke(
            app, ["run", "--container", "data", "--all", "--max-blobs", "3"]
        )

        assert result.exit_code == EXIT_OTHER
        assert "exceeds the limit 3" in result.output
        assert client.tier_calls == []

    def test_keep_going(self, factory: MagicMock, client: MemoryStorageClient):
        """Test failures are collected and reported through the exit code."""
        client.fail_on("hot-1")

        result = runner.invoke(app, ["run", "--container", "data", "--keep-going"])

        assert result.exit_code == EXIT_OTHER
        assert [name for name, _ in client.tier_calls] == ["hot-1", "hot-2"]

    def test_fail_fast(self, factory: MagicMock, client: MemoryStorageClient):
        """Test the first failure aborts the run by default."""
        client.fail_on("hot-1")

        result = runner.invoke(app, ["run", "--container", "data"])

        assert result.exit_code == EXIT_OTHER
        assert "An error happened" in result.output
        assert [name for name, _ in client.tier_calls] == ["hot-1"]

    def test_blob_path(self, factory: MagicMock, client: MemoryStorageClient):
        """Test an explicit blob path fixes that blob only."""
        result = runner.invoke(
            app, ["run", "--container", "data", "--blob-path", "old-1", "--tier", "cool"]
        )

        assert result.exit_code == 0
        assert client.tier_calls == [("old-1", TierType.COOL)]

    def test_environment_fallback(
        self, factory: MagicMock, client: MemoryStorageClient, monkeypatch
    ):
        """Test options fall back to TIERFIX_* variables."""
        monkeypatch.setenv("TIERFIX_CONTAINER", "data")
        monkeypatch.setenv("TIERFIX_DRY_RUN", "true")

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert client.tier_calls == []

    def test_debug_pauses(self, factory: MagicMock):
        """Test --debug waits for Enter before running."""
        result = runner.invoke(
            app, ["run", "--container", "data", "--debug"], input="x\n"
        )

        assert result.exit_code == 0, result.output
        assert "Press Enter to continue" in result.output
        factory.assert_called_once()

    def test_debug_pause_aborted(self, factory: MagicMock, client: MemoryStorageClient):
        """Test closing stdin at the debug pause aborts before any work."""
        result = runner.invoke(app, ["run", "--container", "data", "--debug"], input="")

        assert result.exit_code != 0
        factory.assert_not_called()
        assert client.tier_calls == []

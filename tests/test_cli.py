"""Tests for the gqlbundle command line interface."""

import logging

import pytest
from click.testing import CliRunner

from gqlbundle import __version__, config
from gqlbundle.cli import cli
from gqlbundle.logging import configure_logging


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging():
    """Commands point logging at the runner's stderr, which closes after invoke."""
    yield
    configure_logging(debug=False)


@pytest.fixture
def blog_config(tmp_path):
    cfg = tmp_path / "modules.yaml"
    cfg.write_text(
        """
modules:
  - import: "gqlbundle.testmods.users"
  - import: "gqlbundle.testmods.posts:create_module"
        """,
        encoding="utf-8",
    )
    return str(cfg)


@pytest.fixture
def reshaped_config(tmp_path):
    cfg = tmp_path / "reshaped.yaml"
    cfg.write_text(
        """
modules:
  - import: "gqlbundle.testmods.users"
  - import: "gqlbundle.testmods.reshape"
        """,
        encoding="utf-8",
    )
    return str(cfg)


class TestPrintSchema:
    def test_prints_bundled_type_defs(self, runner, blog_config):
        result = runner.invoke(cli, ["print-schema", blog_config])

        assert result.exit_code == 0
        assert "type RootQuery {" in result.output
        assert "mutation: RootMutation" in result.output

    def test_root_key_overrides(self, runner, blog_config):
        result = runner.invoke(cli, ["print-schema", blog_config, "--root-query", "Query"])

        assert result.exit_code == 0
        assert "type Query {" in result.output
        assert "query: Query" in result.output

    def test_missing_config_fails(self, runner, tmp_path):
        result = runner.invoke(cli, ["print-schema", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1

    def test_result_replaced_by_alter_fails(self, runner, reshaped_config):
        result = runner.invoke(cli, ["print-schema", reshaped_config])

        assert result.exit_code == 1
        assert "alter hook" in result.output

    def test_debug_from_settings(self, runner, blog_config, monkeypatch):
        monkeypatch.setattr(config.settings, "debug", True)

        result = runner.invoke(cli, ["print-schema", blog_config])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG


class TestValidate:
    def test_valid_schema(self, runner, blog_config):
        result = runner.invoke(cli, ["validate", blog_config, "--no-combine"])

        assert result.exit_code == 0
        assert "Schema is valid" in result.output

    def test_invalid_schema(self, runner, tmp_path):
        # A plain string is not a module, so nothing gets bundled
        cfg = tmp_path / "broken.yaml"
        cfg.write_text('modules:\n  - import: "gqlbundle.testmods.users:schema"\n', encoding="utf-8")

        result = runner.invoke(cli, ["validate", str(cfg)])

        assert result.exit_code == 1

    def test_result_replaced_by_alter_fails(self, runner, reshaped_config):
        result = runner.invoke(cli, ["validate", reshaped_config])

        assert result.exit_code == 1
        assert "✗" in result.output
        assert "alter hook" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output

"""Unit tests for the siteop CLI."""

import json
import os
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from main import cli, load_declarations
from plugins.reconcilers.base import ResourceData
from plugins.registry import reset_registry
from state import StateStore


@pytest.fixture(autouse=True)
def fresh_registry():
    reset_registry()
    yield
    reset_registry()


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from attaching log handlers to the runner's streams."""
    with patch("main.logging.basicConfig"):
        yield


@pytest.fixture
def runner():
    return CliRunner()


def _write_declarations(path, resources):
    path.write_text(yaml.safe_dump({"resources": resources}))
    return str(path)


class TestLoadDeclarations:
    """Tests for load_declarations."""

    def test_yaml(self, tmp_path):
        filename = _write_declarations(
            tmp_path / "sites.yaml",
            [{"name": "web", "type": "netlify_site", "spec": {"name": "site1"}}],
        )
        assert load_declarations(filename) == [
            {"name": "web", "type": "netlify_site", "spec": {"name": "site1"}}
        ]

    def test_json_without_spec(self, tmp_path):
        path = tmp_path / "sites.json"
        path.write_text(json.dumps({"resources": [{"name": "web", "type": "t"}]}))
        assert load_declarations(str(path))[0]["spec"] == {}


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_file(self, runner, tmp_path):
        filename = _write_declarations(
            tmp_path / "sites.yaml",
            [{"name": "web", "type": "netlify_site", "spec": {"name": "site1"}}],
        )
        result = runner.invoke(cli, ["validate", filename])
        assert result.exit_code == 0
        assert "web: valid" in result.output

    def test_invalid_file(self, runner, tmp_path):
        filename = _write_declarations(
            tmp_path / "sites.yaml",
            [
                {
                    "name": "web",
                    "type": "netlify_site",
                    "spec": {"repo": {"provider": "github"}},
                }
            ],
        )
        result = runner.invoke(cli, ["validate", filename])
        assert result.exit_code == 1

    def test_missing_resources_key(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("sites: []\n")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code != 0
        assert "resources" in result.output


class TestShowCommand:
    """Tests for the show command."""

    def test_show_json(self, runner, tmp_path):
        state_file = tmp_path / "state.json"
        StateStore(str(state_file)).put(
            "web",
            "netlify_site",
            ResourceData(id="site-1", attributes={"name": "site1", "repo": None}),
        )

        result = runner.invoke(cli, ["--state", str(state_file), "show", "-o", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "web": {"type": "netlify_site", "id": "site-1", "name": "site1", "repo": None}
        }

    def test_show_table(self, runner, tmp_path):
        state_file = tmp_path / "state.json"
        StateStore(str(state_file)).put(
            "web",
            "netlify_site",
            ResourceData(
                id="site-1",
                attributes={
                    "name": "site1",
                    "repo": {"repo_path": "org/repo", "repo_branch": "main"},
                },
            ),
        )

        result = runner.invoke(cli, ["--state", str(state_file), "show"])

        assert result.exit_code == 0
        assert "org/repo@main" in result.output


class TestApplyCommand:
    """Tests for commands that need API credentials."""

    def test_apply_requires_token(self, runner, tmp_path):
        filename = _write_declarations(
            tmp_path / "sites.yaml",
            [{"name": "web", "type": "netlify_site", "spec": {}}],
        )
        with patch.dict(os.environ, {}, clear=True):
            result = runner.invoke(
                cli, ["--state", str(tmp_path / "s.json"), "apply", filename]
            )
        assert result.exit_code != 0
        assert "NETLIFY_AUTH_TOKEN" in result.output

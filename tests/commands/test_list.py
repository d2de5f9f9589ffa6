"""Tests for the list CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from postctl.cli import cli


@pytest.mark.usefixtures("_isolated_site")
class TestListCommand:
    def test_list_default(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "ORM Patterns" in result.output
        assert "4 entries" in result.output

    def test_list_json_order(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        slugs = [i["slug"] for i in data["data"]["items"]]
        assert slugs == ["rust-traits", "testing-philosophy", "orm-patterns", "resume"]

    def test_list_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "list", "--section", "blog", "--limit", "1"])
        assert result.exit_code == 0
        assert result.output.strip() == "blog/rust-traits.md"

    def test_list_tag_filter(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list", "--tag", "orm"])
        data = json.loads(result.output)
        assert [i["slug"] for i in data["data"]["items"]] == ["orm-patterns"]

    def test_list_bad_since(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--since", "yesterday"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Invalid since" in result.stderr

    def test_list_bad_sort_rejected_by_click(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--sort", "weight"])
        assert result.exit_code == 2

    def test_list_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--examples"])
        assert result.exit_code == 0
        assert "postctl list --tag rust" in result.output

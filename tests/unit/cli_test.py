"""Tests for the scala-tokens CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from scala_tokens.cli.app import app

runner = CliRunner()


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["tokens"],
        ["legend"],
        ["serve"],
        ["serve", "api"],
    ],
    ids=["root", "tokens", "legend", "serve", "serve-api"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestTokensCommand:
    def test_json_output(self) -> None:
        result = runner.invoke(app, ["tokens", "--code", "class Foo", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"line": 0, "column": 6, "length": 3, "category": "class", "modifiers": ["declaration"]}
        ]

    def test_encoded_output(self) -> None:
        result = runner.invoke(app, ["tokens", "--code", "class Foo", "-f", "encoded"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"data": [0, 6, 3, 9, 1]}

    def test_table_output(self) -> None:
        result = runner.invoke(app, ["tokens", "--code", "class Foo"])

        assert result.exit_code == 0, result.output
        assert "class" in result.output
        assert "(1 tokens)" in result.output

    def test_sort_flag(self) -> None:
        code = "object A {\n  val x = 1\n}"
        result = runner.invoke(app, ["tokens", "--code", code, "--format", "json", "--sort"])

        assert result.exit_code == 0, result.output
        positions = [(token["line"], token["column"]) for token in json.loads(result.output)]
        assert positions == sorted(positions)

    def test_reads_file(self, tmp_path: Path) -> None:
        file_path = tmp_path / "Main.scala"
        file_path.write_text("trait Greeter\n", encoding="utf-8")

        result = runner.invoke(app, ["tokens", str(file_path), "--format", "json"])

        assert result.exit_code == 0, result.output
        [token] = json.loads(result.output)
        assert token["category"] == "interface"
        assert token["modifiers"] == ["declaration", "abstract"]

    def test_parse_error_exits_1(self) -> None:
        result = runner.invoke(app, ["tokens", "--code", "class {"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_file_exits_1(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["tokens", str(tmp_path / "Missing.scala")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_requires_input(self) -> None:
        result = runner.invoke(app, ["tokens"])

        assert result.exit_code == 2
        assert "--code" in result.output

    def test_rejects_unknown_format(self) -> None:
        result = runner.invoke(app, ["tokens", "--code", "class Foo", "--format", "xml"])

        assert result.exit_code == 2
        assert "unknown format" in result.output


def test_legend_command() -> None:
    result = runner.invoke(app, ["legend"])

    assert result.exit_code == 0
    assert "typeParameter" in result.output
    assert "declaration" in result.output

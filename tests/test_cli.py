"""Tests for the mcp-skillgen command line."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from skillgen import __version__, cli
from skillgen.converter import ConversionResult
from skillgen.errors import ServerConnectionError
from skillgen.models import Category, Tool

runner = CliRunner()


class RecordingConverter:
    """Stands in for SkillConverter and records how it was built and called."""

    instances = []
    error = None

    def __init__(self, settings, rules=None, output=None):
        self.settings = settings
        self.rules = rules
        self.calls = []
        RecordingConverter.instances.append(self)

    def convert(self, command_line, output_dir, name=None, description=None):
        self.calls.append((command_line, output_dir, name, description))
        if RecordingConverter.error:
            raise RecordingConverter.error
        category = Category(name="Other", key="other", description="", tools=[Tool(name="echo")])
        return ConversionResult(
            output_dir=output_dir, skill_name=name or "mcp-skill", tool_count=1,
            categories=[category],
        )


@pytest.fixture
def converter(monkeypatch, clean_env, tmp_path):
    clean_env.chdir(tmp_path)
    RecordingConverter.instances = []
    RecordingConverter.error = None
    monkeypatch.setattr(cli, "SkillConverter", RecordingConverter)
    return RecordingConverter


def test_version():
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_convert(converter, tmp_path):
    result = runner.invoke(cli.app, [
        "convert", "npx -y @modelcontextprotocol/server-everything", str(tmp_path / "out"),
        "--name", "everything", "--no-ai",
    ])

    assert result.exit_code == 0, result.output
    assert "Skill created successfully!" in result.output
    instance = converter.instances[0]
    assert instance.calls == [(
        "npx -y @modelcontextprotocol/server-everything", tmp_path / "out", "everything", None,
    )]
    assert instance.settings.use_ai is False
    assert instance.rules is None


def test_convert_without_api_key_disables_ai(converter, tmp_path):
    result = runner.invoke(cli.app, ["convert", "node server.js", str(tmp_path / "out")])

    assert result.exit_code == 0, result.output
    assert "AI description disabled" in result.output
    assert converter.instances[0].settings.use_ai is False


def test_convert_with_rules(converter, tmp_path):
    rules = tmp_path / "rules.json"
    rules.write_text('[{"name": "Echo", "key": "echo", "description": "", "patterns": ["echo"]}]')

    result = runner.invoke(cli.app, [
        "convert", "node server.js", str(tmp_path / "out"), "--rules", str(rules), "--no-ai",
    ])

    assert result.exit_code == 0, result.output
    assert [rule.key for rule in converter.instances[0].rules] == ["echo"]


def test_invalid_rules_file(converter, tmp_path):
    rules = tmp_path / "rules.json"
    rules.write_text("{not json")

    result = runner.invoke(cli.app, [
        "convert", "node server.js", str(tmp_path / "out"), "--rules", str(rules), "--no-ai",
    ])

    assert result.exit_code == 1
    assert "Error during conversion" in result.output
    assert converter.instances == []


def test_conversion_failure(converter, tmp_path):
    converter.error = ServerConnectionError("Could not connect to MCP server 'nope': boom")

    result = runner.invoke(cli.app, ["convert", "nope", str(tmp_path / "out"), "--no-ai"])

    assert result.exit_code == 1
    assert "Could not connect to MCP server" in result.output


def test_empty_command(converter, tmp_path):
    converter.error = ValueError("Server command is empty")

    result = runner.invoke(cli.app, ["convert", "  ", str(tmp_path / "out"), "--no-ai"])

    assert result.exit_code == 1
    assert "Server command is empty" in result.output


def test_invalid_setting(converter, tmp_path):
    env_file = tmp_path / "bad.env"
    env_file.write_text("MCP_MAX_PAGES=abc\n")

    result = runner.invoke(cli.app, [
        "convert", "node server.js", str(tmp_path / "out"), "--env", str(env_file),
    ])

    assert result.exit_code == 1
    assert "Error during conversion" in result.output
    assert isinstance(result.exception, SystemExit)
    assert converter.instances == []


def test_write_failure(converter, tmp_path):
    converter.error = PermissionError("Permission denied: '/readonly/SKILL.md'")

    result = runner.invoke(cli.app, ["convert", "node server.js", "/readonly", "--no-ai"])

    assert result.exit_code == 1
    assert "Permission denied" in result.output
    assert isinstance(result.exception, SystemExit)


def test_init(tmp_path):
    target = tmp_path / ".env.example"

    result = runner.invoke(cli.app, ["init", "--output", str(target)])

    assert result.exit_code == 0
    assert "LLM_API_KEY=" in Path(target).read_text()

"""Tests for server command parsing and masking."""

import pytest

from skillgen.command import (
    REDACTED,
    derive_skill_name,
    format_command,
    mask_sensitive_args,
    parse_server_command,
)
from skillgen.models import SkillMetadata


class TestParseServerCommand:
    """Tests for parse_server_command."""

    def test_splits_on_whitespace(self):
        command, args = parse_server_command("npx  -y\t@modelcontextprotocol/server-everything")

        assert command == "npx"
        assert args == ["-y", "@modelcontextprotocol/server-everything"]

    def test_command_only(self):
        assert parse_server_command("mcp-server") == ("mcp-server", [])

    def test_empty(self):
        with pytest.raises(ValueError):
            parse_server_command("   ")


class TestMasking:
    """Tests for sensitive argument masking."""

    def test_masks_token(self):
        assert mask_sensitive_args(["TFE_TOKEN=abc123"]) == [f"TFE_TOKEN={REDACTED}"]
        assert REDACTED == "***REDACTED***"

    @pytest.mark.parametrize("arg, expected", [
        ("GITHUB_API_KEY=ghp_123", "GITHUB_API_KEY=***REDACTED***"),
        ("DB_PASSWORD=hunter2", "DB_PASSWORD=***REDACTED***"),
        ("client_secret=s3cr3t", "client_secret=***REDACTED***"),
        ("AUTH_HEADER=Bearer x", "AUTH_HEADER=***REDACTED***"),
        ("-e TFE_TOKEN=abc", "-e TFE_TOKEN=***REDACTED***"),
    ])
    def test_sensitive_names(self, arg, expected):
        assert mask_sensitive_args([arg]) == [expected]

    @pytest.mark.parametrize("arg", [
        "PORT=8080",
        "--verbose",
        "-e",
        "@modelcontextprotocol/server-everything",
        "TFE_TOKEN",
    ])
    def test_leaves_other_args(self, arg):
        assert mask_sensitive_args([arg]) == [arg]

    def test_does_not_modify_input(self):
        args = ["run", "-e", "TFE_TOKEN=abc123"]

        masked = mask_sensitive_args(args)

        assert args == ["run", "-e", "TFE_TOKEN=abc123"]
        assert masked == ["run", "-e", "TFE_TOKEN=***REDACTED***"]

    def test_format_command(self):
        assert format_command("docker", ["run", "TFE_TOKEN=abc123", "hashicorp/tfmcp"]) == (
            "docker run TFE_TOKEN=***REDACTED*** hashicorp/tfmcp"
        )

    def test_metadata_display_command_is_masked(self):
        metadata = SkillMetadata(
            name="tf", description="", server_command="docker",
            server_args=["TFE_TOKEN=abc123"],
        )

        assert metadata.display_command == "docker TFE_TOKEN=***REDACTED***"
        assert metadata.server_args == ["TFE_TOKEN=abc123"]


class TestDeriveSkillName:
    """Tests for derive_skill_name."""

    def test_from_server_package(self):
        assert derive_skill_name("npx", ["-y", "@modelcontextprotocol/server-everything"]) == (
            "everything-skill"
        )

    def test_from_command(self):
        assert derive_skill_name("mcp-server-git", []) == "git-skill"

    def test_default(self):
        assert derive_skill_name("node", ["server.js"]) == "mcp-skill"

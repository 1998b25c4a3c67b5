# -*- coding: utf-8 -*-
"""Server command line handling: parsing, naming and masking secrets."""

import re

REDACTED = "***REDACTED***"

# Environment assignments like "TFE_TOKEN=value" or "-e TFE_TOKEN=value"
_SENSITIVE_ASSIGNMENT = re.compile(
    r"^(-e\s+)?([A-Z0-9_]*(?:TOKEN|SECRET|KEY|PASSWORD|API_KEY|AUTH)[A-Z0-9_]*)=(.+)$",
    re.IGNORECASE,
)

_SERVER_PACKAGE = re.compile(r"server-([a-zA-Z0-9-]+)")

DEFAULT_SKILL_NAME = "mcp-skill"


def parse_server_command(command_line: str) -> tuple[str, list[str]]:
    """Split a server command string on whitespace into program and arguments."""
    parts = command_line.split()
    if not parts:
        raise ValueError("Server command is empty")
    return parts[0], parts[1:]


def mask_sensitive_args(args: list[str]) -> list[str]:
    """Return a copy of args with secret-looking assignments redacted.

    Only the textual representation changes; callers must keep passing the
    original list to the server process.
    """
    masked = []
    for arg in args:
        match = _SENSITIVE_ASSIGNMENT.match(arg)
        if match:
            prefix = match.group(1) or ""
            masked.append(f"{prefix}{match.group(2)}={REDACTED}")
        else:
            masked.append(arg)
    return masked


def format_command(command: str, args: list[str]) -> str:
    """Format a command for console output and generated docs."""
    return " ".join([command, *mask_sensitive_args(args)])


def derive_skill_name(command: str, args: list[str]) -> str:
    """Guess a skill name from a ``server-<name>`` package in the command line."""
    match = _SERVER_PACKAGE.search(" ".join([command, *args]))
    if match:
        return f"{match.group(1)}-skill"
    return DEFAULT_SKILL_NAME

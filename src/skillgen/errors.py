# -*- coding: utf-8 -*-
"""Exceptions and warnings raised by mcp-skillgen."""


class SkillGenError(Exception):
    """Base class for all mcp-skillgen errors."""


class DiscoveryError(SkillGenError):
    """Errors raised while talking to an MCP server."""


class ServerConnectionError(DiscoveryError, ConnectionError):
    """The server process could not be started or the handshake failed."""


class AlreadyConnectedError(DiscoveryError):
    """connect() was called on a client that has already been used."""


class NotConnectedError(DiscoveryError):
    """An operation needs a connected client."""


class ProtocolError(DiscoveryError):
    """The server answered with a malformed or non-terminating response."""


class NameCollisionError(SkillGenError):
    """Two distinct tool names normalize to the same generated type name."""

    def __init__(self, type_name: str, first: str, second: str):
        self.type_name = type_name
        self.first = first
        self.second = second
        super().__init__(
            f"Tool names '{first}' and '{second}' both map to type name '{type_name}'"
        )


class RuleConfigError(SkillGenError):
    """A classification rules file could not be loaded."""


class AssemblyError(SkillGenError):
    """Categories and generated interfaces do not line up."""


class SchemaTranslationWarning(UserWarning):
    """Part of a tool schema could not be typed and was degraded to unknown."""

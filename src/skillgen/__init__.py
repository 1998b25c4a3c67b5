# mcp-skillgen - MCP server to typed skill package generator

"""
mcp-skillgen connects to an MCP (Model Context Protocol) server, lists its
tools, sorts them into categories and writes a skill package with TypeScript
interfaces for every tool.
"""

__version__ = "0.1.0"

from skillgen.classifier import ClassificationRule, ToolClassifier
from skillgen.client import MCPDiscoveryClient
from skillgen.config import Settings
from skillgen.converter import SkillConverter
from skillgen.schema import SchemaTranslator

__all__ = [
    "ClassificationRule",
    "MCPDiscoveryClient",
    "SchemaTranslator",
    "Settings",
    "SkillConverter",
    "ToolClassifier",
]

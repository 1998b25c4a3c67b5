# -*- coding: utf-8 -*-
"""Data models shared across the discovery, classification and generation steps."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from skillgen.command import format_command


class Tool(BaseModel):
    """A tool as reported by ``tools/list``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: Optional[str] = None
    input_schema: Any = Field(default_factory=dict, alias="inputSchema")


class Category(BaseModel):
    """A named, non-overlapping group of tools."""

    name: str
    key: str
    description: str
    tools: list[Tool] = Field(default_factory=list)

    @property
    def tool_names(self) -> list[str]:
        return [tool.name for tool in self.tools]


class GeneratedInterface(BaseModel):
    """TypeScript declarations generated for one tool."""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    input_type_name: str
    output_type_name: str
    source_text: str


class SkillMetadata(BaseModel):
    """Identity of the generated skill and the server it wraps."""

    name: str
    description: str
    server_command: str
    server_args: list[str] = Field(default_factory=list)

    @property
    def display_command(self) -> str:
        """Server command line with secrets redacted."""
        return format_command(self.server_command, self.server_args)

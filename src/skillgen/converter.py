# -*- coding: utf-8 -*-
"""Core MCP server to skill package converter."""

import asyncio
import logging
import warnings
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape

from skillgen.assembler import PackageAssembler
from skillgen.classifier import ClassificationRule, ToolClassifier
from skillgen.client import MCPDiscoveryClient, SessionFactory
from skillgen.command import derive_skill_name, format_command, parse_server_command
from skillgen.config import Settings
from skillgen.describer import SkillDescriber
from skillgen.errors import SchemaTranslationWarning
from skillgen.models import Category, GeneratedInterface, SkillMetadata, Tool
from skillgen.schema import SchemaTranslator

console = Console()
logger = logging.getLogger(__name__)


def _tool_line(tool: Tool) -> str:
    lines = (tool.description or "").strip().splitlines()
    return f"{tool.name} - {lines[0]}" if lines else tool.name


class ConversionResult(BaseModel):
    """Summary of one conversion run."""

    output_dir: Path
    skill_name: str
    tool_count: int
    categories: list[Category]
    warnings: list[str] = Field(default_factory=list)


class SkillConverter:
    """Convert a stdio MCP server into a skill package."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rules: Optional[list[ClassificationRule]] = None,
        session_factory: Optional[SessionFactory] = None,
        output: Optional[Console] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.classifier = ToolClassifier(rules)
        self.translator = SchemaTranslator()
        self.describer = SkillDescriber(self.settings)
        self.console = output or console
        self._session_factory = session_factory

    def convert(
        self,
        command_line: str,
        output_dir: Path,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ConversionResult:
        """Convert the server started by ``command_line`` into a skill at ``output_dir``.

        Args:
            command_line: Server command, split on whitespace into program and arguments
            output_dir: Directory the package is written to
            name: Skill name (default: derived from a ``server-<name>`` package)
            description: Skill description (default: AI-written or summarized)
        """
        command, args = parse_server_command(command_line)
        return asyncio.run(self.run(command, args, Path(output_dir), name, description))

    async def run(
        self,
        command: str,
        args: list[str],
        output_dir: Path,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ConversionResult:
        """Run the whole pipeline; the server is always stopped before returning."""
        display_command = format_command(command, args)
        self.console.print(f"[blue]Server command:[/blue] {escape(display_command)}")
        self.console.print(f"[blue]Output directory:[/blue] {escape(str(output_dir))}")

        async with MCPDiscoveryClient(self.settings, self._session_factory) as client:
            self.console.print("[blue]Connecting to MCP server...[/blue]")
            await client.connect(command, args)
            server_name = client.server_info.get("name") or "Unknown"
            server_version = client.server_info.get("version") or "Unknown"
            self.console.print(f"  Connected to {escape(server_name)} (v{escape(server_version)})")

            self.console.print("[blue]Discovering tools...[/blue]")
            tools = await client.list_tools()
            self.console.print(f"  Found {len(tools)} tools")

            if not tools:
                self.console.print(
                    "[yellow]Warning: No tools found on the server. Skill will be empty.[/yellow]"
                )
            for index, tool in enumerate(tools, 1):
                self.console.print(f"  [dim]{index}. {escape(_tool_line(tool))}[/dim]")

            categories = self.classifier.classify(tools)
            self.console.print(f"[blue]Organized into {len(categories)} categories:[/blue]")
            for category in categories:
                self.console.print(f"  - {escape(category.name)}: {len(category.tools)} tools")

            interfaces, issues = self._translate(categories)
            self.console.print(
                f"[blue]Generated TypeScript interfaces for {len(tools)} tools[/blue]"
            )
            if issues:
                self.console.print(
                    f"  [yellow]{len(issues)} schema fragments degraded to unknown[/yellow]"
                )

            skill_name = name or derive_skill_name(command, args)
            if description is None:
                if self.describer.is_available():
                    self.console.print("  [green]Using AI to write the description...[/green]")
                description = self.describer.generate_description(skill_name, categories)

            metadata = SkillMetadata(
                name=skill_name,
                description=description,
                server_command=command,
                server_args=args,
            )
            PackageAssembler(output_dir, self.translator).assemble(
                metadata, categories, interfaces
            )

        self.console.print(f"[green]Created skill: {escape(str(output_dir))}[/green]")
        return ConversionResult(
            output_dir=output_dir,
            skill_name=skill_name,
            tool_count=len(tools),
            categories=categories,
            warnings=issues,
        )

    def _translate(
        self, categories: list[Category]
    ) -> tuple[dict[str, list[GeneratedInterface]], list[str]]:
        """Translate all tools, collecting schema warnings instead of printing them."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", SchemaTranslationWarning)
            interfaces = self.translator.translate_categories(categories)

        issues = []
        for warning in caught:
            if issubclass(warning.category, SchemaTranslationWarning):
                issues.append(str(warning.message))
                logger.warning("%s", warning.message)
            else:
                warnings.warn_explicit(
                    warning.message, warning.category, warning.filename, warning.lineno
                )
        return interfaces, issues

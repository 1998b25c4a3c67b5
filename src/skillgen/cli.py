# -*- coding: utf-8 -*-
"""CLI interface for mcp-skillgen."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from skillgen import __version__
from skillgen.classifier import load_rules
from skillgen.config import ENV_EXAMPLE, Settings
from skillgen.converter import SkillConverter
from skillgen.errors import SkillGenError
from skillgen.log import setup_logging

app = typer.Typer(
    name="mcp-skillgen",
    help="Generate a categorized, typed skill package from an MCP server",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"mcp-skillgen version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """mcp-skillgen - Convert MCP servers to skill packages."""
    pass


@app.command()
def convert(
    server_command: str = typer.Argument(
        ...,
        help="Command that starts the MCP server, e.g. 'npx -y @modelcontextprotocol/server-everything'",
    ),
    output: Path = typer.Argument(
        ...,
        help="Output directory for the skill package",
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n",
        help="Skill name (default: derived from the server package)",
    ),
    description: Optional[str] = typer.Option(
        None, "--description", "-d",
        help="Skill description (default: AI-written or summarized from the tools)",
    ),
    rules: Optional[Path] = typer.Option(
        None, "--rules", "-r",
        help="JSON file with ordered classification rules",
        exists=True,
        dir_okay=False,
    ),
    no_ai: bool = typer.Option(
        False, "--no-ai",
        help="Do not call an LLM for the skill description",
    ),
    env_file: Optional[Path] = typer.Option(
        None, "--env", "-e",
        help="Path to .env file for configuration",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Enable debug logging",
    ),
):
    """Convert one MCP server into a skill package."""
    try:
        settings = Settings.from_env(env_file)
        settings.use_ai = settings.use_ai and not no_ai
        settings.debug = settings.debug or verbose
        setup_logging(settings.debug)

        if settings.use_ai and not settings.validate_llm_config():
            console.print(
                "[yellow]Warning: AI description disabled (no LLM_API_KEY configured)[/yellow]"
            )
            settings.use_ai = False

        rule_list = load_rules(rules) if rules else None
        converter = SkillConverter(settings, rules=rule_list, output=console)
        result = converter.convert(server_command, output, name=name, description=description)
    except (SkillGenError, ValueError, OSError) as e:
        console.print(f"[red]Error during conversion: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    category_lines = "\n".join(
        f"  - scripts/{category.key}/ ({len(category.tools)} tools)"
        for category in result.categories
    )
    console.print(Panel(
        f"[green]Skill created successfully![/green]\n\n"
        f"Location: {escape(str(result.output_dir))}\n"
        f"Tools: {result.tool_count}\n"
        f"{escape(category_lines)}\n\n"
        f"Next steps:\n"
        f"  1. Review SKILL.md\n"
        f"  2. Copy the directory to your skills location",
        title="Success",
    ))


@app.command()
def init(
    output: Path = typer.Option(
        Path(".env.example"), "--output", "-o",
        help="Output path for the example .env file",
    ),
):
    """Generate an example .env configuration file."""
    output.write_text(ENV_EXAMPLE, encoding="utf-8")
    console.print(f"[green]Created example config: {escape(str(output))}[/green]")
    console.print("\nTo use:")
    console.print("  1. Copy to .env: cp .env.example .env")
    console.print("  2. Optionally add your LLM_API_KEY")
    console.print("  3. Run: mcp-skillgen convert '<server command>' ./my-skill")


if __name__ == "__main__":
    app()

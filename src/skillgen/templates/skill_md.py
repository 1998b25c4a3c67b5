"""SKILL.md and README.md generators for categorized skill packages."""

from skillgen.models import Category, GeneratedInterface, SkillMetadata, Tool


def generate_skill_md(
    metadata: SkillMetadata,
    categories: list[Category],
    interfaces: dict[str, list[GeneratedInterface]],
) -> str:
    """Generate SKILL.md content.

    Args:
        metadata: Skill identity and the server command it wraps
        categories: Categorized tools, in display order
        interfaces: Generated declarations keyed by category key, in the same
                    tool order as ``categories``
    """
    tool_count = sum(len(category.tools) for category in categories)

    # Clean description - remove newlines and extra spaces for YAML compatibility
    clean_description = " ".join(metadata.description.split())

    sections = [_generate_category_section(category, interfaces.get(category.key, []))
                for category in categories]

    content = f"""---
name: {metadata.name}
description: >-
  {clean_description}
---

# {metadata.name}

{metadata.description}

## Server Information

**Command:** `{metadata.display_command}`

**Total Tools:** {tool_count}

## Tool Categories

{_generate_category_index(categories)}

{chr(10).join(sections)}
## Usage

{_generate_usage(categories, interfaces)}
"""

    return content


def _anchor(title: str) -> str:
    return "-".join(title.lower().split())


def _generate_category_index(categories: list[Category]) -> str:
    if not categories:
        return "(No tools available)"
    return "\n".join(
        f"- **[{category.name}](#{_anchor(category.name)})** "
        f"({len(category.tools)} tools) - {category.description}"
        for category in categories
    )


def _generate_category_section(
    category: Category,
    interfaces: list[GeneratedInterface],
) -> str:
    """Generate the documentation block for one category."""
    by_tool = {interface.tool_name: interface for interface in interfaces}
    lines = [
        f"## {category.name}",
        "",
        category.description,
        "",
        f"**Location:** `scripts/{category.key}/`",
        "",
    ]

    for tool in category.tools:
        lines.append(f"### {tool.name}")
        lines.append("")
        if tool.description:
            lines.append(tool.description)
            lines.append("")

        lines.append("**Parameters:**")
        lines.append("")
        lines.extend(_format_parameters(tool))
        lines.append("")

        interface = by_tool.get(tool.name)
        if interface:
            lines.append(f"**TypeScript Interface:** `{interface.input_type_name}`")
            lines.append("")
            lines.append(
                f"**Import:** `import {{ {interface.input_type_name} }} "
                f"from \"./scripts/{category.key}/types.js\"`"
            )
            lines.append("")

    return "\n".join(lines)


def _format_parameters(tool: Tool) -> list[str]:
    """List a tool's top-level parameters with required/optional markers."""
    schema = tool.input_schema if isinstance(tool.input_schema, dict) else {}
    properties = schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        return ["No parameters"]

    required = schema.get("required")
    required = {r for r in required if isinstance(r, str)} if isinstance(required, list) else set()

    lines = []
    for param_name, param_schema in properties.items():
        param_schema = param_schema if isinstance(param_schema, dict) else {}
        param_type = param_schema.get("type", "any")
        if isinstance(param_type, list):
            param_type = " | ".join(str(t) for t in param_type)
        marker = "required" if param_name in required else "optional"
        lines.append(f"- `{param_name}`: {param_type} ({marker})")

        param_desc = param_schema.get("description")
        if isinstance(param_desc, str) and param_desc:
            lines.append(f"  {param_desc}")
    return lines


def _generate_usage(
    categories: list[Category],
    interfaces: dict[str, list[GeneratedInterface]],
) -> str:
    """Generate a short TypeScript example using the first generated interface."""
    first = next(
        ((category, interfaces[category.key][0]) for category in categories
         if interfaces.get(category.key)),
        None,
    )
    if first is None:
        return "This skill provides TypeScript interfaces for MCP tools. No tools were found."

    category, interface = first
    return f"""This skill provides TypeScript interfaces for all MCP tools.
Import the interfaces from category-specific directories:

```typescript
// Example: Import from {category.name}
import {{ {interface.input_type_name}, {interface.output_type_name} }} from "./scripts/{category.key}/types.js";

// Use the interface for type-safe tool calls
const input: {interface.input_type_name} = {{
  // ... parameters
}};
```"""


def generate_readme(metadata: SkillMetadata, categories: list[Category]) -> str:
    """Generate README.md: installation notes and the category manifest."""
    tool_count = sum(len(category.tools) for category in categories)
    script_lines = "\n".join(
        f"  - `scripts/{category.key}/` - {category.name} ({len(category.tools)} tools)"
        for category in categories
    )
    manifest_lines = []
    for category in categories:
        manifest_lines.append(
            f"- **{category.name}** ({len(category.tools)} tools): {category.description}"
        )
        for tool in category.tools:
            manifest_lines.append(f"  - `{tool.name}`")

    return f"""# {metadata.name}

This is an auto-generated agent skill from an MCP server.

## Installation

1. Copy this directory to your skills location
2. The skill will be available to your agent

## Contents

- `SKILL.md` - Main skill documentation
- `scripts/` - TypeScript interfaces organized by category
{script_lines}

## Original MCP Server

**Command:** `{metadata.display_command}`

**Tools:** {tool_count} available

## Tool Categories

{chr(10).join(manifest_lines)}
"""

# -*- coding: utf-8 -*-
"""Translate tool JSON Schemas into TypeScript interface declarations.

Schemas coming from MCP servers are frequently incomplete or plain wrong, so
translation happens in two steps. ``parse_schema`` turns an arbitrary JSON
value into a small tagged type tree; anything it cannot make sense of becomes
``UnknownType`` and a ``SchemaTranslationWarning`` is issued. ``render_type``
then prints that tree as TypeScript. Neither step raises for bad input.

Only tree-shaped schemas are supported: ``$ref`` is not resolved.
"""

import json
import logging
import re
import warnings
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from skillgen.errors import NameCollisionError, SchemaTranslationWarning
from skillgen.models import Category, GeneratedInterface, Tool

logger = logging.getLogger(__name__)

CONTENT_BLOCK_TYPE = "McpContentBlock"
INDEX_SIGNATURE = "[key: string]: unknown;"
INDENT = "  "

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


# ---------------------------------------------------------------------------
# Type tree
# ---------------------------------------------------------------------------


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class StringType(_Node):
    kind: Literal["string"] = "string"


class NumberType(_Node):
    kind: Literal["number"] = "number"


class BooleanType(_Node):
    kind: Literal["boolean"] = "boolean"


class NullType(_Node):
    kind: Literal["null"] = "null"


class LiteralType(_Node):
    """Closed union of literal values, in declaration order."""

    kind: Literal["literal"] = "literal"
    values: list[Any]


class ArrayType(_Node):
    kind: Literal["array"] = "array"
    items: "TypeNode"


class Member(_Node):
    name: str
    type: "TypeNode"
    required: bool = False
    description: Optional[str] = None


class ObjectType(_Node):
    """Structural type; always open to extra members when rendered."""

    kind: Literal["object"] = "object"
    members: list[Member] = Field(default_factory=list)


class UnionType(_Node):
    kind: Literal["union"] = "union"
    options: list["TypeNode"]


class UnknownType(_Node):
    kind: Literal["unknown"] = "unknown"


TypeNode = Annotated[
    Union[
        StringType,
        NumberType,
        BooleanType,
        NullType,
        LiteralType,
        ArrayType,
        ObjectType,
        UnionType,
        UnknownType,
    ],
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()
Member.model_rebuild()
ObjectType.model_rebuild()
UnionType.model_rebuild()

_PRIMITIVES = {
    "string": StringType,
    "number": NumberType,
    "integer": NumberType,
    "boolean": BooleanType,
    "null": NullType,
}


# ---------------------------------------------------------------------------
# JSON Schema -> type tree
# ---------------------------------------------------------------------------


def _warn(path: str, message: str) -> None:
    logger.debug("%s: %s", path, message)
    warnings.warn(f"{path}: {message}", SchemaTranslationWarning, stacklevel=3)


def _unique(values: list[Any]) -> list[Any]:
    seen = set()
    result = []
    for value in values:
        marker = json.dumps(value, sort_keys=True, default=str)
        if marker not in seen:
            seen.add(marker)
            result.append(value)
    return result


def parse_schema(schema: Any, path: str = "$") -> TypeNode:
    """Convert a JSON Schema fragment into a type tree.

    Args:
        schema: Any JSON value; malformed fragments degrade to ``UnknownType``
        path: Location used in warning messages

    Returns:
        The parsed type node
    """
    if not isinstance(schema, dict):
        # Boolean schemas are legal JSON Schema and simply mean "anything"
        if not isinstance(schema, bool):
            _warn(path, f"expected a schema object, got {type(schema).__name__}")
        return UnknownType()

    enum = schema.get("enum")
    if enum is not None:
        if isinstance(enum, list) and enum:
            return LiteralType(values=_unique(enum))
        _warn(path, "ignoring empty or non-list enum")

    if "const" in schema:
        return LiteralType(values=[schema["const"]])

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        options = [_parse_typed(schema, item, path) for item in schema_type]
        return _union(options, path)
    if schema_type is not None:
        return _parse_typed(schema, schema_type, path)

    for combinator in ("anyOf", "oneOf"):
        variants = schema.get(combinator)
        if isinstance(variants, list) and variants:
            return _union([
                parse_schema(variant, f"{path}.{combinator}[{i}]")
                for i, variant in enumerate(variants)
            ], path)

    if "properties" in schema:
        return _parse_object(schema, path)

    return UnknownType()


def _union(options: list[TypeNode], path: str) -> TypeNode:
    if not options:
        _warn(path, "empty type list, using unknown")
        return UnknownType()
    options = _unique_nodes(options)
    if any(isinstance(option, UnknownType) for option in options):
        return UnknownType()
    if len(options) == 1:
        return options[0]
    return UnionType(options=options)


def _unique_nodes(nodes: list[TypeNode]) -> list[TypeNode]:
    result: list[TypeNode] = []
    for node in nodes:
        if node not in result:
            result.append(node)
    return result


def _parse_typed(schema: dict[str, Any], schema_type: Any, path: str) -> TypeNode:
    if schema_type == "object":
        return _parse_object(schema, path)
    if schema_type == "array":
        return _parse_array(schema, path)

    factory = _PRIMITIVES.get(schema_type) if isinstance(schema_type, str) else None
    if factory is None:
        _warn(path, f"unrecognized type {schema_type!r}, using unknown")
        return UnknownType()
    return factory()


def _parse_array(schema: dict[str, Any], path: str) -> TypeNode:
    if "items" not in schema:
        return ArrayType(items=UnknownType())
    items = schema["items"]
    if isinstance(items, list):
        # Tuple form: any of the positional item schemas
        return ArrayType(items=_union([
            parse_schema(item, f"{path}[{i}]") for i, item in enumerate(items)
        ], path) if items else UnknownType())
    return ArrayType(items=parse_schema(items, f"{path}[]"))


def _parse_object(schema: dict[str, Any], path: str) -> TypeNode:
    properties = schema.get("properties", {})
    if not isinstance(properties, dict):
        _warn(path, "properties is not an object, members dropped")
        properties = {}

    required = schema.get("required", [])
    if not isinstance(required, list):
        _warn(path, "required is not a list, all members optional")
        required = []
    required_names = {name for name in required if isinstance(name, str)}

    members = []
    for name, sub_schema in properties.items():
        description = sub_schema.get("description") if isinstance(sub_schema, dict) else None
        members.append(Member(
            name=str(name),
            type=parse_schema(sub_schema, f"{path}.{name}"),
            required=name in required_names,
            description=description if isinstance(description, str) else None,
        ))
    return ObjectType(members=members)


# ---------------------------------------------------------------------------
# Type tree -> TypeScript
# ---------------------------------------------------------------------------


def _doc_comment(text: str, depth: int) -> list[str]:
    pad = INDENT * depth
    lines = text.replace("*/", "*\\/").strip().splitlines() or [""]
    if len(lines) == 1:
        return [f"{pad}/** {lines[0].strip()} */"]
    return [f"{pad}/**", *(f"{pad} * {line.rstrip()}".rstrip() for line in lines), f"{pad} */"]


def _member_name(name: str) -> str:
    return name if _IDENTIFIER.match(name) else json.dumps(name)


def render_type(node: TypeNode, depth: int = 0) -> str:
    """Render a type node as a TypeScript type expression."""
    if isinstance(node, LiteralType):
        return " | ".join(json.dumps(value, default=str) for value in node.values)
    if isinstance(node, ArrayType):
        return f"Array<{render_type(node.items, depth)}>"
    if isinstance(node, UnionType):
        return " | ".join(render_type(option, depth) for option in node.options)
    if isinstance(node, ObjectType):
        return _render_object(node, depth)
    # string, number, boolean, null and unknown share their TypeScript spelling
    return node.kind


def _render_object(node: ObjectType, depth: int) -> str:
    pad = INDENT * (depth + 1)
    lines = ["{"]
    for member in node.members:
        if member.description:
            lines.extend(_doc_comment(member.description, depth + 1))
        optional = "" if member.required else "?"
        lines.append(
            f"{pad}{_member_name(member.name)}{optional}: {render_type(member.type, depth + 1)};"
        )
    lines.append(f"{pad}{INDEX_SIGNATURE}")
    lines.append(INDENT * depth + "}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Per-tool declarations
# ---------------------------------------------------------------------------


def type_name_for(tool_name: str) -> str:
    """Derive the base declaration name for a tool.

    ``get_run-details`` becomes ``GetRunDetails``. Distinct tool names can
    produce the same result; ``SchemaTranslator`` rejects such collisions.
    """
    parts = [part for part in _SEPARATORS.split(tool_name) if part]
    name = "".join(part[0].upper() + part[1:] for part in parts)
    if not name or name[0].isdigit():
        name = f"Tool{name}"
    return name


def input_type_for(tool: Tool) -> ObjectType:
    """Parse a tool's input schema; a non-object top level means no parameters."""
    if not isinstance(tool.input_schema, dict):
        logger.debug("%s: input schema is not an object, treating as no parameters", tool.name)
        return ObjectType()
    node = parse_schema(tool.input_schema, tool.name)
    if not isinstance(node, ObjectType):
        logger.debug("%s: input schema is %s, treating as no parameters", tool.name, node.kind)
        return ObjectType()
    return node


def render_output_interface(type_name: str) -> str:
    """The fixed result envelope shared by every MCP tool."""
    return "\n".join([
        f"export interface {type_name} {{",
        f"{INDENT}content: Array<{CONTENT_BLOCK_TYPE}>;",
        f"{INDENT}isError?: boolean;",
        f"{INDENT}{INDEX_SIGNATURE}",
        "}",
    ])


CONTENT_BLOCK_DECLARATION = "\n".join([
    "/** A content block returned by an MCP tool call. */",
    f"export interface {CONTENT_BLOCK_TYPE} {{",
    f"{INDENT}type: string;",
    f"{INDENT}text?: string;",
    f"{INDENT}data?: string;",
    f"{INDENT}mimeType?: string;",
    f"{INDENT}{INDEX_SIGNATURE}",
    "}",
])


class SchemaTranslator:
    """Generates input/output declarations for tools."""

    def translate_tool(self, tool: Tool) -> GeneratedInterface:
        """Generate the input and output interfaces for a single tool."""
        base = type_name_for(tool.name)
        input_name = f"{base}Input"
        output_name = f"{base}Output"

        lines = []
        if tool.description:
            lines.extend(_doc_comment(tool.description, 0))
        lines.append(f"export interface {input_name} {render_type(input_type_for(tool))}")
        lines.append("")
        lines.extend(_doc_comment(f"Result of the `{tool.name}` tool.", 0))
        lines.append(render_output_interface(output_name))

        return GeneratedInterface(
            tool_name=tool.name,
            input_type_name=input_name,
            output_type_name=output_name,
            source_text="\n".join(lines),
        )

    def translate_categories(
        self, categories: list[Category]
    ) -> dict[str, list[GeneratedInterface]]:
        """Translate every categorized tool, keyed by category key.

        Raises:
            NameCollisionError: Two distinct tools share a declaration name
        """
        owners: dict[str, str] = {}
        result: dict[str, list[GeneratedInterface]] = {}

        for category in categories:
            interfaces = []
            for tool in category.tools:
                base = type_name_for(tool.name)
                owner = owners.setdefault(base, tool.name)
                if owner != tool.name:
                    raise NameCollisionError(base, owner, tool.name)
                interfaces.append(self.translate_tool(tool))
            result[category.key] = interfaces

        return result

    def render_module(self, category: Category, interfaces: list[GeneratedInterface]) -> str:
        """Render the ``types.ts`` file for one category."""
        header = [
            "/**",
            f" * {category.name}: {category.description}",
            " *",
            " * Generated by mcp-skillgen. Do not edit by hand.",
            " */",
            "",
            CONTENT_BLOCK_DECLARATION,
        ]
        sections = ["\n".join(header)]
        sections.extend(interface.source_text for interface in interfaces)
        return "\n\n".join(sections) + "\n"

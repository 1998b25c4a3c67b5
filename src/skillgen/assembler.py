# -*- coding: utf-8 -*-
"""Write a generated skill package to disk."""

import logging
from pathlib import Path
from typing import Optional

from skillgen.errors import AssemblyError
from skillgen.models import Category, GeneratedInterface, SkillMetadata
from skillgen.schema import SchemaTranslator
from skillgen.templates.skill_md import generate_readme, generate_skill_md

logger = logging.getLogger(__name__)


class PackageAssembler:
    """Lays out SKILL.md, README.md and ``scripts/<category>/types.ts``."""

    def __init__(self, output_dir: Path, translator: Optional[SchemaTranslator] = None):
        self.output_dir = Path(output_dir)
        self.translator = translator or SchemaTranslator()

    @staticmethod
    def check_handoff(
        categories: list[Category],
        interfaces: dict[str, list[GeneratedInterface]],
    ) -> None:
        """Verify every categorized tool has exactly one interface under its category key.

        Raises:
            AssemblyError: A tool is missing, duplicated or filed under the wrong key
        """
        seen: dict[str, str] = {}
        for category in categories:
            for tool in category.tools:
                if tool.name in seen:
                    raise AssemblyError(
                        f"Tool '{tool.name}' is in both '{seen[tool.name]}' and '{category.key}'"
                    )
                seen[tool.name] = category.key

            generated = [interface.tool_name for interface in interfaces.get(category.key, [])]
            if generated != category.tool_names:
                raise AssemblyError(
                    f"Interfaces for category '{category.key}' do not match its tools: "
                    f"expected {category.tool_names}, got {generated}"
                )

        extra = set(interfaces) - {category.key for category in categories}
        if extra:
            raise AssemblyError(f"Interfaces for unknown categories: {sorted(extra)}")

    def assemble(
        self,
        metadata: SkillMetadata,
        categories: list[Category],
        interfaces: dict[str, list[GeneratedInterface]],
    ) -> Path:
        """Write the package and return its directory."""
        self.check_handoff(categories, interfaces)

        scripts_dir = self.output_dir / "scripts"
        scripts_dir.mkdir(parents=True, exist_ok=True)

        skill_path = self.output_dir / "SKILL.md"
        skill_path.write_text(generate_skill_md(metadata, categories, interfaces), encoding="utf-8")

        for category in categories:
            category_dir = scripts_dir / category.key
            category_dir.mkdir(parents=True, exist_ok=True)
            content = self.translator.render_module(category, interfaces[category.key])
            (category_dir / "types.ts").write_text(content, encoding="utf-8")
            logger.debug("Wrote %s (%d tools)", category_dir / "types.ts", len(category.tools))

        readme_path = self.output_dir / "README.md"
        readme_path.write_text(generate_readme(metadata, categories), encoding="utf-8")

        return self.output_dir

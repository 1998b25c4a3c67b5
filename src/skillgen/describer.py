# -*- coding: utf-8 -*-
"""Skill description writer, optionally backed by an LLM."""

import json
import logging

from openai import OpenAI

from skillgen.config import Settings
from skillgen.models import Category

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You write the description field of agent skills.

The description is the ONLY thing an agent reads to decide when to use a skill. It must:
- Say what the skill does AND when to use it
- Mention the concrete kinds of objects the tools work with
- Be 40-80 words of plain prose, no Markdown, no surrounding quotes
"""


class SkillDescriber:
    """Writes the one-paragraph description placed at the top of SKILL.md."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: OpenAI | None = None

        if settings.use_ai and settings.validate_llm_config():
            self.client = OpenAI(
                api_key=settings.llm.api_key,
                base_url=settings.llm.base_url,
            )

    def is_available(self) -> bool:
        """Check if AI generation is available."""
        return self.client is not None and self.settings.use_ai

    def _call_llm(self, messages: list[dict]) -> str | None:
        """Make an LLM API call; returns None on any failure."""
        if not self.client:
            return None

        logger.debug(
            "LLM request to %s (model=%s)", self.settings.llm.base_url, self.settings.llm.model
        )
        try:
            response = self.client.chat.completions.create(
                model=self.settings.llm.model,
                messages=messages,
                temperature=self.settings.llm.temperature,
                max_tokens=self.settings.llm.max_tokens,
            )
        except Exception as e:
            logger.warning("AI description failed: %s, using fallback", e)
            return None

        content = response.choices[0].message.content
        if response.choices[0].finish_reason == "length":
            logger.warning(
                "AI response was truncated (max_tokens=%d)", self.settings.llm.max_tokens
            )
        return content.strip() if content else None

    def generate_description(self, skill_name: str, categories: list[Category]) -> str:
        """Describe the skill from its categorized tools."""
        if not self.is_available():
            return self.fallback_description(skill_name, categories)

        summary = {
            category.name: [
                {"name": tool.name, "description": (tool.description or "")[:120]}
                for tool in category.tools[:8]
            ]
            for category in categories
        }
        prompt = (
            f"Skill name: {skill_name}\n"
            f"Tools by category:\n{json.dumps(summary, indent=2, ensure_ascii=False)}\n\n"
            "Write the description."
        )
        result = self._call_llm([
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ])

        # Anything shorter than a sentence or two is not worth keeping
        if not result or len(result.split()) < 10:
            return self.fallback_description(skill_name, categories)
        return " ".join(result.split())

    @staticmethod
    def fallback_description(skill_name: str, categories: list[Category]) -> str:
        """Deterministic description built from category names and tool counts."""
        total = sum(len(category.tools) for category in categories)
        if total == 0:
            return f"{skill_name}: auto-generated skill from an MCP server that exposes no tools."

        parts = [f"{category.name} ({len(category.tools)})" for category in categories]
        noun = "tool" if total == 1 else "tools"
        group = "category" if len(categories) == 1 else "categories"
        return (
            f"{skill_name} wraps an MCP server with {total} {noun} "
            f"in {len(categories)} {group}: {', '.join(parts)}. "
            "Use it to call these tools with typed inputs."
        )

# -*- coding: utf-8 -*-
"""Rule-based partitioning of tools into categories."""

import json
import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from skillgen.errors import RuleConfigError
from skillgen.models import Category, Tool


class ClassificationRule(BaseModel):
    """One category and the patterns that claim tools for it.

    Patterns are searched case-insensitively against the tool name and the
    tool description; a hit on either field counts.
    """

    name: str
    key: str
    description: str
    patterns: list[re.Pattern] = Field(min_length=1)
    exclude: list[re.Pattern] = Field(default_factory=list)

    @field_validator("patterns", "exclude", mode="before")
    @classmethod
    def _compile(cls, value):
        if not isinstance(value, list):
            return value
        return [
            re.compile(p, re.IGNORECASE) if isinstance(p, str) else p
            for p in value
        ]

    def _hits(self, patterns: list[re.Pattern], tool: Tool) -> bool:
        for pattern in patterns:
            if pattern.search(tool.name):
                return True
            if tool.description and pattern.search(tool.description):
                return True
        return False

    def claims(self, tool: Tool) -> bool:
        """Whether this rule matches the tool and no exclusion applies."""
        return self._hits(self.patterns, tool) and not self._hits(self.exclude, tool)

    def new_category(self) -> Category:
        return Category(name=self.name, key=self.key, description=self.description)


FALLBACK_CATEGORY_KEY = "other"


def fallback_category() -> Category:
    return Category(name="Other", key=FALLBACK_CATEGORY_KEY, description="Additional tools")


# Order matters: the first rule that claims a tool wins, so specific rules
# (exact prefixes, "private") come before broad substrings ("workspace", "run").
DEFAULT_RULES: list[ClassificationRule] = [
    ClassificationRule(
        name="Public Registry",
        key="public-registry",
        description="Tools for accessing public Terraform registry (modules, providers, policies)",
        patterns=[
            r"^(get_latest|get_module_details|get_policy_details|get_provider_details"
            r"|get_provider_capabilities|search_modules|search_policies|search_providers)"
        ],
        exclude=[r"private"],
    ),
    ClassificationRule(
        name="Private Registry",
        key="private-registry",
        description="Tools for accessing private Terraform modules and providers",
        patterns=[r"private_(module|provider)", r"search_private", r"get_private"],
    ),
    ClassificationRule(
        name="Workspaces",
        key="workspaces",
        description="Workspace creation, configuration, and management",
        patterns=[r"workspace"],
        exclude=[r"variable", r"tag"],
    ),
    ClassificationRule(
        name="Runs",
        key="runs",
        description="Terraform run creation and monitoring",
        patterns=[r"run"],
        exclude=[r"running"],
    ),
    ClassificationRule(
        name="Variables",
        key="variables",
        description="Variable and variable set management",
        patterns=[r"variable", r"variable_set"],
    ),
    ClassificationRule(
        name="Tags",
        key="tags",
        description="Workspace tagging operations",
        patterns=[r"tag"],
    ),
    ClassificationRule(
        name="Organization",
        key="organization",
        description="Organization and project listing",
        patterns=[r"org|project", r"^list_terraform"],
    ),
]


class ToolClassifier:
    """Assigns every tool to exactly one category."""

    def __init__(self, rules: Optional[list[ClassificationRule]] = None):
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        keys = [rule.key for rule in self.rules]
        if len(set(keys)) != len(keys):
            raise RuleConfigError("Classification rule keys must be unique")
        if FALLBACK_CATEGORY_KEY in keys:
            raise RuleConfigError(
                f"'{FALLBACK_CATEGORY_KEY}' is reserved for the fallback category"
            )

    def rule_for(self, tool: Tool) -> Optional[ClassificationRule]:
        """Return the first rule that claims the tool, if any."""
        for rule in self.rules:
            if rule.claims(tool):
                return rule
        return None

    def classify(self, tools: list[Tool]) -> list[Category]:
        """Partition tools into categories.

        Categories (including the fallback) are created on first claim and
        returned in that order; tools keep their input order within each one.
        """
        categories: dict[str, Category] = {}

        for tool in tools:
            rule = self.rule_for(tool)
            if rule is not None:
                category = categories.get(rule.key)
                if category is None:
                    category = categories[rule.key] = rule.new_category()
            else:
                category = categories.get(FALLBACK_CATEGORY_KEY)
                if category is None:
                    category = categories[FALLBACK_CATEGORY_KEY] = fallback_category()
            category.tools.append(tool)

        return list(categories.values())


def load_rules(path: Path) -> list[ClassificationRule]:
    """Load an ordered rule list from a JSON file.

    The file holds an array of objects with ``name``, ``key``,
    ``description``, ``patterns`` and optionally ``exclude``. Array order is
    rule precedence.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RuleConfigError(f"Could not read rules from {path}: {e}") from e

    if not isinstance(data, list):
        raise RuleConfigError(f"Rules file {path} must contain a JSON array")

    try:
        return [ClassificationRule(**entry) for entry in data]
    except (TypeError, ValidationError, re.error) as e:
        raise RuleConfigError(f"Invalid rule in {path}: {e}") from e

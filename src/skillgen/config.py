# -*- coding: utf-8 -*-
"""Configuration management for mcp-skillgen."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from dotenv import load_dotenv


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class LLMSettings(BaseModel):
    """LLM API configuration."""

    api_key: str = Field(default="", description="API key for the LLM service")
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL for the LLM API"
    )
    model: str = Field(
        default="gpt-4o-mini",
        description="Model name to use for generation"
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Temperature for generation"
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        description="Maximum tokens for generation"
    )


class Settings(BaseModel):
    """Application settings."""

    # LLM settings
    llm: LLMSettings = Field(default_factory=LLMSettings)

    # MCP discovery
    handshake_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for the server to answer the initialize handshake"
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Seconds to wait for each tools/list page"
    )
    max_pages: int = Field(
        default=1000,
        ge=1,
        description="Upper bound on tools/list pages before giving up"
    )

    # Generation options
    use_ai: bool = Field(
        default=True,
        description="Use AI to write the skill description"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Load settings from environment variables."""
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        llm_settings = LLMSettings(
            api_key=os.getenv("LLM_API_KEY", ""),
            base_url=os.getenv("LLM_BASE_URL", "https://api.openai.com/v1"),
            model=os.getenv("LLM_MODEL", "gpt-4o-mini"),
            temperature=float(os.getenv("LLM_TEMPERATURE", "0.7")),
            max_tokens=int(os.getenv("LLM_MAX_TOKENS", "1024")),
        )

        return cls(
            llm=llm_settings,
            handshake_timeout=float(os.getenv("MCP_HANDSHAKE_TIMEOUT", "30")),
            request_timeout=float(os.getenv("MCP_REQUEST_TIMEOUT", "60")),
            max_pages=int(os.getenv("MCP_MAX_PAGES", "1000")),
            use_ai=_env_flag("USE_AI", "true"),
            debug=_env_flag("SKILLGEN_DEBUG", "false"),
        )

    def validate_llm_config(self) -> bool:
        """Check if LLM configuration is valid."""
        return bool(self.llm.api_key and self.llm.base_url and self.llm.model)


ENV_EXAMPLE = """# mcp-skillgen configuration
# Copy this file to .env and fill in your values

# LLM Configuration (optional, writes the skill description)
LLM_API_KEY=your-api-key-here
LLM_BASE_URL=https://api.openai.com/v1
LLM_MODEL=gpt-4o-mini
LLM_TEMPERATURE=0.7
LLM_MAX_TOKENS=1024

# MCP discovery limits
MCP_HANDSHAKE_TIMEOUT=30
MCP_REQUEST_TIMEOUT=60
MCP_MAX_PAGES=1000

# Options
USE_AI=true
SKILLGEN_DEBUG=false
"""

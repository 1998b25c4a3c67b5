"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from skillgen.config import ENV_EXAMPLE, Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.handshake_timeout == 30
        assert settings.request_timeout == 60
        assert settings.max_pages == 1000
        assert settings.use_ai is True
        assert settings.llm.max_tokens == 1024
        assert not settings.validate_llm_config()

    def test_from_env(self, clean_env, tmp_path):
        clean_env.chdir(tmp_path)
        clean_env.setenv("LLM_API_KEY", "sk-test")
        clean_env.setenv("LLM_MODEL", "gpt-test")
        clean_env.setenv("MCP_HANDSHAKE_TIMEOUT", "5")
        clean_env.setenv("MCP_MAX_PAGES", "20")
        clean_env.setenv("USE_AI", "no")
        clean_env.setenv("SKILLGEN_DEBUG", "1")

        settings = Settings.from_env()

        assert settings.llm.api_key == "sk-test"
        assert settings.llm.model == "gpt-test"
        assert settings.handshake_timeout == 5
        assert settings.request_timeout == 60
        assert settings.max_pages == 20
        assert settings.use_ai is False
        assert settings.debug is True
        assert settings.validate_llm_config()

    def test_from_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("LLM_API_KEY=from-file\nMCP_REQUEST_TIMEOUT=7.5\n")

        settings = Settings.from_env(env_file)

        assert settings.llm.api_key == "from-file"
        assert settings.request_timeout == 7.5

    def test_environment_wins_over_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("LLM_MODEL=from-file\n")
        clean_env.setenv("LLM_MODEL", "from-env")

        assert Settings.from_env(env_file).llm.model == "from-env"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            Settings(handshake_timeout=0)

    def test_env_example_lists_every_setting(self):
        for key in ("LLM_API_KEY", "MCP_HANDSHAKE_TIMEOUT", "MCP_REQUEST_TIMEOUT",
                    "MCP_MAX_PAGES", "USE_AI", "SKILLGEN_DEBUG"):
            assert f"{key}=" in ENV_EXAMPLE

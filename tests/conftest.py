"""Shared fixtures: a scripted stand-in for an MCP server session."""

import asyncio
from contextlib import asynccontextmanager
from types import SimpleNamespace

import pytest

ENV_KEYS = [
    "LLM_API_KEY",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "USE_AI",
    "MCP_HANDSHAKE_TIMEOUT",
    "MCP_REQUEST_TIMEOUT",
    "MCP_MAX_PAGES",
    "SKILLGEN_DEBUG",
]


def make_tools(prefix, count):
    return [
        {"name": f"{prefix}_{i}", "description": f"Tool {i}", "inputSchema": {"type": "object"}}
        for i in range(count)
    ]


class FakeSession:
    """Answers tools/list from a {cursor: (tools, next_cursor)} script."""

    def __init__(self, pages=None, server_name="fake-server", initialize_delay=0.0,
                 initialize_error=None):
        self.pages = pages if pages is not None else {None: ([], None)}
        self.server_name = server_name
        self.initialize_delay = initialize_delay
        self.initialize_error = initialize_error
        self.requests = []

    async def initialize(self):
        if self.initialize_delay:
            await asyncio.sleep(self.initialize_delay)
        if self.initialize_error:
            raise self.initialize_error
        return SimpleNamespace(serverInfo=SimpleNamespace(name=self.server_name, version="1.2.3"))

    async def list_tools(self, cursor=None):
        self.requests.append(cursor)
        page = self.pages[cursor]
        if callable(page):
            page = page(cursor)
        tools, next_cursor = page
        return SimpleNamespace(tools=tools, nextCursor=next_cursor)


class FakeServer:
    """Session factory that records process start/stop and arguments."""

    def __init__(self, session=None, start_error=None):
        self.session = session or FakeSession()
        self.start_error = start_error
        self.events = []
        self.params = None

    @asynccontextmanager
    async def __call__(self, params, settings):
        self.params = params
        if self.start_error:
            raise self.start_error
        self.events.append("start")
        try:
            yield self.session
        finally:
            self.events.append("stop")


@pytest.fixture
def clean_env(monkeypatch):
    """Clear configuration variables and undo anything load_dotenv sets."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def paged_server():
    """A server with pages of 10, 10 and 4 tools."""
    pages = {
        None: (make_tools("a", 10), "c1"),
        "c1": (make_tools("b", 10), "c2"),
        "c2": (make_tools("c", 4), None),
    }
    return FakeServer(FakeSession(pages))

# -*- coding: utf-8 -*-
"""MCP discovery client: connect to a stdio server and list all of its tools."""

import enum
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from datetime import timedelta
from typing import Any, AsyncContextManager, AsyncIterator, Callable, Optional

import anyio
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from skillgen.config import Settings
from skillgen.errors import (
    AlreadyConnectedError,
    NotConnectedError,
    ProtocolError,
    ServerConnectionError,
)
from skillgen.models import Tool

logger = logging.getLogger(__name__)

CLIENT_NAME = "mcp-skillgen"

# Opens a session to the server described by the parameters. The client runs
# the initialize handshake on the yielded session itself.
SessionFactory = Callable[[StdioServerParameters, Settings], AsyncContextManager[Any]]


class ConnectionState(str, enum.Enum):
    UNCONNECTED = "unconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    FAILED = "failed"


@asynccontextmanager
async def open_stdio_session(
    params: StdioServerParameters, settings: Settings
) -> AsyncIterator[ClientSession]:
    """Spawn the server process and open a client session over its stdio.

    Every request on the session, including each tools/list page, is bounded
    by ``settings.request_timeout``.
    """
    async with stdio_client(params) as (read, write):
        async with ClientSession(
            read,
            write,
            read_timeout_seconds=timedelta(seconds=settings.request_timeout),
        ) as session:
            yield session


class MCPDiscoveryClient:
    """Owns one connection to an MCP server for the duration of a run.

    A client is single use: ``connect`` may only be called once. Use it as an
    async context manager, or call ``disconnect`` in a ``finally`` block, so
    the server process is always released::

        async with MCPDiscoveryClient(settings) as client:
            await client.connect("npx", ["-y", "@modelcontextprotocol/server-everything"])
            tools = await client.list_tools()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[SessionFactory] = None,
    ):
        self.settings = settings or Settings()
        self._session_factory = session_factory or open_stdio_session
        self._stack: Optional[AsyncExitStack] = None
        self._session: Any = None
        self.state = ConnectionState.UNCONNECTED
        self.server_info: dict[str, Optional[str]] = {}

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    async def __aenter__(self) -> "MCPDiscoveryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.disconnect()

    async def connect(
        self,
        command: str,
        args: list[str],
        env: Optional[dict[str, str]] = None,
    ) -> None:
        """Start the server process and perform the MCP handshake.

        Raises:
            AlreadyConnectedError: connect() was already called on this client
            ServerConnectionError: The process could not start or the handshake failed
        """
        if self.state is not ConnectionState.UNCONNECTED:
            raise AlreadyConnectedError(f"Client is already {self.state.value}")

        self.state = ConnectionState.CONNECTING
        params = StdioServerParameters(command=command, args=list(args), env=env)
        stack = AsyncExitStack()

        try:
            session = await stack.enter_async_context(
                self._session_factory(params, self.settings)
            )
            with anyio.fail_after(self.settings.handshake_timeout):
                init_result = await session.initialize()
        except Exception as e:
            self.state = ConnectionState.FAILED
            try:
                await stack.aclose()
            except Exception as close_error:
                logger.debug("Cleanup after failed connect raised: %s", close_error)
            raise ServerConnectionError(
                f"Could not connect to MCP server '{command}': {str(e) or type(e).__name__}"
            ) from e

        self._stack = stack
        self._session = session
        self.server_info = _describe_server(init_result)
        self.state = ConnectionState.CONNECTED
        logger.debug("Connected to %s", self.server_info.get("name") or command)

    async def list_tools(self) -> list[Tool]:
        """Fetch every tool, following ``nextCursor`` until the last page.

        Raises:
            NotConnectedError: The client is not connected
            ProtocolError: A request failed, a response was malformed, a
                cursor repeated or the page limit was exceeded
        """
        if not self.is_connected:
            raise NotConnectedError("Client is not connected. Call connect() first.")

        tools: list[Tool] = []
        names: set[str] = set()
        seen_cursors: set[str] = set()
        cursor: Optional[str] = None
        pages = 0

        while True:
            pages += 1
            if pages > self.settings.max_pages:
                raise ProtocolError(
                    f"tools/list did not finish within {self.settings.max_pages} pages"
                )

            try:
                response = await self._session.list_tools(cursor)
            except Exception as e:
                raise ProtocolError(f"tools/list request failed: {str(e) or type(e).__name__}") from e

            page_tools = getattr(response, "tools", None)
            if page_tools is None:
                raise ProtocolError("tools/list response has no 'tools' field")

            for raw in page_tools:
                tool = _to_tool(raw)
                if tool.name in names:
                    raise ProtocolError(f"Server listed tool '{tool.name}' more than once")
                names.add(tool.name)
                tools.append(tool)

            logger.debug("tools/list page %d: %d tools", pages, len(page_tools))

            cursor = getattr(response, "nextCursor", None)
            if not cursor:
                return tools
            if cursor in seen_cursors:
                raise ProtocolError(f"Server repeated pagination cursor {cursor!r}")
            seen_cursors.add(cursor)

    async def disconnect(self) -> None:
        """Close the session and stop the server process. Safe to call repeatedly."""
        stack, self._stack = self._stack, None
        self._session = None
        if self.state is ConnectionState.CONNECTED:
            self.state = ConnectionState.DISCONNECTED
        if stack is None:
            return
        try:
            await stack.aclose()
        except Exception as e:
            logger.warning("Error while stopping MCP server: %s", str(e) or type(e).__name__)
        else:
            logger.debug("Disconnected from MCP server")


def _to_tool(raw: Any) -> Tool:
    if isinstance(raw, dict):
        data = raw
    elif hasattr(raw, "model_dump"):
        data = raw.model_dump(by_alias=True)
    else:
        raise ProtocolError(f"Unexpected tool entry: {raw!r}")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ProtocolError(f"Tool entry without a name: {data!r}")

    description = data.get("description")
    return Tool(
        name=name,
        description=description if isinstance(description, str) else None,
        input_schema=data.get("inputSchema", {}),
    )


def _describe_server(init_result: Any) -> dict[str, Optional[str]]:
    info = getattr(init_result, "serverInfo", None)
    return {
        "name": getattr(info, "name", None),
        "version": getattr(info, "version", None),
    }

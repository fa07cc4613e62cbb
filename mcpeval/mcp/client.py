"""
MCP Client - MCP server communication over the official MCP SDK

Supports the two HTTP transports an MCP server can be reached over:
- Streamable HTTP (``mcp.client.streamable_http``)
- Server-Sent Events (``mcp.client.sse``)
"""

import asyncio
import logging
from contextlib import AsyncExitStack
from datetime import timedelta
from typing import List, Optional

from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.client.streamable_http import streamablehttp_client

from .models import MCPServerConfig, MCPTool, MCPTransportType
from .protocol import MCPClientProtocol

logger = logging.getLogger(__name__)


class MCPClient(MCPClientProtocol):
    """
    MCP Client implementation

    Example:
        config = MCPServerConfig(
            url="https://example.com/mcp",
            transport=MCPTransportType.STREAMABLE_HTTP,
        )
        client = MCPClient(config)
        await client.connect()

        tools = await client.list_tools()

        await client.disconnect()
    """

    def __init__(self, config: MCPServerConfig):
        """
        Initialize MCP client

        Args:
            config: MCP server configuration
        """
        self.config = config
        self._connected = False
        self._tools: List[MCPTool] = []
        self._session: Optional[ClientSession] = None
        self._exit_stack: Optional[AsyncExitStack] = None
        self._server_info_name: Optional[str] = None

    @property
    def server_name(self) -> str:
        return self._server_info_name or self.config.name

    @property
    def transport(self) -> MCPTransportType:
        return self.config.transport

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """
        Connect to the MCP server and discover its tools

        Raises:
            ConnectionError: If the transport, the handshake or the tool
                listing fails
        """
        if self._connected:
            logger.warning(f"Already connected to {self.server_name}")
            return

        logger.debug(f"Opening {self.transport.value} transport to {self.config.url}")
        self._exit_stack = AsyncExitStack()

        try:
            if self.transport == MCPTransportType.STREAMABLE_HTTP:
                await self._connect_streamable_http()
            elif self.transport == MCPTransportType.SSE:
                await self._connect_sse()
            else:
                raise ValueError(f"Unsupported transport: {self.transport}")

            await self._initialize_session()
            self._tools = await self._fetch_tools()
        except Exception as e:
            await self._close_stack()
            raise ConnectionError(f"MCP connection failed: {e}") from e

        self._connected = True
        logger.debug(f"Discovered {len(self._tools)} tools from {self.server_name}")

    async def _connect_streamable_http(self) -> None:
        read_stream, write_stream, _ = await self._exit_stack.enter_async_context(
            streamablehttp_client(
                self.config.url,
                headers=self.config.headers or None,
                timeout=timedelta(seconds=self.config.timeout),
                sse_read_timeout=timedelta(seconds=self.config.sse_read_timeout),
            )
        )
        await self._open_session(read_stream, write_stream)

    async def _connect_sse(self) -> None:
        read_stream, write_stream = await self._exit_stack.enter_async_context(
            sse_client(
                self.config.url,
                headers=self.config.headers or None,
                timeout=self.config.timeout,
                sse_read_timeout=self.config.sse_read_timeout,
            )
        )
        await self._open_session(read_stream, write_stream)

    async def _open_session(self, read_stream, write_stream) -> None:
        self._session = await self._exit_stack.enter_async_context(
            ClientSession(read_stream, write_stream)
        )

    async def _initialize_session(self) -> None:
        # A server that does not speak this transport may never answer
        result = await asyncio.wait_for(self._session.initialize(), timeout=self.config.timeout)
        server_info = getattr(result, "serverInfo", None)
        self._server_info_name = getattr(server_info, "name", None)

    async def _fetch_tools(self) -> List[MCPTool]:
        result = await self._session.list_tools()
        return [
            MCPTool(
                name=tool.name,
                description=tool.description or "",
                input_schema=tool.inputSchema or {},
                server_name=self.server_name,
            )
            for tool in result.tools
        ]

    async def _close_stack(self) -> None:
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if stack is None:
            return
        try:
            await stack.aclose()
        except Exception as e:
            logger.debug(f"Error while closing {self.transport.value} transport: {e}")

    async def disconnect(self) -> None:
        """Disconnect from the MCP server"""
        if not self._connected:
            return

        logger.debug(f"Disconnecting from MCP server: {self.server_name}")
        self._connected = False
        self._tools = []
        await self._close_stack()

    async def list_tools(self) -> List[MCPTool]:
        """List all available tools"""
        if not self._connected:
            raise ConnectionError("Not connected to MCP server")
        return list(self._tools)

    async def __aenter__(self) -> "MCPClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    def __repr__(self) -> str:
        status = "connected" if self._connected else "disconnected"
        return (
            f"MCPClient(server='{self.server_name}', "
            f"transport={self.transport.value}, status={status})"
        )


class MockMCPClient(MCPClient):
    """
    Mock MCP client for testing

    Example:
        client = MockMCPClient(
            tools=[
                MCPTool(
                    name="echo",
                    description="Echo input",
                    input_schema={"type": "object", "properties": {"text": {"type": "string"}}},
                )
            ]
        )
        await client.connect()
    """

    def __init__(
        self,
        config: Optional[MCPServerConfig] = None,
        tools: Optional[List[MCPTool]] = None,
        connect_error: Optional[Exception] = None,
        name: str = "mock-server",
    ):
        super().__init__(config or MCPServerConfig(url="mock://server", name=name))
        self._mock_tools = tools or []
        self._connect_error = connect_error
        self._server_info_name = name

    async def connect(self) -> None:
        if self._connect_error is not None:
            raise ConnectionError(f"MCP connection failed: {self._connect_error}") from self._connect_error
        self._tools = list(self._mock_tools)
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False
        self._tools = []

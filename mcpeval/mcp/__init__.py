"""
mcp-eval MCP Integration - Model Context Protocol connections

Example:
    from mcpeval.mcp import connect_with_fallback

    client = await connect_with_fallback("https://example.com/mcp")
    tools = await client.list_tools()
    await client.disconnect()
"""

from .protocol import MCPClientProtocol
from .client import MCPClient, MockMCPClient
from .connector import TransportAttempt, connect_with_fallback
from .models import MCPServerConfig, MCPTool, MCPTransportType

__all__ = [
    "MCPClientProtocol",
    "MCPClient",
    "MockMCPClient",
    "TransportAttempt",
    "connect_with_fallback",
    "MCPServerConfig",
    "MCPTool",
    "MCPTransportType",
]

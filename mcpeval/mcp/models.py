"""
MCP Models - Data structures for MCP server connections
"""

from dataclasses import dataclass, field
from typing import Any, Dict
from enum import Enum

from ..models import ToolDefinition


class MCPTransportType(str, Enum):
    """MCP transport types, in the order they are tried"""
    STREAMABLE_HTTP = "streamable_http"
    SSE = "sse"


@dataclass
class MCPServerConfig:
    """
    Configuration for connecting to an MCP server

    Attributes:
        url: Server URL
        transport: Wire transport to use
        headers: HTTP headers sent with every request
        name: Label used in logs
        timeout: HTTP timeout in seconds
        sse_read_timeout: How long to wait for a server event, in seconds

    Example:
        config = MCPServerConfig(
            url="https://example.com/mcp",
            transport=MCPTransportType.SSE,
            headers={"Authorization": "Bearer xxx"},
        )
    """
    url: str
    transport: MCPTransportType = MCPTransportType.STREAMABLE_HTTP
    headers: Dict[str, str] = field(default_factory=dict)
    name: str = "mcp-server"
    timeout: float = 30.0
    sse_read_timeout: float = 300.0

    def __post_init__(self):
        if not self.url:
            raise ValueError(f"{self.transport.value} transport requires 'url'")


@dataclass
class MCPTool:
    """
    Represents a tool from an MCP server

    Attributes:
        name: Tool name (as defined by MCP server)
        description: Tool description
        input_schema: JSON Schema for tool parameters
        server_name: Name of the MCP server providing this tool
    """
    name: str
    description: str
    input_schema: Dict[str, Any]
    server_name: str = ""

    def to_tool_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description or "",
            parameters_schema=self.input_schema or {},
        )

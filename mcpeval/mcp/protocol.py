"""
MCP Protocol - Abstract interface for MCP clients

The runner and connector only depend on this protocol, so tests and
alternative SDK integrations can supply their own client.
"""

from typing import List, Protocol, runtime_checkable

from .models import MCPTool


@runtime_checkable
class MCPClientProtocol(Protocol):
    """
    Abstract interface for MCP clients

    Example:
        class MyMCPClient:
            async def connect(self) -> None:
                ...

            async def disconnect(self) -> None:
                ...

            async def list_tools(self) -> List[MCPTool]:
                ...
    """

    @property
    def server_name(self) -> str:
        """Get the server name"""
        ...

    @property
    def is_connected(self) -> bool:
        """Check if connected to server"""
        ...

    async def connect(self) -> None:
        """
        Connect to the MCP server

        Raises:
            ConnectionError: If connection fails
        """
        ...

    async def disconnect(self) -> None:
        """Disconnect from the MCP server"""
        ...

    async def list_tools(self) -> List[MCPTool]:
        """
        List all available tools from the MCP server

        Returns:
            List of MCPTool objects
        """
        ...

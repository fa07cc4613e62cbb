"""
MCP Transport Connector - Connect with automatic transport fallback

Streamable HTTP is tried first. On any failure the same URL and headers are
tried over SSE. When both fail, TransportConnectionError reports both
causes. The two attempts are different protocols, not retries, so there is
no backoff and no second round.

Usage:
    client = await connect_with_fallback("https://example.com/mcp", headers={"X-Key": "..."})
    try:
        tools = await client.list_tools()
    finally:
        await client.disconnect()
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from ..errors import TransportConnectionError
from .client import MCPClient
from .models import MCPServerConfig, MCPTransportType
from .protocol import MCPClientProtocol

logger = logging.getLogger(__name__)

TRANSPORT_ORDER: Sequence[MCPTransportType] = (
    MCPTransportType.STREAMABLE_HTTP,
    MCPTransportType.SSE,
)

ClientFactory = Callable[[MCPServerConfig], MCPClientProtocol]


@dataclass
class TransportAttempt:
    """Record of a single failed transport attempt."""
    transport: MCPTransportType
    error: str


async def connect_with_fallback(
    url: str,
    headers: Optional[Dict[str, str]] = None,
    client_factory: ClientFactory = MCPClient,
    transports: Sequence[MCPTransportType] = TRANSPORT_ORDER,
    timeout: float = 30.0,
) -> MCPClientProtocol:
    """
    Connect to an MCP server, trying each transport in order.

    Args:
        url: MCP server URL
        headers: Custom HTTP headers, sent identically on every attempt
        client_factory: Builds a client from a config (injectable for tests)
        transports: Transports to try, in order
        timeout: Per-attempt HTTP timeout in seconds

    Returns:
        A connected client

    Raises:
        TransportConnectionError: If every transport failed
    """
    attempts: List[TransportAttempt] = []

    logger.info(f"🔍 Connecting to the MCP server at {url}...")

    for index, transport in enumerate(transports):
        config = MCPServerConfig(
            url=url,
            transport=transport,
            headers=dict(headers or {}),
            timeout=timeout,
        )
        client = client_factory(config)

        try:
            await client.connect()
        except Exception as e:
            attempts.append(TransportAttempt(transport=transport, error=str(e)))
            if index + 1 < len(transports):
                logger.warning(
                    f"{transport.value} connection failed ({e}), "
                    f"falling back to {transports[index + 1].value}"
                )
            continue

        tools = await client.list_tools()
        logger.info(
            f"✅ Connected with {client.server_name} over {transport.value}. "
            f"{len(tools)} tools found."
        )
        return client

    raise TransportConnectionError(attempts)

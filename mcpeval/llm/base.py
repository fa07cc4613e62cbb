"""
mcp-eval LLM Client Base - Base class and common types for LLM clients

This module provides:
- BaseLLMClient: Abstract base class for model endpoint clients
- LLMConfig: Configuration dataclass
- LLMResponse: Standardized response format
- ToolCall: A tool call made by the model
- decode_arguments: Decode a tool call argument payload
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..models import ToolDefinition


@dataclass
class LLMConfig:
    """
    Configuration for LLM clients.

    Attributes:
        api_key: API key for the provider
        model: Default model name, overridable per call
        base_url: Optional base URL override for API
        temperature: Sampling temperature, None leaves the provider default
        timeout: Request timeout in seconds
        max_retries: Maximum number of retries done by the SDK
        default_headers: Additional headers to send with requests
    """
    api_key: Optional[str] = None
    model: str = ""
    base_url: Optional[str] = None
    temperature: Optional[float] = None
    timeout: float = 120.0
    max_retries: int = 0
    default_headers: Dict[str, str] = field(default_factory=dict)


def decode_arguments(raw: Optional[str]) -> Dict[str, Any]:
    """
    Decode a tool call's JSON argument payload.

    An empty payload decodes to ``{}``.

    Raises:
        ValueError: If the payload is not a JSON object
    """
    if not raw:
        return {}
    arguments = json.loads(raw)
    if not isinstance(arguments, dict):
        raise ValueError(f"Tool call arguments must be a JSON object, got: {raw}")
    return arguments


@dataclass
class ToolCall:
    """
    A tool call from the LLM

    Providers hand back the argument payload as JSON text. It is kept as
    received in ``raw_arguments`` and only decoded by ``parsed_arguments()``,
    so a malformed payload surfaces where the call is actually inspected.

    Attributes:
        id: Call id assigned by the provider
        name: Tool name
        arguments: Already decoded arguments, if the caller had them
        type: Call kind reported by the provider ("function" for function tools)
        raw_arguments: Argument payload as received
    """
    id: str
    name: str
    arguments: Optional[Dict[str, Any]] = None
    type: str = "function"
    raw_arguments: Optional[str] = None

    @property
    def is_function(self) -> bool:
        return self.type == "function"

    def parsed_arguments(self) -> Dict[str, Any]:
        """
        Raises:
            ValueError: If the raw payload is not a JSON object
        """
        if self.arguments is not None:
            return self.arguments
        return decode_arguments(self.raw_arguments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "arguments": self.arguments if self.arguments is not None else self.raw_arguments,
        }


@dataclass
class LLMResponse:
    """
    Standardized LLM response format.

    All provider clients return this format for consistency.
    """
    content: str
    tool_calls: Optional[List[ToolCall]] = None
    model: Optional[str] = None

    # Raw response for debugging
    raw_response: Optional[Any] = None

    @property
    def has_tool_calls(self) -> bool:
        """Check if response contains tool calls"""
        return self.tool_calls is not None and len(self.tool_calls) > 0

    @property
    def first_tool_call(self) -> Optional[ToolCall]:
        return self.tool_calls[0] if self.has_tool_calls else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "tool_calls": [tc.to_dict() for tc in self.tool_calls] if self.tool_calls else None,
            "model": self.model,
        }


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients.

    Provider clients implement ``_call_api``; callers use
    ``chat_completion``, which accepts ToolDefinition objects or ready
    OpenAI-format tool dicts.

    Example:
        class MyClient(BaseLLMClient):
            async def _call_api(self, messages, tools, **kwargs):
                # Provider-specific implementation
                pass
    """

    # Provider name (override in subclasses)
    provider: str = "unknown"

    def __init__(self, config: Optional[LLMConfig] = None, **kwargs):
        """
        Initialize the client.

        Args:
            config: LLMConfig instance
            **kwargs: Override config values
        """
        if config is None:
            config = LLMConfig(**kwargs)
        else:
            for key, value in kwargs.items():
                if hasattr(config, key):
                    setattr(config, key, value)

        self.config = config
        self._client = None  # Lazy-initialized SDK client

    @abstractmethod
    async def _call_api(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Make the actual API call (provider-specific).

        Args:
            messages: List of message dicts
            tools: Optional list of OpenAI-format tool schemas
            **kwargs: Additional provider-specific params (e.g. model)

        Returns:
            LLMResponse with standardized format
        """
        pass

    async def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Union[Dict[str, Any], ToolDefinition]]] = None,
        config: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: List of message dicts with 'role' and 'content'
            tools: Optional list of tools (dict or ToolDefinition)
            config: Optional config overrides
            **kwargs: Additional parameters

        Returns:
            LLMResponse with content and tool_calls

        Example:
            response = await client.chat_completion(
                [{"role": "user", "content": "Open a bug about login"}],
                tools=[create_issue_tool],
                model="anthropic/claude-3.7-sonnet",
            )
        """
        tool_schemas = None
        if tools:
            tool_schemas = [
                self._format_tool(tool) if isinstance(tool, ToolDefinition) else tool
                for tool in tools
            ]

        merged_kwargs = {**kwargs}
        if config:
            merged_kwargs.update(config)

        return await self._call_api(messages, tool_schemas, **merged_kwargs)

    def _format_tool(self, tool: ToolDefinition) -> Dict[str, Any]:
        """
        Format ToolDefinition to provider-specific schema.

        Default implementation uses OpenAI format.
        """
        return tool.to_openai_schema()

    async def close(self) -> None:
        """Close the client and release resources"""
        if self._client and hasattr(self._client, "close"):
            await self._client.close()
        self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

"""
mcp-eval Protocols - Interfaces the runner depends on
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Union, runtime_checkable

from .llm.base import LLMResponse
from .models import ToolDefinition


@runtime_checkable
class LLMClientProtocol(Protocol):
    """
    Abstract interface for LLM clients

    Implement this protocol to evaluate against any model endpoint.

    Example:
        class MyLLMClient:
            async def chat_completion(self, messages, tools=None, config=None, **kwargs):
                return LLMResponse(content="", tool_calls=[...])
    """

    async def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[Sequence[Union[Dict[str, Any], ToolDefinition]]] = None,
        config: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Call LLM for chat completion

        Args:
            messages: List of message dicts with 'role' and 'content'
            tools: Optional list of tools
            config: Optional configuration overrides
            **kwargs: Per-call parameters such as ``model``

        Returns:
            LLMResponse with content and tool calls
        """
        ...

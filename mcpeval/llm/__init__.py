"""
mcp-eval LLM Client - Model endpoint clients

Usage:
    from mcpeval.llm import OpenAIClient, LLMConfig

    config = LLMConfig(api_key="sk-or-xxx", model="anthropic/claude-3.7-sonnet")
    client = OpenAIClient(config=config)
    response = await client.chat_completion(messages=[...], tools=[...])
"""

from .base import BaseLLMClient, LLMConfig, LLMResponse, ToolCall, decode_arguments
from .openai_client import OpenAIClient

__all__ = [
    "BaseLLMClient",
    "LLMConfig",
    "LLMResponse",
    "ToolCall",
    "decode_arguments",
    "OpenAIClient",
]

"""
mcp-eval OpenAI Client - Chat completions over any OpenAI-compatible API

Defaults to OpenRouter so that any hosted model (Anthropic, OpenAI, Google,
...) can be evaluated with one API key.
"""

import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from ..config import DEFAULT_BASE_URL
from .base import BaseLLMClient, LLMConfig, LLMResponse, ToolCall

logger = logging.getLogger(__name__)


class OpenAIClient(BaseLLMClient):
    """
    OpenAI-compatible API client.

    Example:
        client = OpenAIClient(api_key="sk-or-xxx", model="anthropic/claude-3.7-sonnet")
        response = await client.chat_completion(
            messages=[{"role": "user", "content": "Open a bug about login"}],
            tools=[create_issue_tool],
        )
    """

    provider = "openai"

    def __init__(self, config: Optional[LLMConfig] = None, **kwargs):
        """
        Initialize OpenAI client.

        Args:
            config: LLMConfig instance
            api_key: API key
            model: Default model name
            base_url: Base URL for API (default: OpenRouter)
            **kwargs: Additional config options
        """
        if config is None:
            kwargs.setdefault("base_url", DEFAULT_BASE_URL)
        super().__init__(config, **kwargs)

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client"""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=self.config.max_retries,
                default_headers=self.config.default_headers or None,
            )
        return self._client

    async def _call_api(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ) -> LLMResponse:
        """Make OpenAI API call"""
        client = self._get_client()

        params: Dict[str, Any] = {
            "model": kwargs.get("model") or self.config.model,
            "messages": messages,
        }

        temperature = kwargs.get("temperature", self.config.temperature)
        if temperature is not None:
            params["temperature"] = temperature

        if tools:
            params["tools"] = tools
            params["tool_choice"] = kwargs.get("tool_choice", "auto")

        response = await client.chat.completions.create(**params)

        if not response.choices:
            raise ValueError(f"Model endpoint returned no choices (model={params['model']})")

        message = response.choices[0].message

        tool_calls = None
        if message.tool_calls:
            tool_calls = [self._parse_tool_call(tc) for tc in message.tool_calls]

        return LLMResponse(
            content=message.content or "",
            tool_calls=tool_calls,
            model=response.model,
            raw_response=response,
        )

    def _parse_tool_call(self, tc: Any) -> ToolCall:
        call_type = getattr(tc, "type", "function") or "function"
        if call_type != "function":
            custom = getattr(tc, "custom", None)
            return ToolCall(
                id=tc.id,
                name=getattr(custom, "name", ""),
                type=call_type,
            )

        return ToolCall(
            id=tc.id,
            name=tc.function.name,
            raw_arguments=tc.function.arguments,
        )

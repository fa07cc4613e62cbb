"""
mcp-eval Config - Run settings resolved from environment variables

Environment variables:
    OPENROUTER_API_KEY      API key for the model endpoint
    MCP_EVAL_BASE_URL       OpenAI-compatible base URL (default: OpenRouter)
    MCP_EVAL_RESULTS_PATH   Where the results artifact is written
    MCP_EVAL_TIMEOUT        Per-test timeout in seconds
    MCP_EVAL_CONCURRENCY    Max test cases in flight (0 = unlimited)
    MCP_EVAL_LOCATION       Location rendered into system instructions
"""

import os
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_RESULTS_PATH = "mcp-eval-results.json"
DEFAULT_TEST_TIMEOUT = 120.0
DEFAULT_LOCATION = "Paris, Île-de-France, FR"


@dataclass
class Settings:
    """
    Settings for one evaluation run.

    Attributes:
        api_key: Model endpoint API key
        base_url: OpenAI-compatible base URL
        results_path: Path of the JSON results artifact
        test_timeout: Upper bound in seconds for one test case's model call
        max_concurrency: Max concurrent test cases, None for unlimited
        user_location: Assumed user location for system instructions
        llm_max_retries: Retries done by the OpenAI SDK itself
    """
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    results_path: str = DEFAULT_RESULTS_PATH
    test_timeout: float = DEFAULT_TEST_TIMEOUT
    max_concurrency: Optional[int] = None
    user_location: str = DEFAULT_LOCATION
    llm_max_retries: int = 0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults"""
        env = os.environ if environ is None else environ

        try:
            timeout = float(env.get("MCP_EVAL_TIMEOUT", DEFAULT_TEST_TIMEOUT))
            concurrency = int(env.get("MCP_EVAL_CONCURRENCY", "0"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting in environment: {e}") from e

        return cls(
            api_key=env.get("OPENROUTER_API_KEY") or None,
            base_url=env.get("MCP_EVAL_BASE_URL", DEFAULT_BASE_URL),
            results_path=env.get("MCP_EVAL_RESULTS_PATH", DEFAULT_RESULTS_PATH),
            test_timeout=timeout,
            max_concurrency=concurrency or None,
            user_location=env.get("MCP_EVAL_LOCATION", DEFAULT_LOCATION),
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied"""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(
                "No model endpoint API key. Pass --api-key or set OPENROUTER_API_KEY."
            )
        return self.api_key


def parse_headers(raw_headers: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse ``Name: value`` strings into a header dict.

    Args:
        raw_headers: Header strings as given on the command line

    Returns:
        Dict of header name to value

    Raises:
        ConfigurationError: If a header has no colon or an empty name
    """
    headers: Dict[str, str] = {}
    for raw in raw_headers or []:
        name, sep, value = raw.partition(":")
        name = name.strip()
        if not sep or not name:
            raise ConfigurationError(
                f"Malformed header '{raw}'. Expected format 'Name: value'."
            )
        headers[name] = value.strip()
    return headers

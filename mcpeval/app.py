"""
mcp-eval Application - Run one evaluation end to end

Usage:
    from mcpeval.app import run_suite
    from mcpeval.config import Settings

    result = await run_suite(
        "tests.yml",
        url="https://example.com/mcp",
        settings=Settings.from_env(),
    )
    print(result.aggregator.render_summary())

Order of a run:
1. Load and validate the test suite
2. Resolve the assistant profile
3. Connect to the MCP server (streamable HTTP, then SSE)
4. Check every tool referenced by the conversations against the server
5. Run all test cases concurrently and aggregate the outcomes
6. Write the results artifact

Steps 1-4 raise MCPEvalError subclasses; no test case runs when they do.
"""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .assistants import DEFAULT_ASSISTANT, AssistantProfile, resolve_assistant_profile
from .config import Settings
from .errors import UnknownToolReferenceError
from .llm import LLMConfig, OpenAIClient
from .mcp import MCPClient, MCPTool, connect_with_fallback
from .mcp.connector import ClientFactory
from .models import ToolDefinition
from .protocols import LLMClientProtocol
from .report import ResultAggregator, SuiteSummary
from .runner import TestCaseRunner
from .suite import ParsedSuite, load_test_suite

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """What a completed run produced"""
    aggregator: ResultAggregator
    server_name: str
    model_id: str
    results_path: Optional[Path] = None

    @property
    def summary(self) -> SuiteSummary:
        return self.aggregator.summary()


def check_tool_references(suite: ParsedSuite, tools: Sequence[MCPTool]) -> None:
    """
    Make sure every tool named in a conversation's tool turns is exposed by the server.

    Raises:
        UnknownToolReferenceError: Listing every unknown name
    """
    available = [tool.name for tool in tools]
    known = set(available)
    unknown = [name for name in suite.referenced_tool_names() if name not in known]
    if unknown:
        raise UnknownToolReferenceError(unknown, available)


def build_tool_catalog(
    tools: Sequence[MCPTool],
    profile: AssistantProfile,
) -> List[ToolDefinition]:
    """MCP tools first, then the profile's implicit tools the server does not already provide"""
    catalog = [tool.to_tool_definition() for tool in tools]
    provided = {definition.name for definition in catalog}
    for definition in profile.implicit_tool_definitions():
        if definition.name in provided:
            logger.debug(f"MCP server provides '{definition.name}', skipping implicit placeholder")
            continue
        catalog.append(definition)
    return catalog


def create_llm_client(settings: Settings, profile: AssistantProfile) -> OpenAIClient:
    config = LLMConfig(
        api_key=settings.require_api_key(),
        model=profile.model_id,
        base_url=settings.base_url,
        timeout=settings.test_timeout,
        max_retries=settings.llm_max_retries,
    )
    return OpenAIClient(config=config)


async def run_suite(
    suite_path: Union[str, Path],
    url: str,
    assistant: str = DEFAULT_ASSISTANT.value,
    headers: Optional[Dict[str, str]] = None,
    settings: Optional[Settings] = None,
    client_factory: ClientFactory = MCPClient,
    llm_client: Optional[LLMClientProtocol] = None,
    today: Optional[date] = None,
    write_results: bool = True,
) -> RunResult:
    """
    Run a test suite against an MCP server.

    Args:
        suite_path: Path of the YAML test suite
        url: MCP server URL
        assistant: Assistant profile name
        headers: Custom HTTP headers for the MCP server
        settings: Run settings (default: from environment)
        client_factory: Builds MCP clients (injectable for tests)
        llm_client: Model endpoint client; an OpenAIClient is created and
            closed here when omitted
        today: Date rendered into the system instructions (default: today)
        write_results: Write the JSON results artifact

    Returns:
        RunResult with the aggregated outcomes

    Raises:
        SuiteValidationError: Malformed test suite
        ConfigurationError: Unknown assistant, missing API key, or unknown tool references
        TransportConnectionError: No transport could reach the MCP server
    """
    settings = settings or Settings.from_env()

    suite = load_test_suite(suite_path)

    profile = resolve_assistant_profile(assistant, today=today, user_location=settings.user_location)

    owns_llm_client = llm_client is None
    if llm_client is None:
        llm_client = create_llm_client(settings, profile)

    try:
        mcp_client = await connect_with_fallback(
            url,
            headers=headers,
            client_factory=client_factory,
        )
        try:
            tools = await mcp_client.list_tools()
            check_tool_references(suite, tools)

            runner = TestCaseRunner(
                llm_client=llm_client,
                model_id=profile.model_id,
                system_instructions=profile.system_instructions,
                tools=build_tool_catalog(tools, profile),
                timeout=settings.test_timeout,
                max_concurrency=settings.max_concurrency,
            )
            logger.info(
                f"🚀 Running {len(suite.test_cases)} test case(s) with {profile.model_id}"
            )
            outcomes = await runner.run_all(suite.test_cases)
            server_name = mcp_client.server_name
        finally:
            await mcp_client.disconnect()
    finally:
        if owns_llm_client:
            await llm_client.close()

    aggregator = ResultAggregator(outcomes)
    result = RunResult(
        aggregator=aggregator,
        server_name=server_name,
        model_id=profile.model_id,
    )
    if write_results:
        result.results_path = aggregator.write_results(settings.results_path)
    return result

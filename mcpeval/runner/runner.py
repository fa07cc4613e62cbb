"""
Test Case Runner - Replay one test case against the model and classify it

For each test case the runner:
1. Builds the system message followed by the expanded conversation
2. Calls the model endpoint once with the full tool catalog
3. Classifies the single tool call (or its absence) against the expectation

Classification priority:
- No tool call, or a non-function call    -> failed / message
- Tool call to another tool               -> failed / tool
- Undecodable arguments on the right tool -> error
- Expected parameters not all matched     -> failed / parameters
- Otherwise                               -> passed

Parameter comparison is a subset check: every expected key must be present
in the actual arguments with a deep-equal value; extra actual keys are
ignored.
"""

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Sequence

from ..llm.base import LLMResponse
from ..models import ToolDefinition
from ..protocols import LLMClientProtocol
from ..suite.conversation import Message, expand_conversation
from ..suite.models import TestCase
from .outcome import (
    TOOL_CALL_SENTINEL,
    ErrorOutcome,
    FailedOutcome,
    FailureReason,
    PassedOutcome,
    TestOutcome,
    describe_outcome,
    error_message,
)

logger = logging.getLogger(__name__)


def values_equal(expected: Any, actual: Any) -> bool:
    """Deep equality on decoded JSON values (``True`` does not equal ``1``)"""
    if isinstance(expected, bool) or isinstance(actual, bool):
        return isinstance(expected, bool) and isinstance(actual, bool) and expected == actual
    if isinstance(expected, Mapping):
        return (
            isinstance(actual, Mapping)
            and expected.keys() == actual.keys()
            and all(values_equal(expected[k], actual[k]) for k in expected)
        )
    if isinstance(expected, (list, tuple)):
        return (
            isinstance(actual, (list, tuple))
            and len(expected) == len(actual)
            and all(values_equal(e, a) for e, a in zip(expected, actual))
        )
    return expected == actual


def expected_is_subset(expected: Mapping[str, Any], actual: Mapping[str, Any]) -> bool:
    """True when every expected key is in ``actual`` with a deep-equal value"""
    return all(
        key in actual and values_equal(value, actual[key])
        for key, value in expected.items()
    )


def classify_response(case: TestCase, response: LLMResponse) -> TestOutcome:
    """Classify a model response against the test case expectation"""
    expected = case.expected_tool_call
    tool_call = response.first_tool_call

    if tool_call is None or not tool_call.is_function:
        return FailedOutcome(
            name=case.name,
            reason=FailureReason.MESSAGE,
            expected=TOOL_CALL_SENTINEL,
            actual=response.content,
        )

    if tool_call.name != expected.tool_name:
        return FailedOutcome(
            name=case.name,
            reason=FailureReason.TOOL,
            expected=expected.tool_name,
            actual=tool_call.name,
        )

    try:
        arguments = tool_call.parsed_arguments()
    except ValueError as e:
        return ErrorOutcome(name=case.name, message=error_message(e))

    if not expected_is_subset(expected.parameters, arguments):
        return FailedOutcome(
            name=case.name,
            reason=FailureReason.PARAMETERS,
            expected=dict(expected.parameters),
            actual=dict(arguments),
        )

    return PassedOutcome(name=case.name)


class TestCaseRunner:
    """
    Runs test cases against one model with one tool catalog.

    The LLM client and tool catalog are shared read-only by every test case;
    the runner holds no state that changes while tests execute.

    Example:
        runner = TestCaseRunner(
            llm_client=OpenAIClient(api_key="sk-or-xxx"),
            model_id="anthropic/claude-3.7-sonnet",
            system_instructions="You are a helpful assistant",
            tools=catalog,
        )
        outcomes = await runner.run_all(test_cases)
    """

    __test__ = False

    def __init__(
        self,
        llm_client: LLMClientProtocol,
        model_id: str,
        system_instructions: str,
        tools: Sequence[ToolDefinition],
        timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None,
    ):
        """
        Args:
            llm_client: Client exposing ``chat_completion``
            model_id: Model identifier sent with every request
            system_instructions: System prompt prepended to every conversation
            tools: Full tool catalog (MCP tools and implicit tools)
            timeout: Per-test bound in seconds on the model call (None: no bound)
            max_concurrency: Max test cases in flight (None: unlimited)
        """
        self.llm_client = llm_client
        self.model_id = model_id
        self.system_instructions = system_instructions
        self.tools: List[ToolDefinition] = list(tools)
        self.timeout = timeout
        self.max_concurrency = max_concurrency

    def build_messages(self, case: TestCase) -> List[Message]:
        return [
            {"role": "system", "content": self.system_instructions},
            *expand_conversation(case.conversation),
        ]

    async def run(self, case: TestCase) -> TestOutcome:
        """
        Run one test case.

        Never raises for failures while building the request or calling the
        model: they become ErrorOutcome so sibling test cases keep running.
        """
        try:
            messages = self.build_messages(case)
            call = self.llm_client.chat_completion(
                messages,
                tools=self.tools,
                model=self.model_id,
            )
            if self.timeout is not None:
                response = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                response = await call
        except asyncio.TimeoutError:
            logger.debug(f"Model call for '{case.name}' timed out")
            outcome = ErrorOutcome(
                name=case.name,
                message=f"Model call timed out after {self.timeout:g}s",
            )
        except Exception as e:
            logger.debug(f"Model call for '{case.name}' failed", exc_info=True)
            outcome = ErrorOutcome(name=case.name, message=error_message(e))
        else:
            outcome = classify_response(case, response)

        self._log_outcome(outcome)
        return outcome

    async def run_all(self, cases: Sequence[TestCase]) -> List[TestOutcome]:
        """
        Run every test case concurrently.

        Returns:
            One outcome per test case, in input order
        """
        if self.max_concurrency:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded(case: TestCase) -> TestOutcome:
                async with semaphore:
                    return await self.run(case)

            return list(await asyncio.gather(*(bounded(case) for case in cases)))

        return list(await asyncio.gather(*(self.run(case) for case in cases)))

    def _log_outcome(self, outcome: TestOutcome) -> None:
        line = describe_outcome(outcome)
        if isinstance(outcome, PassedOutcome):
            logger.info(line)
        elif isinstance(outcome, FailedOutcome):
            logger.warning(line)
        else:
            logger.error(line)

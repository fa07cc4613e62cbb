"""Tests for mcpeval.runner.runner — classification, isolation, concurrency"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock

import pytest

from mcpeval.llm import LLMResponse, ToolCall
from mcpeval.models import ToolDefinition
from mcpeval.runner import (
    TOOL_CALL_SENTINEL,
    ErrorOutcome,
    FailedOutcome,
    FailureReason,
    PassedOutcome,
    TestCaseRunner,
    classify_response,
    expected_is_subset,
)
from mcpeval.runner.runner import values_equal
from mcpeval.suite import ExpectedToolCall, TestCase, ToolTurn, UserOrAssistantTurn


def make_case(name="case", tool_name="create_issue", parameters=None, conversation=None):
    return TestCase(
        name=name,
        expected_tool_call=ExpectedToolCall(tool_name=tool_name, parameters=parameters or {}),
        conversation=conversation or [UserOrAssistantTurn(role="user", content="do it")],
    )


def tool_response(name, arguments, content=""):
    return LLMResponse(content=content, tool_calls=[ToolCall(id="call_1", name=name, arguments=arguments)])


def text_response(content):
    return LLMResponse(content=content)


def make_runner(llm_client, **kwargs):
    return TestCaseRunner(
        llm_client=llm_client,
        model_id="anthropic/claude-3.7-sonnet",
        system_instructions="You are Claude.",
        tools=[ToolDefinition(name="create_issue"), ToolDefinition.placeholder("web_search")],
        **kwargs,
    )


# ── Parameter comparison ──


class TestExpectedIsSubset:

    def test_empty_expected_always_matches(self):
        assert expected_is_subset({}, {})
        assert expected_is_subset({}, {"anything": 1})

    def test_extra_actual_keys_ignored(self):
        assert expected_is_subset({"title": "Bug"}, {"title": "Bug", "labels": ["x"]})

    def test_missing_key(self):
        assert not expected_is_subset({"title": "Bug"}, {"body": "Bug"})

    def test_different_value(self):
        assert not expected_is_subset({"number": 42}, {"number": 43})

    def test_nested_values_deep_equal(self):
        expected = {"filter": {"labels": ["bug", "p1"], "state": "open"}}
        assert expected_is_subset(expected, {"filter": {"state": "open", "labels": ["bug", "p1"]}})

    def test_nested_values_compared_whole(self):
        expected = {"filter": {"state": "open"}}
        assert not expected_is_subset(expected, {"filter": {"state": "open", "labels": []}})

    def test_list_order_matters(self):
        assert not expected_is_subset({"labels": ["a", "b"]}, {"labels": ["b", "a"]})

    def test_int_float_equal(self):
        assert expected_is_subset({"n": 1}, {"n": 1.0})

    def test_bool_not_int(self):
        assert not values_equal(True, 1)
        assert not values_equal(0, False)
        assert values_equal(True, True)

    def test_none_values(self):
        assert expected_is_subset({"milestone": None}, {"milestone": None})
        assert not expected_is_subset({"milestone": None}, {})


# ── Classification priority ──


class TestClassifyResponse:

    def test_passed(self):
        case = make_case(parameters={"title": "Bug"})
        outcome = classify_response(case, tool_response("create_issue", {"title": "Bug", "body": "x"}))
        assert outcome == PassedOutcome(name="case")

    def test_no_tool_call_is_message_failure(self):
        case = make_case(parameters={"title": "Bug"})
        outcome = classify_response(case, text_response("Which repository?"))
        assert isinstance(outcome, FailedOutcome)
        assert outcome.reason == FailureReason.MESSAGE
        assert outcome.expected == TOOL_CALL_SENTINEL
        assert outcome.actual == "Which repository?"

    def test_text_naming_the_tool_is_still_message_failure(self):
        case = make_case(parameters={"title": "Bug"})
        outcome = classify_response(case, text_response("I would call create_issue with title Bug"))
        assert outcome.reason == FailureReason.MESSAGE
        assert outcome.expected == TOOL_CALL_SENTINEL

    def test_wrong_tool_with_malformed_arguments_is_tool_failure(self):
        case = make_case(parameters={"title": "Bug"})
        response = LLMResponse(
            content="",
            tool_calls=[ToolCall(id="c", name="close_issue", raw_arguments="{not json")],
        )
        outcome = classify_response(case, response)
        assert outcome.reason == FailureReason.TOOL
        assert outcome.actual == "close_issue"

    def test_malformed_arguments_on_expected_tool_is_error(self):
        case = make_case(name="bad args", parameters={"title": "Bug"})
        response = LLMResponse(
            content="",
            tool_calls=[ToolCall(id="c", name="create_issue", raw_arguments="{not json")],
        )
        outcome = classify_response(case, response)
        assert isinstance(outcome, ErrorOutcome)
        assert outcome.message.startswith("JSONDecodeError")

    def test_raw_arguments_decoded_for_comparison(self):
        case = make_case(parameters={"title": "Bug"})
        response = LLMResponse(
            content="",
            tool_calls=[ToolCall(id="c", name="create_issue", raw_arguments='{"title": "Bug", "body": "x"}')],
        )
        assert isinstance(classify_response(case, response), PassedOutcome)

    def test_non_function_call_is_message_failure(self):
        case = make_case()
        response = LLMResponse(
            content="",
            tool_calls=[ToolCall(id="c", name="create_issue", arguments={}, type="custom")],
        )
        assert classify_response(case, response).reason == FailureReason.MESSAGE

    def test_wrong_tool(self):
        case = make_case(parameters={"title": "Bug"})
        outcome = classify_response(case, tool_response("web_search", {"query": "Bug"}))
        assert outcome.reason == FailureReason.TOOL
        assert outcome.expected == "create_issue"
        assert outcome.actual == "web_search"

    def test_wrong_tool_wins_over_parameters(self):
        case = make_case(parameters={"title": "Bug"})
        outcome = classify_response(case, tool_response("close_issue", {}))
        assert outcome.reason == FailureReason.TOOL

    def test_wrong_parameters(self):
        case = make_case(parameters={"title": "Bug"})
        outcome = classify_response(case, tool_response("create_issue", {"title": "bug"}))
        assert outcome.reason == FailureReason.PARAMETERS
        assert outcome.expected == {"title": "Bug"}
        assert outcome.actual == {"title": "bug"}

    def test_only_first_tool_call_considered(self):
        case = make_case()
        response = LLMResponse(
            content="",
            tool_calls=[
                ToolCall(id="1", name="web_search", arguments={}),
                ToolCall(id="2", name="create_issue", arguments={}),
            ],
        )
        assert classify_response(case, response).reason == FailureReason.TOOL


# ── Running single cases ──


class TestRun:

    @pytest.mark.asyncio
    async def test_request_shape(self):
        llm = AsyncMock()
        llm.chat_completion.return_value = tool_response("create_issue", {})
        runner = make_runner(llm)
        case = make_case(conversation=[
            UserOrAssistantTurn(role="user", content="find it"),
            ToolTurn(role="tool", tool_name="search_issues", parameters={"q": "x"}, response="[]"),
            UserOrAssistantTurn(role="user", content="open one"),
        ])

        await runner.run(case)

        args, kwargs = llm.chat_completion.call_args
        messages = args[0]
        assert messages[0] == {"role": "system", "content": "You are Claude."}
        assert [m["role"] for m in messages[1:]] == ["user", "assistant", "tool", "user"]
        assert kwargs["model"] == "anthropic/claude-3.7-sonnet"
        assert [t.name for t in kwargs["tools"]] == ["create_issue", "web_search"]

    @pytest.mark.asyncio
    async def test_endpoint_error_becomes_error_outcome(self):
        llm = AsyncMock()
        llm.chat_completion.side_effect = RuntimeError("rate limited")
        outcome = await make_runner(llm).run(make_case(name="boom"))
        assert outcome == ErrorOutcome(name="boom", message="RuntimeError: rate limited")

    @pytest.mark.asyncio
    async def test_undecodable_arguments_become_error_outcome(self):
        llm = AsyncMock()
        llm.chat_completion.return_value = LLMResponse(
            content="",
            tool_calls=[ToolCall(id="c", name="create_issue", raw_arguments='"not an object"')],
        )
        outcome = await make_runner(llm).run(make_case())
        assert isinstance(outcome, ErrorOutcome)
        assert outcome.message.startswith("ValueError")

    @pytest.mark.asyncio
    async def test_unencodable_tool_turn_becomes_error_outcome(self):
        llm = AsyncMock()
        llm.chat_completion.return_value = tool_response("create_issue", {})
        broken = make_case(name="broken", conversation=[
            ToolTurn(role="tool", tool_name="list_commits", parameters={"since": date(2024, 5, 1)}, response="[]"),
            UserOrAssistantTurn(role="user", content="open an issue"),
        ])

        outcomes = await make_runner(llm).run_all([broken, make_case(name="fine")])

        assert isinstance(outcomes[0], ErrorOutcome)
        assert outcomes[0].message.startswith("TypeError")
        assert outcomes[1] == PassedOutcome(name="fine")
        assert llm.chat_completion.await_count == 1

    @pytest.mark.asyncio
    async def test_timeout_becomes_error_outcome(self):
        async def slow(*args, **kwargs):
            await asyncio.sleep(5)
            return text_response("late")

        llm = AsyncMock()
        llm.chat_completion.side_effect = slow
        outcome = await make_runner(llm, timeout=0.01).run(make_case(name="slow"))
        assert isinstance(outcome, ErrorOutcome)
        assert "timed out" in outcome.message

    @pytest.mark.asyncio
    async def test_outcome_logged(self, caplog):
        llm = AsyncMock()
        llm.chat_completion.return_value = tool_response("create_issue", {})
        with caplog.at_level("INFO", logger="mcpeval.runner.runner"):
            await make_runner(llm).run(make_case(name="logged"))
        assert "✓ PASS logged" in caplog.text


# ── Running all cases ──


class TestRunAll:

    @pytest.mark.asyncio
    async def test_one_outcome_per_case_in_order(self):
        responses = {
            "pass": tool_response("create_issue", {"title": "Bug"}),
            "message": text_response("What title?"),
            "tool": tool_response("web_search", {}),
        }

        async def respond(messages, **kwargs):
            return responses[messages[-1]["content"]]

        llm = AsyncMock()
        llm.chat_completion.side_effect = respond
        cases = [
            make_case(name=key, parameters={"title": "Bug"},
                      conversation=[UserOrAssistantTurn(role="user", content=key)])
            for key in ["pass", "message", "tool"]
        ]

        outcomes = await make_runner(llm).run_all(cases)

        assert [o.name for o in outcomes] == ["pass", "message", "tool"]
        assert isinstance(outcomes[0], PassedOutcome)
        assert outcomes[1].reason == FailureReason.MESSAGE
        assert outcomes[2].reason == FailureReason.TOOL

    @pytest.mark.asyncio
    async def test_error_isolated_from_siblings(self):
        async def respond(messages, **kwargs):
            if messages[-1]["content"] == "explode":
                raise ConnectionError("socket closed")
            return tool_response("create_issue", {})

        llm = AsyncMock()
        llm.chat_completion.side_effect = respond
        cases = [
            make_case(name=text, conversation=[UserOrAssistantTurn(role="user", content=text)])
            for text in ["ok-1", "explode", "ok-2"]
        ]

        outcomes = await make_runner(llm).run_all(cases)

        assert isinstance(outcomes[0], PassedOutcome)
        assert isinstance(outcomes[1], ErrorOutcome)
        assert isinstance(outcomes[2], PassedOutcome)

    @pytest.mark.asyncio
    async def test_runs_concurrently(self):
        in_flight = 0
        peak = 0

        async def respond(messages, **kwargs):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return tool_response("create_issue", {})

        llm = AsyncMock()
        llm.chat_completion.side_effect = respond
        cases = [make_case(name=str(i)) for i in range(5)]

        await make_runner(llm).run_all(cases)
        assert peak == 5

    @pytest.mark.asyncio
    async def test_concurrency_cap(self):
        in_flight = 0
        peak = 0

        async def respond(messages, **kwargs):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return tool_response("create_issue", {})

        llm = AsyncMock()
        llm.chat_completion.side_effect = respond
        cases = [make_case(name=str(i)) for i in range(6)]

        outcomes = await make_runner(llm, max_concurrency=2).run_all(cases)
        assert len(outcomes) == 6
        assert peak == 2

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await make_runner(AsyncMock()).run_all([]) == []

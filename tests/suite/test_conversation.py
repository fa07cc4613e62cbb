"""Tests for mcpeval.suite.conversation — turn expansion into chat messages"""

import itertools
import json

import pytest

from mcpeval.suite import ToolTurn, UserOrAssistantTurn, expand_conversation, expand_turn
from mcpeval.suite.conversation import new_tool_call_id


def _ids():
    counter = itertools.count(1)
    return lambda: f"call_{next(counter)}"


def user(content):
    return UserOrAssistantTurn(role="user", content=content)


def assistant(content):
    return UserOrAssistantTurn(role="assistant", content=content)


def tool(name, parameters, response):
    return ToolTurn(role="tool", tool_name=name, parameters=parameters, response=response)


# ── Single turns ──


class TestExpandTurn:

    def test_user_turn(self):
        assert expand_turn(user("hi")) == [{"role": "user", "content": "hi"}]

    def test_assistant_turn(self):
        assert expand_turn(assistant("ok")) == [{"role": "assistant", "content": "ok"}]

    def test_tool_turn_expands_to_call_and_result(self):
        messages = expand_turn(tool("search", {"q": "login"}, "[]"), id_factory=lambda: "call_x")
        assert messages == [
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_x",
                        "type": "function",
                        "function": {"name": "search", "arguments": json.dumps({"q": "login"})},
                    }
                ],
            },
            {"role": "tool", "tool_call_id": "call_x", "content": "[]"},
        ]

    def test_tool_call_id_links_call_and_result(self):
        call, result = expand_turn(tool("search", {}, "[]"))
        assert call["tool_calls"][0]["id"] == result["tool_call_id"]

    def test_arguments_are_json_text(self):
        call, _ = expand_turn(tool("search", {"n": 1, "tags": ["a"]}, "ok"))
        arguments = call["tool_calls"][0]["function"]["arguments"]
        assert isinstance(arguments, str)
        assert json.loads(arguments) == {"n": 1, "tags": ["a"]}

    def test_unsupported_turn(self):
        with pytest.raises(TypeError):
            expand_turn({"role": "user", "content": "hi"})


# ── Whole conversations ──


class TestExpandConversation:

    def test_message_count(self):
        turns = [user("a"), tool("t1", {}, "r1"), assistant("b"), tool("t2", {}, "r2"), user("c")]
        messages = expand_conversation(turns)
        assert len(messages) == 3 + 2 * 2

    def test_order_preserved(self):
        turns = [user("find it"), tool("search", {}, "found"), user("close it")]
        messages = expand_conversation(turns, id_factory=_ids())
        assert [m["role"] for m in messages] == ["user", "assistant", "tool", "user"]
        assert messages[2]["content"] == "found"
        assert messages[3]["content"] == "close it"

    def test_ids_distinct_per_tool_turn(self):
        turns = [tool("a", {}, "1"), tool("b", {}, "2")]
        messages = expand_conversation(turns, id_factory=_ids())
        assert messages[1]["tool_call_id"] == "call_1"
        assert messages[3]["tool_call_id"] == "call_2"

    def test_default_ids_unique(self):
        assert new_tool_call_id() != new_tool_call_id()
        assert new_tool_call_id().startswith("call_")

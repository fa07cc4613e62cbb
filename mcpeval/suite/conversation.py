"""
Conversation Expander - Turn suite conversation turns into chat messages

Produces OpenAI message format:
- User / assistant: {"role": "user", "content": "..."}
- Tool call:        {"role": "assistant", "content": None, "tool_calls": [{"id": "...", "type": "function", "function": {"name": "...", "arguments": "..."}}]}
- Tool result:      {"role": "tool", "tool_call_id": "...", "content": "..."}

A tool turn expands to exactly two messages, the call and its result, tied
together by a freshly generated call id.
"""

import json
import uuid
from typing import Any, Callable, Dict, Iterable, List, Optional

from .models import ConversationTurn, ToolTurn, UserOrAssistantTurn

Message = Dict[str, Any]


def new_tool_call_id() -> str:
    return f"call_{uuid.uuid4().hex}"


def expand_turn(
    turn: ConversationTurn,
    id_factory: Optional[Callable[[], str]] = None,
) -> List[Message]:
    """
    Expand one turn into model-ready messages.

    Args:
        turn: The conversation turn
        id_factory: Generates the tool call id (default: random)

    Returns:
        One message for user/assistant turns, two for tool turns
    """
    if isinstance(turn, UserOrAssistantTurn):
        return [{"role": turn.role, "content": turn.content}]

    if isinstance(turn, ToolTurn):
        call_id = (id_factory or new_tool_call_id)()
        return [
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": call_id,
                        "type": "function",
                        "function": {
                            "name": turn.tool_name,
                            "arguments": json.dumps(turn.parameters),
                        },
                    }
                ],
            },
            {"role": "tool", "tool_call_id": call_id, "content": turn.response},
        ]

    raise TypeError(f"Unsupported conversation turn: {type(turn).__name__}")


def expand_conversation(
    turns: Iterable[ConversationTurn],
    id_factory: Optional[Callable[[], str]] = None,
) -> List[Message]:
    """Expand every turn in order into a flat message list"""
    messages: List[Message] = []
    for turn in turns:
        messages.extend(expand_turn(turn, id_factory))
    return messages

"""
mcp-eval Suite - Test-suite documents and conversation expansion
"""

from .models import (
    ConversationTurn,
    ExpectedToolCall,
    TestCase,
    ToolTurn,
    UserOrAssistantTurn,
)
from .loader import ParsedSuite, load_test_suite, parse_test_suite
from .conversation import expand_conversation, expand_turn

__all__ = [
    "ConversationTurn",
    "ExpectedToolCall",
    "TestCase",
    "ToolTurn",
    "UserOrAssistantTurn",
    "ParsedSuite",
    "load_test_suite",
    "parse_test_suite",
    "expand_conversation",
    "expand_turn",
]

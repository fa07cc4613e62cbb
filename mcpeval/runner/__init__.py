"""
mcp-eval Runner - Test case execution and outcome classification
"""

from .outcome import (
    TOOL_CALL_SENTINEL,
    ErrorOutcome,
    FailedOutcome,
    FailureReason,
    OutcomeStatus,
    PassedOutcome,
    TestOutcome,
)
from .runner import TestCaseRunner, classify_response, expected_is_subset

__all__ = [
    "TOOL_CALL_SENTINEL",
    "ErrorOutcome",
    "FailedOutcome",
    "FailureReason",
    "OutcomeStatus",
    "PassedOutcome",
    "TestOutcome",
    "TestCaseRunner",
    "classify_response",
    "expected_is_subset",
]

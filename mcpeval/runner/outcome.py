"""
mcp-eval Outcomes - Terminal classification of one test case

Closed set of variants:
- PassedOutcome: the expected tool was called with matching parameters
- FailedOutcome: an assertion mismatch (message / tool / parameters)
- ErrorOutcome: the model call itself failed
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

# Expected value recorded when no tool call was made at all
TOOL_CALL_SENTINEL = "tool_call"


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


class FailureReason(str, Enum):
    """Why a test case failed"""
    MESSAGE = "message"        # Model answered with text, no tool call
    TOOL = "tool"              # Model called a different tool
    PARAMETERS = "parameters"  # Right tool, mismatching parameters


@dataclass(frozen=True)
class PassedOutcome:
    name: str
    status: OutcomeStatus = field(default=OutcomeStatus.PASSED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status.value}


@dataclass(frozen=True)
class FailedOutcome:
    """
    An assertion mismatch.

    Attributes:
        name: Test case name
        reason: Which check failed
        expected: Expected value (sentinel, tool name, or parameters mapping)
        actual: Actual value (text content, tool name, or parameters mapping)
    """
    name: str
    reason: FailureReason
    expected: Any
    actual: Any
    status: OutcomeStatus = field(default=OutcomeStatus.FAILED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "reason": self.reason.value,
            "expected": self.expected,
            "actual": self.actual,
        }


@dataclass(frozen=True)
class ErrorOutcome:
    name: str
    message: str
    status: OutcomeStatus = field(default=OutcomeStatus.ERROR, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status.value, "message": self.message}


TestOutcome = Union[PassedOutcome, FailedOutcome, ErrorOutcome]


def describe_outcome(outcome: TestOutcome) -> str:
    """One-line pass/fail marker for console output"""
    if isinstance(outcome, PassedOutcome):
        return f"✓ PASS {outcome.name}"
    if isinstance(outcome, FailedOutcome):
        return (
            f"✗ FAIL {outcome.name} [{outcome.reason.value}] "
            f"expected {outcome.expected!r}, got {_preview(outcome.actual)!r}"
        )
    if isinstance(outcome, ErrorOutcome):
        return f"⚠ ERROR {outcome.name}: {outcome.message}"
    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")


def _preview(value: Any, limit: int = 200) -> Any:
    if isinstance(value, str) and len(value) > limit:
        return value[:limit] + "..."
    return value


def error_message(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__

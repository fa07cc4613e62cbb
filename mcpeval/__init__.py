"""
mcp-eval - Tool-call evaluation for MCP servers

Replays scripted conversations against a model that is given an MCP server's
tools, and checks whether the model calls the expected tool with the
expected parameters.

Usage:
    mcp-eval run tests.yml --url https://example.com/mcp

    # or from Python
    from mcpeval import run_suite
    result = await run_suite("tests.yml", url="https://example.com/mcp")
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError,
    MCPEvalError,
    SuiteValidationError,
    TransportConnectionError,
    UnknownToolReferenceError,
)
from .config import Settings
from .models import ToolDefinition
from .suite import TestCase, load_test_suite, parse_test_suite
from .runner import (
    ErrorOutcome,
    FailedOutcome,
    FailureReason,
    PassedOutcome,
    TestCaseRunner,
    TestOutcome,
)
from .report import ResultAggregator, SuiteSummary
from .app import RunResult, run_suite

__all__ = [
    "__version__",
    "ConfigurationError",
    "MCPEvalError",
    "SuiteValidationError",
    "TransportConnectionError",
    "UnknownToolReferenceError",
    "Settings",
    "ToolDefinition",
    "TestCase",
    "load_test_suite",
    "parse_test_suite",
    "ErrorOutcome",
    "FailedOutcome",
    "FailureReason",
    "PassedOutcome",
    "TestCaseRunner",
    "TestOutcome",
    "ResultAggregator",
    "SuiteSummary",
    "RunResult",
    "run_suite",
]

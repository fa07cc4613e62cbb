"""
mcp-eval Errors - Fatal error taxonomy

Fatal errors abort a run before (or instead of) test execution and surface
at the CLI boundary with a non-zero exit. Per-test problems are never raised
through here: they are recorded as outcomes by the runner.
"""

from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .mcp.connector import TransportAttempt


class MCPEvalError(Exception):
    """Base class for errors that abort an evaluation run"""
    pass


class SuiteValidationError(MCPEvalError):
    """
    Raised when the test-suite document is malformed.

    Attributes:
        violations: Every violation found, one human-readable line each
    """

    def __init__(self, violations: Sequence[str], message: str = ""):
        self.violations: List[str] = list(violations)
        if not message:
            lines = "\n".join(f"  - {v}" for v in self.violations)
            message = f"Test suite file contains {len(self.violations)} validation error(s):\n{lines}"
        super().__init__(message)


class ConfigurationError(MCPEvalError):
    """Raised for invalid run configuration (profile, headers, tool references, API key)"""
    pass


class UnknownToolReferenceError(ConfigurationError):
    """Raised when a conversation references tools the MCP server does not expose"""

    def __init__(self, unknown_tools: Sequence[str], available_tools: Sequence[str]):
        self.unknown_tools = list(unknown_tools)
        self.available_tools = list(available_tools)
        super().__init__(
            f"Test cases reference tool(s) not exposed by the MCP server: "
            f"{', '.join(self.unknown_tools)}. "
            f"Available: {', '.join(self.available_tools) or '(none)'}"
        )


class TransportConnectionError(MCPEvalError, ConnectionError):
    """
    Raised when every MCP transport failed.

    Attributes:
        attempts: One record per transport tried, in order
    """

    def __init__(self, attempts: Sequence["TransportAttempt"], message: str = ""):
        self.attempts = list(attempts)
        if not message:
            summaries = [f"  {a.transport.value}: {a.error}" for a in self.attempts]
            message = "Could not connect to the MCP server. Attempts:\n" + "\n".join(summaries)
        super().__init__(message)

"""
mcp-eval Suite Models - Typed shape of a test-suite document

A suite document looks like:

    test_cases:
      - name: Create a bug report
        input_conversation:
          - role: user
            content: Open an issue about the login bug
        expected_tool_call:
          tool_name: create_issue
          parameters:
            title: Login bug

      - name: Follow-up after a search
        input_conversation:
          - role: user
            content: Find the login bug
          - role: tool
            tool_name: search_issues
            parameters: {query: login}
            response: '[{"number": 42, "title": "Login bug"}]'
          - role: user
            content: Close it
        expected_tool_call:
          tool_name: close_issue
          parameters: {number: 42}

``input_prompt: "..."`` is accepted instead of ``input_conversation`` but is
deprecated; the loader upgrades it to a single user turn.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class UserOrAssistantTurn(BaseModel):
    """A plain message authored by the user or the assistant"""
    role: Literal["user", "assistant"]
    content: str

    model_config = ConfigDict(extra="ignore", frozen=True)


class ToolTurn(BaseModel):
    """A tool invocation together with the response the tool produced"""
    role: Literal["tool"]
    tool_name: str = Field(min_length=1)
    parameters: Dict[str, Any] = Field(default_factory=dict)
    response: str

    model_config = ConfigDict(extra="ignore", frozen=True)


ConversationTurn = Annotated[
    Union[UserOrAssistantTurn, ToolTurn],
    Field(discriminator="role"),
]


class ExpectedToolCall(BaseModel):
    """The tool call a test case expects the model to make"""
    tool_name: str = Field(min_length=1)
    parameters: Dict[str, Any]

    model_config = ConfigDict(extra="ignore", frozen=True)


class TestCaseInput(BaseModel):
    """A test case as written in the suite document (either input form)"""
    __test__ = False

    name: str
    expected_tool_call: ExpectedToolCall
    input_prompt: Optional[str] = None
    # validate_default so the input rule below runs even when the field is absent
    input_conversation: Optional[List[ConversationTurn]] = Field(
        default=None, min_length=1, validate_default=True
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("input_conversation")
    @classmethod
    def _exactly_one_input(
        cls,
        conversation: Optional[List[ConversationTurn]],
        info: ValidationInfo,
    ) -> Optional[List[ConversationTurn]]:
        # Runs even when other fields of the case failed validation
        has_prompt = info.data.get("input_prompt") is not None
        if has_prompt == (conversation is not None):
            raise ValueError(
                "exactly one of 'input_prompt' (deprecated) or 'input_conversation' is required"
            )
        return conversation

    @property
    def uses_deprecated_prompt(self) -> bool:
        return self.input_prompt is not None

    def to_test_case(self) -> "TestCase":
        """Return the canonical form, upgrading ``input_prompt`` to one user turn"""
        if self.input_prompt is not None:
            conversation = [UserOrAssistantTurn(role="user", content=self.input_prompt)]
        else:
            conversation = list(self.input_conversation or [])
        return TestCase(
            name=self.name,
            expected_tool_call=self.expected_tool_call,
            conversation=conversation,
        )


class TestSuiteDocument(BaseModel):
    """Top-level suite document"""
    __test__ = False

    test_cases: List[TestCaseInput] = Field(min_length=1)

    model_config = ConfigDict(extra="ignore")


class TestCase(BaseModel):
    """
    A normalized test case.

    Attributes:
        name: Display and correlation key (not necessarily unique)
        expected_tool_call: Tool name and parameters the model should produce
        conversation: Non-empty ordered turns replayed to the model
    """
    name: str
    expected_tool_call: ExpectedToolCall
    conversation: List[ConversationTurn] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    __test__ = False

    def referenced_tool_names(self) -> List[str]:
        return [turn.tool_name for turn in self.conversation if isinstance(turn, ToolTurn)]


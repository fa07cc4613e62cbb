"""
mcp-eval Models - Tool definitions shared by the MCP and LLM layers
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ToolDefinition:
    """
    A tool offered to the model.

    Attributes:
        name: Tool name as exposed by the MCP server
        description: What the tool does (shown to the model)
        parameters_schema: JSON Schema object for the tool's arguments

    Example:
        tool = ToolDefinition(
            name="create_issue",
            description="Create a new issue",
            parameters_schema={
                "type": "object",
                "properties": {"title": {"type": "string"}},
                "required": ["title"],
            },
        )
    """
    name: str
    description: str = ""
    parameters_schema: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def placeholder(cls, name: str) -> "ToolDefinition":
        """A tool known to the assistant but with no schema behind it"""
        return cls(name=name, description="", parameters_schema={"type": "object", "properties": {}})

    def to_openai_schema(self) -> Dict[str, Any]:
        """Convert to OpenAI function calling format"""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": self.parameters_schema.get("properties") or {},
                    "required": self.parameters_schema.get("required") or [],
                },
            },
        }

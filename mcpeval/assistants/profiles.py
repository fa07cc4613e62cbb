"""
Assistant Profiles - Model, system instructions and implicit tools per assistant

Each assistant profile reproduces how a given consumer assistant talks to
an MCP server: which model answers, which system prompt it runs with, and
which built-in tools it believes it has besides the server's own. Built-in
tools are offered as empty placeholders so that the model can pick them
(and so fail a test) exactly as it would in the real assistant.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..errors import ConfigurationError
from ..models import ToolDefinition

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent / "prompts"


class AssistantName(str, Enum):
    """Assistants that can be emulated"""
    ANTHROPIC_CLAUDE = "anthropic/claude"


DEFAULT_ASSISTANT = AssistantName.ANTHROPIC_CLAUDE


@dataclass(frozen=True)
class ProfileSpec:
    """Static description of an assistant profile"""
    model_id: str
    template_name: str
    implicit_tools: Tuple[str, ...] = ()


ASSISTANT_PROFILES: Dict[AssistantName, ProfileSpec] = {
    AssistantName.ANTHROPIC_CLAUDE: ProfileSpec(
        model_id="anthropic/claude-3.7-sonnet",
        template_name="claude-3.7.md",
        implicit_tools=("web_search", "repl", "artifacts"),
    ),
}


@dataclass(frozen=True)
class AssistantProfile:
    """
    A resolved assistant profile.

    Attributes:
        name: Profile name
        model_id: Model identifier sent to the model endpoint
        system_instructions: Rendered system prompt
        implicit_tools: Names of tools the assistant has built in
    """
    name: AssistantName
    model_id: str
    system_instructions: str
    implicit_tools: Tuple[str, ...] = field(default_factory=tuple)

    def implicit_tool_definitions(self) -> List[ToolDefinition]:
        return [ToolDefinition.placeholder(name) for name in self.implicit_tools]


def _template_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(PROMPTS_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def format_prompt_date(day: date) -> str:
    """e.g. ``Sunday, October 18, 2026``"""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def render_system_instructions(
    template_name: str,
    today: Optional[date] = None,
    user_location: str = "",
) -> str:
    """
    Render a system-instructions template.

    Args:
        template_name: File name under the prompts directory
        today: Date rendered as ``current_date`` (default: today)
        user_location: Rendered as ``user_location``

    Returns:
        The rendered instructions text
    """
    template = _template_environment().get_template(template_name)
    return template.render(
        current_date=format_prompt_date(today or date.today()),
        user_location=user_location,
    )


def resolve_assistant_profile(
    name: Union[str, AssistantName],
    today: Optional[date] = None,
    user_location: str = "",
) -> AssistantProfile:
    """
    Resolve a profile name into model id, instructions and implicit tools.

    Raises:
        ConfigurationError: If the name is not a known assistant
    """
    try:
        assistant = AssistantName(name)
    except ValueError as e:
        known = ", ".join(a.value for a in AssistantName)
        raise ConfigurationError(f"Unknown assistant '{name}'. Known assistants: {known}") from e

    profile_spec = ASSISTANT_PROFILES[assistant]
    instructions = render_system_instructions(profile_spec.template_name, today, user_location)
    logger.debug(f"Resolved assistant {assistant.value} -> {profile_spec.model_id}")

    return AssistantProfile(
        name=assistant,
        model_id=profile_spec.model_id,
        system_instructions=instructions,
        implicit_tools=profile_spec.implicit_tools,
    )

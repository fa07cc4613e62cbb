"""
mcp-eval Assistants - Emulated assistant profiles
"""

from .profiles import (
    ASSISTANT_PROFILES,
    DEFAULT_ASSISTANT,
    AssistantName,
    AssistantProfile,
    ProfileSpec,
    render_system_instructions,
    resolve_assistant_profile,
)

__all__ = [
    "ASSISTANT_PROFILES",
    "DEFAULT_ASSISTANT",
    "AssistantName",
    "AssistantProfile",
    "ProfileSpec",
    "render_system_instructions",
    "resolve_assistant_profile",
]

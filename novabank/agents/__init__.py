"""AI Agents package."""

from novabank.agents.advice import (
    EMPTY_REPLY_FALLBACK,
    AdviceClient,
    AdviceConfigurationError,
    AdviceError,
    AdviceServiceError,
    build_system_instruction,
)
from novabank.agents.conversation import (
    CONNECTION_TROUBLE_MESSAGE,
    SUGGESTED_PROMPTS,
    AdvisorConversation,
    default_greeting,
)

__all__ = [
    "EMPTY_REPLY_FALLBACK",
    "AdviceClient",
    "AdviceConfigurationError",
    "AdviceError",
    "AdviceServiceError",
    "build_system_instruction",
    "CONNECTION_TROUBLE_MESSAGE",
    "SUGGESTED_PROMPTS",
    "AdvisorConversation",
    "default_greeting",
]

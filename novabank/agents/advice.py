"""
Financial Advice Agent

DESIGN DECISION: The advisor is a thin, stateless wrapper around Gemini.
Each call is built from its arguments alone:
1. A system instruction carrying the balance and the latest transactions
2. The prior conversation, turn by turn
3. The new user message

The model sees a short text summary of the account, never structured
access to it.

FAILURE MODES:
- No API key: AdviceConfigurationError, raised before any model is built
- Anything the SDK raises: AdviceServiceError, chained to the original
- Empty reply: EMPTY_REPLY_FALLBACK is returned instead
"""

from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

import google.generativeai as genai

from novabank.audit import AuditLogger
from novabank.config import GeminiSettings, get_settings
from novabank.models.account import Transaction
from novabank.models.audit import AuditEventBuilder
from novabank.models.chat import AdviceContext, AdviceTurn, ChatRole


EMPTY_REPLY_FALLBACK = "I'm sorry, I couldn't process that request right now."

MAX_SUMMARY_TRANSACTIONS = 5

ModelFactory = Callable[[str], Any]


class AdviceError(Exception):
    """Base exception for advisor errors."""
    pass


class AdviceConfigurationError(AdviceError):
    """The advisor is not configured (no API key)."""
    pass


class AdviceServiceError(AdviceError):
    """The remote model call failed."""
    pass


def summarize_transactions(
    transactions: Sequence[Transaction],
    limit: int = MAX_SUMMARY_TRANSACTIONS,
) -> str:
    """'description: amount (category)' for the newest few, comma separated."""
    return ", ".join(
        f"{t.description}: {t.amount} ({t.category})"
        for t in transactions[:limit]
    )


def build_system_instruction(context: AdviceContext) -> str:
    """Persona plus the customer's actual numbers."""
    balance = Decimal(context.balance)
    tx_summary = summarize_transactions(context.recent_transactions)

    return f"""You are Nova, an expert financial advisor for NovaBank customers.
Current User Info:
- Balance: ${balance:.2f}
- Recent Transactions: {tx_summary}

Goal: Provide helpful, professional, and concise financial advice.
Help with budgeting, saving, and explaining trends based on their ACTUAL data above.
Be encouraging but maintain a professional banking tone.
Do NOT ask for account numbers, passwords, or PINs."""


def build_contents(
    user_message: str,
    history: Sequence[AdviceTurn],
) -> list[dict]:
    """Prior turns followed by the new user message, in Gemini's format."""
    contents = [
        {"role": turn.role.value, "parts": [turn.text]}
        for turn in history
    ]
    contents.append({"role": ChatRole.USER.value, "parts": [user_message]})
    return contents


def _reply_text(response: Any) -> Optional[str]:
    """
    Text of a Gemini response, or None.

    `response.text` raises ValueError when the response carries no
    text parts (e.g. blocked or empty candidates).
    """
    if response is None:
        return None
    try:
        return response.text
    except ValueError:
        return None


class AdviceClient:
    """
    Produces one advisor reply per call.

    Holds configuration only. Conversation memory belongs to the caller
    (see AdvisorConversation).
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model_factory: Optional[ModelFactory] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Gemini settings; loaded from the environment if None
            model_factory: Builds a model for a given system instruction.
                          Defaults to a google.generativeai GenerativeModel.
            audit_logger: Where advisor events go
        """
        self._settings = settings or get_settings().gemini
        self._model_factory = model_factory or self._create_gemini_model
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def settings(self) -> GeminiSettings:
        return self._settings

    def _create_gemini_model(self, system_instruction: str):
        """Configure Google Generative AI and build the model."""
        genai.configure(api_key=self._settings.api_key)
        return genai.GenerativeModel(
            model_name=self._settings.model_name,
            system_instruction=system_instruction,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            },
        )

    async def get_advice(
        self,
        user_message: str,
        history: Sequence[AdviceTurn],
        context: AdviceContext,
    ) -> str:
        """
        Ask the model for advice.

        Returns:
            The model's reply verbatim, or EMPTY_REPLY_FALLBACK if it
            came back empty

        Raises:
            AdviceConfigurationError: No API key is configured
            AdviceServiceError: The model call failed
        """
        if not self._settings.has_api_key:
            self._audit_logger.log(AuditEventBuilder.advice_failed(
                error_type="configuration",
                error_message="API key is missing",
            ))
            raise AdviceConfigurationError("API Key is missing.")

        system_instruction = build_system_instruction(context)
        contents = build_contents(user_message, history)

        self._audit_logger.log(AuditEventBuilder.advice_requested(
            model_name=self._settings.model_name,
            history_length=len(history),
        ))

        try:
            model = self._model_factory(system_instruction)
            response = await model.generate_content_async(contents)
        except Exception as e:
            self._audit_logger.log(AuditEventBuilder.advice_failed(
                error_type=type(e).__name__,
                error_message=str(e),
            ))
            raise AdviceServiceError(f"Gemini API error: {e}") from e

        text = _reply_text(response)
        used_fallback = not text
        self._audit_logger.log(AuditEventBuilder.advice_received(
            reply_length=len(text or ""),
            used_fallback=used_fallback,
        ))

        if used_fallback:
            return EMPTY_REPLY_FALLBACK
        return text

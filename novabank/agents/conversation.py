"""
Advisor Conversation

Caller-side chat state for the "Ask Nova" page. The AdviceClient is
stateless; this object remembers the messages and passes them back in
as history on every call.

A failed call never loses the user's message: it stays in the list and
is followed by exactly one fallback reply.
"""

from typing import Optional

from novabank.agents.advice import AdviceClient, AdviceError
from novabank.models.chat import AdviceContext, ChatMessage, ChatRole


CONNECTION_TROUBLE_MESSAGE = (
    "I'm having trouble connecting to my brain right now. "
    "Please ensure your environment is set up correctly."
)

SUGGESTED_PROMPTS = (
    "How to save $500/month?",
    "Explain compound interest",
    "Review my spending",
    "Investing for beginners",
)


def default_greeting(customer_name: str = "Alex") -> str:
    return (
        f"Hello {customer_name}! I'm Nova, your personalized AI financial advisor. "
        "How can I help you optimize your finances today? I can help with "
        "budgeting, saving goals, or explaining market trends."
    )


class AdvisorConversation:
    """
    Message list plus a busy flag.

    Usage:
        conversation = AdvisorConversation(AdviceClient())
        reply = await conversation.send("Review my spending", context)
    """

    def __init__(
        self,
        client: AdviceClient,
        greeting: Optional[str] = None,
    ):
        self._client = client
        self._greeting = ChatMessage(
            role=ChatRole.MODEL,
            text=greeting or default_greeting(),
        )
        self._messages: list[ChatMessage] = [self._greeting]
        self._is_busy = False

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def is_busy(self) -> bool:
        """True while waiting for a reply."""
        return self._is_busy

    def clear(self) -> None:
        """Drop everything except the greeting."""
        self._messages = [self._greeting]

    async def send(
        self,
        text: str,
        context: AdviceContext,
    ) -> Optional[ChatMessage]:
        """
        Send a user message and append the advisor's reply.

        Blank input, or input arriving while a reply is pending, is
        ignored and returns None. Otherwise returns the appended model
        message.
        """
        if not text.strip() or self._is_busy:
            return None

        history = [m.to_turn() for m in self._messages]
        self._messages.append(ChatMessage(role=ChatRole.USER, text=text))
        self._is_busy = True

        try:
            reply_text = await self._client.get_advice(text, history, context)
        except AdviceError:
            reply_text = CONNECTION_TROUBLE_MESSAGE
        finally:
            self._is_busy = False

        reply = ChatMessage(role=ChatRole.MODEL, text=reply_text)
        self._messages.append(reply)
        return reply

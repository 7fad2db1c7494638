"""
Tests for the advice client and the advisor conversation

The Gemini model is replaced by the fake factory from conftest; no
network calls are made.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from novabank.agents import (
    CONNECTION_TROUBLE_MESSAGE,
    EMPTY_REPLY_FALLBACK,
    AdviceClient,
    AdviceConfigurationError,
    AdviceServiceError,
    AdvisorConversation,
    build_system_instruction,
)
from novabank.agents.advice import build_contents, summarize_transactions
from novabank.audit import AuditLogger
from novabank.config import GeminiSettings
from novabank.models.audit import AuditEventType
from novabank.models.chat import AdviceContext, AdviceTurn, ChatRole
from novabank.store import seed_transactions


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def context():
    return AdviceContext(
        balance=Decimal("12450"),
        recent_transactions=tuple(seed_transactions(NOW)),
    )


@pytest.fixture
def settings():
    return GeminiSettings(api_key="test-key", model_name="gemini-test", temperature=0.7)


class TestPromptBuilding:
    """Tests for the system instruction and request contents."""

    def test_balance_has_two_decimals(self, context):
        """Test the balance formatting."""
        instruction = build_system_instruction(context)
        assert "- Balance: $12450.00" in instruction

    def test_summary_lists_description_amount_category(self, context):
        """Test the transaction summary line."""
        summary = summarize_transactions(context.recent_transactions)
        assert summary.startswith("Starbucks Coffee: -12.50 (Food & Drink), Shell Gas Station")
        assert "Monthly Salary Deposit: 4500.00 (Income)" in summary

    def test_summary_is_capped_at_five(self, context):
        """Test that only the newest five transactions are summarized."""
        many = AdviceContext(
            balance=Decimal("1"),
            recent_transactions=context.recent_transactions + context.recent_transactions,
        )
        summary = summarize_transactions(many.recent_transactions)
        assert summary.count("(") == 5

    def test_summary_empty_history(self):
        """Test that an empty history gives an empty summary."""
        instruction = build_system_instruction(AdviceContext(balance=Decimal("3.5")))
        assert "- Balance: $3.50" in instruction
        assert "- Recent Transactions: \n" in instruction

    def test_persona_guardrails(self, context):
        """Test that the instruction forbids asking for credentials."""
        instruction = build_system_instruction(context)
        assert "You are Nova" in instruction
        assert "Do NOT ask for account numbers, passwords, or PINs." in instruction

    def test_contents_order(self):
        """Test that history comes first and the new message last."""
        history = [
            AdviceTurn(role=ChatRole.MODEL, text="Hello!"),
            AdviceTurn(role=ChatRole.USER, text="Hi"),
            AdviceTurn(role=ChatRole.MODEL, text="How can I help?"),
        ]
        contents = build_contents("Review my spending", history)

        assert contents == [
            {"role": "model", "parts": ["Hello!"]},
            {"role": "user", "parts": ["Hi"]},
            {"role": "model", "parts": ["How can I help?"]},
            {"role": "user", "parts": ["Review my spending"]},
        ]


class TestAdviceClient:
    """Tests for AdviceClient.get_advice."""

    def test_returns_reply_verbatim(self, settings, context, make_model_factory):
        """Test the happy path."""
        factory = make_model_factory(text="Spend less on coffee.\nSave more.")
        client = AdviceClient(settings=settings, model_factory=factory)

        reply = asyncio.run(client.get_advice("Tips?", [], context))

        assert reply == "Spend less on coffee.\nSave more."
        assert factory.model.calls == [[{"role": "user", "parts": ["Tips?"]}]]
        assert "$12450.00" in factory.instructions[0]

    def test_each_call_is_independent(self, settings, context, make_model_factory):
        """Test that the client keeps no conversation state."""
        factory = make_model_factory(text="ok")
        client = AdviceClient(settings=settings, model_factory=factory)

        asyncio.run(client.get_advice("first", [], context))
        asyncio.run(client.get_advice("second", [], context))

        assert factory.model.calls[1] == [{"role": "user", "parts": ["second"]}]

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_reply_uses_fallback(self, settings, context, make_model_factory, text):
        """Test that an empty body never reaches the user."""
        client = AdviceClient(settings=settings, model_factory=make_model_factory(text=text))
        assert asyncio.run(client.get_advice("Hi", [], context)) == EMPTY_REPLY_FALLBACK

    def test_blocked_reply_uses_fallback(self, settings, context, make_model_factory):
        """Test that a response without text parts is treated as empty."""
        client = AdviceClient(settings=settings, model_factory=make_model_factory(blocked=True))
        assert asyncio.run(client.get_advice("Hi", [], context)) == EMPTY_REPLY_FALLBACK

    @pytest.mark.parametrize("api_key", [None, "", "   "])
    def test_missing_key_fails_before_model_is_built(self, context, make_model_factory, api_key):
        """Test that a missing credential is a configuration error with no model call."""
        factory = make_model_factory(text="never")
        client = AdviceClient(settings=GeminiSettings(api_key=api_key), model_factory=factory)

        with pytest.raises(AdviceConfigurationError):
            asyncio.run(client.get_advice("Hi", [], context))
        assert factory.instructions == []
        assert factory.model.calls == []

    def test_service_error_is_wrapped(self, settings, context, make_model_factory):
        """Test that SDK failures surface as AdviceServiceError."""
        boom = ConnectionError("network unreachable")
        client = AdviceClient(settings=settings, model_factory=make_model_factory(error=boom))

        with pytest.raises(AdviceServiceError) as exc_info:
            asyncio.run(client.get_advice("Hi", [], context))
        assert exc_info.value.__cause__ is boom

    def test_configuration_and_service_errors_are_distinct(self):
        """Test the exception hierarchy."""
        assert not issubclass(AdviceConfigurationError, AdviceServiceError)
        assert not issubclass(AdviceServiceError, AdviceConfigurationError)

    def test_audit_events(self, settings, context, make_model_factory):
        """Test that requests and replies are logged."""
        audit = AuditLogger()
        client = AdviceClient(
            settings=settings,
            model_factory=make_model_factory(text="ok"),
            audit_logger=audit,
        )
        asyncio.run(client.get_advice("Hi", [], context))

        types = [e.event_type for e in audit.events]
        assert types == [AuditEventType.ADVICE_REQUESTED, AuditEventType.ADVICE_RECEIVED]


class TestAdvisorConversation:
    """Tests for the caller-side chat state."""

    def test_starts_with_greeting(self, settings, make_model_factory):
        """Test the initial message."""
        conversation = AdvisorConversation(
            AdviceClient(settings=settings, model_factory=make_model_factory(text="x")),
            greeting="Hello Sam!",
        )
        assert len(conversation.messages) == 1
        assert conversation.messages[0].role == ChatRole.MODEL
        assert conversation.messages[0].text == "Hello Sam!"

    def test_send_appends_user_and_reply(self, settings, context, make_model_factory):
        """Test a successful exchange."""
        factory = make_model_factory(text="Try a budget.")
        conversation = AdvisorConversation(AdviceClient(settings=settings, model_factory=factory))

        reply = asyncio.run(conversation.send("Review my spending", context))

        assert reply.text == "Try a budget."
        roles = [m.role for m in conversation.messages]
        assert roles == [ChatRole.MODEL, ChatRole.USER, ChatRole.MODEL]
        # history excludes the new message; it is sent as the final turn
        sent = factory.model.calls[0]
        assert len(sent) == 2
        assert sent[0]["role"] == "model"
        assert sent[1] == {"role": "user", "parts": ["Review my spending"]}

    def test_history_accumulates(self, settings, context, make_model_factory):
        """Test that earlier turns are passed back in."""
        factory = make_model_factory(text="Sure.")
        conversation = AdvisorConversation(AdviceClient(settings=settings, model_factory=factory))

        asyncio.run(conversation.send("one", context))
        asyncio.run(conversation.send("two", context))

        assert len(factory.model.calls[1]) == 4
        assert len(conversation.messages) == 5

    def test_service_failure_appends_one_fallback(self, settings, context, make_model_factory):
        """Test that a transport error keeps the user message and adds one fallback reply."""
        factory = make_model_factory(error=TimeoutError("timed out"))
        conversation = AdvisorConversation(AdviceClient(settings=settings, model_factory=factory))

        reply = asyncio.run(conversation.send("Am I saving enough?", context))

        messages = conversation.messages
        assert reply.text == CONNECTION_TROUBLE_MESSAGE
        assert len(messages) == 3
        assert [m.text for m in messages].count("Am I saving enough?") == 1
        assert messages[1].role == ChatRole.USER
        assert messages[2].role == ChatRole.MODEL
        assert messages[2].text == CONNECTION_TROUBLE_MESSAGE
        assert conversation.is_busy is False

    def test_missing_key_appends_fallback(self, context, make_model_factory):
        """Test that a configuration error is shown as the same generic message."""
        client = AdviceClient(
            settings=GeminiSettings(api_key=None),
            model_factory=make_model_factory(text="never"),
        )
        conversation = AdvisorConversation(client)

        reply = asyncio.run(conversation.send("Hello?", context))
        assert reply.text == CONNECTION_TROUBLE_MESSAGE
        assert len(conversation.messages) == 3

    def test_empty_reply_shows_fallback(self, settings, context, make_model_factory):
        """Test that an empty model reply becomes the fallback message."""
        conversation = AdvisorConversation(
            AdviceClient(settings=settings, model_factory=make_model_factory(text=""))
        )
        reply = asyncio.run(conversation.send("Hi", context))
        assert reply.text == EMPTY_REPLY_FALLBACK

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_input_is_ignored(self, settings, context, make_model_factory, text):
        """Test that nothing is sent for blank input."""
        factory = make_model_factory(text="x")
        conversation = AdvisorConversation(AdviceClient(settings=settings, model_factory=factory))

        assert asyncio.run(conversation.send(text, context)) is None
        assert len(conversation.messages) == 1
        assert factory.model.calls == []

    def test_input_while_busy_is_ignored(self, settings, context):
        """Test that a second send during a pending reply does nothing."""

        class SlowModel:
            def __init__(self):
                self.calls = []
                self.release = None

            async def generate_content_async(self, contents):
                self.calls.append(contents)
                await self.release.wait()
                return SimpleNamespace(text="done")

        model = SlowModel()
        conversation = AdvisorConversation(
            AdviceClient(settings=settings, model_factory=lambda instruction: model)
        )

        async def overlap():
            model.release = asyncio.Event()
            first = asyncio.ensure_future(conversation.send("first", context))
            await asyncio.sleep(0)
            busy = conversation.is_busy
            second = await conversation.send("second", context)
            model.release.set()
            return await first, second, busy

        first, second, busy = asyncio.run(overlap())

        assert busy is True
        assert first.text == "done"
        assert second is None
        assert len(model.calls) == 1
        assert [m.text for m in conversation.messages][1:] == ["first", "done"]

    def test_clear_keeps_greeting(self, settings, context, make_model_factory):
        """Test resetting the conversation."""
        conversation = AdvisorConversation(
            AdviceClient(settings=settings, model_factory=make_model_factory(text="x")),
            greeting="Hi there",
        )
        asyncio.run(conversation.send("one", context))
        conversation.clear()

        assert [m.text for m in conversation.messages] == ["Hi there"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

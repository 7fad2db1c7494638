"""
Shared fixtures.

Every test runs in its own temporary working directory with the
NovaBank/Gemini environment variables removed, so a developer's .env or
shell never leaks into assertions. The Gemini model is always faked.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from novabank.config import get_settings


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

_ENV_VARS = [
    "API_KEY",
    "GEMINI_API_KEY",
    "GEMINI_MODEL_NAME",
    "GEMINI_TEMPERATURE",
    "NOVA_SEED_BALANCE",
    "NOVA_TRANSFER_DELAY_SECONDS",
    "NOVA_SERIALIZE_TRANSFERS",
    "NOVA_BALANCE_KEY",
    "NOVA_TRANSACTIONS_KEY",
    "NOVA_DATA_PATH",
    "CUSTOMER_NAME",
]


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_clock():
    return lambda: NOW


class FakeResponse:
    """Mimics a google.generativeai response object."""

    def __init__(self, text: Optional[str] = None, blocked: bool = False):
        self._text = text
        self._blocked = blocked

    @property
    def text(self) -> Optional[str]:
        if self._blocked:
            raise ValueError("The response does not contain any valid Part")
        return self._text


class FakeModel:
    """Records generate_content_async calls and replays a canned result."""

    def __init__(self, response: Any = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: list = []

    async def generate_content_async(self, contents):
        self.calls.append(contents)
        if self.error is not None:
            raise self.error
        return self.response


class FakeModelFactory:
    """Stands in for the GenerativeModel constructor."""

    def __init__(self, model: FakeModel):
        self.model = model
        self.instructions: list[str] = []

    def __call__(self, system_instruction: str) -> FakeModel:
        self.instructions.append(system_instruction)
        return self.model


@pytest.fixture
def make_model_factory():
    def _make(text=None, blocked=False, error=None) -> FakeModelFactory:
        model = FakeModel(response=FakeResponse(text, blocked=blocked), error=error)
        return FakeModelFactory(model)
    return _make

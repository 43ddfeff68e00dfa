from __future__ import annotations

import pytest

from rentease_bot.core.exceptions import CompletionUnavailable


class FakeCompletionClient:
    """Stands in for the model: returns a canned reply or raises."""

    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[dict]] = []

    async def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_completion():
    def _make(reply: str | None = None, error: Exception | None = None) -> FakeCompletionClient:
        return FakeCompletionClient(reply=reply, error=error)

    return _make


@pytest.fixture
def unavailable_completion(fake_completion):
    return fake_completion(error=CompletionUnavailable("timeout"))

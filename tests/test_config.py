from __future__ import annotations

import pytest

from rentease_bot.config import Settings


def test_defaults_are_usable_without_env() -> None:
    settings = Settings()
    assert settings.CHAT_HISTORY_WINDOW >= 0
    assert settings.COMPLETION_TIMEOUT_SECONDS > 0
    assert settings.OPENROUTER_BASE_URL.startswith("https://")


@pytest.mark.parametrize("timeout", [0, -1.5])
def test_non_positive_timeout_is_rejected(timeout: float) -> None:
    with pytest.raises(ValueError):
        Settings(COMPLETION_TIMEOUT_SECONDS=timeout)


def test_negative_window_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(CHAT_HISTORY_WINDOW=-1)


def test_text_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(FILTER_TEXT_MAX_LENGTH=0)

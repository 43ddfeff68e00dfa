from datetime import datetime
from typing import Optional
from rentease_bot.config import settings
from rentease_bot.schemas.chat import ChatTurnResult
from rentease_bot.schemas.property_search import PropertySearchFilters
from rentease_bot.services.filter_parser import ParsedReply
import pytz

DEFAULT_GREETING = (
    "Hi there! I'm here to help you find your perfect rental property. "
    "Tell me a location like 'Cebu City', a budget, or amenities like WiFi or a balcony."
)

COMPLETION_FALLBACK_MESSAGE = (
    "I'm having trouble connecting right now. "
    "Please try again in a moment or use the search filters above to browse properties."
)


def _now() -> datetime:
    return datetime.now(pytz.timezone(settings.APP_TIMEZONE))


def compose_reply(parsed: ParsedReply, filters: Optional[PropertySearchFilters]) -> ChatTurnResult:
    """Normal turn: the model's prose plus whatever filter survived sanitization."""
    return ChatTurnResult(
        reply_text=parsed.prose_text or DEFAULT_GREETING,
        filters=filters,
        is_error=False,
        timestamp=_now(),
    )


def compose_fallback() -> ChatTurnResult:
    # Never carries a filter, whatever the model may have produced before failing
    return ChatTurnResult(
        reply_text=COMPLETION_FALLBACK_MESSAGE,
        filters=None,
        is_error=True,
        timestamp=_now(),
    )

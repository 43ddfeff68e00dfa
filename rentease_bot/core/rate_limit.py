from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from rentease_bot.config import settings
import logging

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

# In-memory counters; every chat turn costs a paid model call
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def chatbot_rate_limit() -> str:
    """Read at request time so the limit follows the current settings."""
    return settings.CHATBOT_RATE_LIMIT


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"🚫 Rate limit hit for {get_remote_address(request)} on {request.url.path}")
    return JSONResponse(status_code=429, content={"message": RATE_LIMIT_MESSAGE})

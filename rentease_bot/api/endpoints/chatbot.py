from fastapi import APIRouter, Depends, HTTPException, Request
from rentease_bot.core.rate_limit import chatbot_rate_limit, limiter
from rentease_bot.schemas.chat import ChatRequest
from rentease_bot.services.chatbot_service import ChatbotService
import logging

# Initialize Router and Logger
router = APIRouter()
logger = logging.getLogger(__name__)

_service = None

def get_chatbot_service() -> ChatbotService:
    """Dependency returning the shared (stateless) chatbot service."""
    global _service
    if _service is None:
        _service = ChatbotService()
    return _service


# ==============================================================================
# CHAT TURN (POST)
# ==============================================================================
@router.post("/chatbot")
@limiter.limit(chatbot_rate_limit)
async def handle_chatbot_message(
    request: Request,
    payload: ChatRequest,
    service: ChatbotService = Depends(get_chatbot_service)
):
    """
    Runs one chat turn and returns the reply plus the search filter (or null).
    A completion failure still answers 200, with isError set.
    """
    if not payload.message or not payload.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    logger.info(
        f"🟢 Chat message received ({len(payload.conversation_history)} history entries): {payload.message[:80]}"
    )

    result = await service.handle_message(payload.message, payload.conversation_history)
    return result.to_payload()

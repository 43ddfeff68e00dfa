# rentease_bot/schemas/chat.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from rentease_bot.schemas.enums import MessageRole
from rentease_bot.schemas.property_search import PropertySearchFilters

class ChatMessage(BaseModel):
    """One entry of the transcript the caller owns."""
    role: MessageRole
    content: str
    timestamp: Optional[datetime] = None


class ChatRequest(BaseModel):
    """Inbound body of POST /chatbot"""
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    conversation_history: List[ChatMessage] = Field(
        default_factory=list,
        alias="conversationHistory"
    )


class ChatTurnResult(BaseModel):
    """
    What one turn hands back to the caller. `is_error` is only set on the
    completion-failure fallback so the UI can render it differently.
    """
    reply_text: str
    filters: Optional[PropertySearchFilters] = None
    is_error: bool = False
    timestamp: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "replyText": self.reply_text,
            "filter": self.filters.to_payload() if self.filters else None,
            "isError": self.is_error,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

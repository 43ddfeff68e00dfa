from typing import Any, Optional, Sequence
from rentease_bot.core.exceptions import CompletionUnavailable
from rentease_bot.graphs.chat_graph import get_chat_graph
from rentease_bot.schemas.chat import ChatTurnResult
from rentease_bot.services.completion_client import CompletionClient
from rentease_bot.services.response_composer import compose_fallback
import logging

logger = logging.getLogger(__name__)

class ChatbotService:
    """
    Runs one chat turn: window -> completion -> parse -> sanitize -> compose.

    Stateless between calls; the caller passes the conversation history every
    time. Safe to share one instance across concurrent requests.
    """

    def __init__(self, completion_client=None):
        self.completion_client = completion_client or CompletionClient()
        self.graph = get_chat_graph()

    async def handle_message(
        self,
        message: str,
        conversation_history: Optional[Sequence[Any]] = None,
    ) -> ChatTurnResult:
        config = {"configurable": {"completion_client": self.completion_client}}
        input_data = {
            "message": message,
            "conversation_history": list(conversation_history or []),
        }

        try:
            final_state = await self.graph.ainvoke(input_data, config=config)
        except CompletionUnavailable as e:
            # The single place a failed turn is turned into the apology reply
            logger.warning(f"⚠️ Completion unavailable ({e.reason}), sending fallback reply")
            return compose_fallback()

        return final_state["result"]

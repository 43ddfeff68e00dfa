from rentease_bot.core.state import TurnState
from rentease_bot.services.conversation_window import build_conversation_window
import logging

logger = logging.getLogger(__name__)

def window_node(state: TurnState):
    """
    Cuts the caller's history down to the recent window and appends the new message.
    """
    history = state.get("conversation_history") or []
    window = build_conversation_window(history, state["message"])
    logger.info(f"🪟 Window: {len(window) - 1} of {len(history)} prior messages kept")
    return {"window": window}

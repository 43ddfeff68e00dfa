from typing import TypedDict, List, Optional, Dict, Any
from rentease_bot.schemas.chat import ChatTurnResult
from rentease_bot.schemas.property_search import PropertySearchFilters
from rentease_bot.services.filter_parser import ParsedReply

class TurnState(TypedDict, total=False):
    # 1. Caller Input (history is owned by the caller, read-only here)
    message: str
    conversation_history: List[Any]

    # 2. What goes to the model
    window: List[Dict[str, str]]

    # 3. What comes back
    raw_completion: Optional[str]
    parsed: Optional[ParsedReply]

    # 4. Output
    filters: Optional[PropertySearchFilters]
    result: Optional[ChatTurnResult]

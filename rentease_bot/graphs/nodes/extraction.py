from rentease_bot.core.state import TurnState
from rentease_bot.services.filter_parser import extract_filter_block
from rentease_bot.services.filter_sanitizer import sanitize_filters
import logging

logger = logging.getLogger(__name__)

def parse_node(state: TurnState):
    parsed = extract_filter_block(state.get("raw_completion"))
    if parsed.candidate is None:
        logger.info("📝 No filter block in reply, prose only")
    return {"parsed": parsed}


def sanitize_node(state: TurnState):
    """
    Turns the untrusted candidate into a PropertySearchFilters (or None).
    """
    parsed = state["parsed"]
    filters = sanitize_filters(parsed.candidate)
    if filters:
        logger.info(f"🔍 Filters extracted: {filters.to_payload()}")
    return {"filters": filters}

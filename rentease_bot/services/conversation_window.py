from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from rentease_bot.config import settings
from rentease_bot.schemas.chat import ChatMessage
from rentease_bot.schemas.enums import MessageRole
import logging

logger = logging.getLogger(__name__)

_ALLOWED_ROLES = {role.value for role in MessageRole}

HistoryEntry = Union[ChatMessage, Mapping[str, Any]]


def _to_wire(entry: HistoryEntry) -> Optional[Dict[str, str]]:
    """Reduces a history entry to {role, content}. Returns None for unusable entries."""
    if isinstance(entry, ChatMessage):
        return {"role": entry.role.value, "content": entry.content}

    if not isinstance(entry, Mapping):
        return None

    role = entry.get("role")
    if isinstance(role, MessageRole):
        role = role.value
    content = entry.get("content")

    # Only the caller's own turns may reach the model; never a smuggled 'system' role
    if role not in _ALLOWED_ROLES or not isinstance(content, str):
        return None
    return {"role": role, "content": content}


def build_conversation_window(
    history: Optional[Sequence[HistoryEntry]],
    message: str,
    limit: Optional[int] = None,
) -> List[Dict[str, str]]:
    """
    Returns the last `limit` usable history entries (oldest first) followed by
    the new user message. Timestamps are stripped. The history is never mutated.
    """
    if limit is None:
        limit = settings.CHAT_HISTORY_WINDOW

    prior = []
    for entry in history or []:
        wire = _to_wire(entry)
        if wire is None:
            logger.debug("Skipping history entry with unusable role/content")
            continue
        prior.append(wire)

    # Truncate from the oldest end; the new message is always kept
    recent = prior[-limit:] if limit > 0 else []
    if len(prior) > len(recent):
        logger.debug(f"Conversation window dropped {len(prior) - len(recent)} older messages")

    return recent + [{"role": MessageRole.USER.value, "content": message}]

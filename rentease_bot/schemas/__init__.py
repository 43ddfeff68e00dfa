# rentease_bot/schemas/__init__.py
from .enums import FilterField, MessageRole
from .property_search import PropertySearchFilters
from .chat import ChatMessage, ChatRequest, ChatTurnResult

__all__ = [
    'FilterField',
    'MessageRole',
    'PropertySearchFilters',
    'ChatMessage',
    'ChatRequest',
    'ChatTurnResult'
]

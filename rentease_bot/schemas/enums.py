# rentease_bot/schemas/enums.py
from enum import Enum

class MessageRole(str, Enum):
    """Chat roles a caller may put in the conversation history"""
    USER = "user"
    ASSISTANT = "assistant"


class FilterField(str, Enum):
    """Filter keys as they travel over the wire (camelCase, matching the Browse Properties UI)"""
    SEARCH = "search"
    LOCATION = "location"
    AMENITIES = "amenities"
    PROPERTY_TYPE = "propertyType"
    MIN_PRICE = "minPrice"
    MAX_PRICE = "maxPrice"

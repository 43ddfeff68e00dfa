from typing import Any, Dict, List, Mapping, Optional, Union
from rentease_bot.config import settings
from rentease_bot.schemas.enums import FilterField
from rentease_bot.schemas.property_search import PropertySearchFilters
import logging
import math
import re

logger = logging.getLogger(__name__)

# Spellings the model (or the user) uses, mapped to the amenity names shown in Browse Properties
AMENITY_ALIASES = {
    "wifi": "WiFi",
    "wi-fi": "WiFi",
    "internet": "WiFi",
    "wireless": "WiFi",
    "air conditioning": "Air Conditioning",
    "air-conditioning": "Air Conditioning",
    "aircon": "Air Conditioning",
    "ac": "Air Conditioning",
    "security": "24/7 Security",
    "24/7": "24/7 Security",
    "24/7 security": "24/7 Security",
    "balcony": "Balcony",
}

# Leading currency markers tolerated in price strings ("₱15,000", "PHP 8000")
_CURRENCY_PREFIX = re.compile(r"^(?:₱|php|\$)\s*", re.IGNORECASE)

Number = Union[int, float]


def _reject(field: FilterField, value: Any) -> None:
    logger.debug(f"Dropping filter field '{field.value}': {value!r:.80}")
    return None


def _clean_text(field: FilterField, value: Any, max_length: int) -> Optional[str]:
    if not isinstance(value, str):
        return _reject(field, value)
    cleaned = value.strip()
    if not cleaned or len(cleaned) > max_length:
        return _reject(field, value)
    return cleaned


def _clean_amenities(value: Any, max_length: int, max_items: int) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return _reject(FilterField.AMENITIES, value)

    seen = set()
    amenities = []
    for item in value:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if not name or len(name) > max_length:
            continue
        name = AMENITY_ALIASES.get(name.lower(), name)
        key = name.casefold()
        if key in seen:
            continue
        seen.add(key)
        amenities.append(name)

    amenities = amenities[:max_items]
    if not amenities:
        return _reject(FilterField.AMENITIES, value)
    return amenities


def _clean_price(field: FilterField, value: Any) -> Optional[Number]:
    # bool is an int subclass; "true" is never a price
    if isinstance(value, bool):
        return _reject(field, value)

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = _CURRENCY_PREFIX.sub("", value.strip()).replace(",", "").replace(" ", "")
        try:
            number = float(text)
        except ValueError:
            return _reject(field, value)
    else:
        return _reject(field, value)

    if isinstance(number, float):
        if not math.isfinite(number):
            return _reject(field, value)
        if number.is_integer():
            number = int(number)

    if number < 0:
        return _reject(field, value)
    return number


def sanitize_filters(
    candidate: Union[Mapping[str, Any], PropertySearchFilters, None],
    max_text_length: Optional[int] = None,
    max_amenities: Optional[int] = None,
) -> Optional[PropertySearchFilters]:
    """
    Validates an untrusted filter candidate field by field.

    Invalid fields are dropped silently; one bad field never voids the rest.
    When both prices survive but min > max, max is dropped. Returns None when
    nothing survives so callers never see an empty filter object.
    """
    if candidate is None:
        return None
    if isinstance(candidate, PropertySearchFilters):
        candidate = candidate.to_payload()
    if not isinstance(candidate, Mapping):
        logger.debug(f"Filter candidate is not an object: {type(candidate).__name__}")
        return None

    if max_text_length is None:
        max_text_length = settings.FILTER_TEXT_MAX_LENGTH
    if max_amenities is None:
        max_amenities = settings.FILTER_MAX_AMENITIES

    clean: Dict[str, Any] = {}

    # --- 1. TEXT FIELDS ---
    text_fields = {
        FilterField.SEARCH: "search",
        FilterField.LOCATION: "location",
        FilterField.PROPERTY_TYPE: "property_type",
    }
    for field, attr in text_fields.items():
        if candidate.get(field.value) is not None:
            value = _clean_text(field, candidate[field.value], max_text_length)
            if value is not None:
                clean[attr] = value

    # --- 2. AMENITIES ---
    if candidate.get(FilterField.AMENITIES.value) is not None:
        amenities = _clean_amenities(candidate[FilterField.AMENITIES.value], max_text_length, max_amenities)
        if amenities is not None:
            clean["amenities"] = amenities

    # --- 3. PRICES ---
    if candidate.get(FilterField.MIN_PRICE.value) is not None:
        min_price = _clean_price(FilterField.MIN_PRICE, candidate[FilterField.MIN_PRICE.value])
        if min_price is not None:
            clean["min_price"] = min_price
    if candidate.get(FilterField.MAX_PRICE.value) is not None:
        max_price = _clean_price(FilterField.MAX_PRICE, candidate[FilterField.MAX_PRICE.value])
        if max_price is not None:
            clean["max_price"] = max_price

    # An upper bound below the lower bound is the implausible one
    if "min_price" in clean and "max_price" in clean and clean["min_price"] > clean["max_price"]:
        logger.info(
            f"Price conflict (min {clean['min_price']} > max {clean['max_price']}), dropping maxPrice"
        )
        del clean["max_price"]

    if not clean:
        return None
    return PropertySearchFilters(**clean)

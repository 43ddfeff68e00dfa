from typing import Any, Dict, NamedTuple, Optional, Tuple
from rentease_bot.schemas.enums import FilterField
import json
import logging
import re

logger = logging.getLogger(__name__)

# Shown when the model replied with nothing but the filter block
FILTER_ACKNOWLEDGEMENT = "Got it! Let me apply those filters for you."

# ```json { ... } ``` (language tag optional). Other fenced languages are ignored.
_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(\{.*?\})\s*```", re.DOTALL)
_OPEN_FENCE_BEFORE = re.compile(r"```(?:json|JSON)?\s*$")
_CLOSE_FENCE_AFTER = re.compile(r"\s*```")

# Wire keys we recognise, plus the snake_case spellings some models emit
_KEY_ALIASES = {
    "property_type": FilterField.PROPERTY_TYPE.value,
    "min_price": FilterField.MIN_PRICE.value,
    "max_price": FilterField.MAX_PRICE.value,
}
_FILTER_KEYS = {field.value for field in FilterField}


class ParsedReply(NamedTuple):
    prose_text: str
    candidate: Optional[Dict[str, Any]]


def _find_balanced_span(text: str, start: int) -> Optional[int]:
    """
    Returns the index just past the '}' closing the '{' at `start`, or None.
    Braces inside JSON strings (including escaped quotes) do not count.
    """
    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def _locate_block(text: str) -> Optional[Tuple[int, int, str]]:
    """
    Finds the first structured block: a json fence or a balanced {...} span,
    whichever starts earlier. Returns (start, end, payload) or None.
    """
    brace = None
    pos = text.find("{")
    while pos != -1:
        end = _find_balanced_span(text, pos)
        if end is not None:
            brace = (pos, end, text[pos:end])
            break
        pos = text.find("{", pos + 1)

    fence_match = _FENCE_PATTERN.search(text)
    fence = None
    if fence_match:
        fence = (fence_match.start(), fence_match.end(), fence_match.group(1))

    if fence and (brace is None or fence[0] <= brace[0]):
        return fence
    if brace is None:
        return None

    # An unclosed fence leaves its markers next to the object; take them with it
    start, end, payload = brace
    opening = _OPEN_FENCE_BEFORE.search(text, 0, start)
    if opening:
        start = opening.start()
        closing = _CLOSE_FENCE_AFTER.match(text, end)
        if closing:
            end = closing.end()
    return start, end, payload


def _collapse_whitespace(text: str) -> str:
    lines = [re.sub(r"[ \t]+", " ", line).strip() for line in text.splitlines()]
    collapsed = "\n".join(lines)
    collapsed = re.sub(r"\n{3,}", "\n\n", collapsed)
    return collapsed.strip()


def _pick_filter_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    # Some models wrap the object: {"filters": {...}}
    nested = data.get("filters")
    if isinstance(nested, dict):
        data = nested

    candidate = {k: v for k, v in data.items() if k in _FILTER_KEYS}
    for alias, key in _KEY_ALIASES.items():
        if alias in data and key not in candidate:
            candidate[key] = data[alias]
    return candidate


def extract_filter_block(raw_text: Optional[str]) -> ParsedReply:
    """
    Splits a raw model reply into the prose shown to the user and the first
    embedded JSON object (untrusted, unvalidated).

    Never raises: a missing or malformed block degrades to a prose-only reply
    with candidate=None. Unknown keys are dropped here; wrong-typed values are
    left for the sanitizer.
    """
    text = raw_text if isinstance(raw_text, str) else ""
    block = _locate_block(text)

    if block is None:
        return ParsedReply(prose_text=text.strip(), candidate=None)

    start, end, payload = block
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Filter block is not valid JSON, replying with prose only: {e}")
        return ParsedReply(prose_text=text.strip(), candidate=None)

    if not isinstance(data, dict):
        logger.debug("Filter block decoded to a non-object, replying with prose only")
        return ParsedReply(prose_text=text.strip(), candidate=None)

    prose = _collapse_whitespace(text[:start] + " " + text[end:])
    if not prose:
        prose = FILTER_ACKNOWLEDGEMENT

    return ParsedReply(prose_text=prose, candidate=_pick_filter_keys(data))

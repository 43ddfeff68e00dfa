from __future__ import annotations

import pytest

from rentease_bot.services.filter_parser import FILTER_ACKNOWLEDGEMENT, extract_filter_block


def test_inline_object_after_prose() -> None:
    raw = 'Sure! {"propertyType":"apartment","location":"Cebu City","maxPrice":15000}'
    parsed = extract_filter_block(raw)

    assert parsed.prose_text == "Sure!"
    assert parsed.candidate == {"propertyType": "apartment", "location": "Cebu City", "maxPrice": 15000}


@pytest.mark.parametrize(
    "raw",
    [
        "Hello! How can I help you today?",
        "  The flag of Japan is white with a red circle.  \n",
        "",
    ],
)
def test_prose_only_reply_has_no_candidate(raw: str) -> None:
    parsed = extract_filter_block(raw)
    assert parsed.candidate is None
    assert parsed.prose_text == raw.strip()


def test_none_reply_is_prose_only() -> None:
    parsed = extract_filter_block(None)
    assert parsed == ("", None)


def test_malformed_object_degrades_to_prose() -> None:
    raw = "Let me apply those filters! {location: Cebu, maxPrice: 15000}"
    parsed = extract_filter_block(raw)
    assert parsed.candidate is None
    assert parsed.prose_text == raw


def test_unbalanced_brace_degrades_to_prose() -> None:
    raw = 'Okay {"location": "Cebu City"'
    parsed = extract_filter_block(raw)
    assert parsed.candidate is None
    assert parsed.prose_text == raw


def test_json_fence_is_removed_from_prose() -> None:
    raw = (
        "I'll help you find condos in Lahug!\n\n"
        "```json\n"
        '{"propertyType": "condominium", "location": "Lahug"}\n'
        "```\n"
    )
    parsed = extract_filter_block(raw)

    assert parsed.candidate == {"propertyType": "condominium", "location": "Lahug"}
    assert parsed.prose_text == "I'll help you find condos in Lahug!"


def test_first_of_multiple_blocks_wins() -> None:
    raw = 'First {"location": "Mandaue"} then {"location": "Lapu-Lapu"}'
    parsed = extract_filter_block(raw)

    assert parsed.candidate == {"location": "Mandaue"}
    assert parsed.prose_text == 'First then {"location": "Lapu-Lapu"}'


def test_braces_inside_strings_do_not_end_the_block() -> None:
    raw = 'Searching {"search": "Villa {North} \\"Wing\\"", "location": "Banilad"} now'
    parsed = extract_filter_block(raw)

    assert parsed.candidate == {"search": 'Villa {North} "Wing"', "location": "Banilad"}
    assert parsed.prose_text == "Searching now"


def test_nested_object_is_decoded_as_one_block() -> None:
    raw = 'Done {"filters": {"location": "IT Park", "amenities": ["WiFi"]}, "intent": "search"}'
    parsed = extract_filter_block(raw)
    assert parsed.candidate == {"location": "IT Park", "amenities": ["WiFi"]}


def test_unknown_keys_are_ignored_and_snake_case_accepted() -> None:
    raw = '{"bedrooms": 2, "property_type": "house", "min_price": "8000", "max_price": 12000, "petFriendly": true}'
    parsed = extract_filter_block(raw)
    assert parsed.candidate == {"propertyType": "house", "minPrice": "8000", "maxPrice": 12000}


def test_camel_case_key_wins_over_snake_case_duplicate() -> None:
    parsed = extract_filter_block('{"maxPrice": 9000, "max_price": 1}')
    assert parsed.candidate == {"maxPrice": 9000}


def test_block_only_reply_gets_acknowledgement() -> None:
    parsed = extract_filter_block('  {"minPrice": 20000, "maxPrice": 5000}  ')
    assert parsed.prose_text == FILTER_ACKNOWLEDGEMENT
    assert parsed.candidate == {"minPrice": 20000, "maxPrice": 5000}


def test_wrong_typed_values_pass_through_untouched() -> None:
    parsed = extract_filter_block('ok {"maxPrice": "cheap", "amenities": "wifi"}')
    assert parsed.candidate == {"maxPrice": "cheap", "amenities": "wifi"}


def test_empty_object_block_is_stripped_without_keys() -> None:
    raw = "Options: [1, 2, 3] and {} nothing else"
    parsed = extract_filter_block(raw)
    assert parsed.candidate == {}
    assert parsed.prose_text == "Options: [1, 2, 3] and nothing else"


def test_other_fenced_languages_are_left_alone() -> None:
    raw = "Here is code:\n```python\nprint('hi')\n```"
    parsed = extract_filter_block(raw)
    assert parsed.candidate is None
    assert parsed.prose_text == raw.strip()


def test_whitespace_is_collapsed_around_removed_block() -> None:
    raw = 'Great   choice!\n\n\n\n{"location": "Talamban"}\n\nLet me   apply that.'
    parsed = extract_filter_block(raw)
    assert parsed.prose_text == "Great choice!\n\nLet me apply that."


def test_unclosed_fence_is_removed_from_prose() -> None:
    parsed = extract_filter_block('Sure!\n```json\n{"location": "Lahug"}')
    assert parsed.prose_text == "Sure!"
    assert parsed.candidate == {"location": "Lahug"}


def test_closed_fence_followed_by_question_is_removed_from_prose() -> None:
    parsed = extract_filter_block('Here you go\n```json\n{"location": "Lahug"} ```\nanything else?')
    assert parsed.candidate == {"location": "Lahug"}
    assert "```" not in parsed.prose_text


@pytest.mark.parametrize("raw", [None, ["not", "text"], 42])
def test_non_text_reply_yields_empty_prose(raw) -> None:
    parsed = extract_filter_block(raw)
    assert parsed.prose_text == ""
    assert parsed.candidate is None

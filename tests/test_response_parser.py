import json

import pytest

from app.errors import ParseError
from app.services.response_parser import parse_itinerary_response, strip_code_fence
from mock_llm_service import sample_itinerary_json, sample_itinerary_payload


# ---------------------------
# Fence stripping
# ---------------------------

def test_strip_json_fence():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_bare_fence():
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_fence_with_surrounding_whitespace():
    assert strip_code_fence('\n\n  ```JSON\n{\n  "a": 1\n}\n```  \n') == '{\n  "a": 1\n}'


def test_unfenced_text_is_only_trimmed():
    assert strip_code_fence('  {"a": 1}\n') == '{"a": 1}'


def test_text_with_only_an_opening_fence_is_left_alone():
    text = '```json\n{"a": 1}'
    assert strip_code_fence(text) == text


def test_single_line_fence():
    assert strip_code_fence('```{"a": 1}```') == '{"a": 1}'


def test_closing_fence_on_last_content_line():
    assert strip_code_fence('```json\n{\n  "a": 1\n}```') == '{\n  "a": 1\n}'


def test_content_on_opening_fence_line():
    assert strip_code_fence('```json {"a": 1}\n```') == '{"a": 1}'


def test_itinerary_with_inline_closing_fence_parses():
    text = "```json\n" + json.dumps(sample_itinerary_payload(days=3), indent=2) + "```"

    itinerary = parse_itinerary_response(text, expected_days=3)

    assert itinerary.title == "Lisbon Light and Fado"
    assert len(itinerary.days) == 3


def test_stripping_twice_changes_nothing_more():
    once = strip_code_fence(sample_itinerary_json(fenced=True))
    assert strip_code_fence(once) == once


# ---------------------------
# Parsing
# ---------------------------

def test_fenced_and_bare_responses_parse_identically():
    fenced = parse_itinerary_response(sample_itinerary_json(fenced=True))
    bare = parse_itinerary_response(sample_itinerary_json())
    assert fenced == bare


def test_fence_without_language_tag():
    parsed = parse_itinerary_response(sample_itinerary_json(fenced=True, language=""))
    assert parsed.title == "Lisbon Light and Fado"


def test_parsed_document_shape():
    itinerary = parse_itinerary_response(sample_itinerary_json(days=2))
    assert len(itinerary.days) == 2
    assert itinerary.days[0].morning.cost == 20
    assert itinerary.restaurants[0].priceRange == "$$"
    assert itinerary.accommodations[0].amenities == ["WiFi", "Breakfast"]
    # template placeholder is not a number
    assert itinerary.dailyBudget is None


def test_numeric_daily_budget_is_kept():
    payload = sample_itinerary_payload()
    payload["dailyBudget"] = 500
    assert parse_itinerary_response(json.dumps(payload)).dailyBudget == 500


def test_truncated_json_raises_parse_error():
    text = sample_itinerary_json()[:200]
    with pytest.raises(ParseError, match="valid JSON"):
        parse_itinerary_response(text)


@pytest.mark.parametrize("text", ["", "   ", "```json\n```"])
def test_empty_response_raises_parse_error(text):
    with pytest.raises(ParseError):
        parse_itinerary_response(text)


def test_non_object_json_raises_parse_error():
    with pytest.raises(ParseError, match="JSON object"):
        parse_itinerary_response("[1, 2, 3]")


def test_prose_response_raises_parse_error():
    with pytest.raises(ParseError):
        parse_itinerary_response("Sure! Here is your itinerary for Lisbon: day one...")


@pytest.mark.parametrize("field", ["title", "summary", "totalCost", "days", "restaurants", "accommodations", "tips"])
def test_missing_required_field_raises_parse_error(field):
    payload = sample_itinerary_payload()
    del payload[field]
    with pytest.raises(ParseError, match=field):
        parse_itinerary_response(json.dumps(payload))


def test_wrong_shape_raises_parse_error():
    payload = sample_itinerary_payload()
    payload["days"] = "three lovely days"
    with pytest.raises(ParseError, match="days"):
        parse_itinerary_response(json.dumps(payload))


def test_day_missing_time_slot_raises_parse_error():
    payload = sample_itinerary_payload()
    del payload["days"][1]["evening"]
    with pytest.raises(ParseError, match="evening"):
        parse_itinerary_response(json.dumps(payload))


def test_values_are_not_judged():
    payload = sample_itinerary_payload()
    payload["days"][0]["morning"]["cost"] = -15
    payload["restaurants"][0]["rating"] = 9
    itinerary = parse_itinerary_response(json.dumps(payload))
    assert itinerary.days[0].morning.cost == -15
    assert itinerary.restaurants[0].rating == 9


def test_day_count_mismatch_raises_parse_error():
    with pytest.raises(ParseError, match="Expected 5 days"):
        parse_itinerary_response(sample_itinerary_json(days=3), expected_days=5)

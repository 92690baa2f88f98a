"""Query encoding tests."""

from infino_gateway.query.encoder import build_query_string, encode_param


def test_special_characters_are_form_encoded():
    assert encode_param("special characters &%") == "special+characters+%26%25"


def test_missing_value_encodes_empty():
    assert encode_param(None) == ""


def test_utf8_values():
    assert encode_param("café") == "caf%C3%A9"


def test_timestamp_colons_are_escaped():
    assert encode_param("2024-01-01T00:00:00Z") == "2024-01-01T00%3A00%3A00Z"


def test_key_order_is_preserved():
    query = build_query_string([("text", "a b"), ("start_time", "1"), ("end_time", "2")])
    assert query == "text=a+b&start_time=1&end_time=2"

    query = build_query_string([("end_time", "2"), ("text", None)])
    assert query == "end_time=2&text="

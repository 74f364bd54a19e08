"""Path identifier parsing — positive integers only, rejected before any query."""

import pytest

from koinonia.core.domain_types import EventId, UserId
from koinonia.core.errors import InputValidationError
from koinonia.core.identifiers import parse_event_id, parse_identifier, parse_user_id


@pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), (12, 12)])
def test_valid_identifiers(raw, expected):
    assert parse_identifier(raw, "event id") == expected


@pytest.mark.parametrize("raw", ["0", "-1", "1.5", "abc", "", None, "1e3", 0, -4, True])
def test_invalid_identifiers_raise(raw):
    with pytest.raises(InputValidationError) as exc:
        parse_identifier(raw, "event id")
    assert exc.value.http_status == 400
    assert exc.value.field == "event id"


def test_typed_id_parsers():
    assert parse_event_id("12") == EventId(12)
    assert parse_user_id(" 7 ") == UserId(7)


def test_typed_id_parsers_name_the_field():
    with pytest.raises(InputValidationError) as exc:
        parse_user_id("x")
    assert exc.value.field == "user id"

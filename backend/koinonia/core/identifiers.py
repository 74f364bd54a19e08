"""Identifier Parsing — path ids validated before any store access.

Invariants:
    - Only positive base-10 integers are accepted ("12", " 7 ")
    - "0", "-3", "1.5", "abc", "" all raise InputValidationError
    - parse_event_id / parse_user_id return the typed ids used by services
"""

import re

from koinonia.core.domain_types import EventId, UserId
from koinonia.core.errors import InputValidationError

_POSITIVE_INT = re.compile(r"[0-9]+")


def parse_identifier(raw: str | int | None, field: str) -> int:
    """Parse a numeric path identifier or raise InputValidationError."""
    if isinstance(raw, bool):
        raise InputValidationError(f"Invalid {field}", field)
    if isinstance(raw, int):
        value = raw
    else:
        text = (raw or "").strip()
        if not _POSITIVE_INT.fullmatch(text):
            raise InputValidationError(f"Invalid {field}", field)
        value = int(text)
    if value <= 0:
        raise InputValidationError(f"Invalid {field}", field)
    return value


def parse_event_id(raw: str | int | None) -> EventId:
    return EventId(parse_identifier(raw, "event id"))


def parse_user_id(raw: str | int | None) -> UserId:
    return UserId(parse_identifier(raw, "user id"))

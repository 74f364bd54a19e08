"""Shared field validators for request schemas.

Invariants:
    - Required text is stripped and must be non-empty
    - Optional text collapses "" / whitespace to None
"""


def require_text(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be empty or whitespace")
    return value


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None

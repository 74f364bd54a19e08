"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, EventId, EnrollmentId wrap positive integers (serial PKs)
    - PriceCents is a non-negative integer amount of centavos
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare against DB strings without converters
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
EventId = NewType("EventId", int)
EnrollmentId = NewType("EnrollmentId", int)


# ─── Value Types ─────────────────────────────────────────────────

PriceCents = NewType("PriceCents", int)   # >= 0


# ─── Enums ───────────────────────────────────────────────────────

class EnrollmentStatus(str, Enum):
    """Enrollment row lifecycle — enrolled -> cancelled, never back."""
    ENROLLED = "enrolled"
    CANCELLED = "cancelled"


class UserRole(str, Enum):
    """Role tag stored on users. Free-form roles are allowed; these are known."""
    MEMBER = "member"
    ADMIN = "admin"

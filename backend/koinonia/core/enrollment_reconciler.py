"""Enrollment Reconciler — decides which requested participants are new.

Invariants:
    - Pure: no IO, inputs are never mutated
    - Key = lowercase trimmed name + "|" + age ("" when age is absent)
    - A requested participant is accepted only if its key is not already active
      AND was not accepted earlier in the same request
    - Request order is preserved among accepted participants
    - Only additions are ever produced: existing rows are never replaced

Design Decisions:
    - Active rows are the only dedup source: cancelled rows do not block re-enrollment
    - The transactional shell (services/enrollment_service.py) loads existing rows,
      calls select_new_participants, then inserts in one batch
"""

from typing import Iterable, Protocol, Sequence, TypeVar


class ParticipantLike(Protocol):
    """Structural contract for requested participants."""
    name: str
    age: int | None


P = TypeVar("P", bound=ParticipantLike)


def normalize_name(name: str | None) -> str:
    return (name or "").strip().lower()


def participant_key(name: str | None, age: int | None) -> str:
    """Dedup key for one participant within a (user, event) pair."""
    return f"{normalize_name(name)}|{'' if age is None else age}"


def build_key_set(existing: Iterable[tuple[str | None, int | None]]) -> set[str]:
    """Keys for the currently active (name, age) rows."""
    return {participant_key(name, age) for name, age in existing}


def select_new_participants(
    existing_keys: set[str], requested: Sequence[P],
) -> list[P]:
    """Return the requested participants that would not duplicate an active row."""
    seen = set(existing_keys)
    accepted: list[P] = []
    for participant in requested:
        key = participant_key(participant.name, participant.age)
        if key in seen:
            continue
        seen.add(key)
        accepted.append(participant)
    return accepted

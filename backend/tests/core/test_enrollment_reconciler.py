"""Enrollment Reconciler — pure selection of participants to insert.

Tests:
    - Keys normalize name (trim + lowercase) and render a missing age as ""
    - Pre-existing active keys are skipped
    - Duplicates inside one request are accepted once, first occurrence wins
    - Inputs are never mutated
"""

from dataclasses import dataclass

from koinonia.core.enrollment_reconciler import (
    build_key_set, participant_key, select_new_participants,
)


@dataclass
class _Participant:
    name: str
    age: int | None = None


def test_key_normalizes_name_and_age():
    assert participant_key("  Ana Clara ", 7) == "ana clara|7"
    assert participant_key("ANA", None) == "ana|"
    assert participant_key(None, None) == "|"


def test_age_zero_is_not_the_same_as_missing_age():
    assert participant_key("Bia", 0) != participant_key("Bia", None)


def test_build_key_set_from_stored_rows():
    keys = build_key_set([("João", 30), ("Maria ", None)])
    assert keys == {"joão|30", "maria|"}


def test_empty_existing_accepts_everything():
    requested = [_Participant("Ana", 5), _Participant("Pedro")]
    assert select_new_participants(set(), requested) == requested


def test_existing_active_participants_are_skipped():
    existing = build_key_set([("Ana", 5)])
    requested = [_Participant("ana ", 5), _Participant("Pedro")]
    accepted = select_new_participants(existing, requested)
    assert [p.name for p in accepted] == ["Pedro"]


def test_same_name_different_age_is_a_different_participant():
    existing = build_key_set([("Ana", 5)])
    accepted = select_new_participants(existing, [_Participant("Ana", 6)])
    assert len(accepted) == 1


def test_duplicates_within_one_request_are_accepted_once():
    requested = [
        _Participant("Lucas", 10),
        _Participant(" lucas", 10),
        _Participant("LUCAS ", 10),
        _Participant("Lucas", None),
    ]
    accepted = select_new_participants(set(), requested)
    assert accepted == [requested[0], requested[3]]


def test_resubmitting_the_same_list_adds_nothing():
    requested = [_Participant("Ana", 5), _Participant("Pedro")]
    first = select_new_participants(set(), requested)
    stored = build_key_set((p.name, p.age) for p in first)
    assert select_new_participants(stored, requested) == []


def test_existing_key_set_is_not_mutated():
    existing = {"ana|5"}
    select_new_participants(existing, [_Participant("Pedro")])
    assert existing == {"ana|5"}

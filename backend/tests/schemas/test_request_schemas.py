"""Request schemas — field presence and shape checks done before store access.

Invariants:
    - Required text must be non-empty after strip
    - Event date must parse (DD/MM/YYYY or ISO-8601)
    - Event price fits the stored column; JSON numbers are read as reais
    - Enrollment needs a positive userId and >= 1 participant, each with a name
    - Portuguese keys of the mobile client are accepted as aliases
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from koinonia.schemas.enrollment import EnrollmentCreate, ParticipantIn
from koinonia.schemas.event import EventCreate
from koinonia.schemas.user import LoginRequest, UserCreate


# --- UserCreate ---------------------------------------------------------------

def test_user_create_strips_name_and_email():
    user = UserCreate(name=" Maria ", email=" maria@example.com ", password="pw")
    assert user.name == "Maria"
    assert user.email == "maria@example.com"
    assert user.role is None


def test_user_create_accepts_portuguese_keys():
    user = UserCreate.model_validate(
        {"nome": "João", "email": "j@example.com", "senha": "x", "tipo": "admin"},
    )
    assert (user.name, user.password, user.role) == ("João", "x", "admin")


@pytest.mark.parametrize("missing", ["name", "email", "password"])
def test_user_create_requires_each_field(missing):
    data = {"name": "Maria", "email": "m@example.com", "password": "pw"}
    data.pop(missing)
    with pytest.raises(ValidationError):
        UserCreate.model_validate(data)


@pytest.mark.parametrize("field", ["name", "email", "password"])
def test_user_create_rejects_blank_fields(field):
    data = {"name": "Maria", "email": "m@example.com", "password": "pw"}
    data[field] = "   "
    with pytest.raises(ValidationError):
        UserCreate.model_validate(data)


def test_password_over_bcrypt_limit_rejected():
    with pytest.raises(ValidationError):
        UserCreate(name="Maria", email="m@example.com", password="é" * 40)


def test_login_requires_password():
    with pytest.raises(ValidationError):
        LoginRequest(email="m@example.com", password="")


# --- EventCreate --------------------------------------------------------------

def test_event_create_parses_br_date():
    event = EventCreate(title="Culto", date="01/01/2026", location="Templo")
    assert event.event_date == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert event.price is None


def test_event_create_camel_case_keys():
    event = EventCreate.model_validate({
        "title": "Culto", "date": "2026-01-01", "location": "Templo",
        "imageUrl": "https://img.example/1.png", "createdById": 4,
    })
    assert event.image_url == "https://img.example/1.png"
    assert event.created_by_id == 4


@pytest.mark.parametrize("date", ["32/01/2026", "amanhã", "   "])
def test_event_create_rejects_unparseable_date(date):
    with pytest.raises(ValidationError):
        EventCreate(title="Culto", date=date, location="Templo")


@pytest.mark.parametrize("field", ["title", "location"])
def test_event_create_rejects_blank_required_text(field):
    data = {"title": "Culto", "date": "01/01/2026", "location": "Templo"}
    data[field] = ""
    with pytest.raises(ValidationError):
        EventCreate.model_validate(data)


def test_blank_optional_text_becomes_none():
    event = EventCreate(
        title="Culto", date="01/01/2026", location="Templo",
        description="  ", attractions="", imageUrl=" ",
    )
    assert event.description is None
    assert event.attractions is None
    assert event.image_url is None


# --- EnrollmentCreate ---------------------------------------------------------

def test_enrollment_create_valid():
    body = EnrollmentCreate.model_validate({
        "userId": 3,
        "participants": [{"name": " Ana ", "age": 7}, {"name": "Pedro"}],
    })
    assert body.user_id == 3
    assert body.participants[0] == ParticipantIn(name="Ana", age=7)
    assert body.participants[1].age is None


def test_enrollment_create_accepts_portuguese_keys():
    body = EnrollmentCreate.model_validate({
        "usuarioId": 3, "participantes": [{"nome": "Ana", "idade": 7}],
    })
    assert body.participants[0].name == "Ana"


@pytest.mark.parametrize("payload", [
    {"participants": [{"name": "Ana"}]},
    {"userId": 0, "participants": [{"name": "Ana"}]},
    {"userId": 3, "participants": []},
    {"userId": 3},
    {"userId": 3, "participants": [{"name": "Ana"}, {"name": "  "}]},
    {"userId": 3, "participants": [{"name": "Ana"}, None]},
    {"userId": 3, "participants": [{"age": 4}]},
    {"userId": 3, "participants": [{"name": "Ana", "age": -1}]},
])
def test_enrollment_create_rejects_bad_payloads(payload):
    with pytest.raises(ValidationError):
        EnrollmentCreate.model_validate(payload)


# --- EventCreate price --------------------------------------------------------

def _event(**fields) -> EventCreate:
    return EventCreate(title="Culto", date="01/01/2026", location="Templo", **fields)


@pytest.mark.parametrize("number, text", [
    (25, "25,00"), (25.5, "25,50"), (0, "0,00"), (1234.56, "1234,56"),
])
def test_numeric_price_becomes_reais_text(number, text):
    assert _event(price=number).price == text


@pytest.mark.parametrize("number", [-1, -0.5, float("inf"), float("nan"), True])
def test_bad_numeric_price_is_rejected(number):
    with pytest.raises(ValidationError):
        _event(price=number)


def test_price_text_above_storage_range_is_rejected():
    with pytest.raises(ValidationError):
        _event(price="R$ 21.474.836,48")


def test_unreadable_price_text_is_still_accepted():
    assert _event(price="a combinar").price == "a combinar"

"""Enrollment Schemas — participant list submitted for one (user, event) pair.

Invariants:
    - userId is a positive integer
    - participants has at least one entry
    - every participant has a non-empty trimmed name; age is optional and >= 0
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from koinonia.core.domain_types import UserId


class ParticipantIn(BaseModel):
    """One participant: the user, a dependent, or a companion."""
    name: str = Field(
        max_length=200, validation_alias=AliasChoices("name", "nome"),
    )
    age: int | None = Field(
        None, ge=0, le=150, validation_alias=AliasChoices("age", "idade"),
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("every participant needs a non-empty name")
        return v


class EnrollmentCreate(BaseModel):
    """Body of POST /events/{id}/enrollments."""
    user_id: UserId = Field(
        gt=0, validation_alias=AliasChoices("userId", "usuarioId"),
    )
    participants: list[ParticipantIn] = Field(
        min_length=1,
        validation_alias=AliasChoices("participants", "participantes"),
    )

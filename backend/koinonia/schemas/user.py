"""User Schemas — signup and login bodies.

Invariants:
    - UserCreate: name, email, password all non-empty
    - Passwords are never stripped (whitespace is significant) and never exceed
      72 bytes (bcrypt input limit)
    - Portuguese keys from the mobile client (nome, senha, tipo) accepted as aliases
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from koinonia.schemas.common import optional_text, require_text

BCRYPT_MAX_BYTES = 72


def _check_password(value: str) -> str:
    if not value.strip():
        raise ValueError("password cannot be empty or whitespace")
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password cannot exceed {BCRYPT_MAX_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    """Signup body."""
    name: str = Field(
        max_length=200, validation_alias=AliasChoices("name", "nome"),
    )
    email: str = Field(max_length=320)
    password: str = Field(validation_alias=AliasChoices("password", "senha"))
    role: str | None = Field(
        None, max_length=30, validation_alias=AliasChoices("role", "tipo"),
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return require_text(v, "name")

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return require_text(v, "email")

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("role")
    @classmethod
    def strip_role(cls, v: str | None) -> str | None:
        return optional_text(v)


class LoginRequest(BaseModel):
    """Login body."""
    email: str
    password: str = Field(validation_alias=AliasChoices("password", "senha"))

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return require_text(v, "email")

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("password cannot be empty")
        return v

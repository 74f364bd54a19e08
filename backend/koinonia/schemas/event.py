"""Event Schemas — event creation body.

Invariants:
    - title, date, location non-empty after strip
    - date must parse as DD/MM/YYYY or ISO-8601 (core/formatting.py), else 400
    - price is free-form text; unreadable text is accepted (stored as R$ 0,00), but an
      amount above MAX_PRICE_CENTS is a 400
    - JSON numbers for price are read as reais (25 -> "25,00", 25.5 -> "25,50");
      negative or non-finite numbers are a 400
"""

import math
from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field, ValidationInfo, field_validator

from koinonia.core.domain_types import UserId
from koinonia.core.formatting import MAX_PRICE_CENTS, parse_event_date, parse_price
from koinonia.schemas.common import optional_text, require_text


class EventCreate(BaseModel):
    """Event creation body. date example: "18/03/2025"."""
    title: str = Field(max_length=200)
    date: str
    location: str = Field(max_length=300)
    price: str | None = None
    image_url: str | None = Field(
        None, validation_alias=AliasChoices("imageUrl", "image_url"),
    )
    description: str | None = None
    attractions: str | None = None
    created_by_id: UserId | None = Field(
        None, gt=0,
        validation_alias=AliasChoices("createdById", "criadoPorId"),
    )

    @field_validator("title", "location")
    @classmethod
    def strip_required(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, info.field_name)

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        v = require_text(v, "date")
        if parse_event_date(v) is None:
            raise ValueError('invalid date format, use "DD/MM/YYYY" or ISO-8601')
        return v

    @field_validator("price", mode="before")
    @classmethod
    def number_to_price_text(cls, v: object) -> object:
        # bool is an int subclass; leave it for the str check to reject
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return v
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("price must be a finite number")
        if v < 0:
            raise ValueError("price cannot be negative")
        return f"{Decimal(str(v)):.2f}".replace(".", ",")

    @field_validator("price")
    @classmethod
    def check_price_range(cls, v: str | None) -> str | None:
        if parse_price(v).minor_units > MAX_PRICE_CENTS:
            raise ValueError("price is too large")
        return v

    @field_validator("image_url", "description", "attractions")
    @classmethod
    def strip_optional(cls, v: str | None) -> str | None:
        return optional_text(v)

    @property
    def event_date(self) -> datetime:
        return parse_event_date(self.date)

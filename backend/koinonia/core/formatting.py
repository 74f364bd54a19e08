"""Formatting — Brazilian date/currency text to storage form and back.

Invariants:
    - parse_event_date never raises: invalid input returns None
    - DD/MM/YYYY input always becomes UTC midnight of that calendar day
    - format_event_date(parse_event_date(s)) == s for every valid DD/MM/YYYY s
    - parse_price never returns a negative amount; is_free implies minor_units == 0
    - Amounts above MAX_PRICE_CENTS are parsed but cannot be stored; callers reject them
    - Prices are handled in integer centavos, Decimal only for the text conversion

Design Decisions:
    - Dots are thousand separators and the first comma is the decimal separator,
      matching how prices are typed in pt-BR ("R$ 1.234,56")
    - Unparseable non-empty price text yields ParsedPrice(0, False) instead of an error
      (ADR: existing clients send free-form text; kept and pinned in tests)
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from koinonia.core.domain_types import PriceCents

FREE_LABEL = "Gratuito"
FREE_MARKERS: tuple[str, ...] = ("grat", "grát", "free")
CURRENCY_SYMBOL = "R$"
# events.price_cents is a 32-bit INTEGER column
MAX_PRICE_CENTS = 2_147_483_647

_BR_DATE = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")
_NON_PRICE_CHARS = re.compile(r"[^0-9,]")


@dataclass(frozen=True)
class ParsedPrice:
    """Price in centavos plus the free flag, as stored on events."""
    minor_units: PriceCents
    is_free: bool


# ─── Dates ───────────────────────────────────────────────────────

def parse_event_date(value: str | None) -> datetime | None:
    """Parse "DD/MM/YYYY" or an ISO-8601 string into an aware UTC datetime."""
    if not value:
        return None
    text = value.strip()

    match = _BR_DATE.fullmatch(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            return None

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # offsets near year 1 / 9999 push the UTC instant out of range
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def format_event_date(value: datetime | date | None) -> str | None:
    """Render a stored event date as "DD/MM/YYYY" (UTC calendar day)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        # SQLite drops tzinfo on the way back; stored values are always UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc).date()
    return value.strftime("%d/%m/%Y")


# ─── Prices ──────────────────────────────────────────────────────

def is_free_text(value: str | None) -> bool:
    """True for empty input or text carrying a free marker ("Gratuito", "free")."""
    if not value:
        return True
    lowered = value.lower()
    return any(marker in lowered for marker in FREE_MARKERS)


def parse_price(value: str | None) -> ParsedPrice:
    """Parse user-typed price text into centavos.

    "Gratuito" / "" -> (0, True); "R$ 25,90" -> (2590, False);
    "R$ 0,00" -> (0, True); "abc" -> (0, False).
    """
    if is_free_text(value):
        return ParsedPrice(PriceCents(0), True)

    digits = _NON_PRICE_CHARS.sub("", value)
    whole, _, rest = digits.partition(",")
    fraction = rest.split(",", 1)[0]
    if not whole and not fraction:
        return ParsedPrice(PriceCents(0), False)

    amount = Decimal(f"{whole or '0'}.{fraction or '0'}")
    cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return ParsedPrice(PriceCents(cents), cents == 0)


def format_price(minor_units: PriceCents | None, is_free: bool) -> str:
    """Render centavos as "R$ 1.234,56", or the free label."""
    if is_free:
        return FREE_LABEL
    cents = minor_units or 0
    reais, centavos = divmod(abs(cents), 100)
    grouped = f"{reais:,}".replace(",", ".")
    sign = "-" if cents < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {grouped},{centavos:02d}"

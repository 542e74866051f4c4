"""Card field formatting (per keystroke) and validation (at submit)."""
import re
from datetime import date
from typing import Optional

from booking.core.config import settings
from booking.schemas.card import CardDetails

CARD_NUMBER_LENGTH = 16
CVV_MAX_LENGTH = 4

_NON_DIGITS = re.compile(r"[^0-9]")
_EXPIRY_RE = re.compile(r"(0[1-9]|1[0-2])/([0-9]{2})")
_CVV_RE = re.compile(r"[0-9]{3,4}")
_CARD_NUMBER_RE = re.compile(rf"[0-9]{{{CARD_NUMBER_LENGTH}}}")


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def format_card_number(value: str) -> str:
    digits = _digits(value)[:CARD_NUMBER_LENGTH]
    return " ".join(digits[i:i + 4] for i in range(0, len(digits), 4))


def format_expiry(value: str) -> str:
    digits = _digits(value)
    if len(digits) < 2:
        return digits
    month, year = digits[:2], digits[2:4]
    if int(month) > 12:
        month = "12"
    return f"{month}/{year}" if year else month


def format_cvv(value: str) -> str:
    return (value or "")[:CVV_MAX_LENGTH]


def format_card_details(details: CardDetails) -> CardDetails:
    return CardDetails(
        number=format_card_number(details.number),
        holder_name=details.holder_name,
        expiry=format_expiry(details.expiry),
        cvv=format_cvv(details.cvv),
    )


def is_expired(month: int, year: int, today: date) -> bool:
    return date(2000 + year, month, 1) < today


def validate_card_details(details: CardDetails, today: Optional[date] = None) -> list[str]:
    """Return every violation found in ``details``; an empty list means valid."""
    today = today or date.today()
    violations: list[str] = []

    number = (details.number or "").replace(" ", "")
    if not _CARD_NUMBER_RE.fullmatch(number):
        violations.append(f"Card number must be {CARD_NUMBER_LENGTH} digits")

    holder = (details.holder_name or "").strip()
    min_length = settings.CARD_HOLDER_MIN_LENGTH
    if not holder:
        violations.append("Cardholder name is required")
    elif len(holder) < min_length:
        violations.append(f"Cardholder name must be at least {min_length} characters")

    match = _EXPIRY_RE.fullmatch(details.expiry or "")
    if not match:
        violations.append("Expiry date must be in MM/YY format")
    elif is_expired(int(match.group(1)), int(match.group(2)), today):
        violations.append("Card has expired")

    if not _CVV_RE.fullmatch(details.cvv or ""):
        violations.append("CVV must be 3 or 4 digits")

    return violations

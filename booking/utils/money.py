import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")

_AMOUNT_RE = re.compile(r"-?[0-9][0-9,]*(?:\.[0-9]+)?")


def parse_amount(value: Any) -> Decimal:
    """Coerce an upstream amount to a non-negative Decimal.

    Accepts numbers and display strings such as ``"Kshs 14,240"`` or
    ``"25,000 Kshs + 2,000 Kshs per labor min"`` (the first amount wins).
    Missing, negative, NaN and unparseable input all become 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, str):
        match = _AMOUNT_RE.search(value)
        if not match:
            return ZERO
        value = match.group(0).replace(",", "")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite() or amount < 0:
        return ZERO
    return amount


def money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)

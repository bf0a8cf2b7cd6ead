"""Number parsing helpers for CNB documents."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation


def parse_decimal(value: object | None) -> Decimal | None:
    """Parse CNB numbers such as ``22,222`` or ``1 234,5`` into :class:`Decimal`.

    Returns ``None`` for anything that is not a finite number.
    """

    if value is None:
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    cleaned = re.sub(r"\s+", "", str(value)).replace(",", ".")
    if not cleaned:
        return None
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def parse_int(value: object | None) -> int | None:
    parsed = parse_decimal(value)
    if parsed is None or parsed != parsed.to_integral_value():
        return None
    return int(parsed)

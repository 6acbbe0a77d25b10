"""
Helpers shared by the request schemas.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CENT = Decimal("0.01")


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes are converted to UTC; naive ones are taken as UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_cents(value) -> Decimal:
    """Round a money amount half-up to two decimal places."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def clean_strings(values: list[str]) -> list[str]:
    """Strip entries, drop blanks and duplicates while keeping order"""
    seen = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return seen

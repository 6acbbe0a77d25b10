"""
Pure invoice arithmetic, numbering and due-date helpers.

Money is handled as Decimal and rounded half-up to cents at each line and
at the tax step, so stored totals always equal subtotal + tax.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from domain.enums import InvoiceStatus
from domain.schemas.common import to_cents


@dataclass
class InvoiceTotals:
    line_totals: List[Decimal]
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def line_total(quantity, unit_price) -> Decimal:
    return to_cents(Decimal(str(quantity)) * Decimal(str(unit_price)))


def calculate_totals(items: Iterable[Tuple], tax_rate) -> InvoiceTotals:
    """
    Compute line totals, subtotal, tax and grand total.

    Args:
        items: (quantity, unit_price) pairs
        tax_rate: Percentage between 0 and 100
    """
    lines = [line_total(quantity, unit_price) for quantity, unit_price in items]
    subtotal = to_cents(sum(lines, Decimal("0")))
    tax_amount = to_cents(subtotal * Decimal(str(tax_rate)) / Decimal("100"))
    return InvoiceTotals(
        line_totals=lines,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )


def number_prefix(
    prefix: str, separator: str, year: Optional[int], include_year: bool
) -> str:
    if include_year and year is not None:
        return f"{prefix}{separator}{year}{separator}"
    return f"{prefix}{separator}"


def next_invoice_number(
    existing_numbers: Iterable[str],
    prefix: str = "INV",
    separator: str = "-",
    padding: int = 4,
    year: Optional[int] = None,
    include_year: bool = True,
) -> str:
    """
    Allocate the next number in a sequence such as INV-2026-0001.

    The sequence is the highest numeric suffix among existing numbers that
    share the same prefix (and year), plus one.
    """
    head = number_prefix(prefix, separator, year, include_year)
    highest = 0
    for number in existing_numbers:
        if not number.startswith(head):
            continue
        suffix = number[len(head):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{head}{str(highest + 1).zfill(padding)}"


def default_due_date(issue_date: date, due_days: int) -> date:
    return issue_date + timedelta(days=due_days)


def effective_status(status: InvoiceStatus, due_date: date, today: date) -> InvoiceStatus:
    """A sent invoice past its due date is reported overdue"""
    if status == InvoiceStatus.SENT and due_date < today:
        return InvoiceStatus.OVERDUE
    return status


def days_until(due_date: date, today: date) -> int:
    return (due_date - today).days

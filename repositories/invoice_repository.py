"""
Invoice Repository - Data access layer for invoices and their line items
"""

from typing import List, Optional, Tuple
from datetime import date
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func, or_, and_

from repositories.base import BaseRepository, LIKE_ESCAPE, contains_pattern
from domain.models import Invoice
from domain.enums import InvoiceStatus, SortOrder

SORT_COLUMNS = {
    "date": Invoice.issue_date,
    "client_name": Invoice.client_name,
    "invoice_number": Invoice.invoice_number,
    "total": Invoice.total,
    "status": Invoice.status,
}


class InvoiceRepository(BaseRepository[Invoice]):
    """Repository for invoice data access"""

    def __init__(self, db: Session):
        super().__init__(db, Invoice)

    def _with_items(self):
        return self.db.query(Invoice).options(selectinload(Invoice.items))

    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        return (
            self.db.query(Invoice)
            .filter(Invoice.invoice_number == invoice_number)
            .first()
        )

    def numbers_with_prefix(self, prefix: str) -> List[str]:
        """All invoice numbers starting with a prefix (used for sequence allocation)"""
        rows = (
            self.db.query(Invoice.invoice_number)
            .filter(Invoice.invoice_number.like(f"{prefix}%"))
            .all()
        )
        return [row[0] for row in rows]

    def _status_filter(self, query, status: InvoiceStatus, today: date):
        """Filter by effective status: overdue includes sent invoices past due"""
        past_due_sent = and_(
            Invoice.status == InvoiceStatus.SENT, Invoice.due_date < today
        )
        if status == InvoiceStatus.OVERDUE:
            return query.filter(or_(Invoice.status == InvoiceStatus.OVERDUE, past_due_sent))
        if status == InvoiceStatus.SENT:
            return query.filter(
                Invoice.status == InvoiceStatus.SENT, Invoice.due_date >= today
            )
        return query.filter(Invoice.status == status)

    def search(
        self,
        today: date,
        search: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        sort_by: str = "date",
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Invoice], int]:
        """Filtered, sorted page of invoices plus the total count"""
        query = self._with_items()
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    func.lower(Invoice.client_name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Invoice.invoice_number).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Invoice.client_email).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if status is not None:
            query = self._status_filter(query, status, today)

        total = self.count(query)
        column = SORT_COLUMNS.get(sort_by, Invoice.issue_date)
        ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
        items = (
            query.order_by(ordering, Invoice.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total

    def all_invoices(self) -> List[Invoice]:
        return self._with_items().order_by(Invoice.issue_date.desc()).all()

    def open_invoices(self) -> List[Invoice]:
        """Invoices that can still become overdue or need a reminder"""
        return (
            self.db.query(Invoice)
            .filter(Invoice.status.in_((InvoiceStatus.SENT, InvoiceStatus.OVERDUE)))
            .order_by(Invoice.due_date)
            .all()
        )

    def count_by_status(self) -> dict:
        rows = (
            self.db.query(Invoice.status, func.count(Invoice.invoice_id))
            .group_by(Invoice.status)
            .all()
        )
        return {status: count for status, count in rows}

    def count_past_due_sent(self, today: date) -> int:
        return self.count(
            self.db.query(Invoice).filter(
                Invoice.status == InvoiceStatus.SENT, Invoice.due_date < today
            )
        )

    def paid_revenue(self):
        return (
            self.db.query(func.coalesce(func.sum(Invoice.total), 0))
            .filter(Invoice.status == InvoiceStatus.PAID)
            .scalar()
        )

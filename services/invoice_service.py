from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import date
from decimal import Decimal
import csv
import io
import logging
import uuid

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError, ConflictError
from domain.models import Invoice, InvoiceItem, utcnow
from domain.enums import InvoiceStatus, SortOrder
from domain.schemas.invoice_schemas import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceItemCreate,
    InvoiceResponse,
    BulkDeleteResponse,
    InvoiceStats,
    InvoiceAlert,
)
from repositories import InvoiceRepository
from services import invoice_calculator

logger = logging.getLogger("appsuite.invoices")

CSV_HEADERS = [
    "Invoice Number",
    "Client Name",
    "Client Email",
    "Date",
    "Due Date",
    "Status",
    "Subtotal",
    "Tax Amount",
    "Total",
]


def _today() -> date:
    return utcnow().date()


class InvoiceService:
    @staticmethod
    def to_response(invoice: Invoice, today: Optional[date] = None) -> InvoiceResponse:
        """Serialize an invoice with its effective (possibly overdue) status"""
        response = InvoiceResponse.model_validate(invoice)
        response.status = invoice_calculator.effective_status(
            invoice.status, invoice.due_date, today or _today()
        )
        return response

    @staticmethod
    def _apply_items(invoice: Invoice, items: List[InvoiceItemCreate], tax_rate) -> None:
        totals = invoice_calculator.calculate_totals(
            [(item.quantity, item.unit_price) for item in items], tax_rate
        )
        invoice.items = [
            InvoiceItem(
                position=position,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=line,
            )
            for position, (item, line) in enumerate(zip(items, totals.line_totals))
        ]
        invoice.tax_rate = Decimal(str(tax_rate))
        invoice.subtotal = totals.subtotal
        invoice.tax_amount = totals.tax_amount
        invoice.total = totals.total

    @staticmethod
    def _allocate_number(repo: InvoiceRepository, issue_date: date) -> str:
        year = issue_date.year if settings.invoice_include_year else None
        head = invoice_calculator.number_prefix(
            settings.invoice_prefix,
            settings.invoice_separator,
            year,
            settings.invoice_include_year,
        )
        return invoice_calculator.next_invoice_number(
            repo.numbers_with_prefix(head),
            prefix=settings.invoice_prefix,
            separator=settings.invoice_separator,
            padding=settings.invoice_number_padding,
            year=year,
            include_year=settings.invoice_include_year,
        )

    @staticmethod
    def create_invoice(db: Session, data: InvoiceCreate) -> Invoice:
        """
        Create an invoice, numbering it and computing its totals.

        Raises:
            ServiceValidationError: Due date before issue date
            ConflictError: Number allocation raced with another request
        """
        issue_date = data.issue_date or _today()
        due_date = data.due_date or invoice_calculator.default_due_date(
            issue_date, settings.invoice_due_days
        )
        if due_date < issue_date:
            raise ServiceValidationError("due_date must not be before issue_date")

        repo = InvoiceRepository(db)
        invoice = Invoice(
            invoice_number=InvoiceService._allocate_number(repo, issue_date),
            client_name=data.client.name,
            client_email=str(data.client.email),
            client_address=data.client.address,
            client_phone=data.client.phone,
            issue_date=issue_date,
            due_date=due_date,
            status=data.status,
            notes=data.notes,
        )
        InvoiceService._apply_items(invoice, data.items, data.tax_rate)

        try:
            invoice = repo.create(invoice)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Invoice number already allocated, retry") from e
        logger.info(f"Invoice created: {invoice.invoice_number} total={invoice.total}")
        return invoice

    @staticmethod
    def get_invoice(db: Session, invoice_id: uuid.UUID) -> Invoice:
        invoice = InvoiceRepository(db).get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError(f"Invoice {invoice_id} not found")
        return invoice

    @staticmethod
    def list_invoices(
        db: Session,
        search: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        sort_by: str = "date",
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        limit: int = 10,
    ):
        """Page of invoices (with effective statuses) and the total count"""
        today = _today()
        items, total = InvoiceRepository(db).search(
            today,
            search=search,
            status=status,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
        return [InvoiceService.to_response(i, today) for i in items], total

    @staticmethod
    def update_invoice(db: Session, invoice_id: uuid.UUID, data: InvoiceUpdate) -> Invoice:
        """
        Edit an invoice and recalculate its totals.

        Raises:
            NotFoundError: Unknown invoice
            ServiceValidationError: Invoice already paid, or due date before issue date
        """
        invoice = InvoiceService.get_invoice(db, invoice_id)
        if invoice.status == InvoiceStatus.PAID:
            raise ServiceValidationError("Paid invoices cannot be modified")

        if data.client is not None:
            invoice.client_name = data.client.name
            invoice.client_email = str(data.client.email)
            invoice.client_address = data.client.address
            invoice.client_phone = data.client.phone
        if data.issue_date is not None:
            invoice.issue_date = data.issue_date
        if data.due_date is not None:
            invoice.due_date = data.due_date
        if invoice.due_date < invoice.issue_date:
            raise ServiceValidationError("due_date must not be before issue_date")
        if data.notes is not None:
            invoice.notes = data.notes

        if data.items is not None or data.tax_rate is not None:
            items = data.items
            if items is None:
                items = [
                    InvoiceItemCreate(
                        description=item.description,
                        quantity=item.quantity,
                        unit_price=item.unit_price,
                    )
                    for item in invoice.items
                ]
            tax_rate = data.tax_rate if data.tax_rate is not None else invoice.tax_rate
            InvoiceService._apply_items(invoice, items, tax_rate)

        try:
            invoice = InvoiceRepository(db).update(invoice)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to update invoice {invoice_id}")
            raise
        return invoice

    @staticmethod
    def update_status(db: Session, invoice_id: uuid.UUID, status: InvoiceStatus) -> Invoice:
        invoice = InvoiceService.get_invoice(db, invoice_id)
        invoice.status = status
        logger.info(f"Invoice {invoice.invoice_number} marked {status.value}")
        return InvoiceRepository(db).update(invoice)

    @staticmethod
    def delete_invoice(db: Session, invoice_id: uuid.UUID) -> None:
        if not InvoiceRepository(db).delete(invoice_id):
            raise NotFoundError(f"Invoice {invoice_id} not found")
        logger.info(f"Invoice deleted: {invoice_id}")

    @staticmethod
    def bulk_delete(db: Session, invoice_ids: List[uuid.UUID]) -> BulkDeleteResponse:
        """Delete many invoices; unknown ids are reported as failed"""
        repo = InvoiceRepository(db)
        deleted, failed = [], []
        for invoice_id in invoice_ids:
            (deleted if repo.delete(invoice_id) else failed).append(invoice_id)
        logger.info(f"Bulk delete: {len(deleted)} deleted, {len(failed)} failed")
        return BulkDeleteResponse(deleted=deleted, failed=failed)

    @staticmethod
    def get_stats(db: Session) -> InvoiceStats:
        repo = InvoiceRepository(db)
        today = _today()
        counts = repo.count_by_status()
        past_due_sent = repo.count_past_due_sent(today)
        return InvoiceStats(
            total=sum(counts.values()),
            total_revenue=float(Decimal(str(repo.paid_revenue()))),
            paid=counts.get(InvoiceStatus.PAID, 0),
            overdue=counts.get(InvoiceStatus.OVERDUE, 0) + past_due_sent,
            draft=counts.get(InvoiceStatus.DRAFT, 0),
            sent=counts.get(InvoiceStatus.SENT, 0) - past_due_sent,
        )

    @staticmethod
    def get_alerts(db: Session) -> List[InvoiceAlert]:
        """Overdue invoices first, then sent invoices due within the reminder window"""
        today = _today()
        overdue, reminders = [], []
        for invoice in InvoiceRepository(db).open_invoices():
            days = invoice_calculator.days_until(invoice.due_date, today)
            status = invoice_calculator.effective_status(
                invoice.status, invoice.due_date, today
            )
            base = dict(
                invoice_id=invoice.invoice_id,
                invoice_number=invoice.invoice_number,
                client_name=invoice.client_name,
                total=float(invoice.total),
            )
            if status == InvoiceStatus.OVERDUE:
                overdue.append(InvoiceAlert(type="overdue", days=max(0, -days), **base))
            elif 0 <= days <= settings.invoice_reminder_days:
                reminders.append(InvoiceAlert(type="reminder", days=days, **base))
        overdue.sort(key=lambda alert: alert.days, reverse=True)
        return overdue + reminders

    @staticmethod
    def export_csv(db: Session) -> str:
        today = _today()
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADERS)
        for invoice in InvoiceRepository(db).all_invoices():
            writer.writerow(
                [
                    invoice.invoice_number,
                    invoice.client_name,
                    invoice.client_email,
                    invoice.issue_date.isoformat(),
                    invoice.due_date.isoformat(),
                    invoice_calculator.effective_status(
                        invoice.status, invoice.due_date, today
                    ).value,
                    f"{Decimal(str(invoice.subtotal)):.2f}",
                    f"{Decimal(str(invoice.tax_amount)):.2f}",
                    f"{Decimal(str(invoice.total)):.2f}",
                ]
            )
        return buffer.getvalue()

"""
Invoice models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base, utcnow
from domain.enums import InvoiceStatus


class Invoice(Base):
    """Invoice header with client details and computed totals"""

    __tablename__ = "invoice"

    invoice_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    invoice_number = Column(String(50), unique=True, nullable=False)
    client_name = Column(String(100), nullable=False)
    client_email = Column(String(255), nullable=False)
    client_address = Column(String(200), nullable=False)
    client_phone = Column(String(20))
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(SQLEnum(InvoiceStatus), nullable=False, default=InvoiceStatus.DRAFT)
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )

    __table_args__ = (
        CheckConstraint("tax_rate >= 0 AND tax_rate <= 100", name="check_tax_rate"),
        CheckConstraint("due_date >= issue_date", name="check_due_after_issue"),
    )


class InvoiceItem(Base):
    """One billed line of an invoice"""

    __tablename__ = "invoice_item"

    item_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    invoice_id = Column(
        Uuid,
        ForeignKey("invoice.invoice_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    description = Column(String(200), nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="check_item_quantity"),
        CheckConstraint("unit_price >= 0", name="check_item_price"),
    )

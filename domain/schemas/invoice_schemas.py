from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import InvoiceStatus


class ClientInfo(BaseModel):
    """Billed party"""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    address: str = Field(..., min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("name", "address")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class InvoiceItemCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=200)
    quantity: Decimal = Field(..., gt=0, description="Billed units")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit")

    @field_validator("description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("description must not be blank")
        return v


class InvoiceCreate(BaseModel):
    """Schema for creating an invoice"""

    client: ClientInfo
    items: List[InvoiceItemCreate] = Field(..., min_length=1)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    issue_date: Optional[date] = Field(None, description="Defaults to today")
    due_date: Optional[date] = Field(
        None, description="Defaults to issue_date plus the configured payment term"
    )
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: Optional[str] = Field(None, max_length=2000)


class InvoiceUpdate(BaseModel):
    """Full or partial invoice edit; totals are recalculated"""

    client: Optional[ClientInfo] = None
    items: Optional[List[InvoiceItemCreate]] = Field(None, min_length=1)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceItemResponse(BaseModel):
    item_id: UUID
    description: str
    quantity: float
    unit_price: float
    line_total: float

    model_config = {"from_attributes": True}


class InvoiceResponse(BaseModel):
    invoice_id: UUID
    invoice_number: str
    client_name: str
    client_email: str
    client_address: str
    client_phone: Optional[str]
    issue_date: date
    due_date: date
    status: InvoiceStatus
    tax_rate: float
    subtotal: float
    tax_amount: float
    total: float
    notes: Optional[str]
    items: List[InvoiceItemResponse]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkDeleteRequest(BaseModel):
    invoice_ids: List[UUID] = Field(..., min_length=1, max_length=100)


class BulkDeleteResponse(BaseModel):
    deleted: List[UUID]
    failed: List[UUID]


class InvoiceStats(BaseModel):
    total: int
    total_revenue: float
    paid: int
    overdue: int
    draft: int
    sent: int


class InvoiceAlert(BaseModel):
    """Overdue notice or upcoming-due reminder"""

    invoice_id: UUID
    invoice_number: str
    client_name: str
    type: str  # "overdue" or "reminder"
    days: int  # days past due for overdue, days until due for reminders
    total: float

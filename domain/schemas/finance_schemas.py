from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import TransactionType

# Alias for fields that are themselves named "date"
DateType = date


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: TransactionType

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[TransactionType] = None


class CategoryResponse(BaseModel):
    category_id: UUID
    name: str
    type: TransactionType
    created_at: datetime

    model_config = {"from_attributes": True}


class CategoryCount(BaseModel):
    """Category with how many transactions use it"""

    category_id: UUID
    name: str
    type: TransactionType
    transaction_count: int
    total_amount: float


class TransactionCreate(BaseModel):
    """Schema for recording income or an expense"""

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    type: TransactionType
    category_id: UUID
    date: DateType
    description: Optional[str] = Field(None, max_length=255)


class TransactionUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    type: Optional[TransactionType] = None
    category_id: Optional[UUID] = None
    date: Optional[DateType] = None
    description: Optional[str] = Field(None, max_length=255)


class TransactionResponse(BaseModel):
    transaction_id: UUID
    category_id: UUID
    category_name: Optional[str] = None
    amount: float
    type: TransactionType
    description: Optional[str]
    date: DateType
    created_at: datetime

    model_config = {"from_attributes": True}


class DashboardSummary(BaseModel):
    total_income: float
    total_expense: float
    balance: float
    transaction_count: int


class CategorySpending(BaseModel):
    """Expense total of one category within a date range"""

    category_id: UUID
    category_name: str
    category_type: TransactionType
    total_amount: float


class MonthlySummary(BaseModel):
    month: str  # "YYYY-MM"
    income: float
    expense: float
    balance: float


class TransactionListResponse(BaseModel):
    items: List[TransactionResponse]
    total: int
    limit: int
    offset: int

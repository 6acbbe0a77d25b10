from pydantic import BaseModel, Field, HttpUrl, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import OrderStatus, PaymentIntentStatus


class ProductCreate(BaseModel):
    """Schema for listing a product; the seller comes from the access token"""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    images: List[HttpUrl] = Field(..., min_length=1, max_length=10)
    is_available: bool = True

    @field_validator("title", "description", "category")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class ProductUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    images: Optional[List[HttpUrl]] = Field(None, min_length=1, max_length=10)
    is_available: Optional[bool] = None


class ProductResponse(BaseModel):
    product_id: UUID
    seller_id: UUID
    title: str
    description: str
    price: float
    category: str
    images: List[str]
    is_available: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    order_id: UUID
    buyer_id: UUID
    seller_id: UUID
    product_id: UUID
    amount: float
    currency: str
    status: OrderStatus
    payment_intent_id: Optional[UUID]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaymentIntentCreate(BaseModel):
    product_id: UUID
    currency: Optional[str] = Field(None, min_length=3, max_length=3)


class PaymentConfirmRequest(BaseModel):
    payment_intent_id: UUID


class PaymentIntentResponse(BaseModel):
    intent_id: UUID
    order_id: UUID
    amount: float
    currency: str
    status: PaymentIntentStatus
    client_secret: str
    created_at: datetime

    model_config = {"from_attributes": True}


class OrderSummary(BaseModel):
    order_id: UUID
    status: OrderStatus


class PaymentConfirmResponse(BaseModel):
    success: bool
    payment_intent: PaymentIntentResponse
    order: OrderSummary

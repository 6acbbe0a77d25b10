"""Marketplace payment routes"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.schemas.marketplace_schemas import (
    PaymentIntentCreate,
    PaymentConfirmRequest,
    PaymentIntentResponse,
    PaymentConfirmResponse,
)
from services.payment_service import PaymentService

router = APIRouter(prefix="/v1/payments", tags=["Payments"])
logger = logging.getLogger("appsuite.api.payments")


@router.post(
    "/intent", response_model=PaymentIntentResponse, status_code=status.HTTP_201_CREATED
)
def create_payment_intent(
    payload: PaymentIntentCreate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Open a pending order for a product and return the intent to confirm"""
    return PaymentIntentResponse.model_validate(
        PaymentService.create_intent(db, user, payload)
    )


@router.post("/confirm", response_model=PaymentConfirmResponse)
def confirm_payment(
    payload: PaymentConfirmRequest,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return PaymentService.confirm(db, user, payload.payment_intent_id)


@router.get("/intent/{intent_id}", response_model=PaymentIntentResponse)
def get_payment_intent(
    intent_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return PaymentIntentResponse.model_validate(
        PaymentService.get_intent(db, user, intent_id)
    )


@router.patch("/intent/{intent_id}/cancel", response_model=PaymentIntentResponse)
def cancel_payment_intent(
    intent_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return PaymentIntentResponse.model_validate(
        PaymentService.cancel(db, user, intent_id)
    )

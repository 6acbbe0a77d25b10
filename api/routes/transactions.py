"""Finance transaction routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.enums import TransactionType
from domain.schemas.finance_schemas import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from services.finance_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["Finance"])
logger = logging.getLogger("appsuite.api.transactions")


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    category_id: Optional[UUID] = Query(None),
    type: Optional[TransactionType] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Newest transactions first, each with its category name"""
    return TransactionService.list_transactions(
        db,
        user,
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
        type=type,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    txn = TransactionService.create_transaction(db, user, payload)
    return TransactionService.to_response(txn)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return TransactionService.to_response(
        TransactionService.get_transaction(db, user, transaction_id)
    )


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: UUID,
    payload: TransactionUpdate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    txn = TransactionService.update_transaction(db, user, transaction_id, payload)
    return TransactionService.to_response(txn)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    TransactionService.delete_transaction(db, user, transaction_id)

"""Marketplace order routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.schemas.marketplace_schemas import OrderResponse
from services.marketplace_service import MarketplaceService

router = APIRouter(prefix="/v1/orders", tags=["Marketplace"])


@router.get("", response_model=List[OrderResponse])
def list_orders(
    role: str = Query("buyer", pattern="^(buyer|seller)$"),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Orders where the caller is the buyer (default) or the seller"""
    orders = MarketplaceService.list_orders(db, user, as_seller=role == "seller")
    return [OrderResponse.model_validate(o) for o in orders]


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return OrderResponse.model_validate(MarketplaceService.get_order(db, user, order_id))

"""Marketplace listing routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import Optional
from uuid import UUID
import logging

from api.dependencies import get_db, get_current_user
from api.responses import paginated_response
from domain.models import AppUser
from domain.enums import SortOrder
from domain.schemas.marketplace_schemas import ProductCreate, ProductUpdate, ProductResponse
from services.marketplace_service import MarketplaceService

router = APIRouter(prefix="/v1/products", tags=["Marketplace"])
logger = logging.getLogger("appsuite.api.products")


@router.get("")
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = Query(None, max_length=100),
    search: Optional[str] = Query(None, max_length=200),
    seller_id: Optional[UUID] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    sort_by: str = Query("created_at", pattern="^(created_at|price|title)$"),
    sort_order: SortOrder = Query(SortOrder.DESC),
    db: Session = Depends(get_db),
):
    """Browse listings with filters, sorting and pagination"""
    items, total = MarketplaceService.list_products(
        db,
        page=page,
        limit=limit,
        category=category,
        search=search,
        seller_id=seller_id,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return paginated_response(
        [ProductResponse.model_validate(p).model_dump(mode="json") for p in items],
        total,
        page,
        limit,
    )


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return ProductResponse.model_validate(
        MarketplaceService.create_product(db, user, payload)
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: UUID, db: Session = Depends(get_db)):
    return ProductResponse.model_validate(MarketplaceService.get_product(db, product_id))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Edit a listing; only its seller may do so"""
    return ProductResponse.model_validate(
        MarketplaceService.update_product(db, user, product_id, payload)
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    MarketplaceService.delete_product(db, user, product_id)

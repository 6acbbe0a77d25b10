"""Shopping assistant catalog routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from api.dependencies import get_db, require_admin
from api.responses import paginated_response
from domain.models import AppUser
from domain.schemas.shopping_schemas import (
    CatalogProductCreate,
    CatalogProductUpdate,
    CatalogProductResponse,
    CatalogStats,
    PopularProduct,
)
from services.catalog_service import CatalogService

router = APIRouter(prefix="/shop/products", tags=["Shopping"])


@router.get("")
def list_catalog_products(
    search: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = Query(None, max_length=100),
    brand: Optional[str] = Query(None, max_length=100),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    available: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    items, total = CatalogService.list_products(
        db,
        search=search,
        category=category,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        available=available,
        page=page,
        limit=limit,
    )
    return paginated_response(
        [CatalogProductResponse.model_validate(p).model_dump(mode="json") for p in items],
        total,
        page,
        limit,
    )


@router.get("/categories", response_model=List[str])
def catalog_categories(db: Session = Depends(get_db)):
    return CatalogService.categories(db)


@router.get("/brands", response_model=List[str])
def catalog_brands(db: Session = Depends(get_db)):
    return CatalogService.brands(db)


@router.get("/popular", response_model=List[PopularProduct])
def popular_products(
    limit: int = Query(10, ge=1, le=50), db: Session = Depends(get_db)
):
    """Available products ordered by how often shoppers interacted with them"""
    return CatalogService.popular(db, limit)


@router.get("/stats", response_model=CatalogStats)
def catalog_stats(db: Session = Depends(get_db)):
    return CatalogService.stats(db)


@router.get("/{product_id}", response_model=CatalogProductResponse)
def get_catalog_product(product_id: UUID, db: Session = Depends(get_db)):
    return CatalogProductResponse.model_validate(CatalogService.get_product(db, product_id))


@router.post(
    "", response_model=CatalogProductResponse, status_code=status.HTTP_201_CREATED
)
def create_catalog_product(
    payload: CatalogProductCreate,
    db: Session = Depends(get_db),
    admin: AppUser = Depends(require_admin),
):
    return CatalogProductResponse.model_validate(CatalogService.create_product(db, payload))


@router.put("/{product_id}", response_model=CatalogProductResponse)
def update_catalog_product(
    product_id: UUID,
    payload: CatalogProductUpdate,
    db: Session = Depends(get_db),
    admin: AppUser = Depends(require_admin),
):
    return CatalogProductResponse.model_validate(
        CatalogService.update_product(db, product_id, payload)
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_catalog_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    admin: AppUser = Depends(require_admin),
):
    CatalogService.delete_product(db, product_id)

"""Finance category routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.enums import TransactionType
from domain.schemas.finance_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryCount,
)
from services.finance_service import CategoryService

router = APIRouter(prefix="/categories", tags=["Finance"])


@router.get("/counts", response_model=List[CategoryCount])
def category_counts(
    db: Session = Depends(get_db), user: AppUser = Depends(get_current_user)
):
    """Each category with its transaction count and total amount"""
    return CategoryService.category_counts(db, user)


@router.get("", response_model=List[CategoryResponse])
def list_categories(
    type: Optional[TransactionType] = Query(None),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return [
        CategoryResponse.model_validate(c)
        for c in CategoryService.list_categories(db, user, type)
    ]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return CategoryResponse.model_validate(CategoryService.create_category(db, user, payload))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: UUID,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return CategoryResponse.model_validate(
        CategoryService.update_category(db, user, category_id, payload)
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: UUID,
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    CategoryService.delete_category(db, user, category_id)

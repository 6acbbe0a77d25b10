"""Finance dashboard routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from api.dependencies import get_db, get_current_user
from domain.models import AppUser
from domain.schemas.finance_schemas import (
    CategorySpending,
    DashboardSummary,
    MonthlySummary,
)
from services.finance_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Finance"])


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    return DashboardService.summary(db, user, start_date, end_date)


@router.get("/monthly", response_model=List[MonthlySummary])
def dashboard_monthly(
    months: int = Query(6, ge=1, le=24),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Income, expense and balance per month, oldest first"""
    return DashboardService.monthly(db, user, months)


@router.get("/spending-by-category", response_model=List[CategorySpending])
def spending_by_category(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
    user: AppUser = Depends(get_current_user),
):
    """Expense totals per category in the date range, largest first"""
    return DashboardService.spending_by_category(db, user, start_date, end_date)

"""Appointment calendar routes"""

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from domain.schemas.appointment_schemas import CalendarMonth, CalendarSummary
from services.calendar_service import CalendarService, MIN_YEAR, MAX_YEAR
from services.time_slot_service import (
    DEFAULT_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    MAX_DURATION_MINUTES,
)

router = APIRouter(prefix="/v1/calendar", tags=["Appointments"])
logger = logging.getLogger("appsuite.api.calendar")


@router.get("/{year}/{month}", response_model=CalendarMonth)
def get_calendar(
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    month: int = Path(..., ge=1, le=12),
    duration_minutes: int = Query(
        DEFAULT_DURATION_MINUTES, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    ),
    db: Session = Depends(get_db),
):
    """Month view: every day with its slot grid, bookings and availability counts"""
    return CalendarService.generate_calendar(db, year, month, duration_minutes)


@router.get("/{year}/{month}/summary", response_model=CalendarSummary)
def get_calendar_summary(
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    month: int = Path(..., ge=1, le=12),
    duration_minutes: int = Query(
        DEFAULT_DURATION_MINUTES, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    ),
    db: Session = Depends(get_db),
):
    return CalendarService.get_summary(db, year, month, duration_minutes)

"""Appointment scheduling routes"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID
import logging

from api.dependencies import get_db
from domain.enums import AppointmentStatus
from domain.schemas.common import to_naive_utc
from domain.schemas.appointment_schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    AppointmentListResponse,
    AvailabilityResponse,
    AppointmentStats,
    TimeSlot,
)
from services.appointment_service import AppointmentService
from services.time_slot_service import (
    DEFAULT_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    MAX_DURATION_MINUTES,
)

router = APIRouter(prefix="/v1/appointments", tags=["Appointments"])
logger = logging.getLogger("appsuite.api.appointments")


@router.get("/slots/availability", response_model=AvailabilityResponse)
def check_availability(
    start_time: datetime = Query(...),
    end_time: datetime = Query(...),
    exclude_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
):
    """Whether a time range is free, plus the free slots of that day"""
    return AppointmentService.check_availability(
        db, to_naive_utc(start_time), to_naive_utc(end_time), exclude_id
    )


@router.get("/slots", response_model=List[TimeSlot])
def day_slots(
    date: date = Query(..., description="Day as YYYY-MM-DD"),
    duration_minutes: int = Query(
        DEFAULT_DURATION_MINUTES, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    ),
    db: Session = Depends(get_db),
):
    return AppointmentService.day_slots(db, date, duration_minutes)


@router.get("/stats", response_model=AppointmentStats)
def appointment_stats(db: Session = Depends(get_db)):
    return AppointmentService.get_stats(db)


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(payload: AppointmentCreate, db: Session = Depends(get_db)):
    """
    Book an appointment.

    Overlapping an active booking answers 409 with the conflicting ids.
    """
    appointment = AppointmentService.create_appointment(db, payload)
    return AppointmentResponse.model_validate(appointment)


@router.get("", response_model=AppointmentListResponse)
def list_appointments(
    status: Optional[AppointmentStatus] = Query(None),
    user_email: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return AppointmentService.list_appointments(
        db, status=status, user_email=user_email, limit=limit, offset=offset
    )


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(appointment_id: UUID, db: Session = Depends(get_db)):
    return AppointmentResponse.model_validate(
        AppointmentService.get_appointment(db, appointment_id)
    )


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: UUID, payload: AppointmentUpdate, db: Session = Depends(get_db)
):
    appointment = AppointmentService.update_appointment(db, appointment_id, payload)
    return AppointmentResponse.model_validate(appointment)


@router.patch("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(appointment_id: UUID, db: Session = Depends(get_db)):
    appointment = AppointmentService.cancel_appointment(db, appointment_id)
    return AppointmentResponse.model_validate(appointment)


@router.delete("/{appointment_id}", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
def delete_appointment(appointment_id: UUID):
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Appointments cannot be deleted; cancel them instead",
    )

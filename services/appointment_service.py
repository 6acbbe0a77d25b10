from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import date, datetime, time, timedelta
import logging
import uuid

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import Appointment, utcnow
from domain.enums import AppointmentStatus, ACTIVE_APPOINTMENT_STATUSES
from domain.schemas.appointment_schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    AppointmentListResponse,
    AvailabilityResponse,
    AppointmentStats,
)
from repositories import AppointmentRepository
from services import time_slot_service
from services.time_slot_service import MIN_DURATION_MINUTES, MAX_DURATION_MINUTES

logger = logging.getLogger("appsuite.appointments")


def _duration_minutes(start_time: datetime, end_time: datetime) -> int:
    return int((end_time - start_time).total_seconds() // 60)


class AppointmentService:
    @staticmethod
    def _validate_window(start_time: datetime, end_time: datetime) -> int:
        """
        Check a booking window and return its length in minutes.

        Raises:
            ServiceValidationError: Inverted range, bad length, or outside business hours
        """
        if end_time <= start_time:
            raise ServiceValidationError("end_time must be after start_time")
        duration = _duration_minutes(start_time, end_time)
        if duration < MIN_DURATION_MINUTES:
            raise ServiceValidationError(
                f"Appointment must be at least {MIN_DURATION_MINUTES} minutes"
            )
        if duration > MAX_DURATION_MINUTES:
            raise ServiceValidationError(
                f"Appointment must be at most {MAX_DURATION_MINUTES} minutes"
            )
        if not time_slot_service.within_business_hours(start_time, end_time):
            raise ServiceValidationError(
                "Appointments must be within business hours "
                f"({time_slot_service.BUSINESS_HOURS_START}:00-"
                f"{time_slot_service.BUSINESS_HOURS_END}:00 UTC)"
            )
        return duration

    @staticmethod
    def _ensure_no_conflict(
        repo: AppointmentRepository,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> None:
        conflicts = repo.find_conflicts(start_time, end_time, exclude_id)
        if conflicts:
            logger.info(
                f"Booking conflict for {start_time.isoformat()}-{end_time.isoformat()}: "
                f"{len(conflicts)} overlapping"
            )
            raise ConflictError(
                "Time slot conflicts with an existing appointment",
                details={
                    "conflicting_ids": [str(a.appointment_id) for a in conflicts]
                },
            )

    @staticmethod
    def create_appointment(db: Session, data: AppointmentCreate) -> Appointment:
        """
        Book an appointment.

        The end time defaults to start + duration_minutes. New bookings start as
        pending and block their range for other bookings.

        Raises:
            ServiceValidationError: Past start, invalid window
            ConflictError: Overlaps a pending or confirmed appointment
        """
        if data.start_time <= utcnow():
            raise ServiceValidationError("Appointment start_time must be in the future")

        end_time = data.end_time or data.start_time + timedelta(
            minutes=data.duration_minutes
        )
        duration = AppointmentService._validate_window(data.start_time, end_time)

        repo = AppointmentRepository(db)
        AppointmentService._ensure_no_conflict(repo, data.start_time, end_time)

        appointment = Appointment(
            user_name=data.user_name,
            user_email=str(data.user_email).lower(),
            start_time=data.start_time,
            end_time=end_time,
            duration_minutes=duration,
            status=AppointmentStatus.PENDING,
            notes=data.notes,
        )
        try:
            appointment = repo.create(appointment)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create appointment")
            raise
        logger.info(f"Appointment booked: {appointment.appointment_id}")
        return appointment

    @staticmethod
    def get_appointment(db: Session, appointment_id: uuid.UUID) -> Appointment:
        appointment = AppointmentRepository(db).get_by_id(appointment_id)
        if not appointment:
            raise NotFoundError(f"Appointment {appointment_id} not found")
        return appointment

    @staticmethod
    def list_appointments(
        db: Session,
        status: Optional[AppointmentStatus] = None,
        user_email: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> AppointmentListResponse:
        items, total = AppointmentRepository(db).list_appointments(
            status=status, user_email=user_email, limit=limit, offset=offset
        )
        return AppointmentListResponse(
            items=[AppointmentResponse.model_validate(a) for a in items],
            total=total,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    def update_appointment(
        db: Session, appointment_id: uuid.UUID, data: AppointmentUpdate
    ) -> Appointment:
        """
        Change an appointment.

        A time change re-checks conflicts (ignoring the appointment itself) and
        marks an active appointment as rescheduled unless a status is given.

        Raises:
            NotFoundError: Unknown appointment
            ServiceValidationError: Cancelled appointment or invalid window
            ConflictError: New window overlaps another active appointment
        """
        repo = AppointmentRepository(db)
        appointment = AppointmentService.get_appointment(db, appointment_id)
        if appointment.status == AppointmentStatus.CANCELLED:
            raise ServiceValidationError("Cancelled appointments cannot be modified")

        changes = data.model_dump(exclude_unset=True)
        time_changed = any(
            key in changes for key in ("start_time", "end_time", "duration_minutes")
        )

        if time_changed:
            start_time = changes.get("start_time") or appointment.start_time
            if "end_time" in changes and changes["end_time"] is not None:
                end_time = changes["end_time"]
            else:
                minutes = changes.get("duration_minutes") or appointment.duration_minutes
                end_time = start_time + timedelta(minutes=minutes)
            if "start_time" in changes and start_time <= utcnow():
                raise ServiceValidationError(
                    "Appointment start_time must be in the future"
                )
            duration = AppointmentService._validate_window(start_time, end_time)

            new_status = changes.get("status") or appointment.status
            if new_status in ACTIVE_APPOINTMENT_STATUSES:
                AppointmentService._ensure_no_conflict(
                    repo, start_time, end_time, exclude_id=appointment.appointment_id
                )
            timing_moved = (
                start_time != appointment.start_time or end_time != appointment.end_time
            )
            appointment.start_time = start_time
            appointment.end_time = end_time
            appointment.duration_minutes = duration
            if "status" not in changes and timing_moved:
                appointment.status = AppointmentStatus.RESCHEDULED

        if changes.get("status") is not None:
            appointment.status = changes["status"]
        for field in ("user_name", "notes"):
            if field in changes and changes[field] is not None:
                setattr(appointment, field, changes[field])
        if changes.get("user_email"):
            appointment.user_email = str(changes["user_email"]).lower()

        try:
            appointment = repo.update(appointment)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to update appointment {appointment_id}")
            raise
        return appointment

    @staticmethod
    def cancel_appointment(db: Session, appointment_id: uuid.UUID) -> Appointment:
        """
        Cancel an appointment, freeing its time range.

        Raises:
            NotFoundError: Unknown appointment
            ServiceValidationError: Appointment is already cancelled
        """
        appointment = AppointmentService.get_appointment(db, appointment_id)
        if appointment.status == AppointmentStatus.CANCELLED:
            raise ServiceValidationError("Appointment is already cancelled")
        appointment.status = AppointmentStatus.CANCELLED
        appointment = AppointmentRepository(db).update(appointment)
        logger.info(f"Appointment cancelled: {appointment_id}")
        return appointment

    @staticmethod
    def check_availability(
        db: Session,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> AvailabilityResponse:
        """Whether a range is free, who blocks it, and the free slots of that day"""
        if end_time <= start_time:
            raise ServiceValidationError("end_time must be after start_time")

        repo = AppointmentRepository(db)
        conflicts = repo.find_conflicts(start_time, end_time, exclude_id)
        duration = _duration_minutes(start_time, end_time)
        duration = max(MIN_DURATION_MINUTES, min(duration, MAX_DURATION_MINUTES))
        slots = AppointmentService.day_slots(
            db, start_time.date(), duration, exclude_id=exclude_id
        )
        return AvailabilityResponse(
            is_available=not conflicts,
            conflicting_appointments=[
                AppointmentResponse.model_validate(a) for a in conflicts
            ],
            available_slots=[slot for slot in slots if slot.is_available],
        )

    @staticmethod
    def day_slots(
        db: Session,
        day: date,
        duration_minutes: int = time_slot_service.DEFAULT_DURATION_MINUTES,
        exclude_id: Optional[uuid.UUID] = None,
    ):
        day_start = datetime.combine(day, time.min)
        booked = AppointmentRepository(db).find_conflicts(
            day_start, day_start + timedelta(days=1), exclude_id
        )
        return time_slot_service.generate_slots(day, duration_minutes, booked, utcnow())

    @staticmethod
    def get_stats(db: Session) -> AppointmentStats:
        repo = AppointmentRepository(db)
        counts = repo.count_by_status()
        return AppointmentStats(
            total=sum(counts.values()),
            pending=counts.get(AppointmentStatus.PENDING, 0),
            confirmed=counts.get(AppointmentStatus.CONFIRMED, 0),
            cancelled=counts.get(AppointmentStatus.CANCELLED, 0),
            rescheduled=counts.get(AppointmentStatus.RESCHEDULED, 0),
            upcoming=repo.count_upcoming(utcnow()),
        )

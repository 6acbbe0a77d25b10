"""
Appointment Repository - Data access layer for bookings
"""

from typing import List, Optional, Tuple
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import func

from repositories.base import BaseRepository
from domain.models import Appointment
from domain.enums import AppointmentStatus, ACTIVE_APPOINTMENT_STATUSES


class AppointmentRepository(BaseRepository[Appointment]):
    """Repository for appointment data access"""

    def __init__(self, db: Session):
        super().__init__(db, Appointment)

    def find_conflicts(
        self,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[UUID] = None,
    ) -> List[Appointment]:
        """Active appointments overlapping [start_time, end_time)"""
        query = self.db.query(Appointment).filter(
            Appointment.status.in_(ACTIVE_APPOINTMENT_STATUSES),
            Appointment.start_time < end_time,
            Appointment.end_time > start_time,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.appointment_id != exclude_id)
        return query.order_by(Appointment.start_time).all()

    def list_appointments(
        self,
        status: Optional[AppointmentStatus] = None,
        user_email: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Appointment], int]:
        """Filtered page of appointments ordered by start time, plus the total count"""
        query = self.db.query(Appointment)
        if status is not None:
            query = query.filter(Appointment.status == status)
        if user_email:
            query = query.filter(
                func.lower(Appointment.user_email) == user_email.strip().lower()
            )
        total = self.count(query)
        items = (
            query.order_by(Appointment.start_time)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def count_by_status(self) -> dict:
        rows = (
            self.db.query(Appointment.status, func.count(Appointment.appointment_id))
            .group_by(Appointment.status)
            .all()
        )
        return {status: count for status, count in rows}

    def count_upcoming(self, now: datetime) -> int:
        return self.count(
            self.db.query(Appointment).filter(
                Appointment.start_time > now,
                Appointment.status.in_(ACTIVE_APPOINTMENT_STATUSES),
            )
        )

"""
Appointment scheduling models.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    String,
    Uuid,
    Enum as SQLEnum,
)
import uuid

from domain.models.database import Base, utcnow
from domain.enums import AppointmentStatus


class Appointment(Base):
    """A booked time range for a named person"""

    __tablename__ = "appointment"

    appointment_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_name = Column(String(100), nullable=False)
    user_email = Column(String(255), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    status = Column(
        SQLEnum(AppointmentStatus),
        nullable=False,
        default=AppointmentStatus.PENDING,
    )
    notes = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="check_appointment_range"),
        CheckConstraint(
            "duration_minutes >= 15 AND duration_minutes <= 480",
            name="check_appointment_duration",
        ),
    )

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from domain.enums import AppointmentStatus
from domain.schemas.common import to_naive_utc

# Alias for fields that are themselves named "date"
DateType = date


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""

    user_name: str = Field(..., min_length=1, max_length=100)
    user_email: EmailStr
    start_time: datetime
    end_time: Optional[datetime] = Field(
        None, description="Defaults to start_time + duration_minutes"
    )
    duration_minutes: int = Field(default=60, ge=15, le=480)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("user_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_name must not be blank")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_range(self):
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class AppointmentUpdate(BaseModel):
    """Schema for changing an appointment; omitted fields stay unchanged"""

    user_name: Optional[str] = Field(None, min_length=1, max_length=100)
    user_email: Optional[EmailStr] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, ge=15, le=480)
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, v):
        return to_naive_utc(v)


class AppointmentResponse(BaseModel):
    appointment_id: UUID
    user_name: str
    user_email: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    status: AppointmentStatus
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AppointmentListResponse(BaseModel):
    items: List[AppointmentResponse]
    total: int
    limit: int
    offset: int


class TimeSlot(BaseModel):
    start_time: datetime
    end_time: datetime
    is_available: bool


class AvailabilityResponse(BaseModel):
    """Result of checking a time range against active bookings"""

    is_available: bool
    conflicting_appointments: List[AppointmentResponse]
    available_slots: List[TimeSlot]


class AppointmentStats(BaseModel):
    total: int
    pending: int
    confirmed: int
    cancelled: int
    rescheduled: int
    upcoming: int


class BusinessHours(BaseModel):
    start: str  # "HH:MM"
    end: str
    timezone: str = "UTC"


class CalendarDay(BaseModel):
    """One day of a month view with its slot grid and bookings"""

    date: DateType
    day_of_week: int = Field(..., description="0 = Monday ... 6 = Sunday")
    day_name: str
    is_past_date: bool
    time_slots: List[TimeSlot]
    appointments: List[AppointmentResponse]
    available_slots: int
    total_slots: int


class PopularTimeSlot(BaseModel):
    hour: int
    count: int
    time_slot: str


class CalendarStats(BaseModel):
    total_appointments: int
    total_available_slots: int
    total_slots: int
    utilization_rate: float
    popular_time_slots: List[PopularTimeSlot]


class CalendarMonth(BaseModel):
    year: int
    month: int
    month_name: str
    days: List[CalendarDay]
    stats: CalendarStats
    business_hours: BusinessHours


class CalendarSummary(BaseModel):
    """Month totals without the per-day slot grid"""

    year: int
    month: int
    month_name: str
    total_days: int
    business_days: int
    total_appointments: int
    available_slots: int
    utilization_rate: float
    popular_time_slots: List[PopularTimeSlot]

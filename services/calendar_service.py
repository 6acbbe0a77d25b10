"""
Month calendar views for the appointment scheduler.

Builds on the daily slot grid from time_slot_service; every day of the month
gets its slots, its active bookings and availability counts.
"""

import calendar
from collections import Counter
from datetime import date, datetime, time, timedelta
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.exceptions import ServiceValidationError
from domain.models import utcnow
from domain.schemas.appointment_schemas import (
    AppointmentResponse,
    BusinessHours,
    CalendarDay,
    CalendarMonth,
    CalendarStats,
    CalendarSummary,
    PopularTimeSlot,
)
from repositories import AppointmentRepository
from services import time_slot_service

logger = logging.getLogger("appsuite.calendar")

MIN_YEAR = 2000
MAX_YEAR = 2100
POPULAR_SLOT_COUNT = 3


def _month_bounds(year: int, month: int):
    first = datetime(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]
    return first, first + timedelta(days=days_in_month), days_in_month


def popular_time_slots(appointments, limit: int = POPULAR_SLOT_COUNT) -> List[PopularTimeSlot]:
    """Busiest starting hours, most bookings first and earlier hours on ties"""
    counts = Counter(a.start_time.hour for a in appointments)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]
    return [
        PopularTimeSlot(hour=hour, count=count, time_slot=f"{hour}:00 - {hour + 1}:00")
        for hour, count in ranked
    ]


class CalendarService:
    @staticmethod
    def _validate(year: int, month: int, slot_duration: int) -> None:
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ServiceValidationError(
                f"Year must be between {MIN_YEAR} and {MAX_YEAR}"
            )
        if not 1 <= month <= 12:
            raise ServiceValidationError("Month must be between 1 and 12")
        if not (
            time_slot_service.MIN_DURATION_MINUTES
            <= slot_duration
            <= time_slot_service.MAX_DURATION_MINUTES
        ):
            raise ServiceValidationError(
                f"Duration must be between {time_slot_service.MIN_DURATION_MINUTES} "
                f"and {time_slot_service.MAX_DURATION_MINUTES} minutes"
            )

    @staticmethod
    def generate_calendar(
        db: Session,
        year: int,
        month: int,
        slot_duration: int = time_slot_service.DEFAULT_DURATION_MINUTES,
        now: Optional[datetime] = None,
    ) -> CalendarMonth:
        """
        Build the month view.

        Each day carries its slot grid (past slots and slots overlapping an
        active booking are unavailable) and the active appointments starting
        that day. Stats sum the slots of all days; utilization is the share
        of slots that are not available.

        Raises:
            ServiceValidationError: Year, month or slot duration out of range
        """
        CalendarService._validate(year, month, slot_duration)
        now = now or utcnow()
        month_start, month_end, days_in_month = _month_bounds(year, month)
        appointments = AppointmentRepository(db).find_conflicts(month_start, month_end)

        days = []
        for day_number in range(1, days_in_month + 1):
            day = date(year, month, day_number)
            day_start = datetime.combine(day, time.min)
            day_end = day_start + timedelta(days=1)
            slots = time_slot_service.generate_slots(
                day, slot_duration, appointments, now
            )
            days.append(
                CalendarDay(
                    date=day,
                    day_of_week=day.weekday(),
                    day_name=calendar.day_name[day.weekday()],
                    is_past_date=day < now.date(),
                    time_slots=slots,
                    appointments=[
                        AppointmentResponse.model_validate(a)
                        for a in appointments
                        if day_start <= a.start_time < day_end
                    ],
                    available_slots=sum(1 for slot in slots if slot.is_available),
                    total_slots=len(slots),
                )
            )

        in_month = [a for a in appointments if month_start <= a.start_time < month_end]
        total_slots = sum(d.total_slots for d in days)
        available = sum(d.available_slots for d in days)
        utilization = (total_slots - available) / total_slots if total_slots else 0.0

        logger.debug(
            f"Calendar {year}-{month:02d}: {len(in_month)} appointments, "
            f"{available}/{total_slots} slots free"
        )
        return CalendarMonth(
            year=year,
            month=month,
            month_name=calendar.month_name[month],
            days=days,
            stats=CalendarStats(
                total_appointments=len(in_month),
                total_available_slots=available,
                total_slots=total_slots,
                utilization_rate=round(utilization, 2),
                popular_time_slots=popular_time_slots(in_month),
            ),
            business_hours=BusinessHours(
                start=f"{time_slot_service.BUSINESS_HOURS_START:02d}:00",
                end=f"{time_slot_service.BUSINESS_HOURS_END:02d}:00",
            ),
        )

    @staticmethod
    def get_summary(
        db: Session,
        year: int,
        month: int,
        slot_duration: int = time_slot_service.DEFAULT_DURATION_MINUTES,
        now: Optional[datetime] = None,
    ) -> CalendarSummary:
        view = CalendarService.generate_calendar(db, year, month, slot_duration, now)
        return CalendarSummary(
            year=year,
            month=month,
            month_name=view.month_name,
            total_days=len(view.days),
            business_days=sum(1 for d in view.days if d.day_of_week < 5),
            total_appointments=view.stats.total_appointments,
            available_slots=view.stats.total_available_slots,
            utilization_rate=view.stats.utilization_rate,
            popular_time_slots=view.stats.popular_time_slots,
        )

"""
Time slot helpers for the appointment scheduler.

All times are naive UTC. Slots are generated for a single day from the
opening hour and only overlap-checked against active bookings passed in.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

from domain.models import utcnow
from domain.schemas.appointment_schemas import TimeSlot

BUSINESS_HOURS_START = 9
BUSINESS_HOURS_END = 17
# Bookable slots offered by the calendar stop one hour before closing
SLOT_DAY_END = 16
MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 480
DEFAULT_DURATION_MINUTES = 60


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open ranges overlap when each starts before the other ends."""
    return start_a < end_b and end_a > start_b


def within_business_hours(start_time: datetime, end_time: datetime) -> bool:
    opening = datetime.combine(start_time.date(), time(BUSINESS_HOURS_START))
    closing = datetime.combine(start_time.date(), time(BUSINESS_HOURS_END))
    return start_time >= opening and end_time <= closing


def generate_slots(
    day: date,
    duration_minutes: int,
    booked: Iterable,
    now: Optional[datetime] = None,
) -> List[TimeSlot]:
    """
    Build the slots of one day.

    Args:
        day: Calendar day to build
        duration_minutes: Slot length; slots are laid back to back from opening
        booked: Objects with start_time/end_time that block a slot when overlapping
        now: Reference time; slots starting at or before it are unavailable

    Returns:
        Ordered list of TimeSlot
    """
    now = now or utcnow()
    booked = list(booked)
    step = timedelta(minutes=duration_minutes)
    slot_start = datetime.combine(day, time(BUSINESS_HOURS_START))
    day_end = datetime.combine(day, time(SLOT_DAY_END))

    slots = []
    while slot_start + step <= day_end:
        slot_end = slot_start + step
        taken = any(
            overlaps(slot_start, slot_end, item.start_time, item.end_time)
            for item in booked
        )
        slots.append(
            TimeSlot(
                start_time=slot_start,
                end_time=slot_end,
                is_available=slot_start > now and not taken,
            )
        )
        slot_start = slot_end
    return slots

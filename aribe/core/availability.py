"""Availability Engine - Bookable pickup slots from fixed business hours.

Every function here is pure: the evaluation instant `now` is always passed
in by the caller. Instants are built from numeric year/month/day/hour/minute
fields and compared as local wall-clock values.
"""

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from aribe.contracts.appointment import Appointment

# Minimum notice between "now" and a bookable slot (inclusive)
MINIMUM_NOTICE = timedelta(hours=6)

SATURDAY = 5
SUNDAY = 6


def _half_hours(first: time, last: time) -> tuple[time, ...]:
    """Every 30 minutes from first to last, inclusive."""
    slots = []
    minutes = first.hour * 60 + first.minute
    end = last.hour * 60 + last.minute
    while minutes <= end:
        slots.append(time(minutes // 60, minutes % 60))
        minutes += 30
    return tuple(slots)


WEEKDAY_SLOTS: tuple[time, ...] = (
    time(8, 30),
    *_half_hours(time(9, 0), time(12, 0)),
    time(15, 30),
    time(16, 0),
    time(16, 30),
    time(17, 0),
)

SATURDAY_SLOTS: tuple[time, ...] = (
    time(8, 30),
    *_half_hours(time(9, 0), time(11, 0)),
)

# Indexed by date.weekday(): Monday=0 ... Sunday=6
BUSINESS_HOURS: dict[int, tuple[time, ...]] = {
    0: WEEKDAY_SLOTS,
    1: WEEKDAY_SLOTS,
    2: WEEKDAY_SLOTS,
    3: WEEKDAY_SLOTS,
    4: WEEKDAY_SLOTS,
    SATURDAY: SATURDAY_SLOTS,
    SUNDAY: (),
}


def wall_clock(now: datetime) -> datetime:
    """Reduce an instant to its naive wall-clock reading.

    Aware datetimes keep their own local reading; the offset is dropped.
    """
    if now.tzinfo is not None:
        return now.replace(tzinfo=None)
    return now


def business_slots(day: date) -> tuple[time, ...]:
    """Fixed slot table for the weekday of `day`."""
    return BUSINESS_HOURS[day.weekday()]


def is_business_slot(day: date, slot: time) -> bool:
    """Check whether `slot` belongs to the table of that weekday."""
    return _hour_minute(slot) in business_slots(day)


def slot_instant(day: date, slot: time) -> datetime:
    """Local instant of a slot, from explicit numeric components."""
    return datetime(day.year, day.month, day.day, slot.hour, slot.minute)


def is_slot_valid(day: date, slot: time, now: datetime) -> bool:
    """Minimum-notice rule for a single candidate slot.

    Args:
        day: Pickup date.
        slot: Pickup time.
        now: Evaluation instant.

    Returns:
        True if the slot starts at least MINIMUM_NOTICE after `now`.
    """
    return slot_instant(day, slot) - wall_clock(now) >= MINIMUM_NOTICE


def generate_slots(day: date, now: datetime) -> list[time]:
    """Business-hours table of `day` filtered by the minimum-notice rule.

    Args:
        day: Calendar date (no time component).
        now: Evaluation instant.

    Returns:
        Chronological list of valid slots; empty on Sundays.
    """
    return [slot for slot in business_slots(day) if is_slot_valid(day, slot, now)]


def available_slots(day: date, occupied: Iterable[time], now: datetime) -> list[time]:
    """Valid slots of `day` minus the occupied ones, order preserved.

    Args:
        day: Calendar date.
        occupied: Times already booked for that exact date.
        now: Evaluation instant.

    Returns:
        Chronological list of free, valid slots.
    """
    taken = {_hour_minute(slot) for slot in occupied}
    return [slot for slot in generate_slots(day, now) if slot not in taken]


def occupied_times(appointments: Iterable[Appointment], day: date) -> set[time]:
    """Times booked on `day`, whatever the appointment status."""
    return {
        _hour_minute(appointment.pickup_time)
        for appointment in appointments
        if appointment.pickup_date == day
    }


def available_slots_for(
    day: date,
    appointments: Iterable[Appointment],
    now: datetime,
) -> list[time]:
    """Free slots of `day` given the full list of existing appointments."""
    return available_slots(day, occupied_times(appointments, day), now)


def notice_cutoff(now: datetime) -> datetime:
    """Earliest bookable instant for the given evaluation instant."""
    return wall_clock(now) + MINIMUM_NOTICE


def is_stale_selection(selected: time | None, available: Iterable[time]) -> bool:
    """Tell the consumer to clear a selected time that is no longer free."""
    if selected is None:
        return False
    return _hour_minute(selected) not in {_hour_minute(slot) for slot in available}


def _hour_minute(value: time) -> time:
    # Store rows come back as "08:30:00"; compare on hour and minute only
    return time(value.hour, value.minute)

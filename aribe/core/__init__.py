"""Core package - Availability engine, validation and listings."""

from aribe.core.availability import (
    available_slots,
    generate_slots,
    is_slot_valid,
)
from aribe.core.listings import group_trips_by_destination, sort_appointments
from aribe.core.validators import validate_appointment_form, validate_trip_form

__all__ = [
    "available_slots",
    "generate_slots",
    "is_slot_valid",
    "group_trips_by_destination",
    "sort_appointments",
    "validate_appointment_form",
    "validate_trip_form",
]

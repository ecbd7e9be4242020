"""Contracts package - Pydantic schemas for data validation."""

from aribe.contracts.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentForm,
    AppointmentStatus,
    AppointmentStatusUpdate,
)
from aribe.contracts.booking import (
    AvailableSlots,
    BookingOutcome,
    ErrorKind,
    ListingStats,
)
from aribe.contracts.trip import (
    Location,
    Trip,
    TripCreate,
    TripForm,
    TripGroup,
    TripStatus,
    TripStatusUpdate,
)
from aribe.contracts.user import AuthResult, LoginRequest, UserProfile, UserRole
from aribe.contracts.validation import ValidationErrorCode, ValidationResult

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AppointmentForm",
    "AppointmentStatus",
    "AppointmentStatusUpdate",
    "AvailableSlots",
    "BookingOutcome",
    "ErrorKind",
    "ListingStats",
    "Location",
    "Trip",
    "TripCreate",
    "TripForm",
    "TripGroup",
    "TripStatus",
    "TripStatusUpdate",
    "AuthResult",
    "LoginRequest",
    "UserProfile",
    "UserRole",
    "ValidationErrorCode",
    "ValidationResult",
]

"""Form Validators - Required fields and business rules for both forms.

Every check appends one error; the caller gets the full ordered list.
Temporal rules are delegated to the availability engine.
"""

from datetime import datetime

from aribe.contracts.appointment import AppointmentForm
from aribe.contracts.trip import Location, TripForm
from aribe.contracts.validation import ValidationErrorCode, ValidationResult
from aribe.core.availability import SUNDAY, is_business_slot, is_slot_valid, wall_clock
from aribe.core.templates import validation_message

REQUIRED_APPOINTMENT_FIELDS: tuple[tuple[str, ValidationErrorCode], ...] = (
    ("first_name", ValidationErrorCode.FIRST_NAME_REQUIRED),
    ("last_name", ValidationErrorCode.LAST_NAME_REQUIRED),
    ("phone", ValidationErrorCode.PHONE_REQUIRED),
    ("model", ValidationErrorCode.MODEL_REQUIRED),
    ("color", ValidationErrorCode.COLOR_REQUIRED),
    ("chassis", ValidationErrorCode.CHASSIS_REQUIRED),
    ("order_number", ValidationErrorCode.ORDER_NUMBER_REQUIRED),
)

REQUIRED_TRIP_FIELDS: tuple[tuple[str, ValidationErrorCode], ...] = (
    ("model", ValidationErrorCode.MODEL_REQUIRED),
    ("color", ValidationErrorCode.COLOR_REQUIRED),
    ("chassis", ValidationErrorCode.CHASSIS_REQUIRED),
    ("order_number", ValidationErrorCode.ORDER_NUMBER_REQUIRED),
)

KNOWN_LOCATIONS = frozenset(location.value for location in Location)


def _fail(result: ValidationResult, code: ValidationErrorCode) -> None:
    result.codes.append(code)
    result.errors.append(validation_message(code.value))


def validate_appointment_form(form: AppointmentForm, now: datetime) -> ValidationResult:
    """Validate an appointment form.

    Checks, in order: required text fields, date present, time present,
    date not in the past, date not a Sunday, minimum notice, and the time
    belonging to that weekday's business hours.

    Args:
        form: Submitted form.
        now: Evaluation instant.

    Returns:
        ValidationResult with the ordered errors.
    """
    result = ValidationResult()

    for field, code in REQUIRED_APPOINTMENT_FIELDS:
        if not getattr(form, field).strip():
            _fail(result, code)

    if form.pickup_date is None:
        _fail(result, ValidationErrorCode.PICKUP_DATE_REQUIRED)
    if form.pickup_time is None:
        _fail(result, ValidationErrorCode.PICKUP_TIME_REQUIRED)

    if form.pickup_date is None:
        return result

    is_sunday = form.pickup_date.weekday() == SUNDAY

    if form.pickup_date < wall_clock(now).date():
        _fail(result, ValidationErrorCode.PICKUP_DATE_IN_PAST)
    if is_sunday:
        _fail(result, ValidationErrorCode.SUNDAY_CLOSED)

    if form.pickup_time is not None:
        if not is_slot_valid(form.pickup_date, form.pickup_time, now):
            _fail(result, ValidationErrorCode.MINIMUM_NOTICE)
        if not is_sunday and not is_business_slot(form.pickup_date, form.pickup_time):
            _fail(result, ValidationErrorCode.OUTSIDE_BUSINESS_HOURS)

    return result


def validate_trip_form(form: TripForm) -> ValidationResult:
    """Validate a trip form. Trips have no temporal rules.

    Args:
        form: Submitted form.

    Returns:
        ValidationResult with the ordered errors.
    """
    result = ValidationResult()

    _check_location(
        result,
        form.origin,
        form.origin_other,
        required=ValidationErrorCode.ORIGIN_REQUIRED,
        invalid=ValidationErrorCode.ORIGIN_INVALID,
        other_required=ValidationErrorCode.ORIGIN_OTHER_REQUIRED,
    )
    _check_location(
        result,
        form.destination,
        form.destination_other,
        required=ValidationErrorCode.DESTINATION_REQUIRED,
        invalid=ValidationErrorCode.DESTINATION_INVALID,
        other_required=ValidationErrorCode.DESTINATION_OTHER_REQUIRED,
    )

    for field, code in REQUIRED_TRIP_FIELDS:
        if not getattr(form, field).strip():
            _fail(result, code)

    return result


def _check_location(
    result: ValidationResult,
    selected: str,
    other: str,
    *,
    required: ValidationErrorCode,
    invalid: ValidationErrorCode,
    other_required: ValidationErrorCode,
) -> None:
    if not selected:
        _fail(result, required)
    elif selected not in KNOWN_LOCATIONS:
        _fail(result, invalid)
    elif selected == Location.OTHER.value and not other.strip():
        _fail(result, other_required)

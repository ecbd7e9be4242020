"""Validation Contract - Structured results of form validation."""

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class ValidationErrorCode(str, Enum):
    """Tipos estáveis de erro de validação."""

    # Appointment form
    FIRST_NAME_REQUIRED = "first_name_required"
    LAST_NAME_REQUIRED = "last_name_required"
    PHONE_REQUIRED = "phone_required"
    MODEL_REQUIRED = "model_required"
    COLOR_REQUIRED = "color_required"
    CHASSIS_REQUIRED = "chassis_required"
    ORDER_NUMBER_REQUIRED = "order_number_required"
    PICKUP_DATE_REQUIRED = "pickup_date_required"
    PICKUP_TIME_REQUIRED = "pickup_time_required"
    PICKUP_DATE_IN_PAST = "pickup_date_in_past"
    SUNDAY_CLOSED = "sunday_closed"
    MINIMUM_NOTICE = "minimum_notice"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"

    # Trip form
    ORIGIN_REQUIRED = "origin_required"
    ORIGIN_INVALID = "origin_invalid"
    ORIGIN_OTHER_REQUIRED = "origin_other_required"
    DESTINATION_REQUIRED = "destination_required"
    DESTINATION_INVALID = "destination_invalid"
    DESTINATION_OTHER_REQUIRED = "destination_other_required"


class ValidationResult(BaseModel):
    """Resultado de validação de formulário.

    errors and codes are parallel lists in check order.
    """

    codes: list[ValidationErrorCode] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        """True when no check failed."""
        return not self.codes

"""Response helpers - Map workflow outcomes to HTTP status codes."""

from fastapi import status
from fastapi.responses import JSONResponse

from aribe.contracts.booking import BookingOutcome, ErrorKind

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.SLOT_TAKEN: status.HTTP_409_CONFLICT,
    ErrorKind.COLLABORATOR_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def outcome_response(
    outcome: BookingOutcome,
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Serialize an outcome with the status code of its error kind."""
    if outcome.success or outcome.error_kind is None:
        status_code = success_status
    else:
        status_code = ERROR_STATUS[outcome.error_kind]
    return JSONResponse(status_code=status_code, content=outcome.model_dump(mode="json"))

"""Error Types - Failure kinds raised by collaborators and the workflow.

The availability engine and validators never raise for business
conditions; they return structured results. These exceptions come from the
I/O collaborators and are translated by the booking workflow or the HTTP
exception handlers.
"""

from datetime import date, time


class AribeError(Exception):
    """Base class for all service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SlotTakenError(AribeError):
    """The store rejected a write because (date, time) is already booked."""

    def __init__(self, pickup_date: date, pickup_time: time) -> None:
        super().__init__(
            f"Horário {pickup_time.strftime('%H:%M')} de "
            f"{pickup_date.isoformat()} já está ocupado"
        )
        self.pickup_date = pickup_date
        self.pickup_time = pickup_time


class CollaboratorError(AribeError):
    """Any other failure from the persistence or identity collaborators."""

    def __init__(self, operation: str, cause: Exception | None = None) -> None:
        detail = f": {cause}" if cause else ""
        super().__init__(f"Falha em {operation}{detail}")
        self.operation = operation
        self.cause = cause


class NotFoundError(AribeError):
    """No record with the given id exists."""

    def __init__(self, entity: str, record_id: str) -> None:
        super().__init__(f"{entity} {record_id} não encontrado")
        self.entity = entity
        self.record_id = record_id


class InvalidTransitionError(AribeError, ValueError):
    """Status change outside the allowed transitions."""

"""Status Transitions - Allowed status changes per entity.

Both entities have two states and two reversible transitions; there is no
terminal state.
"""

from aribe.contracts.appointment import AppointmentStatus
from aribe.contracts.trip import TripStatus
from aribe.core.errors import InvalidTransitionError

EntityStatus = AppointmentStatus | TripStatus

# Valid status transitions
APPOINTMENT_TRANSITIONS: dict[AppointmentStatus, list[AppointmentStatus]] = {
    AppointmentStatus.PENDING: [AppointmentStatus.DELIVERED],
    AppointmentStatus.DELIVERED: [AppointmentStatus.PENDING],
}

TRIP_TRANSITIONS: dict[TripStatus, list[TripStatus]] = {
    TripStatus.PENDING: [TripStatus.COMPLETED],
    TripStatus.COMPLETED: [TripStatus.PENDING],
}


def _allowed(current: EntityStatus) -> list[EntityStatus]:
    if isinstance(current, AppointmentStatus):
        return list(APPOINTMENT_TRANSITIONS.get(current, []))
    return list(TRIP_TRANSITIONS.get(current, []))


def can_transition(current: EntityStatus, target: EntityStatus) -> bool:
    """Valida se transição é permitida.

    Args:
        current: Status atual.
        target: Status de destino desejado.

    Returns:
        True se a transição é válida, False caso contrário.
    """
    return target in _allowed(current)


def transition(current: EntityStatus, target: EntityStatus) -> EntityStatus:
    """Executa transição de status.

    Args:
        current: Status atual.
        target: Status de destino.

    Returns:
        O novo status.

    Raises:
        InvalidTransitionError: Se a transição não for permitida.
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Transição inválida: {current.value} -> {target.value}"
        )
    return target

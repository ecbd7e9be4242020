"""Booking Contract - Workflow outcomes and listing views."""

from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_serializer


class ErrorKind(str, Enum):
    """Categorias de falha apresentadas ao usuário."""

    VALIDATION = "validation"
    SLOT_TAKEN = "slot_taken"
    COLLABORATOR_FAILURE = "collaborator_failure"


class AvailableSlots(BaseModel):
    """Horários livres de uma data."""

    pickup_date: date = Field(..., description="Data consultada")
    weekday: str = Field("", description="Dia da semana")
    slots: list[time] = Field(default_factory=list, description="Horários livres")
    cutoff: datetime = Field(..., description="Antecedência mínima: após este instante")
    notice: str = Field("", description="Aviso de antecedência mínima")

    @field_serializer("slots")
    def serialize_slots(self, value: list[time]) -> list[str]:
        return [slot.strftime("%H:%M") for slot in value]

    @field_serializer("cutoff")
    def serialize_cutoff(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%dT%H:%M")


class BookingOutcome(BaseModel):
    """Resultado de uma operação do fluxo de cadastro.

    On success `record` holds the stored entity. On SLOT_TAKEN the fresh
    `available` slots are attached and `clear_selection` tells the caller
    to drop the stale time.
    """

    success: bool = Field(..., description="Se a operação foi concluída")
    message: str = Field(..., description="Mensagem para o usuário")
    record: dict[str, Any] | None = Field(None, description="Registro gravado")
    error_kind: ErrorKind | None = Field(None, description="Categoria da falha")
    errors: list[str] = Field(default_factory=list, description="Erros de validação")
    available: AvailableSlots | None = Field(
        None,
        description="Horários recalculados após conflito",
    )
    clear_selection: bool = Field(
        False,
        description="Se o horário escolhido deve ser limpo",
    )


class ListingStats(BaseModel):
    """Contadores recalculados a cada leitura."""

    appointments_pending: int = 0
    appointments_delivered: int = 0
    appointments_total: int = 0
    trips_pending: int = 0
    trips_completed: int = 0
    trips_total: int = 0

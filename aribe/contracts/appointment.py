"""Appointment Contract - Models for pickup appointments (agendamentos)."""

from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class AppointmentStatus(str, Enum):
    """Status possíveis de um agendamento."""

    PENDING = "pendente"
    DELIVERED = "entregue"


class AppointmentForm(BaseModel):
    """Formulário de cadastro de agendamento.

    Text fields default to empty strings and date/time to None, so presence
    is checked by the validators instead of failing at parse time.
    """

    first_name: str = Field("", description="Nome do cliente")
    last_name: str = Field("", description="Sobrenome do cliente")
    phone: str = Field("", description="Telefone (formatação livre)")
    model: str = Field("", description="Modelo da moto")
    color: str = Field("", description="Cor da moto")
    chassis: str = Field("", description="Chassi da moto")
    order_number: str = Field("", description="Número do pedido")
    pickup_date: date | None = Field(None, description="Data de retirada")
    pickup_time: time | None = Field(None, description="Horário de retirada")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Maria",
                "last_name": "Souza",
                "phone": "(79) 99999-1234",
                "model": "Honda CG 160",
                "color": "Vermelha",
                "chassis": "9C2KC2200NR000001",
                "order_number": "PED-1042",
                "pickup_date": "2026-02-18",
                "pickup_time": "09:30",
            }
        }
    )

    @property
    def full_name(self) -> str:
        """Nome completo como gravado no agendamento."""
        return f"{self.first_name.strip()} {self.last_name.strip()}"


class AppointmentCreate(BaseModel):
    """Schema para criação de agendamento (já validado)."""

    full_name: str = Field(..., min_length=1, description="Nome completo")
    phone: str = Field(..., min_length=1, description="Telefone")
    model: str = Field(..., min_length=1, description="Modelo da moto")
    color: str = Field(..., min_length=1, description="Cor da moto")
    chassis: str = Field(..., min_length=1, description="Chassi")
    order_number: str = Field(..., min_length=1, description="Número do pedido")
    pickup_date: date = Field(..., description="Data de retirada")
    pickup_time: time = Field(..., description="Horário de retirada")
    status: AppointmentStatus = Field(
        default=AppointmentStatus.PENDING,
        description="Status inicial",
    )

    @classmethod
    def from_form(cls, form: AppointmentForm) -> "AppointmentCreate":
        """Build the insert payload from a validated form."""
        return cls(
            full_name=form.full_name,
            phone=form.phone.strip(),
            model=form.model.strip(),
            color=form.color.strip(),
            chassis=form.chassis.strip(),
            order_number=form.order_number.strip(),
            pickup_date=form.pickup_date,  # type: ignore[arg-type]
            pickup_time=form.pickup_time,  # type: ignore[arg-type]
        )

    @field_serializer("pickup_time")
    def serialize_pickup_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class Appointment(BaseModel):
    """Schema completo de agendamento (leitura do banco)."""

    id: str = Field(..., description="ID único do agendamento")
    full_name: str = Field(..., description="Nome completo")
    phone: str = Field(..., description="Telefone")
    model: str = Field(..., description="Modelo da moto")
    color: str = Field(..., description="Cor da moto")
    chassis: str = Field(..., description="Chassi")
    order_number: str = Field(..., description="Número do pedido")
    pickup_date: date = Field(..., description="Data de retirada")
    pickup_time: time = Field(..., description="Horário de retirada")
    status: AppointmentStatus = Field(..., description="Status atual")
    created_at: datetime = Field(..., description="Data de cadastro")

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "3f1c2d9a-8e21-4a55-9a0e-2f3b7c1d0e11",
                "full_name": "Maria Souza",
                "phone": "(79) 99999-1234",
                "model": "Honda CG 160",
                "color": "Vermelha",
                "chassis": "9C2KC2200NR000001",
                "order_number": "PED-1042",
                "pickup_date": "2026-02-18",
                "pickup_time": "09:30",
                "status": "pendente",
                "created_at": "2026-02-16T10:00:00Z",
            }
        },
    )

    @field_serializer("pickup_time")
    def serialize_pickup_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class AppointmentStatusUpdate(BaseModel):
    """Corpo da requisição de troca de status do agendamento."""

    status: AppointmentStatus = Field(..., description="Novo status")

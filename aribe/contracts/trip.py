"""Trip Contract - Models for inter-branch motorcycle transfers (viagens)."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Location(str, Enum):
    """Locais disponíveis para origem e destino."""

    ARACAJU = "Aracaju"
    SOCORRO = "Socorro"
    ITABAIANA = "Itabaiana"
    OTHER = "Outros"


class TripStatus(str, Enum):
    """Status possíveis de uma viagem."""

    PENDING = "pendente"
    COMPLETED = "concluida"


class TripForm(BaseModel):
    """Formulário de cadastro de viagem.

    origin/destination carry a Location value; when it is "Outros" the
    free-form *_other field names the actual place.
    """

    origin: str = Field("", description="Origem selecionada")
    origin_other: str = Field("", description="Origem livre quando 'Outros'")
    destination: str = Field("", description="Destino selecionado")
    destination_other: str = Field("", description="Destino livre quando 'Outros'")
    model: str = Field("", description="Modelo da moto")
    color: str = Field("", description="Cor da moto")
    chassis: str = Field("", description="Chassi da moto")
    order_number: str = Field("", description="Número do pedido")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "origin": "Aracaju",
                "origin_other": "",
                "destination": "Outros",
                "destination_other": "Lagarto",
                "model": "Yamaha Fazer 250",
                "color": "Azul",
                "chassis": "9C6RG3850P0000002",
                "order_number": "PED-2001",
            }
        }
    )

    @property
    def resolved_origin(self) -> str:
        """Origem efetiva (texto livre quando 'Outros')."""
        if self.origin == Location.OTHER.value:
            return self.origin_other.strip()
        return self.origin

    @property
    def resolved_destination(self) -> str:
        """Destino efetivo (texto livre quando 'Outros')."""
        if self.destination == Location.OTHER.value:
            return self.destination_other.strip()
        return self.destination


class TripCreate(BaseModel):
    """Schema para criação de viagem (já validada)."""

    origin: str = Field(..., min_length=1, description="Origem")
    destination: str = Field(..., min_length=1, description="Destino")
    model: str = Field(..., min_length=1, description="Modelo da moto")
    color: str = Field(..., min_length=1, description="Cor da moto")
    chassis: str = Field(..., min_length=1, description="Chassi")
    order_number: str = Field(..., min_length=1, description="Número do pedido")
    status: TripStatus = Field(
        default=TripStatus.PENDING,
        description="Status inicial",
    )

    @classmethod
    def from_form(cls, form: TripForm) -> "TripCreate":
        """Build the insert payload from a validated form."""
        return cls(
            origin=form.resolved_origin,
            destination=form.resolved_destination,
            model=form.model.strip(),
            color=form.color.strip(),
            chassis=form.chassis.strip(),
            order_number=form.order_number.strip(),
        )


class Trip(BaseModel):
    """Schema completo de viagem (leitura do banco)."""

    id: str = Field(..., description="ID único da viagem")
    origin: str = Field(..., description="Origem")
    destination: str = Field(..., description="Destino")
    model: str = Field(..., description="Modelo da moto")
    color: str = Field(..., description="Cor da moto")
    chassis: str = Field(..., description="Chassi")
    order_number: str = Field(..., description="Número do pedido")
    status: TripStatus = Field(..., description="Status atual")
    created_at: datetime = Field(..., description="Data de cadastro")

    model_config = ConfigDict(from_attributes=True, frozen=True)


class TripStatusUpdate(BaseModel):
    """Corpo da requisição de troca de status da viagem."""

    status: TripStatus = Field(..., description="Novo status")


class TripGroup(BaseModel):
    """Viagens agrupadas por destino."""

    destination: str
    trips: list[Trip]

"""Serviço do Supabase - Persistência de agendamentos e viagens."""

from datetime import date, time
from typing import Any

from postgrest.exceptions import APIError
from pydantic import ValidationError

from aribe.config.settings import get_settings
from aribe.contracts.appointment import Appointment, AppointmentCreate, AppointmentStatus
from aribe.contracts.trip import Trip, TripCreate, TripStatus
from aribe.core.errors import CollaboratorError, NotFoundError, SlotTakenError
from aribe.utils.logger import get_logger
from supabase import Client, ClientOptions, create_client

logger = get_logger(__name__)

APPOINTMENTS_TABLE = "agendamentos"
TRIPS_TABLE = "viagens"

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"


def create_supabase_client() -> Client:
    """Cria um novo cliente Supabase a partir das configurações."""
    settings = get_settings()

    # Prioriza a service key para operações de backend para ignorar RLS (Row Level Security)
    key = settings.supabase_service_key or settings.supabase_key

    if not key or not settings.supabase_url:
        logger.warning(
            "supabase_not_configured",
            message="Credenciais do Supabase não configuradas.",
        )
        if not settings.is_development:
            raise ValueError("Credenciais do Supabase são obrigatórias fora de desenvolvimento")

    client = create_client(settings.supabase_url, key)

    logger.info(
        "supabase_client_created",
        using_service_key=key == settings.supabase_service_key,
        key_preview=key[:5] + "..." if key else "None",
    )
    return client


def create_session_client() -> Client:
    """Cria um cliente descartável para login com senha.

    O login grava o token do usuário no header Authorization do cliente
    que o executou; por isso nunca roda no cliente compartilhado da
    service key.
    """
    settings = get_settings()
    key = settings.supabase_key or settings.supabase_service_key
    return create_client(
        settings.supabase_url,
        key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )


class SupabaseService:
    """Serviço encapsulado para operações no Supabase.

    Falhas do banco são traduzidas para SlotTakenError (horário já
    reservado), NotFoundError (id inexistente) ou CollaboratorError.
    """

    def __init__(self, client: Client | None = None) -> None:
        """Inicializa o serviço com um cliente Supabase.

        Args:
            client: Cliente Supabase opcional. Se não fornecido, cria um novo baseado nas settings.
        """
        self.client = client or create_supabase_client()

    def _execute(self, operation: str, query: Any) -> list[dict[str, Any]]:
        """Executa a query e traduz falhas para CollaboratorError."""
        try:
            result = query.execute()
        except Exception as e:
            logger.error("supabase_operation_failed", operation=operation, error=str(e))
            raise CollaboratorError(operation, e) from e
        return result.data or []

    # ------------------------------------------------------------------
    # Agendamentos
    # ------------------------------------------------------------------

    async def list_appointments(self) -> list[Appointment]:
        """Lista agendamentos, mais recentes primeiro.

        Linhas com dados inválidos (ex: status desconhecido) são descartadas.
        """
        rows = self._execute(
            "list_appointments",
            self.client.table(APPOINTMENTS_TABLE)
            .select("*")
            .order("created_at", desc=True),
        )
        appointments = [a for a in (_parse(Appointment, row) for row in rows) if a]

        logger.info("appointments_fetched", count=len(appointments))
        return appointments

    async def occupied_times(self, pickup_date: date) -> set[time]:
        """Horários já reservados para uma data (qualquer status).

        Args:
            pickup_date: Data de retirada.

        Returns:
            Conjunto de horários ocupados.
        """
        rows = self._execute(
            "occupied_times",
            self.client.table(APPOINTMENTS_TABLE)
            .select("pickup_time")
            .eq("pickup_date", pickup_date.isoformat()),
        )
        return {time.fromisoformat(row["pickup_time"]) for row in rows}

    async def create_appointment(self, appointment: AppointmentCreate) -> Appointment:
        """Cria agendamento no banco de dados.

        A verificação prévia de ocupação é só uma otimização; a restrição
        UNIQUE (pickup_date, pickup_time) do banco é a palavra final.

        Args:
            appointment: Dados validados do agendamento.

        Returns:
            Agendamento criado.

        Raises:
            SlotTakenError: Se o horário já estiver reservado.
            CollaboratorError: Para qualquer outra falha.
        """
        pickup_date = appointment.pickup_date
        pickup_time = appointment.pickup_time

        taken = await self.occupied_times(pickup_date)
        if time(pickup_time.hour, pickup_time.minute) in taken:
            logger.info(
                "appointment_slot_already_taken",
                pickup_date=pickup_date.isoformat(),
                pickup_time=pickup_time.strftime("%H:%M"),
            )
            raise SlotTakenError(pickup_date, pickup_time)

        try:
            result = (
                self.client.table(APPOINTMENTS_TABLE)
                .insert(appointment.model_dump(mode="json"))
                .execute()
            )
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.warning(
                    "appointment_slot_conflict",
                    pickup_date=pickup_date.isoformat(),
                    pickup_time=pickup_time.strftime("%H:%M"),
                )
                raise SlotTakenError(pickup_date, pickup_time) from e
            logger.error("appointment_create_failed", error=str(e), code=e.code)
            raise CollaboratorError("create_appointment", e) from e
        except Exception as e:
            logger.error("appointment_create_failed", error=str(e))
            raise CollaboratorError("create_appointment", e) from e

        if not result.data:
            raise CollaboratorError("create_appointment")

        created = Appointment.model_validate(result.data[0])
        logger.info(
            "appointment_created",
            appointment_id=created.id,
            pickup_date=created.pickup_date.isoformat(),
            pickup_time=created.pickup_time.strftime("%H:%M"),
        )
        return created

    async def get_appointment(self, appointment_id: str) -> Appointment:
        """Busca agendamento pelo ID.

        Raises:
            NotFoundError: Se não existir.
        """
        rows = self._execute(
            "get_appointment",
            self.client.table(APPOINTMENTS_TABLE)
            .select("*")
            .eq("id", appointment_id)
            .limit(1),
        )
        if not rows:
            raise NotFoundError("Agendamento", appointment_id)
        return Appointment.model_validate(rows[0])

    async def update_appointment_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> Appointment:
        """Atualiza o status do agendamento.

        Args:
            appointment_id: ID do agendamento.
            status: Novo status.

        Returns:
            Agendamento atualizado.
        """
        rows = self._execute(
            "update_appointment_status",
            self.client.table(APPOINTMENTS_TABLE)
            .update({"status": status.value})
            .eq("id", appointment_id),
        )
        if not rows:
            raise NotFoundError("Agendamento", appointment_id)

        logger.info(
            "appointment_status_updated",
            appointment_id=appointment_id,
            status=status.value,
        )
        return Appointment.model_validate(rows[0])

    async def delete_appointment(self, appointment_id: str) -> None:
        """Exclui agendamento pelo ID."""
        rows = self._execute(
            "delete_appointment",
            self.client.table(APPOINTMENTS_TABLE).delete().eq("id", appointment_id),
        )
        if not rows:
            raise NotFoundError("Agendamento", appointment_id)

        logger.info("appointment_deleted", appointment_id=appointment_id)

    # ------------------------------------------------------------------
    # Viagens
    # ------------------------------------------------------------------

    async def list_trips(self) -> list[Trip]:
        """Lista viagens, mais recentes primeiro."""
        rows = self._execute(
            "list_trips",
            self.client.table(TRIPS_TABLE).select("*").order("created_at", desc=True),
        )
        trips = [t for t in (_parse(Trip, row) for row in rows) if t]

        logger.info("trips_fetched", count=len(trips))
        return trips

    async def create_trip(self, trip: TripCreate) -> Trip:
        """Cria viagem no banco de dados."""
        rows = self._execute(
            "create_trip",
            self.client.table(TRIPS_TABLE).insert(trip.model_dump(mode="json")),
        )
        if not rows:
            raise CollaboratorError("create_trip")

        created = Trip.model_validate(rows[0])
        logger.info(
            "trip_created",
            trip_id=created.id,
            origin=created.origin,
            destination=created.destination,
        )
        return created

    async def get_trip(self, trip_id: str) -> Trip:
        """Busca viagem pelo ID.

        Raises:
            NotFoundError: Se não existir.
        """
        rows = self._execute(
            "get_trip",
            self.client.table(TRIPS_TABLE).select("*").eq("id", trip_id).limit(1),
        )
        if not rows:
            raise NotFoundError("Viagem", trip_id)
        return Trip.model_validate(rows[0])

    async def update_trip_status(self, trip_id: str, status: TripStatus) -> Trip:
        """Atualiza o status da viagem."""
        rows = self._execute(
            "update_trip_status",
            self.client.table(TRIPS_TABLE)
            .update({"status": status.value})
            .eq("id", trip_id),
        )
        if not rows:
            raise NotFoundError("Viagem", trip_id)

        logger.info("trip_status_updated", trip_id=trip_id, status=status.value)
        return Trip.model_validate(rows[0])

    async def delete_trip(self, trip_id: str) -> None:
        """Exclui viagem pelo ID."""
        rows = self._execute(
            "delete_trip",
            self.client.table(TRIPS_TABLE).delete().eq("id", trip_id),
        )
        if not rows:
            raise NotFoundError("Viagem", trip_id)

        logger.info("trip_deleted", trip_id=trip_id)


def _parse(model: type[Appointment] | type[Trip], row: dict[str, Any]) -> Any:
    try:
        return model.model_validate(row)
    except ValidationError as e:
        logger.warning(
            "row_rejected",
            model=model.__name__,
            row_id=row.get("id"),
            error=str(e),
        )
        return None


# Instância global, usada pelas dependências do FastAPI
_supabase_service: SupabaseService | None = None


def get_supabase_service() -> SupabaseService:
    """Retorna ou cria instância global do serviço."""
    global _supabase_service
    if _supabase_service is None:
        _supabase_service = SupabaseService()
    return _supabase_service

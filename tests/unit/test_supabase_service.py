"""Unit Tests - Supabase persistence service."""

from datetime import date, time
from typing import Any
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from aribe.config.settings import Settings
from aribe.contracts.appointment import AppointmentCreate, AppointmentStatus
from aribe.contracts.trip import TripCreate, TripStatus
from aribe.core.errors import CollaboratorError, NotFoundError, SlotTakenError
from aribe.services.supabase import APPOINTMENTS_TABLE, SupabaseService, create_supabase_client


def appointment_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": "3f1c2d9a-8e21-4a55-9a0e-2f3b7c1d0e11",
        "full_name": "Maria Souza",
        "phone": "(79) 99999-1234",
        "model": "Honda CG 160",
        "color": "Vermelha",
        "chassis": "9C2KC2200NR000001",
        "order_number": "PED-1042",
        "pickup_date": "2026-02-18",
        "pickup_time": "09:30:00",
        "status": "pendente",
        "created_at": "2026-02-16T10:00:00+00:00",
    }
    row.update(overrides)
    return row


def trip_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": "8d0f6c1e-1b2a-4c3d-9e8f-0a1b2c3d4e5f",
        "origin": "Aracaju",
        "destination": "Lagarto",
        "model": "Yamaha Fazer 250",
        "color": "Azul",
        "chassis": "9C6RG3850P0000002",
        "order_number": "PED-2001",
        "status": "pendente",
        "created_at": "2026-02-16T10:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(client: MagicMock) -> SupabaseService:
    return SupabaseService(client)


@pytest.fixture
def payload() -> AppointmentCreate:
    return AppointmentCreate(
        full_name="Maria Souza",
        phone="(79) 99999-1234",
        model="Honda CG 160",
        color="Vermelha",
        chassis="9C2KC2200NR000001",
        order_number="PED-1042",
        pickup_date=date(2026, 2, 18),
        pickup_time=time(9, 30),
    )


def occupancy_query(client: MagicMock) -> MagicMock:
    return client.table.return_value.select.return_value.eq.return_value


def insert_query(client: MagicMock) -> MagicMock:
    return client.table.return_value.insert.return_value


class TestAppointments:
    """Tests for appointment persistence."""

    async def test_list_parses_rows(self, service: SupabaseService, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.order.return_value
        query.execute.return_value = MagicMock(data=[appointment_row()])

        result = await service.list_appointments()

        client.table.assert_called_with(APPOINTMENTS_TABLE)
        assert len(result) == 1
        assert result[0].pickup_time == time(9, 30)
        assert result[0].status == AppointmentStatus.PENDING

    async def test_list_skips_invalid_rows(
        self, service: SupabaseService, client: MagicMock
    ) -> None:
        """Unknown status values are dropped instead of failing the list."""
        query = client.table.return_value.select.return_value.order.return_value
        query.execute.return_value = MagicMock(
            data=[appointment_row(), appointment_row(id="bad", status="cancelado")]
        )

        result = await service.list_appointments()

        assert [a.id for a in result] == ["3f1c2d9a-8e21-4a55-9a0e-2f3b7c1d0e11"]

    async def test_list_failure(self, service: SupabaseService, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.order.return_value
        query.execute.side_effect = ConnectionError("timeout")

        with pytest.raises(CollaboratorError) as exc_info:
            await service.list_appointments()

        assert exc_info.value.operation == "list_appointments"

    async def test_occupied_times(self, service: SupabaseService, client: MagicMock) -> None:
        occupancy_query(client).execute.return_value = MagicMock(
            data=[{"pickup_time": "09:00:00"}, {"pickup_time": "16:30:00"}]
        )

        result = await service.occupied_times(date(2026, 2, 18))

        client.table.return_value.select.return_value.eq.assert_called_with(
            "pickup_date", "2026-02-18"
        )
        assert result == {time(9, 0), time(16, 30)}

    async def test_create(
        self, service: SupabaseService, client: MagicMock, payload: AppointmentCreate
    ) -> None:
        occupancy_query(client).execute.return_value = MagicMock(data=[])
        insert_query(client).execute.return_value = MagicMock(data=[appointment_row()])

        created = await service.create_appointment(payload)

        inserted = client.table.return_value.insert.call_args.args[0]
        assert inserted["pickup_date"] == "2026-02-18"
        assert inserted["pickup_time"] == "09:30"
        assert inserted["status"] == "pendente"
        assert created.full_name == "Maria Souza"

    async def test_create_on_occupied_slot(
        self, service: SupabaseService, client: MagicMock, payload: AppointmentCreate
    ) -> None:
        """The pre-check rejects without attempting the insert."""
        occupancy_query(client).execute.return_value = MagicMock(
            data=[{"pickup_time": "09:30:00"}]
        )

        with pytest.raises(SlotTakenError):
            await service.create_appointment(payload)

        client.table.return_value.insert.assert_not_called()

    async def test_unique_violation_is_slot_taken(
        self, service: SupabaseService, client: MagicMock, payload: AppointmentCreate
    ) -> None:
        """A concurrent insert loses on the UNIQUE (pickup_date, pickup_time) constraint."""
        occupancy_query(client).execute.return_value = MagicMock(data=[])
        insert_query(client).execute.side_effect = APIError(
            {
                "message": "duplicate key value violates unique constraint",
                "code": "23505",
                "hint": None,
                "details": None,
            }
        )

        with pytest.raises(SlotTakenError) as exc_info:
            await service.create_appointment(payload)

        assert exc_info.value.pickup_time == time(9, 30)

    async def test_other_api_error_is_collaborator_failure(
        self, service: SupabaseService, client: MagicMock, payload: AppointmentCreate
    ) -> None:
        occupancy_query(client).execute.return_value = MagicMock(data=[])
        insert_query(client).execute.side_effect = APIError(
            {"message": "permission denied", "code": "42501", "hint": None, "details": None}
        )

        with pytest.raises(CollaboratorError):
            await service.create_appointment(payload)

    async def test_network_error_is_collaborator_failure(
        self, service: SupabaseService, client: MagicMock, payload: AppointmentCreate
    ) -> None:
        occupancy_query(client).execute.return_value = MagicMock(data=[])
        insert_query(client).execute.side_effect = ConnectionError("reset")

        with pytest.raises(CollaboratorError) as exc_info:
            await service.create_appointment(payload)

        assert isinstance(exc_info.value.cause, ConnectionError)

    async def test_get_missing(self, service: SupabaseService, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])

        with pytest.raises(NotFoundError):
            await service.get_appointment("missing")

    async def test_update_status(self, service: SupabaseService, client: MagicMock) -> None:
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute.return_value = MagicMock(data=[appointment_row(status="entregue")])

        updated = await service.update_appointment_status("a1", AppointmentStatus.DELIVERED)

        client.table.return_value.update.assert_called_with({"status": "entregue"})
        assert updated.status == AppointmentStatus.DELIVERED

    async def test_delete_missing(self, service: SupabaseService, client: MagicMock) -> None:
        query = client.table.return_value.delete.return_value.eq.return_value
        query.execute.return_value = MagicMock(data=[])

        with pytest.raises(NotFoundError):
            await service.delete_appointment("missing")


class TestTrips:
    """Tests for trip persistence."""

    async def test_create(self, service: SupabaseService, client: MagicMock) -> None:
        insert_query(client).execute.return_value = MagicMock(data=[trip_row()])

        created = await service.create_trip(
            TripCreate(
                origin="Aracaju",
                destination="Lagarto",
                model="Yamaha Fazer 250",
                color="Azul",
                chassis="9C6RG3850P0000002",
                order_number="PED-2001",
            )
        )

        assert created.destination == "Lagarto"

    async def test_list_skips_invalid_rows(
        self, service: SupabaseService, client: MagicMock
    ) -> None:
        query = client.table.return_value.select.return_value.order.return_value
        query.execute.return_value = MagicMock(data=[trip_row(), trip_row(status="x")])

        result = await service.list_trips()

        assert len(result) == 1

    async def test_update_missing(self, service: SupabaseService, client: MagicMock) -> None:
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute.return_value = MagicMock(data=[])

        with pytest.raises(NotFoundError):
            await service.update_trip_status("missing", TripStatus.COMPLETED)


class TestClientFactory:
    """Tests for create_supabase_client."""

    def test_missing_credentials_outside_development(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settings = Settings(
            app_env="production", supabase_url="", supabase_key="", supabase_service_key=""
        )
        monkeypatch.setattr("aribe.services.supabase.get_settings", lambda: settings)

        assert not settings.is_development
        with pytest.raises(ValueError):
            create_supabase_client()

"""Pytest Configuration - Shared fixtures for tests."""

import os
from collections.abc import AsyncGenerator
from datetime import date, datetime, time, timedelta, timezone
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
os.environ["APP_ENV"] = "development"
os.environ["ENABLE_TRACING"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from aribe.contracts.appointment import (  # noqa: E402
    Appointment,
    AppointmentCreate,
    AppointmentForm,
    AppointmentStatus,
)
from aribe.contracts.trip import Trip, TripCreate, TripForm, TripStatus  # noqa: E402
from aribe.contracts.user import UserProfile, UserRole  # noqa: E402
from aribe.core.errors import (  # noqa: E402
    CollaboratorError,
    NotFoundError,
    SlotTakenError,
)

# Monday 2026-02-16 08:00, shop local time
NOW = datetime(2026, 2, 16, 8, 0)


class FakeStore:
    """In-memory stand-in for SupabaseService with the same async interface."""

    def __init__(self) -> None:
        self.appointments: dict[str, Appointment] = {}
        self.trips: dict[str, Trip] = {}
        self.fail_with: Exception | None = None
        self.steal_slot_on_create = False
        self._tick = 0

    def _created_at(self) -> datetime:
        self._tick += 1
        return datetime(2026, 2, 1, tzinfo=timezone.utc) + timedelta(minutes=self._tick)

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def add_appointment(
        self,
        pickup_date: date,
        pickup_time: time,
        status: AppointmentStatus = AppointmentStatus.PENDING,
        **fields: str,
    ) -> Appointment:
        appointment = Appointment(
            id=uuid4().hex,
            full_name=fields.get("full_name", "Maria Souza"),
            phone=fields.get("phone", "(79) 99999-1234"),
            model=fields.get("model", "Honda CG 160"),
            color=fields.get("color", "Vermelha"),
            chassis=fields.get("chassis", "9C2KC2200NR000001"),
            order_number=fields.get("order_number", "PED-1042"),
            pickup_date=pickup_date,
            pickup_time=pickup_time,
            status=status,
            created_at=self._created_at(),
        )
        self.appointments[appointment.id] = appointment
        return appointment

    def add_trip(
        self,
        destination: str,
        status: TripStatus = TripStatus.PENDING,
        origin: str = "Aracaju",
    ) -> Trip:
        trip = Trip(
            id=uuid4().hex,
            origin=origin,
            destination=destination,
            model="Yamaha Fazer 250",
            color="Azul",
            chassis="9C6RG3850P0000002",
            order_number="PED-2001",
            status=status,
            created_at=self._created_at(),
        )
        self.trips[trip.id] = trip
        return trip

    async def list_appointments(self) -> list[Appointment]:
        self._check_failure()
        return sorted(self.appointments.values(), key=lambda a: a.created_at, reverse=True)

    async def occupied_times(self, pickup_date: date) -> set[time]:
        self._check_failure()
        return {a.pickup_time for a in self.appointments.values() if a.pickup_date == pickup_date}

    async def create_appointment(self, appointment: AppointmentCreate) -> Appointment:
        self._check_failure()
        if self.steal_slot_on_create:
            # Another client wins the race between read and write
            self.add_appointment(appointment.pickup_date, appointment.pickup_time)
        if appointment.pickup_time in await self.occupied_times(appointment.pickup_date):
            raise SlotTakenError(appointment.pickup_date, appointment.pickup_time)
        return self.add_appointment(
            appointment.pickup_date,
            appointment.pickup_time,
            full_name=appointment.full_name,
            phone=appointment.phone,
            model=appointment.model,
            color=appointment.color,
            chassis=appointment.chassis,
            order_number=appointment.order_number,
        )

    async def get_appointment(self, appointment_id: str) -> Appointment:
        self._check_failure()
        if appointment_id not in self.appointments:
            raise NotFoundError("Agendamento", appointment_id)
        return self.appointments[appointment_id]

    async def update_appointment_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> Appointment:
        current = await self.get_appointment(appointment_id)
        updated = current.model_copy(update={"status": status})
        self.appointments[appointment_id] = updated
        return updated

    async def delete_appointment(self, appointment_id: str) -> None:
        await self.get_appointment(appointment_id)
        del self.appointments[appointment_id]

    async def list_trips(self) -> list[Trip]:
        self._check_failure()
        return sorted(self.trips.values(), key=lambda t: t.created_at, reverse=True)

    async def create_trip(self, trip: TripCreate) -> Trip:
        self._check_failure()
        created = self.add_trip(trip.destination, origin=trip.origin)
        return created

    async def get_trip(self, trip_id: str) -> Trip:
        self._check_failure()
        if trip_id not in self.trips:
            raise NotFoundError("Viagem", trip_id)
        return self.trips[trip_id]

    async def update_trip_status(self, trip_id: str, status: TripStatus) -> Trip:
        current = await self.get_trip(trip_id)
        updated = current.model_copy(update={"status": status})
        self.trips[trip_id] = updated
        return updated

    async def delete_trip(self, trip_id: str) -> None:
        await self.get_trip(trip_id)
        del self.trips[trip_id]


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant (Monday 08:00)."""
    return NOW


@pytest.fixture
def store() -> FakeStore:
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def collaborator_failure() -> CollaboratorError:
    """Generic store failure."""
    return CollaboratorError("list_appointments", ConnectionError("timeout"))


@pytest.fixture
def valid_appointment_form() -> AppointmentForm:
    """Form for Wednesday 2026-02-18 09:30, valid at NOW."""
    return AppointmentForm(
        first_name="Maria",
        last_name="Souza",
        phone="(79) 99999-1234",
        model="Honda CG 160",
        color="Vermelha",
        chassis="9C2KC2200NR000001",
        order_number="PED-1042",
        pickup_date=date(2026, 2, 18),
        pickup_time=time(9, 30),
    )


@pytest.fixture
def valid_trip_form() -> TripForm:
    """Trip from Aracaju to a free-form destination."""
    return TripForm(
        origin="Aracaju",
        destination="Outros",
        destination_other="Lagarto",
        model="Yamaha Fazer 250",
        color="Azul",
        chassis="9C6RG3850P0000002",
        order_number="PED-2001",
    )


@pytest.fixture
def admin_user() -> UserProfile:
    return UserProfile(id="admin-uid", email="admin@aribemotos.com", role=UserRole.ADMIN)


@pytest.fixture
def standard_user() -> UserProfile:
    return UserProfile(id="user-uid", email="loja@aribemotos.com", role=UserRole.USER)


@pytest.fixture
async def async_client(
    store: FakeStore, admin_user: UserProfile
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for the app, logged in as administrator."""
    from aribe.core.booking import BookingWorkflow
    from aribe.handlers.dependencies import get_current_user, get_workflow
    from aribe.main import app

    app.dependency_overrides[get_workflow] = lambda: BookingWorkflow(store, clock=lambda: NOW)
    app.dependency_overrides[get_current_user] = lambda: admin_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

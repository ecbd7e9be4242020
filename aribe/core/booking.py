"""Booking Workflow - Validation, persistence and conflict handling.

The workflow reads the clock once per operation and passes that instant to
the availability engine. Collaborator failures on creation are translated
into BookingOutcome error kinds; there is no retry policy here.
"""

from datetime import date

from aribe.contracts.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentForm,
    AppointmentStatus,
)
from aribe.contracts.booking import AvailableSlots, BookingOutcome, ErrorKind, ListingStats
from aribe.contracts.trip import Trip, TripCreate, TripForm, TripGroup, TripStatus
from aribe.core.availability import available_slots, is_stale_selection, notice_cutoff
from aribe.core.clock import Clock, local_now
from aribe.core.errors import CollaboratorError, SlotTakenError
from aribe.core.listings import group_trips_by_destination, listing_stats, sort_appointments
from aribe.core.status import transition
from aribe.core.templates import format_template, get_template
from aribe.core.validators import validate_appointment_form, validate_trip_form
from aribe.services.supabase import SupabaseService
from aribe.utils.formatters import format_datetime, weekday_name
from aribe.utils.logger import get_logger

logger = get_logger(__name__)


class BookingWorkflow:
    """Fluxo de cadastro de agendamentos e viagens."""

    def __init__(self, store: SupabaseService, clock: Clock = local_now) -> None:
        """Initialize the workflow.

        Args:
            store: Persistence collaborator.
            clock: Returns the current local wall-clock time.
        """
        self.store = store
        self.clock = clock

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    async def slots_for(self, pickup_date: date) -> AvailableSlots:
        """Free slots of a date, using fresh occupancy from the store.

        Raises:
            CollaboratorError: If occupancy cannot be read.
        """
        now = self.clock()
        occupied = await self.store.occupied_times(pickup_date)
        slots = available_slots(pickup_date, occupied, now)
        cutoff = notice_cutoff(now)

        logger.info(
            "slots_computed",
            pickup_date=pickup_date.isoformat(),
            occupied=len(occupied),
            available=len(slots),
        )
        return AvailableSlots(
            pickup_date=pickup_date,
            weekday=weekday_name(pickup_date),
            slots=slots,
            cutoff=cutoff,
            notice=format_template("minimum_notice_banner", cutoff=format_datetime(cutoff)),
        )

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------

    async def list_appointments(self) -> list[Appointment]:
        """Appointments ordered for the list view."""
        return sort_appointments(await self.store.list_appointments())

    async def book_appointment(self, form: AppointmentForm) -> BookingOutcome:
        """Validate and store a new appointment.

        Flow:
        1. Validate the form against the current instant
        2. Ask the store to insert (it enforces one booking per slot)
        3. On conflict, recompute availability and flag a stale selection

        Args:
            form: Submitted form.

        Returns:
            BookingOutcome describing success or the failure kind.
        """
        result = validate_appointment_form(form, self.clock())
        if not result.valid:
            logger.info(
                "appointment_validation_failed",
                codes=[code.value for code in result.codes],
            )
            return BookingOutcome(
                success=False,
                message=result.errors[0],
                error_kind=ErrorKind.VALIDATION,
                errors=result.errors,
            )

        payload = AppointmentCreate.from_form(form)

        try:
            created = await self.store.create_appointment(payload)
        except SlotTakenError:
            return await self._slot_taken_outcome(payload)
        except CollaboratorError as e:
            logger.error("appointment_booking_failed", error=e.message)
            return BookingOutcome(
                success=False,
                message=get_template("appointment_error"),
                error_kind=ErrorKind.COLLABORATOR_FAILURE,
            )

        return BookingOutcome(
            success=True,
            message=get_template("appointment_created"),
            record=created.model_dump(mode="json"),
        )

    async def _slot_taken_outcome(self, payload: AppointmentCreate) -> BookingOutcome:
        logger.warning(
            "appointment_slot_taken",
            pickup_date=payload.pickup_date.isoformat(),
            pickup_time=payload.pickup_time.strftime("%H:%M"),
        )
        try:
            available = await self.slots_for(payload.pickup_date)
        except CollaboratorError as e:
            logger.error("slots_recompute_failed", error=e.message)
            return BookingOutcome(
                success=False,
                message=get_template("slot_taken"),
                error_kind=ErrorKind.SLOT_TAKEN,
                clear_selection=True,
            )

        return BookingOutcome(
            success=False,
            message=get_template("slot_taken"),
            error_kind=ErrorKind.SLOT_TAKEN,
            available=available,
            clear_selection=is_stale_selection(payload.pickup_time, available.slots),
        )

    async def get_appointment(self, appointment_id: str) -> Appointment:
        """Fetch one appointment (raises NotFoundError)."""
        return await self.store.get_appointment(appointment_id)

    async def change_appointment_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> BookingOutcome:
        """Move an appointment to `status`.

        Requesting the current status again is a no-op.

        Raises:
            NotFoundError: Unknown id.
            CollaboratorError: Store failure.
        """
        current = await self.store.get_appointment(appointment_id)
        message = (
            get_template("appointment_delivered")
            if status == AppointmentStatus.DELIVERED
            else get_template("status_pending")
        )

        if current.status == status:
            logger.info(
                "appointment_status_unchanged",
                appointment_id=appointment_id,
                status=status.value,
            )
            return BookingOutcome(
                success=True, message=message, record=current.model_dump(mode="json")
            )

        transition(current.status, status)
        updated = await self.store.update_appointment_status(appointment_id, status)
        return BookingOutcome(
            success=True, message=message, record=updated.model_dump(mode="json")
        )

    async def delete_appointment(self, appointment_id: str) -> BookingOutcome:
        """Delete an appointment (raises NotFoundError)."""
        await self.store.delete_appointment(appointment_id)
        return BookingOutcome(success=True, message=get_template("appointment_deleted"))

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    async def list_trips(self) -> list[TripGroup]:
        """Trips grouped by destination for the list view."""
        return group_trips_by_destination(await self.store.list_trips())

    async def register_trip(self, form: TripForm) -> BookingOutcome:
        """Validate and store a new trip."""
        result = validate_trip_form(form)
        if not result.valid:
            logger.info(
                "trip_validation_failed",
                codes=[code.value for code in result.codes],
            )
            return BookingOutcome(
                success=False,
                message=result.errors[0],
                error_kind=ErrorKind.VALIDATION,
                errors=result.errors,
            )

        try:
            created = await self.store.create_trip(TripCreate.from_form(form))
        except CollaboratorError as e:
            logger.error("trip_registration_failed", error=e.message)
            return BookingOutcome(
                success=False,
                message=get_template("trip_error"),
                error_kind=ErrorKind.COLLABORATOR_FAILURE,
            )

        return BookingOutcome(
            success=True,
            message=get_template("trip_created"),
            record=created.model_dump(mode="json"),
        )

    async def change_trip_status(self, trip_id: str, status: TripStatus) -> BookingOutcome:
        """Move a trip to `status`; same-status requests are a no-op."""
        current = await self.store.get_trip(trip_id)
        message = (
            get_template("trip_completed")
            if status == TripStatus.COMPLETED
            else get_template("status_pending")
        )

        if current.status == status:
            logger.info("trip_status_unchanged", trip_id=trip_id, status=status.value)
            return BookingOutcome(
                success=True, message=message, record=current.model_dump(mode="json")
            )

        transition(current.status, status)
        updated = await self.store.update_trip_status(trip_id, status)
        return BookingOutcome(
            success=True, message=message, record=updated.model_dump(mode="json")
        )

    async def delete_trip(self, trip_id: str) -> BookingOutcome:
        """Delete a trip (raises NotFoundError)."""
        await self.store.delete_trip(trip_id)
        return BookingOutcome(success=True, message=get_template("trip_deleted"))

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    async def stats(self, include_trips: bool = True) -> ListingStats:
        """Pending/total counters, recomputed from fresh lists."""
        appointments = await self.store.list_appointments()
        trips: list[Trip] = await self.store.list_trips() if include_trips else []
        return listing_stats(appointments, trips)

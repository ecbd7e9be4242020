"""Listings - Ordering, grouping and counters used by the list views."""

import unicodedata
from collections.abc import Iterable, Sequence

from aribe.contracts.appointment import Appointment, AppointmentStatus
from aribe.contracts.booking import ListingStats
from aribe.contracts.trip import Location, Trip, TripGroup, TripStatus

# Hubs listed first, in this order; other destinations follow alphabetically
DESTINATION_PRIORITY: tuple[str, ...] = (
    Location.ARACAJU.value,
    Location.SOCORRO.value,
    Location.ITABAIANA.value,
)


def sort_appointments(appointments: Iterable[Appointment]) -> list[Appointment]:
    """Pending before delivered, then ascending by pickup date and time."""
    return sorted(
        appointments,
        key=lambda a: (
            a.status != AppointmentStatus.PENDING,
            a.pickup_date,
            a.pickup_time,
        ),
    )


def _collation_key(text: str) -> str:
    """Case and accent insensitive form, so "Ótima" sorts as "otima"."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _destination_key(destination: str) -> tuple[int, int, str, str]:
    if destination in DESTINATION_PRIORITY:
        return (0, DESTINATION_PRIORITY.index(destination), "", "")
    return (1, 0, _collation_key(destination), destination)


def group_trips_by_destination(trips: Iterable[Trip]) -> list[TripGroup]:
    """Group trips by destination.

    Inside a group pending trips come first, then newest first. Groups follow
    DESTINATION_PRIORITY, then any other destination in lexicographic order.

    Args:
        trips: Trips in any order.

    Returns:
        Ordered list of destination groups.
    """
    groups: dict[str, list[Trip]] = {}
    for trip in trips:
        groups.setdefault(trip.destination, []).append(trip)

    ordered_groups = []
    for destination in sorted(groups, key=_destination_key):
        members = sorted(groups[destination], key=lambda t: t.created_at, reverse=True)
        # Stable sort keeps the newest-first order inside each status
        members.sort(key=lambda t: t.status != TripStatus.PENDING)
        ordered_groups.append(TripGroup(destination=destination, trips=members))

    return ordered_groups


def count_by_status(
    items: Sequence[Appointment] | Sequence[Trip],
    status: AppointmentStatus | TripStatus,
) -> int:
    """Number of items currently at `status`."""
    return sum(1 for item in items if item.status == status)


def listing_stats(
    appointments: Sequence[Appointment],
    trips: Sequence[Trip],
) -> ListingStats:
    """Counters for the dashboard, recomputed on every read."""
    return ListingStats(
        appointments_pending=count_by_status(appointments, AppointmentStatus.PENDING),
        appointments_delivered=count_by_status(
            appointments, AppointmentStatus.DELIVERED
        ),
        appointments_total=len(appointments),
        trips_pending=count_by_status(trips, TripStatus.PENDING),
        trips_completed=count_by_status(trips, TripStatus.COMPLETED),
        trips_total=len(trips),
    )

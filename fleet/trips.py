"""Trip lifecycle and odometer propagation."""

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional

from dateutil.parser import isoparse

from .calculations import is_finite_number
from .errors import InvalidStateTransition, ValidationError
from .maintenance_record import now_iso
from .trip import Trip, TripStatus
from .truck import Truck

logger = logging.getLogger(__name__)


class TripState(Enum):
    NO_ACTIVE_TRIP = "NO_ACTIVE_TRIP"
    TRIP_ACTIVE = "TRIP_ACTIVE"


def trip_state(truck: Truck) -> TripState:
    if truck.active_trip is None:
        return TripState.NO_ACTIVE_TRIP
    return TripState.TRIP_ACTIVE


def _check_place(value: Optional[str], field: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Trip {field} is required")


def _check_distance(distance_km) -> None:
    if distance_km is None:
        raise ValidationError("Trip distance is required")
    if not is_finite_number(distance_km) or distance_km <= 0:
        raise ValidationError(
            f"Trip distance must be a positive number, got {distance_km!r}"
        )


def _check_timestamp(value: Optional[str], field: str) -> None:
    if not value:
        raise ValidationError(f"Trip {field} is required")
    if not isinstance(value, str):
        raise ValidationError(f"Trip {field} must be an ISO-8601 string, got {value!r}")
    try:
        isoparse(value)
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Trip {field} '{value}' is not an ISO-8601 date") from e


def start_trip(truck: Truck, trip: Trip) -> Truck:
    """
    Make `trip` the truck's active trip.

    Raises:
        InvalidStateTransition: a trip is already active.
        ValidationError: missing origin/destination, non-positive distance,
            or missing/unparseable start or planned arrival date.
    """
    if truck.active_trip is not None:
        raise InvalidStateTransition(
            f"Truck {truck.plate} already has an active trip "
            f"({truck.active_trip.route})"
        )
    _check_place(trip.origin, "origin")
    _check_place(trip.destination, "destination")
    _check_distance(trip.distance_km)
    _check_timestamp(trip.start_date, "start date")
    _check_timestamp(trip.planned_arrival_date, "planned arrival date")

    trip = replace(trip, status=TripStatus.ACTIVE, completed_date=None)
    logger.info("Trip %s started on truck %s", trip.route, truck.plate)
    return replace(truck, active_trip=trip)


def edit_active_trip(
    truck: Truck,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    distance_km: Optional[float] = None,
) -> Truck:
    """
    Change origin, destination or distance of the active trip.

    Arguments left as None keep their current value.
    """
    trip = truck.active_trip
    if trip is None:
        raise InvalidStateTransition(f"Truck {truck.plate} has no active trip to edit")

    changes = {}
    if origin is not None:
        _check_place(origin, "origin")
        changes["origin"] = origin
    if destination is not None:
        _check_place(destination, "destination")
        changes["destination"] = destination
    if distance_km is not None:
        _check_distance(distance_km)
        changes["distance_km"] = distance_km

    if not changes:
        return truck
    logger.info("Active trip on truck %s edited: %s", truck.plate, changes)
    return replace(truck, active_trip=replace(trip, **changes))


def complete_trip(truck: Truck, when: Optional[str] = None) -> Truck:
    """
    Finish the active trip and credit its distance.

    The odometer and every mounted tire's km grow by the trip distance;
    spares do not roll and are left alone. The completed trip goes to the
    front of the trip history and the truck returns to having no active
    trip. Tire statuses are derived, so they already reflect the new km.

    Raises:
        InvalidStateTransition: no trip is active.
    """
    trip = truck.active_trip
    if trip is None:
        raise InvalidStateTransition(
            f"Truck {truck.plate} has no active trip to complete"
        )

    distance = trip.distance_km
    axles = tuple(
        axle.with_slots(
            None if tire is None else tire.with_km(tire.current_km + distance)
            for tire in axle.slots
        )
        for axle in truck.axles
    )
    completed = replace(
        trip, status=TripStatus.COMPLETED, completed_date=when or now_iso()
    )

    logger.info(
        "Trip %s completed on truck %s: +%s km", trip.route, truck.plate, distance
    )
    return replace(
        truck,
        axles=axles,
        total_km=truck.total_km + distance,
        active_trip=None,
        trip_history=(completed,) + truck.trip_history,
    )


def total_trip_km(truck: Truck) -> float:
    """Distance of all completed trips."""
    return sum(t.distance_km for t in truck.trip_history)

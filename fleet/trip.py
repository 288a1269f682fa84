"""Trip class for planned and completed journeys."""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TripStatus(Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class Trip:
    """A journey whose planned distance is credited to the truck on completion."""

    id: str
    origin: str
    destination: str
    distance_km: float
    start_date: Optional[str]
    planned_arrival_date: Optional[str]
    completed_date: Optional[str] = None
    status: TripStatus = TripStatus.ACTIVE

    @property
    def route(self) -> str:
        return f"{self.origin} -> {self.destination}"


def new_trip(
    origin: str,
    destination: str,
    distance_km: float,
    start_date: Optional[str],
    planned_arrival_date: Optional[str],
) -> Trip:
    """Build an ACTIVE trip with a fresh id. Validation happens in start_trip."""
    return Trip(
        id=uuid.uuid4().hex[:9],
        origin=origin,
        destination=destination,
        distance_km=distance_km,
        start_date=start_date,
        planned_arrival_date=planned_arrival_date,
    )

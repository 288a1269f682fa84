"""Truck class - the aggregate owning axles, spares and trips."""

from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Tuple

from .axle import Axle, AxleType
from .calculations import is_finite_number
from .errors import TireNotFound, ValidationError
from .status import TireStatus
from .tire import Tire
from .trip import Trip


@dataclass(frozen=True)
class Owner:
    """Company and driver contact details."""

    name: str
    driver_name: str
    city: str = ""
    street: str = ""
    number: str = ""
    phone: str = ""
    email: Optional[str] = None


@dataclass(frozen=True)
class Truck:
    """
    Complete truck record: axle layout, spare tires, odometer and trips.

    Trucks are immutable values. Every operation that changes a truck
    returns a new one, copying only the axle or spare tuple it touched, so
    an older snapshot stays valid for whoever still holds it.
    """

    id: str
    plate: str
    model: str
    axles: Tuple[Axle, ...] = ()
    spares: Tuple[Tire, ...] = ()
    total_km: float = 0
    owner: Optional[Owner] = None
    active_trip: Optional[Trip] = None
    trip_history: Tuple[Trip, ...] = ()  # Newest first

    def __post_init__(self):
        object.__setattr__(self, "axles", tuple(self.axles))
        object.__setattr__(self, "spares", tuple(self.spares))
        object.__setattr__(self, "trip_history", tuple(self.trip_history))
        if not is_finite_number(self.total_km):
            raise ValidationError(
                f"Truck {self.plate}: odometer must be a finite number, "
                f"got {self.total_km!r}"
            )
        if self.total_km < 0:
            raise ValidationError(f"Truck {self.plate}: odometer cannot be negative")
        seen = Counter(t.id for t in self.all_tires())
        duplicates = sorted(tire_id for tire_id, n in seen.items() if n > 1)
        if duplicates:
            raise ValidationError(
                f"Truck {self.plate}: tire(s) mounted more than once: "
                f"{', '.join(duplicates)}"
            )

    @property
    def name(self) -> str:
        return f"{self.model} ({self.plate})"

    def installed_tires(self) -> Iterator[Tire]:
        """Tires mounted on axles, in axle then slot order."""
        for axle in self.axles:
            yield from axle.tires

    def all_tires(self) -> Iterator[Tire]:
        yield from self.installed_tires()
        yield from self.spares

    def find_tire(self, tire_id: str) -> Optional[Tire]:
        for tire in self.all_tires():
            if tire.id == tire_id:
                return tire
        return None

    def get_tire(self, tire_id: str) -> Tire:
        tire = self.find_tire(tire_id)
        if tire is None:
            raise TireNotFound(tire_id)
        return tire

    def get_axle(self, axle_id: str) -> Optional[Axle]:
        for axle in self.axles:
            if axle.id == axle_id:
                return axle
        return None

    def traction_axle_index(self) -> Optional[int]:
        """Index of the first axle typed TRACTION, if any."""
        for index, axle in enumerate(self.axles):
            if axle.type == AxleType.TRACTION:
                return index
        return None

    def with_axle(self, index: int, axle: Axle) -> "Truck":
        axles = list(self.axles)
        axles[index] = axle
        return replace(self, axles=tuple(axles))

    def with_spares(self, spares) -> "Truck":
        return replace(self, spares=tuple(spares))

    def replace_tire(self, tire: Tire) -> "Truck":
        """
        Swap in an updated version of a tire where it currently lives.

        Returns the same truck if no tire with that id is on board.
        """
        for axle_index, axle in enumerate(self.axles):
            for slot_index, current in enumerate(axle.slots):
                if current is not None and current.id == tire.id:
                    return self.with_axle(axle_index, axle.with_slot(slot_index, tire))
        for spare_index, current in enumerate(self.spares):
            if current.id == tire.id:
                spares = list(self.spares)
                spares[spare_index] = tire
                return self.with_spares(spares)
        return self

    def status_counts(self) -> Dict[TireStatus, int]:
        """Number of tires in each status, every status present."""
        counts = {status: 0 for status in TireStatus}
        for tire in self.all_tires():
            counts[tire.status] += 1
        return counts

    def tires_needing_attention(self) -> List[Tire]:
        """Tires that are not NEW or GOOD, most urgent first."""
        flagged = [
            t for t in self.all_tires()
            if t.status in (TireStatus.CRITICAL, TireStatus.WARNING)
        ]
        return sorted(flagged, key=lambda t: (t.status.value, t.id))

"""Locate a tire within a truck's axles and spares."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .axle import axle_position, slot_label, spare_label
from .truck import Truck

logger = logging.getLogger(__name__)


class LocationKind(Enum):
    AXLE = "AXLE"
    SPARE = "SPARE"


@dataclass(frozen=True)
class TireLocation:
    """
    Where a tire currently sits.

    `label` is the slot name ("Outer Left", "Spare #1"). `position` adds the
    1-based axle number and is what gets written to Tire.position.
    """

    kind: LocationKind
    index: int  # Slot index on the axle, or index in the spare list
    label: str
    axle_id: Optional[str] = None
    axle_index: Optional[int] = None

    @property
    def is_spare(self) -> bool:
        return self.kind == LocationKind.SPARE

    @property
    def slot_index(self) -> Optional[int]:
        return None if self.is_spare else self.index

    @property
    def position(self) -> str:
        if self.is_spare:
            return self.label
        return axle_position(self.axle_index, self.label)


def locate_tire(truck: Truck, tire_id: str) -> Optional[TireLocation]:
    """
    Find the slot or spare position holding a tire.

    Axles are searched in order, then the spare list. Returns None if the id
    matches nothing; callers treat that as a stale reference, not an error.
    """
    for axle_index, axle in enumerate(truck.axles):
        for slot_index, tire in enumerate(axle.slots):
            if tire is not None and tire.id == tire_id:
                return TireLocation(
                    kind=LocationKind.AXLE,
                    index=slot_index,
                    label=slot_label(slot_index, axle.slot_count),
                    axle_id=axle.id,
                    axle_index=axle_index,
                )
    for spare_index, tire in enumerate(truck.spares):
        if tire.id == tire_id:
            return TireLocation(
                kind=LocationKind.SPARE,
                index=spare_index,
                label=spare_label(spare_index),
            )
    logger.debug("Tire %s not found on truck %s", tire_id, truck.plate)
    return None

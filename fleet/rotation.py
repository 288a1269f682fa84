"""
Rotation engine: manual tire swaps and the automatic X-rotation.

Both operations build a complete new Truck before returning it, so a
failure never leaves a half-rotated truck behind. Rotation does not
trigger reclassification; status depends on km, tread and damage only.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from .axle import Axle, axle_position, slot_label
from .errors import ValidationError
from .locator import TireLocation, locate_tire
from .maintenance_record import MaintenanceRecord, RecordKind, now_iso
from .tire import Tire
from .truck import Truck

logger = logging.getLogger(__name__)

# Axle used for X-rotation when no axle is typed TRACTION
DEFAULT_TRACTION_AXLE_INDEX = 1

# New slot i receives the tire from old slot X_PATTERN[i]:
# Outer Left <-> Inner Right, Inner Left <-> Outer Right
X_PATTERN = (2, 3, 0, 1)


@dataclass(frozen=True)
class PlannedMove:
    """One tire's move in a rotation preview."""

    tire_id: str
    from_position: str
    to_position: str


def rotation_description(before: str, after: str) -> str:
    return f"Before: {before} | After: {after}"


def _moved(tire: Tire, before: str, after: str, when: str) -> Tire:
    record = MaintenanceRecord.create(
        RecordKind.ROTATION, rotation_description(before, after), when=when
    )
    return tire.with_position(after).with_record(record)


def _tire_at(truck: Truck, location: TireLocation) -> Tire:
    if location.is_spare:
        return truck.spares[location.index]
    return truck.axles[location.axle_index].slots[location.index]


def _place(truck: Truck, placements: Sequence[Tuple[TireLocation, Tire]]) -> Truck:
    """Put tires into locations in one step, copying only touched containers."""
    axles = list(truck.axles)
    spares = list(truck.spares)
    for location, tire in placements:
        if location.is_spare:
            spares[location.index] = tire
        else:
            axles[location.axle_index] = axles[location.axle_index].with_slot(
                location.index, tire
            )
    return replace(truck, axles=tuple(axles), spares=tuple(spares))


def swap_tires(
    truck: Truck, tire_id_a: str, tire_id_b: str, when: Optional[str] = None
) -> Truck:
    """
    Exchange two tires between their slots or spare positions.

    Works slot<->slot, slot<->spare and spare<->spare. Each tire gets its
    new position label and one ROTATION record describing its own move;
    both records share the same timestamp. If either id is unknown, or both
    name the same tire, the truck is returned unchanged.
    """
    if tire_id_a == tire_id_b:
        logger.debug("Swap of tire %s with itself ignored", tire_id_a)
        return truck

    location_a = locate_tire(truck, tire_id_a)
    location_b = locate_tire(truck, tire_id_b)
    if location_a is None or location_b is None:
        logger.debug(
            "Swap %s <-> %s ignored on truck %s: tire not found",
            tire_id_a,
            tire_id_b,
            truck.plate,
        )
        return truck

    when = when or now_iso()
    before_a, before_b = location_a.position, location_b.position
    tire_a = _moved(_tire_at(truck, location_a), before_a, before_b, when)
    tire_b = _moved(_tire_at(truck, location_b), before_b, before_a, when)

    logger.info(
        "Swapped %s (%s) with %s (%s) on truck %s",
        tire_id_a,
        location_a.position,
        tire_id_b,
        location_b.position,
        truck.plate,
    )
    return _place(truck, [(location_b, tire_a), (location_a, tire_b)])


def resolve_rotation_axle(
    truck: Truck,
    axle_index: Optional[int] = None,
    fallback_index: int = DEFAULT_TRACTION_AXLE_INDEX,
) -> Optional[int]:
    """
    Pick the axle for X-rotation.

    An explicit axle_index wins, then the first TRACTION axle, then
    fallback_index. Returns None if the chosen index is not on the truck.
    """
    if axle_index is None:
        axle_index = truck.traction_axle_index()
    if axle_index is None:
        axle_index = fallback_index
    if not 0 <= axle_index < len(truck.axles):
        return None
    return axle_index


def _dual_axle(
    truck: Truck, axle_index: Optional[int], fallback_index: int
) -> Tuple[int, Axle]:
    index = resolve_rotation_axle(truck, axle_index, fallback_index)
    if index is None:
        raise ValidationError(
            f"Truck {truck.plate} has no axle to rotate "
            f"({len(truck.axles)} axle(s) configured)"
        )
    axle = truck.axles[index]
    if axle.slot_count != 4:
        raise ValidationError(
            f"Axle {index + 1} has {axle.slot_count} slots; "
            "X-rotation needs a dual-tire axle (4 slots)"
        )
    return index, axle


def plan_x_rotation(
    truck: Truck,
    axle_index: Optional[int] = None,
    fallback_index: int = DEFAULT_TRACTION_AXLE_INDEX,
) -> List[PlannedMove]:
    """Preview the X-rotation moves without applying them."""
    index, axle = _dual_axle(truck, axle_index, fallback_index)
    moves = []
    for old_slot, tire in enumerate(axle.slots):
        if tire is None:
            continue
        new_slot = X_PATTERN.index(old_slot)
        moves.append(
            PlannedMove(
                tire_id=tire.id,
                from_position=axle_position(index, slot_label(old_slot, 4)),
                to_position=axle_position(index, slot_label(new_slot, 4)),
            )
        )
    return moves


def x_rotate(
    truck: Truck,
    axle_index: Optional[int] = None,
    fallback_index: int = DEFAULT_TRACTION_AXLE_INDEX,
    when: Optional[str] = None,
) -> Truck:
    """
    Apply the X-rotation to a dual-tire axle.

    Outer Left <-> Inner Right and Inner Left <-> Outer Right. Every mounted
    tire on the axle gets one ROTATION record (shared timestamp) and its new
    position; empty slots move along without a record.

    Raises:
        ValidationError: the resolved axle is missing or does not have 4 slots.
    """
    index, axle = _dual_axle(truck, axle_index, fallback_index)
    when = when or now_iso()

    new_slots = []
    for new_slot, old_slot in enumerate(X_PATTERN):
        tire = axle.slots[old_slot]
        if tire is not None:
            tire = _moved(
                tire,
                axle_position(index, axle.label(old_slot)),
                axle_position(index, axle.label(new_slot)),
                when,
            )
        new_slots.append(tire)

    logger.info("X-rotation applied to axle %d of truck %s", index + 1, truck.plate)
    return truck.with_axle(index, axle.with_slots(new_slots))


def has_recent_rotation(
    truck: Truck,
    on_date: Union[date, str, None] = None,
    axle_index: Optional[int] = None,
    fallback_index: int = DEFAULT_TRACTION_AXLE_INDEX,
) -> bool:
    """True if a tire on the rotation axle was rotated on on_date (default today)."""
    index = resolve_rotation_axle(truck, axle_index, fallback_index)
    if index is None:
        return False
    if on_date is None:
        on_date = date.today()
    day = on_date.isoformat() if isinstance(on_date, date) else on_date
    return any(
        record.date.startswith(day)
        for tire in truck.axles[index].tires
        for record in tire.rotations
    )


def swap_targets(truck: Truck, tire_id: str) -> List[Tuple[str, str, str]]:
    """Every other tire a manual swap could exchange with: (id, position, brand)."""
    targets = []
    for tire in truck.all_tires():
        if tire.id == tire_id:
            continue
        location = locate_tire(truck, tire.id)
        targets.append((tire.id, location.position, tire.brand))
    return targets

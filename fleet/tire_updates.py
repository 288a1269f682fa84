"""Occurrences, tread readings, pressure checks and edits on a single tire."""

import logging
from typing import Optional

from .calculations import is_finite_number
from .errors import ValidationError
from .maintenance_record import MaintenanceRecord, RecordKind
from .truck import Truck

logger = logging.getLogger(__name__)


def record_occurrence(
    truck: Truck,
    tire_id: str,
    kind: RecordKind,
    description: str = "",
    cost: float = 0,
    when: Optional[str] = None,
) -> Truck:
    """
    Append an occurrence (puncture, retread, blowout...) to a tire's history.

    ROTATION records are written by the rotation engine only. An unknown
    tire id leaves the truck unchanged.
    """
    if kind == RecordKind.ROTATION:
        raise ValidationError("Rotations are recorded by swapping or rotating tires")
    if not is_finite_number(cost) or cost < 0:
        raise ValidationError(f"Occurrence cost cannot be negative, got {cost}")
    tire = truck.find_tire(tire_id)
    if tire is None:
        logger.debug("Occurrence for unknown tire %s ignored", tire_id)
        return truck

    record = MaintenanceRecord.create(kind, description, cost, when)
    updated = tire.with_record(record)
    if updated.status != tire.status:
        logger.info(
            "Tire %s status %s -> %s after %s",
            tire_id,
            tire.status.name,
            updated.status.name,
            kind.value,
        )
    return truck.replace_tire(updated)


def update_tread_depth(truck: Truck, tire_id: str, depth_mm: float) -> Truck:
    """Store a new tread depth reading, however it was measured."""
    if not is_finite_number(depth_mm) or depth_mm < 0:
        raise ValidationError(f"Tread depth must be zero or more, got {depth_mm!r}")
    tire = truck.find_tire(tire_id)
    if tire is None:
        logger.debug("Tread reading for unknown tire %s ignored", tire_id)
        return truck
    logger.info(
        "Tire %s tread depth %s -> %s mm", tire_id, tire.tread_depth_mm, depth_mm
    )
    return truck.replace_tire(tire.with_tread_depth(depth_mm))


def log_pressure(
    truck: Truck, tire_id: str, pressure_psi: float, when: Optional[str] = None
) -> Truck:
    """Set the tire pressure and log the adjustment in its history."""
    if not is_finite_number(pressure_psi) or pressure_psi <= 0:
        raise ValidationError(f"Pressure must be positive, got {pressure_psi!r}")
    tire = truck.find_tire(tire_id)
    if tire is None:
        logger.debug("Pressure reading for unknown tire %s ignored", tire_id)
        return truck
    record = MaintenanceRecord.create(
        RecordKind.PRESSURE, f"Pressure adjusted: {pressure_psi:g} PSI", when=when
    )
    return truck.replace_tire(tire.with_record(record).with_pressure(pressure_psi))


def edit_tire(truck: Truck, tire_id: str, **fields) -> Truck:
    """
    Edit descriptive fields of a tire (brand, model, dot, size, price, km...).

    Raises ValidationError for fields that cannot be edited or values that
    break the tire's invariants, e.g. current km below initial km.
    """
    tire = truck.find_tire(tire_id)
    if tire is None:
        logger.debug("Edit of unknown tire %s ignored", tire_id)
        return truck
    return truck.replace_tire(tire.with_changes(**fields))

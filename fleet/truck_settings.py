"""Edits to the truck record itself: identification, odometer and owner."""

import logging
from dataclasses import replace
from typing import Optional

from .errors import ValidationError
from .truck import Owner, Truck

logger = logging.getLogger(__name__)

OWNER_FIELDS = ("name", "driver_name", "city", "street", "number", "phone", "email")
REQUIRED_OWNER_FIELDS = ("name", "driver_name")


def _check_text(value, field: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")


def edit_truck(
    truck: Truck,
    model: Optional[str] = None,
    plate: Optional[str] = None,
    total_km: Optional[float] = None,
) -> Truck:
    """
    Change the truck's model, plate or odometer reading.

    Arguments left as None keep their current value. Correcting the
    odometer does not touch tire km; only completed trips roll tires.

    Raises:
        ValidationError: blank model or plate, or an odometer that is not
            a finite number of zero or more.
    """
    changes = {}
    if model is not None:
        _check_text(model, "Truck model")
        changes["model"] = model.strip()
    if plate is not None:
        _check_text(plate, "Truck plate")
        changes["plate"] = plate.strip().upper()
    if total_km is not None:
        changes["total_km"] = total_km

    if not changes:
        return truck
    # Truck.__post_init__ checks the odometer
    updated = replace(truck, **changes)
    logger.info("Truck %s settings edited: %s", truck.plate, changes)
    return updated


def edit_owner(truck: Truck, **fields) -> Truck:
    """
    Update company and driver contact details.

    A truck without an owner gets one; `name` and `driver_name` are then
    required. Empty optional fields are stored as "" (email as None).
    """
    unknown = set(fields) - set(OWNER_FIELDS)
    if unknown:
        raise ValidationError(
            f"Cannot edit owner field(s): {', '.join(sorted(unknown))}"
        )

    current = truck.owner
    if current is None:
        missing = [f for f in REQUIRED_OWNER_FIELDS if f not in fields]
        if missing:
            raise ValidationError(
                f"Truck {truck.plate} has no owner yet; "
                f"{', '.join(missing)} required"
            )
        current = Owner(name=fields["name"], driver_name=fields["driver_name"])

    for field in REQUIRED_OWNER_FIELDS:
        if field in fields:
            _check_text(fields[field], f"Owner {field}")
    for field, value in fields.items():
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Owner {field} must be text, got {value!r}")
        if field == "email":
            fields[field] = value or None
        elif value is None:
            fields[field] = ""

    owner = replace(current, **fields)
    if owner == truck.owner:
        return truck
    logger.info("Owner of truck %s edited", truck.plate)
    return replace(truck, owner=owner)

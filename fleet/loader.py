"""YAML loading and saving utilities for truck data."""

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .axle import Axle, AxleType
from .errors import ValidationError
from .maintenance_record import MaintenanceRecord, RecordKind
from .tire import Tire
from .trip import Trip, TripStatus
from .truck import Owner, Truck


def _as_str(value: Any) -> Optional[str]:
    """YAML turns unquoted dates into date objects; the model keeps ISO strings."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _enum(enum_cls, value: Any, where: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(
            f"{where}: unknown {enum_cls.__name__} '{value}' "
            f"(expected one of {allowed})"
        ) from None


def _parse_record(dct: Dict[str, Any]) -> MaintenanceRecord:
    return MaintenanceRecord(
        id=str(dct["id"]),
        date=_as_str(dct["date"]),
        kind=_enum(RecordKind, dct["type"], f"record {dct['id']}"),
        description=dct.get("description") or "",
        cost=dct.get("cost") or 0,
    )


def _parse_tire(dct: Dict[str, Any]) -> Tire:
    # A stored 'status' is ignored: status is always derived
    return Tire(
        id=str(dct["id"]),
        brand=dct.get("brand") or "",
        model=dct.get("model") or "",
        dot=_as_str(dct.get("dot")) or "",
        size=dct.get("size") or "",
        purchase_date=_as_str(dct.get("purchaseDate")),
        purchase_price=dct.get("purchasePrice") or 0,
        payment_method=dct.get("paymentMethod"),
        store=dct.get("store"),
        initial_km=dct.get("initialKm") or 0,
        current_km=dct.get("currentKm") or 0,
        tread_depth_mm=dct.get("treadDepthMm") or 0,
        pressure_psi=dct.get("pressurePsi"),
        position=dct.get("position") or "",
        history=tuple(_parse_record(h) for h in dct.get("history") or []),
    )


def _parse_axle(dct: Dict[str, Any]) -> Axle:
    return Axle(
        id=str(dct["id"]),
        type=_enum(AxleType, dct["type"], f"axle {dct['id']}"),
        slots=tuple(None if t is None else _parse_tire(t) for t in dct["tires"]),
    )


def _parse_trip(dct: Dict[str, Any]) -> Trip:
    return Trip(
        id=str(dct["id"]),
        origin=dct["origin"],
        destination=dct["destination"],
        distance_km=dct["distanceKm"],
        start_date=_as_str(dct.get("startDate")),
        planned_arrival_date=_as_str(dct.get("plannedArrivalDate")),
        completed_date=_as_str(dct.get("completedDate")),
        status=_enum(TripStatus, dct.get("status", "ACTIVE"), f"trip {dct['id']}"),
    )


def _parse_owner(dct: Dict[str, Any]) -> Owner:
    return Owner(
        name=dct["name"],
        driver_name=dct["driverName"],
        city=dct.get("city") or "",
        street=dct.get("street") or "",
        number=_as_str(dct.get("number")) or "",
        phone=_as_str(dct.get("phone")) or "",
        email=dct.get("email"),
    )


def truck_from_dict(data: Dict[str, Any]) -> Truck:
    """Build a Truck from the camelCase dict stored in a truck file."""
    try:
        owner = data.get("owner")
        active = data.get("activeTrip")
        return Truck(
            id=str(data["id"]),
            plate=data["plate"],
            model=data["model"],
            axles=tuple(_parse_axle(a) for a in data.get("axles") or []),
            spares=tuple(_parse_tire(t) for t in data.get("spares") or []),
            total_km=data.get("totalKm") or 0,
            owner=_parse_owner(owner) if owner else None,
            active_trip=_parse_trip(active) if active else None,
            trip_history=tuple(_parse_trip(t) for t in data.get("tripHistory") or []),
        )
    except KeyError as e:
        raise ValidationError(f"Missing required field {e}") from e


def load_truck(filename: Union[str, Path]) -> Truck:
    """Load a truck from a YAML file."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    if not isinstance(data, dict):
        raise ValidationError(f"{filename}: not a truck file")
    return truck_from_dict(data)


def _record_to_dict(record: MaintenanceRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "date": record.date,
        "type": record.kind.value,
        "description": record.description,
        "cost": record.cost,
    }


def _tire_to_dict(tire: Tire) -> Dict[str, Any]:
    """Serialize a Tire, omitting unset optional fields for cleaner YAML."""
    d: Dict[str, Any] = {
        "id": tire.id,
        "brand": tire.brand,
        "model": tire.model,
        "dot": tire.dot,
        "size": tire.size,
    }
    if tire.purchase_date is not None:
        d["purchaseDate"] = tire.purchase_date
    d["purchasePrice"] = tire.purchase_price
    if tire.payment_method is not None:
        d["paymentMethod"] = tire.payment_method
    if tire.store is not None:
        d["store"] = tire.store
    d["initialKm"] = tire.initial_km
    d["currentKm"] = tire.current_km
    d["treadDepthMm"] = tire.tread_depth_mm
    if tire.pressure_psi is not None:
        d["pressurePsi"] = tire.pressure_psi
    if tire.position:
        d["position"] = tire.position
    # Written for people reading the file; recomputed on load
    d["status"] = tire.status.name
    d["history"] = [_record_to_dict(h) for h in tire.history]
    return d


def _trip_to_dict(trip: Trip) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "id": trip.id,
        "origin": trip.origin,
        "destination": trip.destination,
        "distanceKm": trip.distance_km,
        "startDate": trip.start_date,
        "plannedArrivalDate": trip.planned_arrival_date,
    }
    if trip.completed_date is not None:
        d["completedDate"] = trip.completed_date
    d["status"] = trip.status.value
    return d


def _owner_to_dict(owner: Owner) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "name": owner.name,
        "driverName": owner.driver_name,
        "city": owner.city,
        "street": owner.street,
        "number": owner.number,
        "phone": owner.phone,
    }
    if owner.email is not None:
        d["email"] = owner.email
    return d


def truck_to_dict(truck: Truck) -> Dict[str, Any]:
    """Serialize a Truck to the truck file format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": truck.id,
        "plate": truck.plate,
        "model": truck.model,
        "totalKm": truck.total_km,
    }
    if truck.owner is not None:
        d["owner"] = _owner_to_dict(truck.owner)
    d["axles"] = [
        {
            "id": axle.id,
            "type": axle.type.value,
            "tires": [None if t is None else _tire_to_dict(t) for t in axle.slots],
        }
        for axle in truck.axles
    ]
    d["spares"] = [_tire_to_dict(t) for t in truck.spares]
    d["activeTrip"] = (
        _trip_to_dict(truck.active_trip) if truck.active_trip is not None else None
    )
    d["tripHistory"] = [_trip_to_dict(t) for t in truck.trip_history]
    return d


def save_truck(filename: Union[str, Path], truck: Truck) -> None:
    """Write a truck to a YAML file, replacing its previous contents."""
    with open(filename, "w") as fp:
        yaml.dump(
            truck_to_dict(truck),
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )

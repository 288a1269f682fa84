"""
Truck tire tracking models.

This package tracks the tires of a truck and how they wear:
- TireStatus: Wear levels (CRITICAL, WARNING, GOOD, NEW)
- MaintenanceRecord: Events in a tire's history
- Tire: A tire and its derived status
- Axle / Truck: Where tires are mounted, spares, odometer and trips
- locate_tire: Find the slot or spare position of a tire
- swap_tires / x_rotate: The rotation engine
- start_trip / edit_active_trip / complete_trip: Trip lifecycle
- record_occurrence / update_tread_depth / log_pressure / edit_tire: Tire updates
- edit_truck / edit_owner: Truck settings and owner details
"""

from .errors import (
    FleetError,
    ValidationError,
    InvalidStateTransition,
    TireNotFound,
    ExternalCapabilityFailure,
)
from .status import TireStatus
from .maintenance_record import MaintenanceRecord, RecordKind, STRUCTURAL_DAMAGE
from .calculations import classify_tire, calc_cpk
from .tire import Tire
from .axle import Axle, AxleType, slot_label, spare_label
from .trip import Trip, TripStatus, new_trip
from .truck import Owner, Truck
from .locator import LocationKind, TireLocation, locate_tire
from .rotation import (
    PlannedMove,
    swap_tires,
    x_rotate,
    plan_x_rotation,
    has_recent_rotation,
    swap_targets,
)
from .trips import TripState, trip_state, start_trip, edit_active_trip, complete_trip
from .tire_updates import record_occurrence, update_tread_depth, log_pressure, edit_tire
from .truck_settings import edit_truck, edit_owner
from .capabilities import (
    TreadDepthEstimate,
    apply_tread_scan,
    ask_advisor,
    suggest_distance,
    truck_context,
)
from .loader import load_truck, save_truck, truck_from_dict, truck_to_dict

__all__ = [
    "FleetError",
    "ValidationError",
    "InvalidStateTransition",
    "TireNotFound",
    "ExternalCapabilityFailure",
    "TireStatus",
    "MaintenanceRecord",
    "RecordKind",
    "STRUCTURAL_DAMAGE",
    "classify_tire",
    "calc_cpk",
    "Tire",
    "Axle",
    "AxleType",
    "slot_label",
    "spare_label",
    "Trip",
    "TripStatus",
    "new_trip",
    "Owner",
    "Truck",
    "LocationKind",
    "TireLocation",
    "locate_tire",
    "PlannedMove",
    "swap_tires",
    "x_rotate",
    "plan_x_rotation",
    "has_recent_rotation",
    "swap_targets",
    "TripState",
    "trip_state",
    "start_trip",
    "edit_active_trip",
    "complete_trip",
    "record_occurrence",
    "update_tread_depth",
    "log_pressure",
    "edit_tire",
    "edit_truck",
    "edit_owner",
    "TreadDepthEstimate",
    "apply_tread_scan",
    "ask_advisor",
    "suggest_distance",
    "truck_context",
    "load_truck",
    "save_truck",
    "truck_from_dict",
    "truck_to_dict",
]

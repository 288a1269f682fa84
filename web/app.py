"""Flask JSON API over the truck tire files."""

import logging
import math
import os
import threading
from collections import defaultdict
from pathlib import Path

import yaml
from flask import Flask, jsonify, request, abort
from werkzeug.exceptions import HTTPException

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleet import (
    ExternalCapabilityFailure,
    FleetError,
    InvalidStateTransition,
    RecordKind,
    TireNotFound,
    ValidationError,
    apply_tread_scan,
    complete_trip,
    edit_active_trip,
    edit_owner,
    edit_tire,
    edit_truck,
    load_truck,
    log_pressure,
    new_trip,
    record_occurrence,
    save_truck,
    start_trip,
    swap_tires,
    update_tread_depth,
    x_rotate,
)
from fleet.loader import truck_to_dict

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["TRUCKS_DIR"] = Path(
    os.environ.get("TRUCKS_DIR", Path(__file__).parent.parent / "trucks")
)
# Callable taking image bytes and returning a TreadDepthEstimate
app.config["TREAD_ESTIMATOR"] = None

# One mutation in flight per truck; swaps and trip completion are check-then-act
_truck_locks = defaultdict(threading.Lock)

# JSON key -> edit_tire keyword
TIRE_TEXT_FIELDS = {
    "brand": "brand",
    "model": "model",
    "dot": "dot",
    "size": "size",
    "purchaseDate": "purchase_date",
    "paymentMethod": "payment_method",
    "store": "store",
}
TIRE_NUMBER_FIELDS = {
    "purchasePrice": "purchase_price",
    "currentKm": "current_km",
}

# JSON key -> edit_owner keyword
OWNER_FIELDS = {
    "name": "name",
    "driverName": "driver_name",
    "city": "city",
    "street": "street",
    "number": "number",
    "phone": "phone",
    "email": "email",
}


def get_truck_path(truck_id: str) -> Path:
    """Get full path for a truck ID (filename without extension)."""
    path = Path(app.config["TRUCKS_DIR"]) / f"{truck_id}.yaml"
    if not path.exists():
        abort(404, description=f"Truck '{truck_id}' not found")
    return path


def status_counts(truck) -> dict:
    return {s.name: n for s, n in truck.status_counts().items()}


def truck_payload(truck_id: str, truck) -> dict:
    payload = truck_to_dict(truck)
    payload["fileId"] = truck_id
    payload["statusCounts"] = status_counts(truck)
    return payload


def mutate(truck_id: str, operation):
    """Load, apply operation, save and return the new truck as JSON."""
    path = get_truck_path(truck_id)
    with _truck_locks[truck_id]:
        truck = load_truck(path)
        updated = operation(truck)
        if updated is not truck:
            save_truck(path, updated)
    return jsonify(truck_payload(truck_id, updated))


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def number(body: dict, key: str, required: bool = True):
    """Read a finite number from the body; numeric strings are accepted."""
    value = body.get(key)
    if value is None:
        if required:
            raise ValidationError(f"'{key}' is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(f"'{key}' must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{key}' must be a number, got {value!r}") from None
    if not math.isfinite(result):
        raise ValidationError(f"'{key}' must be a finite number, got {value!r}")
    return result


def text(body: dict, key: str):
    """Read an optional string from the body."""
    value = body.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string, got {value!r}")
    return value


def changed_fields(body: dict, text_fields: dict, number_fields: dict) -> dict:
    """Map the camelCase keys present in body to keyword arguments."""
    unknown = set(body) - set(text_fields) - set(number_fields)
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")
    fields = {}
    for key, name in text_fields.items():
        if key in body:
            fields[name] = text(body, key)
    for key, name in number_fields.items():
        if key in body:
            fields[name] = number(body, key)
    return fields


@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify(error=str(e)), 400


@app.errorhandler(InvalidStateTransition)
def handle_invalid_state(e):
    return jsonify(error=str(e)), 409


@app.errorhandler(TireNotFound)
def handle_tire_not_found(e):
    return jsonify(error=str(e)), 404


@app.errorhandler(ExternalCapabilityFailure)
def handle_capability_failure(e):
    return jsonify(error=str(e)), 502


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify(error=e.description), e.code


# =============================================================================
# Trucks
# =============================================================================


@app.route("/trucks")
def list_trucks():
    """Summary of every truck file; unreadable files are listed with an error."""
    trucks = []
    for path in sorted(Path(app.config["TRUCKS_DIR"]).glob("*.yaml")):
        try:
            truck = load_truck(path)
        except (FleetError, yaml.YAMLError, TypeError, AttributeError) as e:
            logger.warning("Skipping unreadable truck file %s: %s", path.name, e)
            trucks.append({"fileId": path.stem, "error": str(e)})
            continue
        trucks.append({
            "fileId": path.stem,
            "plate": truck.plate,
            "model": truck.model,
            "totalKm": truck.total_km,
            "activeTrip": truck.active_trip is not None,
            "statusCounts": status_counts(truck),
        })
    return jsonify(trucks)


@app.route("/trucks/<truck_id>")
def truck_detail(truck_id: str):
    truck = load_truck(get_truck_path(truck_id))
    return jsonify(truck_payload(truck_id, truck))


@app.route("/trucks/<truck_id>", methods=["PATCH"])
def change_truck(truck_id: str):
    body = json_body()
    model, plate = text(body, "model"), text(body, "plate")
    total_km = number(body, "totalKm", required=False)
    return mutate(
        truck_id,
        lambda truck: edit_truck(truck, model=model, plate=plate, total_km=total_km),
    )


@app.route("/trucks/<truck_id>/owner", methods=["PATCH"])
def change_owner(truck_id: str):
    fields = changed_fields(json_body(), OWNER_FIELDS, {})
    return mutate(truck_id, lambda truck: edit_owner(truck, **fields))


# =============================================================================
# Rotation
# =============================================================================


@app.route("/trucks/<truck_id>/swap", methods=["POST"])
def swap(truck_id: str):
    body = json_body()
    tire_a, tire_b = text(body, "tireA"), text(body, "tireB")
    if not tire_a or not tire_b:
        raise ValidationError("'tireA' and 'tireB' are required")
    # Unknown ids are stale references: the truck comes back unchanged
    return mutate(truck_id, lambda truck: swap_tires(truck, tire_a, tire_b))


@app.route("/trucks/<truck_id>/rotate", methods=["POST"])
def rotate(truck_id: str):
    axle = number(json_body(), "axle", required=False)
    axle_index = int(axle) - 1 if axle is not None else None
    return mutate(truck_id, lambda truck: x_rotate(truck, axle_index=axle_index))


# =============================================================================
# Tires
# =============================================================================


@app.route("/trucks/<truck_id>/tires/<tire_id>", methods=["PATCH"])
def change_tire(truck_id: str, tire_id: str):
    fields = changed_fields(json_body(), TIRE_TEXT_FIELDS, TIRE_NUMBER_FIELDS)
    return mutate(truck_id, lambda truck: edit_tire(truck, tire_id, **fields))


@app.route("/trucks/<truck_id>/tires/<tire_id>/occurrences", methods=["POST"])
def add_occurrence(truck_id: str, tire_id: str):
    body = json_body()
    try:
        kind = RecordKind(str(body.get("type", "")).upper())
    except ValueError:
        raise ValidationError(f"Unknown occurrence type {body.get('type')!r}") from None
    description = text(body, "description") or ""
    cost = number(body, "cost", required=False) or 0
    when = text(body, "date")
    return mutate(
        truck_id,
        lambda truck: record_occurrence(truck, tire_id, kind, description, cost, when),
    )


@app.route("/trucks/<truck_id>/tires/<tire_id>/tread", methods=["POST"])
def set_tread(truck_id: str, tire_id: str):
    depth = number(json_body(), "treadDepthMm")
    return mutate(truck_id, lambda truck: update_tread_depth(truck, tire_id, depth))


@app.route("/trucks/<truck_id>/tires/<tire_id>/tread-scan", methods=["POST"])
def scan_tread(truck_id: str, tire_id: str):
    """Estimate tread depth from the raw image in the request body."""
    estimator = app.config["TREAD_ESTIMATOR"]
    if estimator is None:
        abort(501, description="No tread depth estimator configured")
    image = request.get_data()
    if not image:
        raise ValidationError("Request body must contain the tire image")

    path = get_truck_path(truck_id)
    with _truck_locks[truck_id]:
        truck = load_truck(path)
        truck.get_tire(tire_id)
        updated, estimate = apply_tread_scan(truck, tire_id, image, estimator)
        save_truck(path, updated)

    payload = truck_payload(truck_id, updated)
    payload["estimate"] = {
        "estimatedDepthMm": estimate.estimated_depth_mm,
        "wearPercentage": estimate.wear_percentage,
        "condition": estimate.condition,
        "recommendation": estimate.recommendation,
    }
    return jsonify(payload)


@app.route("/trucks/<truck_id>/tires/<tire_id>/pressure", methods=["POST"])
def set_pressure(truck_id: str, tire_id: str):
    body = json_body()
    psi = number(body, "pressurePsi")
    when = text(body, "date")
    return mutate(truck_id, lambda truck: log_pressure(truck, tire_id, psi, when))


# =============================================================================
# Trips
# =============================================================================


@app.route("/trucks/<truck_id>/trip", methods=["POST"])
def begin_trip(truck_id: str):
    body = json_body()
    trip = new_trip(
        body.get("origin"),
        body.get("destination"),
        number(body, "distanceKm"),
        body.get("startDate"),
        body.get("plannedArrivalDate"),
    )
    return mutate(truck_id, lambda truck: start_trip(truck, trip))


@app.route("/trucks/<truck_id>/trip", methods=["PATCH"])
def change_trip(truck_id: str):
    body = json_body()
    distance = number(body, "distanceKm", required=False)
    return mutate(
        truck_id,
        lambda truck: edit_active_trip(
            truck,
            origin=body.get("origin"),
            destination=body.get("destination"),
            distance_km=distance,
        ),
    )


@app.route("/trucks/<truck_id>/trip/complete", methods=["POST"])
def finish_trip(truck_id: str):
    return mutate(truck_id, complete_trip)


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5001)

"""
Boundary to the optional external capabilities.

Three capabilities may be plugged in by the caller: a tread-depth estimator
(image in, depth reading out), an advisor (question and truck summary in,
free text out) and a distance estimator (two place names in, km out). They
are plain callables. Core operations never call them; the helpers here wrap
a call, translate failures to ExternalCapabilityFailure and leave the truck
untouched when anything goes wrong.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .calculations import is_finite_number
from .errors import ExternalCapabilityFailure, ValidationError
from .locator import locate_tire
from .tire_updates import update_tread_depth
from .truck import Truck

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreadDepthEstimate:
    """Result of a tread analysis. Only estimated_depth_mm feeds the model."""

    estimated_depth_mm: float
    wear_percentage: Optional[float] = None
    condition: str = ""
    recommendation: str = ""

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "TreadDepthEstimate":
        """Build from the camelCase payload an analysis service returns."""
        return cls(
            estimated_depth_mm=dct["estimatedDepthMm"],
            wear_percentage=dct.get("wearPercentage"),
            condition=dct.get("condition") or "",
            recommendation=dct.get("recommendation") or "",
        )


TreadDepthEstimator = Callable[[bytes], TreadDepthEstimate]
Advisor = Callable[[str, str], str]
DistanceEstimator = Callable[[str, str], int]


def apply_tread_scan(
    truck: Truck, tire_id: str, image: bytes, estimator: TreadDepthEstimator
) -> Tuple[Truck, TreadDepthEstimate]:
    """
    Estimate a tire's tread depth from an image and store the reading.

    Returns the updated truck and the full estimate for display.

    Raises:
        ExternalCapabilityFailure: the estimator raised, or returned a depth
            that is not a non-negative number. The truck is unchanged.
    """
    try:
        estimate = estimator(image)
    except Exception as e:
        logger.warning("Tread estimator failed for tire %s: %s", tire_id, e)
        raise ExternalCapabilityFailure("tread-depth", str(e)) from e

    depth = getattr(estimate, "estimated_depth_mm", None)
    if not is_finite_number(depth):
        raise ExternalCapabilityFailure(
            "tread-depth", f"unusable depth reading {depth!r}"
        )
    try:
        updated = update_tread_depth(truck, tire_id, depth)
    except ValidationError as e:
        raise ExternalCapabilityFailure("tread-depth", str(e)) from e
    return updated, estimate


def truck_context(truck: Truck) -> str:
    """Plain-text summary of a truck's tire situation for the advisor."""
    counts = truck.status_counts()
    total = sum(counts.values())
    breakdown = ", ".join(
        f"{n} {status.label.lower()}" for status, n in counts.items() if n
    )
    lines = [
        f"Truck: {truck.name}, odometer {truck.total_km:,.0f} km.",
        f"Tires: {total} ({breakdown})." if total else "Tires: none registered.",
    ]
    for tire in truck.tires_needing_attention():
        location = locate_tire(truck, tire.id)
        lines.append(
            f"{tire.status.label}: {tire.id} {tire.brand} at {location.position}, "
            f"{tire.km_run:,.0f} km run, {tire.tread_depth_mm:g} mm tread."
        )
    if truck.active_trip is not None:
        trip = truck.active_trip
        lines.append(f"Active trip: {trip.route} ({trip.distance_km:,.0f} km).")
    return "\n".join(lines)


def ask_advisor(advisor: Advisor, query: str, truck: Truck) -> str:
    """
    Ask the advisor a question about this truck. Never changes the truck.

    Raises:
        ExternalCapabilityFailure: the advisor raised or returned no text.
    """
    try:
        answer = advisor(query, truck_context(truck))
    except Exception as e:
        logger.warning("Advisor failed: %s", e)
        raise ExternalCapabilityFailure("advisor", str(e)) from e
    if not answer:
        raise ExternalCapabilityFailure("advisor", "empty answer")
    return answer


def suggest_distance(
    estimator: Optional[DistanceEstimator], origin: str, destination: str
) -> Optional[int]:
    """
    Road distance suggestion used to pre-fill a new trip.

    Returns None when no estimator is configured, it fails, or it has no
    positive answer; the user then enters the distance by hand.
    """
    if estimator is None:
        return None
    try:
        km = estimator(origin, destination)
    except Exception as e:
        logger.warning(
            "Distance estimate %s -> %s failed: %s", origin, destination, e
        )
        return None
    if not is_finite_number(km) or km <= 0:
        logger.warning(
            "Distance estimate %s -> %s unusable: %r", origin, destination, km
        )
        return None
    return int(km)


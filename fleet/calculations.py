"""Helper functions for tire wear classification and cost."""

import math
from typing import TYPE_CHECKING

from .status import TireStatus

if TYPE_CHECKING:
    from .tire import Tire

CRITICAL_KM_RUN = 120_000
CRITICAL_RETREADS = 2
CRITICAL_TREAD_MM = 3

HALF_LIFE_KM_RUN = 40_000
HALF_LIFE_TREAD_MM = 8


def classify_tire(tire: "Tire") -> TireStatus:
    """
    Classify a tire's wear status from its usage and history.

    Rules are checked by strict priority, first match wins:
    - CRITICAL: structural damage (bubble, blowout, cut), more than
      120,000 km run, more than 2 retreads, or tread below 3 mm
    - GOOD (half-life): more than 40,000 km run, any retread, or tread
      below 8 mm
    - NEW: otherwise

    WARNING is never returned.
    """
    km_run = tire.km_run
    retreads = tire.retread_count

    if tire.has_structural_damage:
        return TireStatus.CRITICAL
    if km_run > CRITICAL_KM_RUN:
        return TireStatus.CRITICAL
    if retreads > CRITICAL_RETREADS:
        return TireStatus.CRITICAL
    if tire.tread_depth_mm < CRITICAL_TREAD_MM:
        return TireStatus.CRITICAL

    if km_run > HALF_LIFE_KM_RUN:
        return TireStatus.GOOD
    if retreads > 0:
        return TireStatus.GOOD
    if tire.tread_depth_mm < HALF_LIFE_TREAD_MM:
        return TireStatus.GOOD

    return TireStatus.NEW


def is_finite_number(value) -> bool:
    """True for int or float values that are neither bool, NaN nor infinite."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def calc_cpk(purchase_price: float, km_run: float) -> float:
    """Cost per kilometer. A tire that has not rolled yet counts as 1 km."""
    return purchase_price / (km_run or 1)

"""Shared fixtures: tires and a two-axle truck with one spare."""

import pytest

from fleet import Axle, AxleType, Owner, Tire, Truck, new_trip


@pytest.fixture
def make_tire():
    """Factory for tires with sensible defaults (new, 18 mm, 0 km)."""

    def _make(tire_id, current_km=0, tread_depth_mm=18, history=(), **kwargs):
        kwargs.setdefault("brand", "Bridgestone")
        kwargs.setdefault("purchase_price", 2400)
        return Tire(
            id=tire_id,
            current_km=current_km,
            tread_depth_mm=tread_depth_mm,
            history=history,
            **kwargs,
        )

    return _make


@pytest.fixture
def truck(make_tire):
    """Front axle (F1, F2), traction axle (T0..T3) and spare S1."""
    front = Axle(
        "axle-1",
        AxleType.FRONT,
        (
            make_tire("F1", current_km=45000, tread_depth_mm=10, brand="Michelin"),
            make_tire("F2", current_km=45000, tread_depth_mm=10, brand="Michelin"),
        ),
    )
    traction = Axle(
        "axle-2",
        AxleType.TRACTION,
        tuple(make_tire(f"T{i}", current_km=5000) for i in range(4)),
    )
    return Truck(
        id="truck-01",
        plate="HUE-2024",
        model="Volvo FH 540",
        axles=(front, traction),
        spares=(
            make_tire("S1", current_km=1000, tread_depth_mm=10, brand="Goodyear"),
        ),
        total_km=124500,
        owner=Owner("Transportadora Modelo", "Joao da Silva", city="Fortaleza"),
    )


@pytest.fixture
def trip():
    return new_trip(
        "Fortaleza", "Recife", 800, "2025-05-01T08:00:00", "2025-05-02T18:00:00"
    )

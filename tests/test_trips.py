#!/usr/bin/env python3
"""Tests for the trip lifecycle."""

from dataclasses import replace

import pytest

from fleet import (
    InvalidStateTransition,
    TripState,
    TripStatus,
    ValidationError,
    complete_trip,
    edit_active_trip,
    start_trip,
    trip_state,
)
from fleet.trips import total_trip_km


class TestStartTrip:
    def test_starts_trip(self, truck, trip):
        assert trip_state(truck) == TripState.NO_ACTIVE_TRIP
        started = start_trip(truck, trip)
        assert trip_state(started) == TripState.TRIP_ACTIVE
        assert started.active_trip.status == TripStatus.ACTIVE
        assert started.active_trip.route == "Fortaleza -> Recife"

    def test_second_trip_rejected(self, truck, trip):
        started = start_trip(truck, trip)
        with pytest.raises(InvalidStateTransition):
            start_trip(started, trip)

    @pytest.mark.parametrize(
        "distance", [0, -10, None, float("nan"), float("inf"), "abc", True]
    )
    def test_distance_must_be_positive(self, truck, trip, distance):
        with pytest.raises(ValidationError):
            start_trip(truck, replace(trip, distance_km=distance))

    @pytest.mark.parametrize("field", ["origin", "destination"])
    def test_places_required(self, truck, trip, field):
        with pytest.raises(ValidationError):
            start_trip(truck, replace(trip, **{field: "  "}))

    def test_dates_must_be_iso(self, truck, trip):
        with pytest.raises(ValidationError):
            start_trip(truck, replace(trip, start_date="tomorrow"))
        with pytest.raises(ValidationError):
            start_trip(truck, replace(trip, planned_arrival_date=None))

    def test_non_string_places_rejected(self, truck, trip):
        with pytest.raises(ValidationError):
            start_trip(truck, replace(trip, origin=123))

    def test_non_string_dates_rejected(self, truck, trip):
        with pytest.raises(ValidationError):
            start_trip(truck, replace(trip, start_date=20250501))

    def test_rejected_distance_leaves_odometer_alone(self, truck, trip):
        with pytest.raises(ValidationError):
            complete_trip(start_trip(truck, replace(trip, distance_km=float("nan"))))
        assert truck.total_km == 124500


class TestEditActiveTrip:
    def test_edit_fields(self, truck, trip):
        started = start_trip(truck, trip)
        edited = edit_active_trip(started, destination="Natal", distance_km=540)
        assert edited.active_trip.destination == "Natal"
        assert edited.active_trip.distance_km == 540
        assert edited.active_trip.origin == "Fortaleza"
        assert edited.active_trip.id == trip.id

    def test_no_changes_returns_same_truck(self, truck, trip):
        started = start_trip(truck, trip)
        assert edit_active_trip(started) is started

    def test_invalid_distance_rejected(self, truck, trip):
        started = start_trip(truck, trip)
        with pytest.raises(ValidationError):
            edit_active_trip(started, distance_km=0)

    @pytest.mark.parametrize("distance", [float("nan"), float("inf"), "790"])
    def test_non_finite_distance_rejected(self, truck, trip, distance):
        started = start_trip(truck, trip)
        with pytest.raises(ValidationError):
            edit_active_trip(started, distance_km=distance)

    def test_non_string_origin_rejected(self, truck, trip):
        started = start_trip(truck, trip)
        with pytest.raises(ValidationError):
            edit_active_trip(started, origin=42)

    def test_requires_active_trip(self, truck):
        with pytest.raises(InvalidStateTransition):
            edit_active_trip(truck, origin="Natal")


class TestCompleteTrip:
    def test_credits_odometer_and_mounted_tires(self, truck, trip):
        done = complete_trip(start_trip(truck, trip), when="2025-05-02T17:00:00")
        assert done.total_km == 124500 + 800
        for tire in done.installed_tires():
            assert tire.current_km == truck.find_tire(tire.id).current_km + 800

    def test_spares_do_not_roll(self, truck, trip):
        done = complete_trip(start_trip(truck, trip))
        assert done.find_tire("S1").current_km == 1000

    def test_moves_trip_to_history(self, truck, trip):
        done = complete_trip(start_trip(truck, trip), when="2025-05-02T17:00:00")
        assert done.active_trip is None
        assert trip_state(done) == TripState.NO_ACTIVE_TRIP
        finished = done.trip_history[0]
        assert finished.id == trip.id
        assert finished.status == TripStatus.COMPLETED
        assert finished.completed_date == "2025-05-02T17:00:00"

    def test_history_newest_first(self, truck, trip):
        done = complete_trip(start_trip(truck, trip))
        second = replace(trip, id="second", destination="Natal", distance_km=540)
        done = complete_trip(start_trip(done, second))
        assert [t.id for t in done.trip_history] == ["second", trip.id]
        assert total_trip_km(done) == 1340

    def test_status_reflects_new_km(self, truck, trip):
        long_trip = replace(trip, distance_km=40_000)
        done = complete_trip(start_trip(truck, long_trip))
        # T0..T3 were NEW at 5000 km and are now past half-life
        assert done.find_tire("T0").status.name == "GOOD"
        assert done.find_tire("S1").status.name == "NEW"

    def test_requires_active_trip(self, truck):
        with pytest.raises(InvalidStateTransition):
            complete_trip(truck)

    def test_empty_slots_survive(self, truck, trip):
        truck = truck.with_axle(1, truck.axles[1].with_slot(2, None))
        done = complete_trip(start_trip(truck, trip))
        assert done.axles[1].slots[2] is None

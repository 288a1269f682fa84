#!/usr/bin/env python3
"""Tests for locate_tire."""

from fleet import LocationKind, locate_tire


class TestLocateTire:
    def test_axle_slot(self, truck):
        location = locate_tire(truck, "T0")
        assert location.kind == LocationKind.AXLE
        assert location.axle_id == "axle-2"
        assert location.axle_index == 1
        assert location.slot_index == 0
        assert location.label == "Outer Left"
        assert location.position == "Axle 2 - Outer Left"

    def test_single_axle_slot(self, truck):
        location = locate_tire(truck, "F2")
        assert location.label == "Right"
        assert location.position == "Axle 1 - Right"

    def test_spare(self, truck):
        location = locate_tire(truck, "S1")
        assert location.is_spare
        assert location.index == 0
        assert location.slot_index is None
        assert location.position == "Spare #1"

    def test_unknown_tire(self, truck):
        assert locate_tire(truck, "NOPE") is None

    def test_empty_slots_are_skipped(self, truck):
        axle = truck.axles[1].with_slot(0, None)
        truck = truck.with_axle(1, axle)
        assert locate_tire(truck, "T0") is None
        assert locate_tire(truck, "T1").label == "Inner Left"

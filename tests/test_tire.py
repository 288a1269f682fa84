#!/usr/bin/env python3
"""Tests for Tire class."""

import pytest

from fleet import MaintenanceRecord, RecordKind, Tire, TireStatus, ValidationError


def record(kind, cost=0):
    return MaintenanceRecord(id="r1", date="2025-01-15", kind=kind, cost=cost)


class TestTireValidation:
    def test_requires_id(self):
        with pytest.raises(ValidationError):
            Tire(id="")

    def test_current_km_below_initial_rejected(self):
        with pytest.raises(ValidationError):
            Tire(id="A", initial_km=1000, current_km=500)

    def test_negative_tread_rejected(self):
        with pytest.raises(ValidationError):
            Tire(id="A", tread_depth_mm=-1)

    @pytest.mark.parametrize(
        "field", ["initial_km", "current_km", "tread_depth_mm", "pressure_psi"]
    )
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "10"])
    def test_numbers_must_be_finite(self, field, value):
        fields = {"initial_km": 0, "current_km": 100, "tread_depth_mm": 18}
        fields[field] = value
        with pytest.raises(ValidationError):
            Tire(id="A", **fields)

    def test_history_list_is_frozen_to_tuple(self):
        tire = Tire(id="A", tread_depth_mm=18, history=[record(RecordKind.OTHER)])
        assert isinstance(tire.history, tuple)


class TestTireDerived:
    def test_km_run(self, make_tire):
        tire = make_tire("A", initial_km=10_000, current_km=25_000)
        assert tire.km_run == 15_000

    def test_status_recomputed_on_every_read(self, make_tire):
        tire = make_tire("A")
        assert tire.status == TireStatus.NEW
        assert tire.with_tread_depth(2).status == TireStatus.CRITICAL
        assert tire.status == TireStatus.NEW

    def test_retread_count_and_damage(self, make_tire):
        tire = make_tire(
            "A", history=(record(RecordKind.RETREAD), record(RecordKind.CUT))
        )
        assert tire.retread_count == 1
        assert tire.has_structural_damage

    def test_cpk(self, make_tire):
        tire = make_tire("A", current_km=48_000, purchase_price=2400)
        assert tire.cpk == pytest.approx(0.05)

    def test_maintenance_cost(self, make_tire):
        tire = make_tire(
            "A",
            history=(
                record(RecordKind.PUNCTURE, cost=80),
                record(RecordKind.RETREAD, cost=900),
            ),
        )
        assert tire.maintenance_cost == 980

    def test_rotations_and_last_record(self, make_tire):
        rotation = record(RecordKind.ROTATION)
        other = record(RecordKind.OTHER)
        tire = make_tire("A", history=(rotation, other))
        assert tire.rotations == (rotation,)
        assert tire.last_record == other
        assert make_tire("B").last_record is None


class TestTireCopies:
    def test_with_record_appends(self, make_tire):
        first, second = record(RecordKind.OTHER), record(RecordKind.PUNCTURE)
        tire = make_tire("A", history=(first,))
        updated = tire.with_record(second)
        assert updated.history == (first, second)
        assert tire.history == (first,)

    def test_with_changes_edits_descriptive_fields(self, make_tire):
        tire = make_tire("A").with_changes(brand="Pirelli", size="275/80R22.5")
        assert tire.brand == "Pirelli"
        assert tire.size == "275/80R22.5"

    def test_with_changes_rejects_unknown_field(self, make_tire):
        with pytest.raises(ValidationError):
            make_tire("A").with_changes(id="B")

    def test_with_changes_rejects_km_below_initial(self, make_tire):
        tire = make_tire("A", initial_km=1000, current_km=2000)
        with pytest.raises(ValidationError):
            tire.with_changes(current_km=500)

    def test_tire_is_immutable(self, make_tire):
        tire = make_tire("A")
        with pytest.raises(AttributeError):
            tire.current_km = 10

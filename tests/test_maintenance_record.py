#!/usr/bin/env python3
"""Tests for MaintenanceRecord class."""

from fleet import STRUCTURAL_DAMAGE, MaintenanceRecord, RecordKind


class TestMaintenanceRecord:
    def test_required_attributes(self):
        rec = MaintenanceRecord("r1", "2025-01-15", RecordKind.PUNCTURE)
        assert rec.id == "r1"
        assert rec.date == "2025-01-15"
        assert rec.kind == RecordKind.PUNCTURE

    def test_optional_attributes_default(self):
        rec = MaintenanceRecord("r1", "2025-01-15", RecordKind.OTHER)
        assert rec.description == ""
        assert rec.cost == 0

    def test_create_generates_id_and_timestamp(self):
        a = MaintenanceRecord.create(RecordKind.RETREAD, "Retreaded", 900)
        b = MaintenanceRecord.create(RecordKind.RETREAD, "Retreaded", 900)
        assert a.id != b.id
        assert a.date
        assert a.cost == 900

    def test_create_uses_given_timestamp(self):
        rec = MaintenanceRecord.create(RecordKind.OTHER, when="2025-03-01T09:30:00")
        assert rec.date == "2025-03-01T09:30:00"

    def test_structural_damage_kinds(self):
        assert STRUCTURAL_DAMAGE == {
            RecordKind.BUBBLE,
            RecordKind.BLOWOUT,
            RecordKind.CUT,
        }
        assert MaintenanceRecord("r", "d", RecordKind.CUT).is_structural_damage
        assert not MaintenanceRecord("r", "d", RecordKind.PUNCTURE).is_structural_damage

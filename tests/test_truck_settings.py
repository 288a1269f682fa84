#!/usr/bin/env python3
"""Tests for truck settings and owner edits."""

from dataclasses import replace

import pytest

from fleet import ValidationError, edit_owner, edit_truck


class TestEditTruck:
    def test_edits_model_plate_and_odometer(self, truck):
        updated = edit_truck(
            truck, model="Volvo FH 460", plate="abc-1d23", total_km=130_000
        )
        assert updated.model == "Volvo FH 460"
        assert updated.plate == "ABC-1D23"
        assert updated.total_km == 130_000
        assert truck.total_km == 124500

    def test_odometer_correction_leaves_tires_alone(self, truck):
        updated = edit_truck(truck, total_km=100_000)
        assert updated.axles is truck.axles
        assert updated.find_tire("F1").current_km == 45000

    def test_no_changes_returns_same_truck(self, truck):
        assert edit_truck(truck) is truck

    @pytest.mark.parametrize("km", [-1, float("nan"), float("inf"), "125000"])
    def test_invalid_odometer_rejected(self, truck, km):
        with pytest.raises(ValidationError):
            edit_truck(truck, total_km=km)

    @pytest.mark.parametrize("field", ["model", "plate"])
    def test_blank_text_rejected(self, truck, field):
        with pytest.raises(ValidationError):
            edit_truck(truck, **{field: "   "})

    def test_non_string_plate_rejected(self, truck):
        with pytest.raises(ValidationError):
            edit_truck(truck, plate=1234)


class TestEditOwner:
    def test_edits_some_fields(self, truck):
        updated = edit_owner(truck, phone="(88) 98888-0000", city="Recife")
        assert updated.owner.phone == "(88) 98888-0000"
        assert updated.owner.city == "Recife"
        assert updated.owner.name == "Transportadora Modelo"
        assert truck.owner.city == "Fortaleza"

    def test_blank_email_stored_as_none(self, truck):
        updated = edit_owner(truck, email="contato@modelo.com")
        assert edit_owner(updated, email="").owner.email is None

    def test_same_values_return_same_truck(self, truck):
        assert edit_owner(truck, city="Fortaleza") is truck

    def test_unknown_field_rejected(self, truck):
        with pytest.raises(ValidationError):
            edit_owner(truck, cnpj="00.000.000/0001-00")

    def test_blank_name_rejected(self, truck):
        with pytest.raises(ValidationError):
            edit_owner(truck, driver_name="")

    def test_non_text_rejected(self, truck):
        with pytest.raises(ValidationError):
            edit_owner(truck, phone=88999990000)

    def test_truck_without_owner_needs_names(self, truck):
        ownerless = replace(truck, owner=None)
        with pytest.raises(ValidationError):
            edit_owner(ownerless, city="Recife")
        updated = edit_owner(
            ownerless, name="Transportes Sol", driver_name="Maria", city="Natal"
        )
        assert updated.owner.driver_name == "Maria"
        assert updated.owner.city == "Natal"

#!/usr/bin/env python3
"""Tests for TireStatus enum."""

from fleet import TireStatus


class TestTireStatus:
    """Tests for TireStatus enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert TireStatus.CRITICAL.value < TireStatus.WARNING.value
        assert TireStatus.WARNING.value < TireStatus.GOOD.value
        assert TireStatus.GOOD.value < TireStatus.NEW.value

    def test_four_values(self):
        assert [s.name for s in TireStatus] == ["CRITICAL", "WARNING", "GOOD", "NEW"]

    def test_labels(self):
        assert TireStatus.GOOD.label == "Half-life"
        assert TireStatus.CRITICAL.label == "Critical"
        assert TireStatus.NEW.label == "New"

"""Tests for rejection classification."""

import logging

from fleet_allocation.allocation import classify_rejection
from fleet_allocation.models import CompartmentStatus, OrderDemand, RejectionKind
from tests.fixtures import make_fleet, make_unit


class TestPriority:
    """Tests for the fixed rule order."""

    def test_too_heavy_wins_over_cold(self):
        """An overweight cold order with no cold units reports ORDER_TOO_HEAVY."""
        order = OrderDemand(id="O1", total_weight_kg=400.0, requires_cold=True)
        units = [make_unit("S", 100.0)]

        reason = classify_rejection(order, units, weight_ceiling_kg=350.0)

        assert reason.kind == RejectionKind.ORDER_TOO_HEAVY
        assert "400.0kg" in reason.message

    def test_no_ceiling_skips_weight_check(self):
        order = OrderDemand(id="O1", total_weight_kg=400.0)
        units = [make_unit("S", 100.0)]

        reason = classify_rejection(order, units, weight_ceiling_kg=None)

        assert reason.kind == RejectionKind.NO_CAPACITY

    def test_cold_wins_over_capacity(self):
        order = OrderDemand(id="O1", total_weight_kg=50.0, requires_cold=True)
        units = [make_unit("S", 10.0)]

        reason = classify_rejection(order, units)

        assert reason.kind == RejectionKind.NO_COLD_STORAGE


class TestSingleUnitRules:
    """Tests for one-unit-must-fit classification."""

    def test_cold_units_too_small(self):
        """Cold units exist but none holds the whole order."""
        order = OrderDemand(id="O1", total_weight_kg=12.0, requires_cold=True)
        units = make_fleet([("C5", 5, True), ("C8", 8, True), ("S50", 50, False)])

        reason = classify_rejection(order, units)

        assert reason.kind == RejectionKind.NO_COLD_STORAGE
        assert reason.details == {"requires_cold": True, "available_cold_units": 0}

    def test_unpowered_cold_unit_not_counted(self):
        order = OrderDemand(id="O1", total_weight_kg=5.0, requires_cold=True)
        units = [make_unit("C", 50.0, cold=True, powered=False)]

        reason = classify_rejection(order, units)

        assert reason.kind == RejectionKind.NO_COLD_STORAGE

    def test_in_transit_unit_not_counted(self):
        order = OrderDemand(id="O1", total_weight_kg=5.0)
        units = [make_unit("S", 50.0, status=CompartmentStatus.IN_TRANSIT)]

        reason = classify_rejection(order, units)

        assert reason.kind == RejectionKind.NO_CAPACITY
        assert reason.details == {"total_units": 1, "available_units": 0}

    def test_unexplained_failure_is_unknown(self, caplog):
        """A fitting unit exists, so no rule applies."""
        order = OrderDemand(id="O1", total_weight_kg=5.0)
        units = [make_unit("S", 50.0)]

        with caplog.at_level(logging.WARNING):
            reason = classify_rejection(order, units)

        assert reason.kind == RejectionKind.UNKNOWN
        assert reason.details == {}
        assert "O1" in caplog.text


class TestPooledRules:
    """Tests for summed-capacity classification."""

    def test_pooled_cold_shortfall(self, mixed_fleet, cold_order):
        reason = classify_rejection(cold_order, mixed_fleet, pools_capacity=True)

        assert reason.kind == RejectionKind.NO_COLD_STORAGE
        assert reason.details["cold_weight_kg"] == 18.0
        assert reason.details["available_cold_capacity_kg"] == 13.0
        assert reason.details["available_cold_units"] == 2

    def test_pooled_cold_covered_by_sum(self, mixed_fleet):
        """12kg cold fits across two cold units, so cold is not the reason."""
        order = OrderDemand(id="O1", total_weight_kg=12.0, requires_cold=True)

        reason = classify_rejection(order, mixed_fleet, pools_capacity=True)

        assert reason.kind == RejectionKind.UNKNOWN

    def test_pooled_total_shortfall(self, mixed_fleet):
        order = OrderDemand(id="O1", total_weight_kg=26.0, cold_weight_kg=6.0)

        reason = classify_rejection(order, mixed_fleet, pools_capacity=True)

        assert reason.kind == RejectionKind.NO_CAPACITY
        assert reason.details["order_weight_kg"] == 26.0
        assert reason.details["available_capacity_kg"] == 25.0
        assert reason.details["available_units"] == 3


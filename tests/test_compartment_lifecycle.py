"""
Tests for compartment lifecycle transitions.

This module tests:
- The transition table
- Load assignment and release
- Full delivery cycle
- Rejected transitions
"""

import pytest

from fleet_allocation.allocation import MultiUnitSplitStrategy, SingleUnitStrategy
from fleet_allocation.models import CompartmentStatus, InvalidTransitionError, OrderDemand
from tests.fixtures import make_unit


class TestTransitionTable:
    """Tests for CompartmentStatus transitions."""

    @pytest.mark.parametrize("current,target", [
        (CompartmentStatus.AVAILABLE, CompartmentStatus.ASSIGNED),
        (CompartmentStatus.ASSIGNED, CompartmentStatus.ASSIGNED),
        (CompartmentStatus.ASSIGNED, CompartmentStatus.IN_TRANSIT),
        (CompartmentStatus.ASSIGNED, CompartmentStatus.AVAILABLE),
        (CompartmentStatus.IN_TRANSIT, CompartmentStatus.DELIVERED),
        (CompartmentStatus.DELIVERED, CompartmentStatus.AVAILABLE),
    ])
    def test_allowed(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize("current,target", [
        (CompartmentStatus.AVAILABLE, CompartmentStatus.IN_TRANSIT),
        (CompartmentStatus.AVAILABLE, CompartmentStatus.DELIVERED),
        (CompartmentStatus.IN_TRANSIT, CompartmentStatus.ASSIGNED),
        (CompartmentStatus.IN_TRANSIT, CompartmentStatus.AVAILABLE),
        (CompartmentStatus.DELIVERED, CompartmentStatus.ASSIGNED),
    ])
    def test_disallowed(self, current, target):
        assert not current.can_transition_to(target)

    def test_only_available_and_assigned_accept_load(self):
        accepting = [s for s in CompartmentStatus if s.accepts_load]
        assert accepting == [CompartmentStatus.AVAILABLE, CompartmentStatus.ASSIGNED]


class TestLoadLifecycle:
    """Tests for lifecycle methods on CapacityUnit."""

    def test_assign_consumes_residual(self, standard_unit):
        standard_unit.assign(4.0)

        assert standard_unit.status == CompartmentStatus.ASSIGNED
        assert standard_unit.residual_kg == 6.0
        assert standard_unit.allocated_kg == 4.0

    def test_assign_again_while_assigned(self, standard_unit):
        """A partially filled compartment can take more load."""
        standard_unit.assign(4.0)
        standard_unit.assign(6.0)

        assert standard_unit.residual_kg == 0.0

    def test_assign_over_residual_rejected(self, standard_unit):
        with pytest.raises(ValueError, match="exceeds residual"):
            standard_unit.assign(10.5)

        assert standard_unit.status == CompartmentStatus.AVAILABLE
        assert standard_unit.residual_kg == 10.0

    def test_release_restores_capacity(self, standard_unit):
        standard_unit.assign(7.0)
        standard_unit.release()

        assert standard_unit.status == CompartmentStatus.AVAILABLE
        assert standard_unit.residual_kg == 10.0

    def test_full_delivery_cycle(self, standard_unit):
        standard_unit.assign(7.0)
        standard_unit.start_transit()
        assert standard_unit.status == CompartmentStatus.IN_TRANSIT

        standard_unit.complete_delivery()
        assert standard_unit.status == CompartmentStatus.DELIVERED

        standard_unit.reset()
        assert standard_unit.status == CompartmentStatus.AVAILABLE
        assert standard_unit.residual_kg == 10.0

    def test_cannot_depart_empty(self, standard_unit):
        with pytest.raises(InvalidTransitionError) as exc_info:
            standard_unit.start_transit()

        assert exc_info.value.unit_id == "STD10"
        assert exc_info.value.current == CompartmentStatus.AVAILABLE
        assert exc_info.value.target == CompartmentStatus.IN_TRANSIT

    def test_cannot_load_in_transit(self, standard_unit):
        standard_unit.assign(2.0)
        standard_unit.start_transit()

        with pytest.raises(InvalidTransitionError):
            standard_unit.assign(1.0)

    def test_invalid_transition_is_value_error(self, standard_unit):
        with pytest.raises(ValueError):
            standard_unit.complete_delivery()


class TestStrategiesRespectLifecycle:
    """Units that cannot take load are skipped by every strategy."""

    @pytest.mark.parametrize("strategy_cls", [SingleUnitStrategy, MultiUnitSplitStrategy])
    def test_in_transit_unit_skipped(self, strategy_cls):
        units = [
            make_unit("BUSY", 100.0, status=CompartmentStatus.IN_TRANSIT),
            make_unit("FREE", 20.0),
        ]
        order = OrderDemand(id="O1", total_weight_kg=10.0)

        result = strategy_cls().allocate(order, units)

        assert result.unit_ids == ["FREE"]

    def test_assigned_unit_still_used(self):
        units = [make_unit("PART", 20.0, residual_kg=15.0, status=CompartmentStatus.ASSIGNED)]
        order = OrderDemand(id="O1", total_weight_kg=10.0)

        result = SingleUnitStrategy().allocate(order, units)

        assert result.is_success
        assert result.residual_kg_by_unit == {"PART": 5.0}

"""Pytest configuration and shared fixtures."""

import pytest

from fleet_allocation.models import OrderDemand
from tests.fixtures import make_unit


@pytest.fixture
def standard_unit():
    """Fixture for a single 10kg non-cold powered unit."""
    return make_unit("STD10", 10.0)


@pytest.fixture
def mixed_fleet():
    """Fixture for [5kg cold, 8kg cold, 12kg standard] units."""
    return [
        make_unit("C5", 5.0, cold=True, vehicle_id="DRONE001"),
        make_unit("C8", 8.0, cold=True, vehicle_id="DRONE002"),
        make_unit("S12", 12.0, vehicle_id="DRONE003"),
    ]


@pytest.fixture
def drone_fleet():
    """Fixture for a fleet of full-size 350kg compartments, one unpowered."""
    return [
        make_unit("35A", 350.0, vehicle_id="DRONE001"),
        make_unit("67D", 350.0, cold=True, vehicle_id="DRONE001"),
        make_unit("88E", 200.0, cold=True, vehicle_id="DRONE002"),
        make_unit("90F", 350.0, cold=True, powered=False, vehicle_id="DRONE003"),
    ]


@pytest.fixture
def cold_order():
    """Fixture for an 18kg all-cold order."""
    return OrderDemand(id="ORD-COLD", total_weight_kg=18.0, requires_cold=True)


@pytest.fixture
def split_order():
    """Fixture for an 18kg order with 10kg cold and 8kg non-cold."""
    return OrderDemand(
        id="ORD-SPLIT",
        total_weight_kg=18.0,
        cold_weight_kg=10.0,
        non_cold_weight_kg=8.0,
    )

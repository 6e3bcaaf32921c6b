"""Reusable capacity unit builders for allocation tests."""

from fleet_allocation.models import CapacityUnit


def make_unit(unit_id, capacity_kg, cold=False, powered=True, **kwargs):
    """Helper to create a capacity unit for testing."""
    return CapacityUnit(
        id=unit_id,
        capacity_kg=capacity_kg,
        is_cold_capable=cold,
        is_powered=powered,
        **kwargs,
    )


def make_fleet(rows):
    """
    Create units from (id, capacity_kg, cold) tuples.

    Example:
        make_fleet([("C5", 5, True), ("S12", 12, False)])
    """
    return [make_unit(unit_id, capacity, cold=cold) for unit_id, capacity, cold in rows]

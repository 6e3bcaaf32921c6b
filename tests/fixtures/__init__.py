"""Test fixtures for allocation engine testing."""

from .fleet_factory import make_unit, make_fleet

__all__ = ['make_unit', 'make_fleet']

"""Analysis and reporting over capacity snapshots and allocation results."""

from .fleet_report import (
    ALLOCATION_COLUMNS,
    UNIT_COLUMNS,
    FleetSummary,
    summarize_fleet,
    units_to_dataframe,
    allocations_to_dataframe,
)

__all__ = [
    'ALLOCATION_COLUMNS',
    'UNIT_COLUMNS',
    'FleetSummary',
    'summarize_fleet',
    'units_to_dataframe',
    'allocations_to_dataframe',
]

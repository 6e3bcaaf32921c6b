"""Fleet capacity summary and tabular views.

Summarizes a capacity unit snapshot (total, used, available and cold
capacity) and converts units and allocation results into DataFrames for
display or export.
"""

from dataclasses import dataclass
from typing import Dict, List
import pandas as pd

from fleet_allocation.constants import round_weight
from fleet_allocation.models.allocation import AllocationResult
from fleet_allocation.models.capacity_unit import CapacityUnit


UNIT_COLUMNS = [
    'Unit', 'Vehicle', 'Capacity (kg)', 'Used (kg)', 'Available (kg)',
    'Cold', 'Powered', 'Status',
]

ALLOCATION_COLUMNS = ['Order', 'Strategy', 'Unit', 'Vehicle', 'Weight (kg)', 'Temperature']


@dataclass
class FleetSummary:
    """Aggregate capacity figures for a unit snapshot."""
    unit_count: int
    powered_count: int
    total_capacity_kg: float
    used_kg: float
    available_kg: float
    cold_capacity_kg: float

    @property
    def utilization(self) -> float:
        """Fraction of total capacity in use (0.0 to 1.0)."""
        if self.total_capacity_kg == 0:
            return 0.0
        return self.used_kg / self.total_capacity_kg

    def to_dict(self) -> Dict:
        """Convert to dictionary for display."""
        return {
            'Units': self.unit_count,
            'Powered Units': self.powered_count,
            'Total Capacity (kg)': self.total_capacity_kg,
            'Currently Used (kg)': self.used_kg,
            'Available (kg)': self.available_kg,
            'Cold Storage Capacity (kg)': self.cold_capacity_kg,
            'Utilization': f"{self.utilization:.1%}",
        }

    def __str__(self) -> str:
        return (
            f"Fleet: {self.unit_count} units, {self.used_kg:.2f}/{self.total_capacity_kg:.2f}kg used "
            f"({self.utilization:.1%}), cold capacity {self.cold_capacity_kg:.2f}kg"
        )


def summarize_fleet(units: List[CapacityUnit]) -> FleetSummary:
    """
    Aggregate capacity figures over a unit snapshot.

    Args:
        units: Capacity units to summarize

    Returns:
        FleetSummary with totals in kg
    """
    total = round_weight(sum(u.capacity_kg for u in units))
    available = round_weight(sum(u.residual_kg for u in units))
    return FleetSummary(
        unit_count=len(units),
        powered_count=sum(1 for u in units if u.is_powered),
        total_capacity_kg=total,
        used_kg=round_weight(total - available),
        available_kg=available,
        cold_capacity_kg=round_weight(sum(u.capacity_kg for u in units if u.is_cold_capable)),
    )


def units_to_dataframe(units: List[CapacityUnit]) -> pd.DataFrame:
    """One row per capacity unit."""
    rows = [
        {
            'Unit': u.id,
            'Vehicle': u.vehicle_id or '-',
            'Capacity (kg)': u.capacity_kg,
            'Used (kg)': u.allocated_kg,
            'Available (kg)': u.residual_kg,
            'Cold': u.is_cold_capable,
            'Powered': u.is_powered,
            'Status': u.status.value,
        }
        for u in units
    ]
    return pd.DataFrame(rows, columns=UNIT_COLUMNS)


def allocations_to_dataframe(result: AllocationResult) -> pd.DataFrame:
    """One row per allocation (empty frame for a rejected result)."""
    rows = [
        {
            'Order': result.order_id,
            'Strategy': result.strategy,
            'Unit': a.unit_id,
            'Vehicle': a.vehicle_id or '-',
            'Weight (kg)': a.weight_kg,
            'Temperature': a.temperature_class.value,
        }
        for a in result.allocations
    ]
    return pd.DataFrame(rows, columns=ALLOCATION_COLUMNS)

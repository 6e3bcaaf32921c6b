"""Allocation result data models.

This module provides the allocation, rejection and result types returned by
every allocation strategy. These are pure data containers: no matching logic
lives here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from fleet_allocation.constants import round_weight


class TemperatureClass(str, Enum):
    """Temperature class of an allocated weight."""
    COLD = "cold"
    NON_COLD = "non_cold"
    STANDARD = "standard"


class RejectionKind(str, Enum):
    """Machine-readable reason an order could not be allocated."""
    MIXED_ORDER_NOT_ALLOWED = "MIXED_ORDER_NOT_ALLOWED"
    ORDER_TOO_HEAVY = "ORDER_TOO_HEAVY"
    NO_COLD_STORAGE = "NO_COLD_STORAGE"
    NO_CAPACITY = "NO_CAPACITY"
    UNKNOWN = "UNKNOWN"


class Allocation(BaseModel):
    """
    Binding of part (or all) of an order's weight to one capacity unit.

    Attributes:
        unit_id: Capacity unit receiving the weight
        weight_kg: Allocated weight in kg
        temperature_class: cold, non_cold (split strategies) or standard
        vehicle_id: Vehicle carrying the unit, if known
    """
    unit_id: str = Field(..., description="Capacity unit ID")
    weight_kg: float = Field(..., description="Allocated weight in kg", gt=0)
    temperature_class: TemperatureClass = Field(..., description="Temperature class")
    vehicle_id: Optional[str] = Field(None, description="Vehicle ID")

    def __str__(self) -> str:
        return f"{self.weight_kg:.2f}kg {self.temperature_class.value} -> unit {self.unit_id}"


class RejectionReason(BaseModel):
    """
    Classified explanation of a failed allocation.

    Attributes:
        kind: Machine-readable rejection kind
        message: Human-readable message for the order originator
        details: Supporting figures (weights, counts, items)
    """
    kind: RejectionKind = Field(..., description="Rejection kind")
    message: str = Field(..., description="Human-readable message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Supporting details")

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass
class AllocationResult:
    """
    Outcome of one allocation call.

    Either allocations is non-empty (success) or rejection is set (failure).
    Failures never carry partial allocations.

    Attributes:
        order_id: Order the result belongs to
        strategy: Name of the strategy that produced it
        allocations: Ordered allocations (empty on failure)
        rejection: Classified failure reason (None on success)
        residual_kg_by_unit: Residual capacity of every unit in the working
            snapshot after the allocations (empty on failure)
    """
    order_id: str
    strategy: str
    allocations: List[Allocation] = field(default_factory=list)
    rejection: Optional[RejectionReason] = None
    residual_kg_by_unit: Dict[str, float] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """True if the order was fully allocated."""
        return self.rejection is None and len(self.allocations) > 0

    @property
    def total_allocated_kg(self) -> float:
        """Sum of all allocated weights."""
        return round_weight(sum(a.weight_kg for a in self.allocations))

    @property
    def unit_ids(self) -> List[str]:
        """Distinct unit IDs touched, in allocation order."""
        return list(dict.fromkeys(a.unit_id for a in self.allocations))

    def allocated_kg_by_unit(self) -> Dict[str, float]:
        """Cumulative allocated weight per unit."""
        totals: Dict[str, float] = {}
        for allocation in self.allocations:
            totals[allocation.unit_id] = round_weight(
                totals.get(allocation.unit_id, 0.0) + allocation.weight_kg
            )
        return totals

    def __str__(self) -> str:
        """String representation."""
        if self.is_success:
            return (
                f"AllocationResult[{self.strategy}] order {self.order_id}: "
                f"{len(self.allocations)} allocations, {self.total_allocated_kg:.2f}kg"
            )
        return f"AllocationResult[{self.strategy}] order {self.order_id}: REJECTED ({self.rejection})"

"""Base class for allocation strategies.

Every strategy shares one contract:

    allocate(order, units) -> AllocationResult

The base class owns the call workflow: it copies the unit snapshot, lets
the concrete strategy pick allocations on the copy, checks completeness and
classifies failures. Caller-owned units are never mutated; committing a
successful result is the caller's job (see engine.commit_allocations).
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from fleet_allocation.allocation.allocation_config import AllocationConfig
from fleet_allocation.allocation.diagnostics import classify_rejection
from fleet_allocation.constants import floor_weight, round_weight
from fleet_allocation.models.allocation import Allocation, AllocationResult, TemperatureClass
from fleet_allocation.models.capacity_unit import CapacityUnit
from fleet_allocation.models.order_demand import OrderDemand

logger = logging.getLogger(__name__)


class AllocationStrategy(ABC):
    """
    Abstract base class for allocation strategies.

    Subclasses implement select_allocations() over a working copy of the
    unit snapshot and declare:
    - name: registry key
    - pools_capacity: whether the order may be split across units

    Example:
        strategy = MultiUnitSplitStrategy()
        result = strategy.allocate(order, units)

        if result.is_success:
            print(f"Placed {result.total_allocated_kg}kg on {len(result.unit_ids)} units")
        else:
            print(result.rejection.message)
    """

    name: str = ""
    pools_capacity: bool = False

    def __init__(self, config: Optional[AllocationConfig] = None):
        """
        Initialize strategy.

        Args:
            config: Allocation settings (defaults apply when omitted)
        """
        self.config = config or AllocationConfig(strategy=self.name)

    @property
    def tolerance_kg(self) -> float:
        return self.config.weight_tolerance_kg

    @property
    def weight_ceiling_kg(self) -> Optional[float]:
        """Order weight ceiling reported as ORDER_TOO_HEAVY (None = no ceiling)."""
        return None

    def allocate(self, order: OrderDemand, units: List[CapacityUnit]) -> AllocationResult:
        """
        Allocate an order against a snapshot of capacity units.

        Args:
            order: Order to place
            units: Current capacity unit snapshot (left untouched)

        Returns:
            AllocationResult with allocations on success or a rejection on failure
        """
        working_units = [unit.working_copy() for unit in units]
        allocations = self.select_allocations(order, working_units)

        if allocations and self._is_complete(order, allocations):
            return AllocationResult(
                order_id=order.id,
                strategy=self.name,
                allocations=allocations,
                residual_kg_by_unit=residuals_by_unit(working_units),
            )

        rejection = classify_rejection(
            order,
            units,
            weight_ceiling_kg=self.weight_ceiling_kg,
            pools_capacity=self.pools_capacity,
            tolerance_kg=self.tolerance_kg,
        )
        return AllocationResult(order_id=order.id, strategy=self.name, rejection=rejection)

    @abstractmethod
    def select_allocations(
        self,
        order: OrderDemand,
        working_units: List[CapacityUnit]
    ) -> Optional[List[Allocation]]:
        """
        Choose allocations for an order.

        May consume residual capacity on working_units, which are per-call
        copies owned by this strategy.

        Args:
            order: Order to place
            working_units: Working copy of the unit snapshot

        Returns:
            Allocations covering the whole order, or None if infeasible
        """

    def _is_complete(self, order: OrderDemand, allocations: List[Allocation]) -> bool:
        allocated = round_weight(sum(a.weight_kg for a in allocations))
        return round_weight(abs(allocated - order.total_weight_kg)) <= self.tolerance_kg

    # ------------------------------------------------------------------
    # Helpers shared by the greedy strategies
    # ------------------------------------------------------------------

    @staticmethod
    def _by_capacity_desc(units: List[CapacityUnit]) -> List[CapacityUnit]:
        """Largest capacity first, unit id ascending on ties."""
        return sorted(units, key=lambda u: (-u.capacity_kg, u.id))

    @staticmethod
    def _by_residual_desc(units: List[CapacityUnit]) -> List[CapacityUnit]:
        """Largest residual first, unit id ascending on ties."""
        return sorted(units, key=lambda u: (-u.residual_kg, u.id))

    def _take(
        self,
        unit: CapacityUnit,
        remaining_kg: float,
        temperature_class: TemperatureClass,
    ) -> Allocation:
        """Place min(remaining, residual) on a unit and return the allocation."""
        # Truncated, never rounded up past the residual
        weight = floor_weight(min(remaining_kg, unit.residual_kg))
        unit.residual_kg = max(round_weight(unit.residual_kg - weight), 0.0)
        logger.debug(
            f"{self.name}: {weight:.2f}kg {temperature_class.value} on unit {unit.id} "
            f"(residual {unit.residual_kg:.2f}kg)"
        )
        return Allocation(
            unit_id=unit.id,
            weight_kg=weight,
            temperature_class=temperature_class,
            vehicle_id=unit.vehicle_id,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self.config!r})"


def residuals_by_unit(units: List[CapacityUnit]) -> Dict[str, float]:
    """Map unit id to residual capacity."""
    return {u.id: u.residual_kg for u in units}

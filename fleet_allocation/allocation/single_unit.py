"""Single-unit exact-fit allocation.

Assigns the whole order to exactly one capacity unit. Among the units that
can take it, the largest compartment wins so that small (often cold) units
stay free for future cold-only demand.
"""

import logging
from typing import List, Optional

from fleet_allocation.allocation.base_strategy import AllocationStrategy
from fleet_allocation.models.allocation import Allocation, TemperatureClass
from fleet_allocation.models.capacity_unit import CapacityUnit
from fleet_allocation.models.order_demand import OrderDemand

logger = logging.getLogger(__name__)


class SingleUnitStrategy(AllocationStrategy):
    """
    One order, one capacity unit.

    Selection rules:
    - Order weight must not exceed max_unit_capacity_kg
    - Unit must be powered, lifecycle-assignable and have enough residual
    - Cold orders need a cold-capable unit; non-cold orders take any unit
    - Largest capacity_kg first, unit id ascending on ties

    Mixed orders are treated as cold: the whole weight needs a cold unit.
    """

    name = "single_unit"
    pools_capacity = False

    @property
    def weight_ceiling_kg(self) -> Optional[float]:
        return self.config.max_unit_capacity_kg

    def find_candidates(self, order: OrderDemand, units: List[CapacityUnit]) -> List[CapacityUnit]:
        """
        Units able to take the whole order, best candidate first.

        Args:
            order: Order to place
            units: Capacity unit snapshot

        Returns:
            Suitable units sorted by capacity (largest first), then id
        """
        candidates = [
            u for u in units
            if u.can_carry(order.total_weight_kg, requires_cold=order.requires_cold)
        ]
        return self._by_capacity_desc(candidates)

    def select_allocations(
        self,
        order: OrderDemand,
        working_units: List[CapacityUnit]
    ) -> Optional[List[Allocation]]:
        if order.total_weight_kg > self.config.max_unit_capacity_kg:
            return None

        candidates = self.find_candidates(order, working_units)
        if not candidates:
            return None

        selected = candidates[0]
        temperature_class = TemperatureClass.COLD if order.requires_cold else TemperatureClass.STANDARD

        logger.info(
            f"Assigned order {order.id} to unit {selected.id} "
            f"({selected.capacity_kg}kg capacity, {temperature_class.value})"
        )

        # Candidates have residual >= total weight, so this takes the full order
        return [self._take(selected, order.total_weight_kg, temperature_class)]

"""Multi-unit split allocation.

Partitions an order's cold and non-cold weight across as many capacity
units as needed, in two phases:

1. Cold phase: cold weight drains cold-capable units, largest residual first
2. Non-cold phase: non-cold weight drains any powered unit, largest
   residual first (cold units may absorb overflow once cold demand is met)

Cold supply is scarcer, so it is reserved before flexible demand can
consume it. The unit pool is re-filtered and re-sorted on every step.
"""

import logging
from typing import Callable, List, Optional, Tuple

from fleet_allocation.allocation.base_strategy import AllocationStrategy
from fleet_allocation.constants import round_weight
from fleet_allocation.models.allocation import Allocation, TemperatureClass
from fleet_allocation.models.capacity_unit import CapacityUnit
from fleet_allocation.models.order_demand import OrderDemand

logger = logging.getLogger(__name__)


class MultiUnitSplitStrategy(AllocationStrategy):
    """
    Splits an order across multiple units, cold phase first.

    A unit may be revisited across phases (cold then non-cold) but never
    within a phase: each step takes min(remaining, residual), which either
    empties the unit or finishes the phase.
    """

    name = "multi_unit_split"
    pools_capacity = True

    @property
    def weight_ceiling_kg(self) -> Optional[float]:
        return self.config.split_weight_ceiling_kg

    def select_allocations(
        self,
        order: OrderDemand,
        working_units: List[CapacityUnit]
    ) -> Optional[List[Allocation]]:
        ceiling = self.weight_ceiling_kg
        if ceiling is not None and order.total_weight_kg > ceiling:
            return None

        cold_allocations, remaining_cold = self._drain(
            order.cold_weight_kg,
            working_units,
            lambda u: u.is_cold_capable,
            TemperatureClass.COLD,
        )
        non_cold_allocations, remaining_non_cold = self._drain(
            order.non_cold_weight_kg,
            working_units,
            lambda u: True,
            TemperatureClass.NON_COLD,
        )

        unallocated = round_weight(remaining_cold + remaining_non_cold)
        if unallocated > self.tolerance_kg:
            logger.info(
                f"Order {order.id}: {unallocated:.2f}kg left unallocated "
                f"(cold {remaining_cold:.2f}kg, non-cold {remaining_non_cold:.2f}kg)"
            )
            return None

        allocations = cold_allocations + non_cold_allocations
        logger.info(
            f"Split order {order.id} across {len(allocations)} allocations "
            f"({len(cold_allocations)} cold, {len(non_cold_allocations)} non-cold)"
        )
        return allocations

    def _drain(
        self,
        weight_kg: float,
        units: List[CapacityUnit],
        eligible: Callable[[CapacityUnit], bool],
        temperature_class: TemperatureClass,
    ) -> Tuple[List[Allocation], float]:
        """
        Greedily place weight on the largest eligible residual until done.

        Args:
            weight_kg: Weight to place
            units: Working units (residuals are consumed)
            eligible: Extra eligibility rule on top of powered + residual
            temperature_class: Tag for the produced allocations

        Returns:
            Tuple of (allocations, remaining unplaced weight)
        """
        allocations: List[Allocation] = []
        remaining = round_weight(weight_kg)

        while remaining > self.tolerance_kg:
            pool = [
                u for u in units
                if u.residual_kg > self.tolerance_kg and u.is_assignable and eligible(u)
            ]
            if not pool:
                break

            unit = self._by_residual_desc(pool)[0]
            allocation = self._take(unit, remaining, temperature_class)
            allocations.append(allocation)
            remaining = round_weight(remaining - allocation.weight_kg)

        return allocations, remaining

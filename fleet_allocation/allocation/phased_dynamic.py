"""Phased dynamic allocation.

A closed-world variant of the multi-unit split. Eligible units are
partitioned once into a cold pool and a standard pool, each sorted by
capacity (largest first, unit id on ties), and then drained in order:

1. Cold weight drains the cold pool
2. Remaining non-cold weight drains the cold-pool remainder, then the
   standard pool

A unit leaves its pool as soon as it receives any weight, so each unit
gets at most one allocation per order.
"""

import logging
from typing import List, Optional, Tuple

from fleet_allocation.allocation.base_strategy import AllocationStrategy
from fleet_allocation.constants import round_weight
from fleet_allocation.models.allocation import Allocation, TemperatureClass
from fleet_allocation.models.capacity_unit import CapacityUnit
from fleet_allocation.models.order_demand import OrderDemand

logger = logging.getLogger(__name__)


class PhasedDynamicStrategy(AllocationStrategy):
    """
    Two-pass greedy drain over pre-sorted cold and standard pools.

    Cold weight never leaves the cold pool; if the cold pool runs dry the
    order fails rather than breaking the cold chain.
    """

    name = "phased_dynamic"
    pools_capacity = True

    @property
    def weight_ceiling_kg(self) -> Optional[float]:
        return self.config.split_weight_ceiling_kg

    def build_pools(self, units: List[CapacityUnit]) -> Tuple[List[CapacityUnit], List[CapacityUnit]]:
        """
        Partition eligible units into sorted cold and standard pools.

        Args:
            units: Working unit snapshot

        Returns:
            Tuple of (cold pool, standard pool), each largest capacity first
        """
        eligible = [u for u in units if u.is_assignable and u.residual_kg > self.tolerance_kg]
        cold_pool = self._by_capacity_desc([u for u in eligible if u.is_cold_capable])
        standard_pool = self._by_capacity_desc([u for u in eligible if not u.is_cold_capable])
        return cold_pool, standard_pool

    def select_allocations(
        self,
        order: OrderDemand,
        working_units: List[CapacityUnit]
    ) -> Optional[List[Allocation]]:
        ceiling = self.weight_ceiling_kg
        if ceiling is not None and order.total_weight_kg > ceiling:
            return None

        cold_pool, standard_pool = self.build_pools(working_units)
        logger.debug(
            f"Order {order.id}: cold pool {[u.id for u in cold_pool]}, "
            f"standard pool {[u.id for u in standard_pool]}"
        )

        allocations: List[Allocation] = []

        # Phase 1: cold weight, cold pool only
        remaining_cold = self._drain_pool(
            order.cold_weight_kg, cold_pool, TemperatureClass.COLD, allocations
        )

        # Phase 2: non-cold weight, cold remainder first, then standard
        remaining_non_cold = self._drain_pool(
            order.non_cold_weight_kg, cold_pool, TemperatureClass.NON_COLD, allocations
        )
        remaining_non_cold = self._drain_pool(
            remaining_non_cold, standard_pool, TemperatureClass.NON_COLD, allocations
        )

        unallocated = round_weight(remaining_cold + remaining_non_cold)
        if unallocated > self.tolerance_kg:
            logger.info(
                f"Order {order.id}: pools exhausted with {unallocated:.2f}kg unallocated "
                f"(cold {remaining_cold:.2f}kg, non-cold {remaining_non_cold:.2f}kg)"
            )
            return None

        logger.info(f"Placed order {order.id} on {len(allocations)} units (phased)")
        return allocations

    def _drain_pool(
        self,
        weight_kg: float,
        pool: List[CapacityUnit],
        temperature_class: TemperatureClass,
        allocations: List[Allocation],
    ) -> float:
        """
        Pop units off the front of a pool until the weight is placed.

        Modifies pool and allocations in place.

        Returns:
            Weight that could not be placed
        """
        remaining = round_weight(weight_kg)
        while remaining > self.tolerance_kg and pool:
            unit = pool.pop(0)
            allocation = self._take(unit, remaining, temperature_class)
            allocations.append(allocation)
            remaining = round_weight(remaining - allocation.weight_kg)
        return remaining

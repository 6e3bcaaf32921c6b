"""Allocation entry points for the order-intake workflow.

Free functions wrapping strategy selection, allocation, dry-run checks and
caller-side commits. A strategy object is built per call; nothing is kept
between calls.

Typical flow:
    result = allocate_order(order, snapshot, config)
    if result.is_success:
        persist(result)                       # caller's transaction
        commit_allocations(registry_units, result)
    else:
        surface(result.rejection)
"""

import logging
from typing import Dict, List, Optional

from fleet_allocation.allocation.allocation_config import AllocationConfig
from fleet_allocation.allocation.registry import create_strategy
from fleet_allocation.models.allocation import AllocationResult
from fleet_allocation.models.capacity_unit import (
    CapacityUnit,
    CompartmentStatus,
    InvalidTransitionError,
)
from fleet_allocation.models.order_demand import OrderDemand

logger = logging.getLogger(__name__)


def allocate_order(
    order: OrderDemand,
    units: List[CapacityUnit],
    config: Optional[AllocationConfig] = None,
) -> AllocationResult:
    """
    Allocate an order with the configured strategy.

    Args:
        order: Validated, weight-resolved order
        units: Fresh capacity unit snapshot (not modified)
        config: Allocation settings (default: single_unit)

    Returns:
        AllocationResult with allocations or a classified rejection
    """
    strategy = create_strategy(config)
    result = strategy.allocate(order, units)

    if result.is_success:
        logger.info(
            f"Order {order.id} allocated by {strategy.name}: "
            f"{result.total_allocated_kg:.2f}kg on {len(result.unit_ids)} unit(s)"
        )
    else:
        logger.info(f"Order {order.id} rejected by {strategy.name}: {result.rejection.kind.value}")

    return result


def can_fulfill_order(
    order: OrderDemand,
    units: List[CapacityUnit],
    config: Optional[AllocationConfig] = None,
) -> bool:
    """
    Dry-run check whether an order could be allocated right now.

    Args:
        order: Order to check
        units: Capacity unit snapshot (not modified)
        config: Allocation settings (default: single_unit)

    Returns:
        True if the configured strategy would allocate the order
    """
    return create_strategy(config).allocate(order, units).is_success


def commit_allocations(units: List[CapacityUnit], result: AllocationResult) -> List[CapacityUnit]:
    """
    Apply a successful result to the caller's units.

    All checks run before any unit is touched, so a failed commit leaves
    every unit unchanged.

    Args:
        units: Caller-owned units (modified in place)
        result: Successful allocation result

    Returns:
        Units that received weight, in allocation order

    Raises:
        ValueError: If the result is a rejection, references an unknown unit,
            or exceeds a unit's residual capacity
        InvalidTransitionError: If a unit's lifecycle state cannot take load
    """
    if not result.is_success:
        raise ValueError(f"Cannot commit rejected allocation for order {result.order_id}")

    units_by_id: Dict[str, CapacityUnit] = {u.id: u for u in units}
    weight_by_unit = result.allocated_kg_by_unit()

    missing = [unit_id for unit_id in weight_by_unit if unit_id not in units_by_id]
    if missing:
        raise ValueError(f"Order {result.order_id}: unknown capacity units {missing}")

    for unit_id, weight in weight_by_unit.items():
        unit = units_by_id[unit_id]
        if not unit.status.accepts_load:
            raise InvalidTransitionError(unit.id, unit.status, CompartmentStatus.ASSIGNED)
        if weight > unit.residual_kg:
            raise ValueError(
                f"Order {result.order_id}: {weight}kg exceeds residual "
                f"{unit.residual_kg}kg on unit {unit_id} (stale snapshot)"
            )

    committed = []
    for unit_id, weight in weight_by_unit.items():
        unit = units_by_id[unit_id]
        unit.assign(weight)
        committed.append(unit)

    logger.info(f"Committed order {result.order_id} to units {[u.id for u in committed]}")
    return committed

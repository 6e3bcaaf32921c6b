"""Rejection diagnostics for failed allocations.

Classifies why a strategy could not place an order, checked in a fixed
priority order:

1. ORDER_TOO_HEAVY - order exceeds the strategy's weight ceiling
2. NO_COLD_STORAGE - cold weight but no sufficient cold-capable capacity
3. NO_CAPACITY     - no sufficient powered capacity at all
4. UNKNOWN         - none of the above explains the failure

Single-unit strategies need one unit large enough for the whole order;
splitting strategies pool the residual capacity of all eligible units.
"""

import logging
from typing import List, Optional

from fleet_allocation.constants import WEIGHT_TOLERANCE_KG, round_weight
from fleet_allocation.models.allocation import RejectionKind, RejectionReason
from fleet_allocation.models.capacity_unit import CapacityUnit
from fleet_allocation.models.order_demand import OrderDemand

logger = logging.getLogger(__name__)


def classify_rejection(
    order: OrderDemand,
    units: List[CapacityUnit],
    weight_ceiling_kg: Optional[float] = None,
    pools_capacity: bool = False,
    tolerance_kg: float = WEIGHT_TOLERANCE_KG,
) -> RejectionReason:
    """
    Explain why an order could not be allocated.

    Args:
        order: Order that failed allocation
        units: Unit snapshot the strategy failed to satisfy
        weight_ceiling_kg: Strategy-supplied maximum order weight (None = no ceiling check)
        pools_capacity: True for strategies that split an order across units
        tolerance_kg: Weight tolerance for pooled comparisons

    Returns:
        RejectionReason with kind, message and supporting details
    """
    if weight_ceiling_kg is not None and order.total_weight_kg > weight_ceiling_kg:
        return RejectionReason(
            kind=RejectionKind.ORDER_TOO_HEAVY,
            message=(
                f"Order weight ({order.total_weight_kg}kg) exceeds maximum container capacity "
                f"({weight_ceiling_kg}kg). Please reduce quantity or split into multiple orders."
            ),
            details={
                "order_weight_kg": order.total_weight_kg,
                "max_capacity_kg": weight_ceiling_kg,
            },
        )

    if pools_capacity:
        reason = _classify_pooled(order, units, tolerance_kg)
    else:
        reason = _classify_single_unit(order, units)

    if reason is not None:
        return reason

    logger.warning(
        f"Order {order.id}: allocation failed but no rejection rule matched "
        f"({len(units)} units, pooled={pools_capacity})"
    )
    return RejectionReason(
        kind=RejectionKind.UNKNOWN,
        message="Unable to assign container to order. Please contact support.",
        details={},
    )


def _classify_single_unit(order: OrderDemand, units: List[CapacityUnit]) -> Optional[RejectionReason]:
    """Rules for strategies that need one unit to take the whole order."""
    weight = order.total_weight_kg

    if order.requires_cold:
        cold_units = [
            u for u in units
            if u.is_cold_capable and u.is_assignable and u.residual_kg >= weight
        ]
        if not cold_units:
            return _no_cold_storage(available_cold_units=0)

    available_units = [u for u in units if u.is_assignable and u.residual_kg >= weight]
    if not available_units:
        return _no_capacity(total_units=len(units), available_units=0)

    return None


def _classify_pooled(
    order: OrderDemand,
    units: List[CapacityUnit],
    tolerance_kg: float,
) -> Optional[RejectionReason]:
    """Rules for strategies that may split an order across units."""
    assignable = [u for u in units if u.is_assignable and u.residual_kg > tolerance_kg]
    cold_units = [u for u in assignable if u.is_cold_capable]
    cold_capacity = round_weight(sum(u.residual_kg for u in cold_units))
    total_capacity = round_weight(sum(u.residual_kg for u in assignable))

    if order.cold_weight_kg > tolerance_kg and cold_capacity < order.cold_weight_kg - tolerance_kg:
        return _no_cold_storage(
            available_cold_units=len(cold_units),
            cold_weight_kg=order.cold_weight_kg,
            available_cold_capacity_kg=cold_capacity,
        )

    if total_capacity < order.total_weight_kg - tolerance_kg:
        return _no_capacity(
            total_units=len(units),
            available_units=len(assignable),
            order_weight_kg=order.total_weight_kg,
            available_capacity_kg=total_capacity,
        )

    return None


def _no_cold_storage(**details) -> RejectionReason:
    return RejectionReason(
        kind=RejectionKind.NO_COLD_STORAGE,
        message=(
            "No refrigerated containers available with sufficient capacity. "
            "Cold storage orders require specialized containers."
        ),
        details={"requires_cold": True, **details},
    )


def _no_capacity(**details) -> RejectionReason:
    return RejectionReason(
        kind=RejectionKind.NO_CAPACITY,
        message=(
            "All drones are currently assigned to other deliveries. "
            "Please try again later or contact support."
        ),
        details=details,
    )

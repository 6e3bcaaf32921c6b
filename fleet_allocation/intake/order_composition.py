"""Order composition from resolved line items.

Turns catalog-resolved line items into an OrderDemand and enforces the
temperature-homogeneity business rule: an order may not mix cold-requiring
and non-cold items. Mixed orders are rejected here, before any allocation
strategy sees them.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fleet_allocation.constants import WEIGHT_TOLERANCE_KG, round_weight
from fleet_allocation.models.allocation import RejectionKind, RejectionReason
from fleet_allocation.models.order_demand import OrderDemand, OrderLineItem

logger = logging.getLogger(__name__)


@dataclass
class OrderComposition:
    """
    Result of composing an order from line items.

    Attributes:
        order_id: Order identifier
        items: Line items the order was built from
        demand: Composed demand (None if rejected)
        rejection: MIXED_ORDER_NOT_ALLOWED rejection (None if accepted)
    """
    order_id: str
    items: List[OrderLineItem] = field(default_factory=list)
    demand: Optional[OrderDemand] = None
    rejection: Optional[RejectionReason] = None

    @property
    def is_accepted(self) -> bool:
        return self.demand is not None and self.rejection is None

    def __str__(self) -> str:
        if self.is_accepted:
            return f"Accepted: {self.demand}"
        return f"Rejected order {self.order_id}: {self.rejection}"


def compose_order_demand(order_id: str, items: List[OrderLineItem]) -> OrderComposition:
    """
    Build an order demand from resolved line items.

    Args:
        order_id: Order identifier
        items: Line items with quantity, unit weight and cold requirement

    Returns:
        OrderComposition with the demand, or a MIXED_ORDER_NOT_ALLOWED rejection

    Raises:
        ValueError: If items is empty
    """
    if not items:
        raise ValueError(f"Order {order_id}: products list cannot be empty")

    cold_items = [item for item in items if item.requires_cold]
    non_cold_items = [item for item in items if not item.requires_cold]

    cold_weight = round_weight(sum(item.total_weight_kg for item in cold_items))
    non_cold_weight = round_weight(sum(item.total_weight_kg for item in non_cold_items))
    total_weight = round_weight(cold_weight + non_cold_weight)

    logger.info(
        f"Order {order_id} breakdown: total {total_weight}kg, "
        f"cold {cold_weight}kg, non-cold {non_cold_weight}kg"
    )

    if cold_weight > WEIGHT_TOLERANCE_KG and non_cold_weight > WEIGHT_TOLERANCE_KG:
        return OrderComposition(
            order_id=order_id,
            items=list(items),
            rejection=RejectionReason(
                kind=RejectionKind.MIXED_ORDER_NOT_ALLOWED,
                message=(
                    "Orders cannot contain both cold and non-cold items. "
                    "Please place separate orders."
                ),
                details={
                    "cold_items": [str(item) for item in cold_items],
                    "non_cold_items": [str(item) for item in non_cold_items],
                    "suggestion": "Create one order for cold items and another for non-cold items",
                },
            ),
        )

    demand = OrderDemand(
        id=order_id,
        total_weight_kg=total_weight,
        requires_cold=bool(cold_items),
        cold_weight_kg=cold_weight,
        non_cold_weight_kg=non_cold_weight,
    )
    return OrderComposition(order_id=order_id, items=list(items), demand=demand)

"""Data models for fleet capacity allocation."""

from .capacity_unit import (
    CapacityUnit,
    CompartmentStatus,
    InvalidTransitionError,
    ALLOWED_TRANSITIONS,
)
from .order_demand import OrderDemand, OrderLineItem
from .allocation import (
    Allocation,
    AllocationResult,
    RejectionKind,
    RejectionReason,
    TemperatureClass,
)

__all__ = [
    # Capacity
    "CapacityUnit",
    "CompartmentStatus",
    "InvalidTransitionError",
    "ALLOWED_TRANSITIONS",
    # Orders
    "OrderDemand",
    "OrderLineItem",
    # Results
    "Allocation",
    "AllocationResult",
    "RejectionKind",
    "RejectionReason",
    "TemperatureClass",
]

"""Capacity allocation engine.

This module matches capacity units to delivery orders under weight,
temperature and availability constraints, and explains failures.

Key components:
- SingleUnitStrategy: Whole order on the largest suitable unit
- MultiUnitSplitStrategy: Cold then non-cold weight split across units
- PhasedDynamicStrategy: Two-pass drain over pre-sorted cold/standard pools
- classify_rejection: Typed reason when no allocation is possible
- allocate_order / can_fulfill_order / commit_allocations: Engine entry points
"""

from .allocation_config import AllocationConfig
from .base_strategy import AllocationStrategy
from .single_unit import SingleUnitStrategy
from .multi_unit_split import MultiUnitSplitStrategy
from .phased_dynamic import PhasedDynamicStrategy
from .diagnostics import classify_rejection
from .registry import STRATEGIES, UnknownStrategyError, available_strategies, create_strategy
from .engine import allocate_order, can_fulfill_order, commit_allocations

__all__ = [
    "AllocationConfig",
    "AllocationStrategy",
    "SingleUnitStrategy",
    "MultiUnitSplitStrategy",
    "PhasedDynamicStrategy",
    "classify_rejection",
    "STRATEGIES",
    "UnknownStrategyError",
    "available_strategies",
    "create_strategy",
    "allocate_order",
    "can_fulfill_order",
    "commit_allocations",
]

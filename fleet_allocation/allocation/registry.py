"""
Allocation strategy registry.

Maps configured strategy names to implementations so that the strategy in
use is chosen by configuration rather than by which module is imported.
"""

from typing import Dict, List, Optional, Type

from fleet_allocation.allocation.allocation_config import AllocationConfig
from fleet_allocation.allocation.base_strategy import AllocationStrategy
from fleet_allocation.allocation.multi_unit_split import MultiUnitSplitStrategy
from fleet_allocation.allocation.phased_dynamic import PhasedDynamicStrategy
from fleet_allocation.allocation.single_unit import SingleUnitStrategy


STRATEGIES: Dict[str, Type[AllocationStrategy]] = {
    SingleUnitStrategy.name: SingleUnitStrategy,
    MultiUnitSplitStrategy.name: MultiUnitSplitStrategy,
    PhasedDynamicStrategy.name: PhasedDynamicStrategy,
}


class UnknownStrategyError(ValueError):
    """Raised when a configuration names a strategy that is not registered."""


def available_strategies() -> List[str]:
    """Get registered strategy names."""
    return sorted(STRATEGIES)


def create_strategy(config: Optional[AllocationConfig] = None) -> AllocationStrategy:
    """
    Build the strategy named by a configuration.

    Args:
        config: Allocation settings (default: single_unit with default limits)

    Returns:
        Fresh strategy instance bound to the config

    Raises:
        UnknownStrategyError: If config.strategy is not registered
    """
    config = config or AllocationConfig()
    try:
        strategy_cls = STRATEGIES[config.strategy]
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown allocation strategy '{config.strategy}'. "
            f"Available: {', '.join(available_strategies())}"
        ) from None
    return strategy_cls(config)

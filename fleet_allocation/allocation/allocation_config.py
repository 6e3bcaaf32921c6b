"""Allocation configuration - strategy selection and weight parameters."""

from typing import Any, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field

from fleet_allocation.constants import MAX_UNIT_CAPACITY_KG, WEIGHT_TOLERANCE_KG


class AllocationConfig(BaseModel):
    """
    Settings that choose and parameterize an allocation strategy.

    Attributes:
        strategy: Registered strategy name (single_unit, multi_unit_split, phased_dynamic)
        max_unit_capacity_kg: Single-unit ceiling, reported as ORDER_TOO_HEAVY when exceeded
        weight_tolerance_kg: Remaining weight below this counts as fully allocated
        split_weight_ceiling_kg: Optional order ceiling for the split strategies
            (None = no ORDER_TOO_HEAVY check when splitting)
    """
    strategy: str = Field(default="single_unit", description="Strategy name")
    max_unit_capacity_kg: float = Field(
        default=MAX_UNIT_CAPACITY_KG,
        description="Largest single-unit capacity",
        gt=0
    )
    weight_tolerance_kg: float = Field(
        default=WEIGHT_TOLERANCE_KG,
        description="Allocation completeness tolerance",
        gt=0
    )
    split_weight_ceiling_kg: Optional[float] = Field(
        None,
        description="Order weight ceiling applied to split strategies",
        gt=0
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, settings: Optional[Mapping[str, Any]] = None) -> "AllocationConfig":
        """
        Build a config from a plain mapping, ignoring unrelated keys.

        Args:
            settings: Mapping such as a parsed settings file section

        Returns:
            AllocationConfig with defaults for missing keys
        """
        if not settings:
            return cls()
        known = {k: v for k, v in settings.items() if k in cls.model_fields and v is not None}
        return cls(**known)

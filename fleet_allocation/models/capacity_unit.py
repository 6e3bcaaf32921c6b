"""Capacity unit data model for fleet allocation.

A capacity unit is a vehicle + cargo compartment pair offering a weight
limit, an optional cold capability and a charge state. Compartment
lifecycle is tracked with an explicit state machine.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from fleet_allocation.constants import round_weight


class CompartmentStatus(str, Enum):
    """Lifecycle state of a cargo compartment."""
    AVAILABLE = "available"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"

    def can_transition_to(self, target: "CompartmentStatus") -> bool:
        """Check whether moving to ``target`` is a defined transition."""
        return target in ALLOWED_TRANSITIONS[self]

    @property
    def accepts_load(self) -> bool:
        """Whether a compartment in this state can take more weight."""
        return self in (CompartmentStatus.AVAILABLE, CompartmentStatus.ASSIGNED)


ALLOWED_TRANSITIONS: Dict[CompartmentStatus, FrozenSet[CompartmentStatus]] = {
    CompartmentStatus.AVAILABLE: frozenset({CompartmentStatus.ASSIGNED}),
    CompartmentStatus.ASSIGNED: frozenset({
        CompartmentStatus.ASSIGNED,  # additional load on a partially filled compartment
        CompartmentStatus.IN_TRANSIT,
        CompartmentStatus.AVAILABLE,
    }),
    CompartmentStatus.IN_TRANSIT: frozenset({CompartmentStatus.DELIVERED}),
    CompartmentStatus.DELIVERED: frozenset({CompartmentStatus.AVAILABLE}),
}


class InvalidTransitionError(ValueError):
    """Raised when a compartment is moved along an undefined transition."""

    def __init__(self, unit_id: str, current: CompartmentStatus, target: CompartmentStatus):
        self.unit_id = unit_id
        self.current = current
        self.target = target
        super().__init__(
            f"Capacity unit {unit_id}: cannot move from {current.value} to {target.value}"
        )


class CapacityUnit(BaseModel):
    """
    Represents an available vehicle + compartment pair.

    Business Rules:
    - residual_kg starts equal to capacity_kg and only decreases through
      allocations; it never goes negative
    - Cold-capable units may also carry non-cold weight
    - Only powered units in AVAILABLE or ASSIGNED state can take load

    Attributes:
        id: Unique capacity unit identifier
        capacity_kg: Maximum weight the compartment can carry
        is_cold_capable: Whether the compartment is refrigerated
        is_powered: Charge/availability gate (battery above threshold)
        residual_kg: Remaining capacity (defaults to capacity_kg)
        status: Compartment lifecycle state
        vehicle_id: Optional vehicle carrying the compartment
        compartment_id: Optional compartment identifier on the vehicle
    """
    id: str = Field(..., description="Unique capacity unit identifier")
    capacity_kg: float = Field(..., description="Maximum weight in kg", gt=0)
    is_cold_capable: bool = Field(default=False, description="Refrigerated compartment")
    is_powered: bool = Field(default=True, description="Charged and available to fly/drive")
    residual_kg: Optional[float] = Field(
        None,
        description="Remaining capacity in kg (defaults to capacity_kg)",
        ge=0
    )
    status: CompartmentStatus = Field(
        default=CompartmentStatus.AVAILABLE,
        description="Compartment lifecycle state"
    )
    vehicle_id: Optional[str] = Field(None, description="Vehicle carrying this compartment")
    compartment_id: Optional[str] = Field(None, description="Compartment identifier")

    model_config = ConfigDict(validate_assignment=True)

    @model_validator(mode="before")
    @classmethod
    def _default_residual(cls, data):
        """A fresh snapshot starts with its full capacity free."""
        if isinstance(data, dict) and data.get("residual_kg") is None and "capacity_kg" in data:
            data = {**data, "residual_kg": data["capacity_kg"]}
        return data

    @model_validator(mode="after")
    def _residual_within_capacity(self) -> "CapacityUnit":
        if self.residual_kg > self.capacity_kg:
            raise ValueError(
                f"residual_kg ({self.residual_kg}) cannot exceed capacity_kg ({self.capacity_kg})"
            )
        return self

    @property
    def allocated_kg(self) -> float:
        """Weight already placed on this unit."""
        return round_weight(self.capacity_kg - self.residual_kg)

    @property
    def is_assignable(self) -> bool:
        """True if the unit is powered and its lifecycle state accepts load."""
        return self.is_powered and self.status.accepts_load

    def can_carry(self, weight_kg: float, requires_cold: bool = False) -> bool:
        """
        Check if this unit can take the full weight in one allocation.

        Args:
            weight_kg: Weight to place in kg
            requires_cold: Whether the weight needs a refrigerated compartment

        Returns:
            True if the unit is assignable, large enough and temperature-compatible
        """
        if requires_cold and not self.is_cold_capable:
            return False
        return self.is_assignable and self.residual_kg >= weight_kg

    def working_copy(self) -> "CapacityUnit":
        """Independent copy used as per-call working state."""
        return self.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Lifecycle transitions
    # ------------------------------------------------------------------

    def _transition(self, target: CompartmentStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(self.id, self.status, target)
        self.status = target

    def assign(self, weight_kg: float) -> None:
        """
        Place committed weight on this unit.

        Args:
            weight_kg: Weight to add in kg

        Raises:
            InvalidTransitionError: If the unit is in transit or delivered
            ValueError: If the weight exceeds the residual capacity
        """
        if weight_kg > self.residual_kg:
            raise ValueError(
                f"Capacity unit {self.id}: {weight_kg}kg exceeds residual {self.residual_kg}kg"
            )
        self._transition(CompartmentStatus.ASSIGNED)
        self.residual_kg = max(round_weight(self.residual_kg - weight_kg), 0.0)

    def release(self) -> None:
        """Drop all assigned load (order cancelled before departure)."""
        self._transition(CompartmentStatus.AVAILABLE)
        self.residual_kg = self.capacity_kg

    def start_transit(self) -> None:
        """Mark the compartment as departed."""
        self._transition(CompartmentStatus.IN_TRANSIT)

    def complete_delivery(self) -> None:
        """Mark the compartment's load as delivered."""
        self._transition(CompartmentStatus.DELIVERED)

    def reset(self) -> None:
        """Return a delivered compartment to the pool with full capacity."""
        self._transition(CompartmentStatus.AVAILABLE)
        self.residual_kg = self.capacity_kg

    def __str__(self) -> str:
        """String representation."""
        cold = "cold" if self.is_cold_capable else "standard"
        power = "" if self.is_powered else " [unpowered]"
        return (
            f"Unit {self.id} ({cold}): {self.residual_kg:.2f}/{self.capacity_kg:.2f}kg free "
            f"- {self.status.value}{power}"
        )

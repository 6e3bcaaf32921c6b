"""Order demand data model.

An order demand is the weight and temperature requirement derived from a
customer order once its line items have been resolved against the product
catalog.
"""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from fleet_allocation.constants import WEIGHT_TOLERANCE_KG, round_weight


class OrderLineItem(BaseModel):
    """
    A single resolved line item of an order.

    Attributes:
        name: Product name
        quantity: Number of units ordered
        unit_weight_kg: Weight per unit in kg
        requires_cold: Whether the product needs cold storage
    """
    name: str = Field(..., description="Product name", min_length=1)
    quantity: float = Field(..., description="Units ordered", gt=0)
    unit_weight_kg: float = Field(..., description="Weight per unit in kg", gt=0)
    requires_cold: bool = Field(default=False, description="Needs cold storage")

    @property
    def total_weight_kg(self) -> float:
        """Line weight (quantity x unit weight)."""
        return round_weight(self.quantity * self.unit_weight_kg)

    def __str__(self) -> str:
        return f"{self.name} ({self.quantity:g}x)"


class OrderDemand(BaseModel):
    """
    Weight and temperature requirement of one order.

    The cold / non-cold split is optional. When omitted it is derived from
    requires_cold: a cold order puts all of its weight in the cold class,
    anything else is entirely non-cold. A cold order must carry cold
    weight. All weights are stored rounded to 2 decimal places.

    Attributes:
        id: Order identifier
        total_weight_kg: Total order weight in kg
        requires_cold: Whether any of the weight needs cold storage
        cold_weight_kg: Weight that must travel in a cold-capable unit
        non_cold_weight_kg: Weight that may travel in any unit
    """
    id: str = Field(..., description="Order identifier")
    total_weight_kg: float = Field(..., description="Total weight in kg", gt=0)
    requires_cold: bool = Field(default=False, description="Order needs cold storage")
    cold_weight_kg: Optional[float] = Field(None, description="Cold weight in kg", ge=0)
    non_cold_weight_kg: Optional[float] = Field(None, description="Non-cold weight in kg", ge=0)

    @model_validator(mode="after")
    def _resolve_weight_split(self) -> "OrderDemand":
        total = round_weight(self.total_weight_kg)
        if total <= 0:
            raise ValueError(f"Order {self.id}: total weight {self.total_weight_kg}kg rounds to zero")

        cold = self.cold_weight_kg
        non_cold = self.non_cold_weight_kg

        if cold is None and non_cold is None:
            cold, non_cold = (total, 0.0) if self.requires_cold else (0.0, total)
        elif cold is None:
            cold = round_weight(total - non_cold)
        elif non_cold is None:
            non_cold = round_weight(total - cold)

        mismatch = round_weight(abs(cold + non_cold - total))
        if cold < 0 or non_cold < 0 or mismatch > WEIGHT_TOLERANCE_KG:
            raise ValueError(
                f"Order {self.id}: cold ({cold}kg) + non-cold ({non_cold}kg) "
                f"must equal total weight ({total}kg)"
            )

        if self.requires_cold and cold <= WEIGHT_TOLERANCE_KG:
            raise ValueError(
                f"Order {self.id}: requires_cold is set but cold weight is {cold}kg"
            )

        self.total_weight_kg = total
        self.cold_weight_kg = round_weight(cold)
        self.non_cold_weight_kg = round_weight(non_cold)
        if self.cold_weight_kg > WEIGHT_TOLERANCE_KG:
            self.requires_cold = True
        return self

    @property
    def is_mixed(self) -> bool:
        """True if the order carries both cold and non-cold weight."""
        return (
            self.cold_weight_kg > WEIGHT_TOLERANCE_KG
            and self.non_cold_weight_kg > WEIGHT_TOLERANCE_KG
        )

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Order {self.id}: {self.total_weight_kg:.2f}kg "
            f"(cold {self.cold_weight_kg:.2f}kg, non-cold {self.non_cold_weight_kg:.2f}kg)"
        )

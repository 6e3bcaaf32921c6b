"""Centralized constants for capacity allocation.

Weight limits and numeric tolerances shared by the order model, the
allocation strategies and the rejection diagnostics.
"""

from decimal import ROUND_DOWN, Decimal

# ============================================================================
# CAPACITY CONSTANTS (kg)
# ============================================================================

#: Largest compartment ever provisioned in the fleet
#: Ceiling applied by the single-unit strategy before any matching
MAX_UNIT_CAPACITY_KG = 350.0


# ============================================================================
# NUMERIC POLICY
# ============================================================================

#: Weights closer than this are treated as equal
#: Used for "fully allocated" checks and the cold + non-cold = total check
WEIGHT_TOLERANCE_KG = 0.01

#: Decimal places kept after every weight arithmetic step
WEIGHT_DECIMALS = 2

_WEIGHT_QUANTUM = Decimal(1).scaleb(-WEIGHT_DECIMALS)


def round_weight(weight_kg: float) -> float:
    """Round a weight to the allocation precision (2 decimal places)."""
    return round(weight_kg, WEIGHT_DECIMALS)


def floor_weight(weight_kg: float) -> float:
    """
    Truncate a weight to the allocation precision.

    Used for weight placed on a unit so that rounding never pushes an
    allocation above the unit's residual capacity (3.336kg -> 3.33kg).
    """
    return float(Decimal(repr(weight_kg)).quantize(_WEIGHT_QUANTUM, rounding=ROUND_DOWN))

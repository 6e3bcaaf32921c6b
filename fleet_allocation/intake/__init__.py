"""Order intake: composing order demands from resolved line items."""

from .order_composition import OrderComposition, compose_order_demand

__all__ = [
    "OrderComposition",
    "compose_order_demand",
]

"""Domain value objects."""

from .order_number import OrderNumber

__all__ = ["OrderNumber"]

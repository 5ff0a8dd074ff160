"""Online orders module"""

from .models import CANCELLED_STATUS, Order, OrderDetail

__all__ = ["CANCELLED_STATUS", "Order", "OrderDetail"]

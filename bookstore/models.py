# Import all models here to ensure they're loaded together
# This prevents circular import issues with relationships

from bookstore.core.db.base import Base, BaseModel
from bookstore.modules.books.models import Book
from bookstore.modules.members.models import Member
from bookstore.modules.orders.models import Order, OrderDetail
from bookstore.modules.sales.models import Sale, SaleDetail

# Export for easy importing
__all__ = [
    "Base",
    "BaseModel",
    "Book",
    "Member",
    "Order",
    "OrderDetail",
    "Sale",
    "SaleDetail",
]

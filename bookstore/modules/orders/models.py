from sqlalchemy import String, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING, Optional

from bookstore.core.db.base import BaseModel

if TYPE_CHECKING:
    from bookstore.modules.books.models import Book

# Orders in this status never count towards income
CANCELLED_STATUS = "cancel"


class Order(BaseModel):
    """
    Online order placed through the storefront.
    Extends BaseModel which provides: id, created_at, updated_at
    """

    __tablename__ = "order"

    __table_args__ = (Index("idx_order_status_created_at", "status", "created_at"),)

    member_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("member.id", name="fk_order_member_id"), nullable=True
    )

    status: Mapped[str] = mapped_column(String(50), nullable=False, default="pending")

    details: Mapped[list["OrderDetail"]] = relationship(
        "OrderDetail", back_populates="order"
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}')>"


class OrderDetail(BaseModel):
    """Line item of an online order. `price` is the line amount."""

    __tablename__ = "order_detail"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("order.id", name="fk_order_detail_order_id"), nullable=False, index=True
    )

    book_id: Mapped[int] = mapped_column(
        ForeignKey("book.id", name="fk_order_detail_book_id"), nullable=False, index=True
    )

    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    qty: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    order: Mapped["Order"] = relationship("Order", back_populates="details")

    book: Mapped["Book"] = relationship("Book")

    def __repr__(self) -> str:
        return f"<OrderDetail(id={self.id}, order_id={self.order_id}, book_id={self.book_id})>"

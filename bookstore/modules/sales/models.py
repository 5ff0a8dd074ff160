from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from bookstore.core.db.base import BaseModel

if TYPE_CHECKING:
    from bookstore.modules.books.models import Book


class Sale(BaseModel):
    """
    In-store (point of sale) transaction.
    There is no cancellation state: every row is revenue.
    """

    __tablename__ = "sale"

    total: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    details: Mapped[list["SaleDetail"]] = relationship(
        "SaleDetail", back_populates="sale"
    )

    def __repr__(self) -> str:
        return f"<Sale(id={self.id}, total={self.total})>"


class SaleDetail(BaseModel):
    """Line item of an in-store sale."""

    __tablename__ = "sale_detail"

    sale_id: Mapped[int] = mapped_column(
        ForeignKey("sale.id", name="fk_sale_detail_sale_id"), nullable=False, index=True
    )

    book_id: Mapped[int] = mapped_column(
        ForeignKey("book.id", name="fk_sale_detail_book_id"), nullable=False, index=True
    )

    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    qty: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    sale: Mapped["Sale"] = relationship("Sale", back_populates="details")

    book: Mapped["Book"] = relationship("Book")

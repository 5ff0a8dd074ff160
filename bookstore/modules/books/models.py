from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional

from bookstore.core.db.base import BaseModel


class Book(BaseModel):
    """
    Book model - a catalogue entry sold both online and in store.
    """

    __tablename__ = "book"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True, default=None)

    category: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, default=None, index=True
    )

    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, name='{self.name}', category='{self.category}')>"

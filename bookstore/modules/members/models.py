from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional

from bookstore.core.db.base import BaseModel


class Member(BaseModel):
    """Member model - a registered storefront customer."""

    __tablename__ = "member"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name='{self.name}')>"

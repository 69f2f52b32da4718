from typing import TYPE_CHECKING, Optional, List
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.base import BaseModel

if TYPE_CHECKING:
    from app.modules.expenses.models import Expense


class Category(BaseModel):
    __tablename__ = "categories"

    category_id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Relationships
    expenses: Mapped[List["Expense"]] = relationship(
        "Expense", back_populates="category", lazy="noload", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Category(category_id={self.category_id}, name='{self.name}')>"

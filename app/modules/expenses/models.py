from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import ForeignKey, Float, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.base import BaseModel

if TYPE_CHECKING:
    from app.modules.categories.models import Category


class Expense(BaseModel):
    __tablename__ = "expenses"
    __table_args__ = (
        # Listing is always ordered by expense date
        Index('idx_expenses_expense_date', 'expense_date'),
    )

    expense_id: Mapped[int] = mapped_column(
        primary_key=True, autoincrement=True, index=True
    )

    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.category_id"), nullable=False, index=True
    )

    # Stored as naive UTC
    expense_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False)

    # Relationships
    # lazy="noload" to prevent automatic loading
    category: Mapped["Category"] = relationship(
        "Category", back_populates="expenses", lazy="noload"
    )

    def __repr__(self) -> str:
        return f"<Expense(expense_id={self.expense_id}, amount={self.amount}, category_id={self.category_id})>"

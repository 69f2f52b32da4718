from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.utils.datetime import to_naive_utc


class ExpenseDto(BaseModel):
    """Expense record as sent by clients on create and update"""
    expense_id: int = Field(0, description="Unique identifier; assigned by the store on create")
    category_id: int = Field(..., description="Associated category ID")
    expense_date: datetime = Field(..., description="When the expense occurred")
    amount: float = Field(..., allow_inf_nan=False, description="Amount of the expense")

    @field_validator("expense_date")
    @classmethod
    def normalize_expense_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class ExpenseResponse(BaseModel):
    expense_id: int = Field(..., description="Unique identifier for the expense")
    category_id: int = Field(..., description="Associated category ID")
    expense_date: datetime = Field(..., description="When the expense occurred")
    amount: float = Field(..., description="Amount of the expense")
    created_at: Optional[datetime] = Field(None, description="When the expense record was created")
    updated_at: Optional[datetime] = Field(None, description="When the expense record was last updated")

    class Config:
        from_attributes = True

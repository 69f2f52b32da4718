from datetime import datetime
from typing import Optional

from app.modules.expenses.dto import ExpenseDto
from app.utils.datetime import to_naive_utc, utc_now


def is_valid_expense(expense: ExpenseDto, now: Optional[datetime] = None) -> bool:
    """
    Domain check shared by create and update.

    An expense is invalid when its date lies in the future or its amount
    is not strictly positive. Both dates are compared as naive UTC.
    """
    now = to_naive_utc(now or utc_now())

    # NaN compares False against everything, so test for "not positive"
    if to_naive_utc(expense.expense_date) > now or not expense.amount > 0:
        return False

    return True

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DatabaseError
from app.modules.expenses.dto import ExpenseDto
from app.modules.expenses.models import Expense

logger = logging.getLogger(__name__)


class ExpensesService:
    def __init__(self):
        self.logger = logger

    async def get_expenses(self, db: AsyncSession) -> List[Expense]:
        """Get all expenses ordered by expense date, oldest first"""
        self.logger.debug("ExpensesService.get_expenses called")
        try:
            result = await db.execute(
                select(Expense).order_by(Expense.expense_date, Expense.expense_id)
            )
            expenses = list(result.scalars().all())
            # Read-only listing: rows are handed back detached, not tracked by the session
            for expense in expenses:
                db.expunge(expense)
            return expenses
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while listing expenses: {str(e)}")
            raise DatabaseError(f"list expenses: {str(e)}")

    async def get_expense(self, db: AsyncSession, expense_id: int) -> Optional[Expense]:
        """Get an expense by primary key"""
        self.logger.debug(f"Fetching expense with ID: {expense_id}")
        try:
            return await db.get(Expense, expense_id)
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while fetching expense {expense_id}: {str(e)}")
            raise DatabaseError(f"get expense: {str(e)}")

    async def expense_exists(self, db: AsyncSession, expense_id: int) -> bool:
        """
        Check presence by primary key without loading the entity into the session.
        Store failures propagate to the caller as DatabaseError.
        """
        try:
            result = await db.execute(
                select(Expense.expense_id).where(Expense.expense_id == expense_id)
            )
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while checking expense {expense_id}: {str(e)}")
            raise DatabaseError(f"check expense: {str(e)}")

    async def create_expense(self, db: AsyncSession, data: ExpenseDto) -> Expense:
        """Create a new expense; any client supplied expense_id is ignored"""
        self.logger.info(f"Creating new expense for category_id: {data.category_id}")

        new_expense = Expense(
            category_id=data.category_id,
            expense_date=data.expense_date,
            amount=data.amount,
        )
        try:
            db.add(new_expense)
            await db.commit()
            await db.refresh(new_expense)
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error during expense creation: {str(e)}")
            raise DatabaseError(f"create expense: {str(e)}")

        self.logger.info(f"Created expense with ID: {new_expense.expense_id}")
        return new_expense

    async def update_expense(self, db: AsyncSession, expense_id: int, data: ExpenseDto) -> None:
        """Replace every client-owned field of the expense (no return)"""
        self.logger.info(f"Updating expense with ID: {expense_id}")
        try:
            await db.execute(
                update(Expense)
                .where(Expense.expense_id == expense_id)
                .values(
                    category_id=data.category_id,
                    expense_date=data.expense_date,
                    amount=data.amount,
                )
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error during expense update: {str(e)}")
            raise DatabaseError(f"update expense: {str(e)}")

    async def delete_expense(self, db: AsyncSession, expense: Expense) -> None:
        """Hard delete an expense (no return)"""
        self.logger.info(f"Deleting expense with ID: {expense.expense_id}")
        try:
            await db.delete(expense)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error during expense deletion: {str(e)}")
            raise DatabaseError(f"delete expense: {str(e)}")
